from __future__ import annotations

from dataclasses import dataclass

import httpx


class PaymentProcessorError(RuntimeError):
	pass


@dataclass
class ChargeResult:
	status: str
	reference: str
	raw: dict | None = None


class PaymentProcessor:
	name = "unknown"

	def charge(self, *, amount: int, currency: str, description: str, source: str, metadata: dict | None = None) -> ChargeResult:
		raise NotImplementedError


class StripePaymentProcessor(PaymentProcessor):
	name = "stripe"
	charges_url = "https://api.stripe.com/v1/charges"

	def __init__(self, secret_key: str, *, timeout: float = 30, http: httpx.Client | None = None):
		self.secret_key = secret_key
		self.http = http or httpx.Client(timeout=timeout)

	def charge(self, *, amount: int, currency: str, description: str, source: str, metadata: dict | None = None) -> ChargeResult:
		if not self.secret_key:
			raise PaymentProcessorError("Stripe is not configured")
		payload = {
			"amount": str(amount),
			"currency": currency,
			"description": description,
			"source": source,
		}
		for key, value in (metadata or {}).items():
			payload[f"metadata[{key}]"] = str(value)
		try:
			r = self.http.post(self.charges_url, data=payload, auth=(self.secret_key, ""))
		except httpx.HTTPError as exc:
			raise PaymentProcessorError(str(exc)) from exc
		try:
			j = r.json() if r.content else {}
		except ValueError:
			j = {}
		if r.status_code < 200 or r.status_code >= 300:
			msg = ((j.get("error") or {}).get("message") or f"HTTP {r.status_code}").strip()
			raise PaymentProcessorError(msg)
		return ChargeResult(
			status=(j.get("status") or "").strip(),
			reference=(j.get("id") or "").strip(),
			raw=j,
		)
