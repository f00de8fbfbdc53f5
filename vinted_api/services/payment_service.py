import math
from decimal import Decimal, ROUND_HALF_UP

from vinted_api.core.errors import PaymentFailed
from vinted_api.db.models import User
from vinted_api.integrations.payments import PaymentProcessor, PaymentProcessorError


def to_minor_units(amount: float) -> int:
	# half-up, so 0.125 charges 13 cents
	if not math.isfinite(float(amount)):
		raise PaymentFailed("Invalid amount")
	return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentGateway:
	def __init__(self, processor: PaymentProcessor, currency: str, description_template: str):
		self.processor = processor
		self.currency = currency
		self.description_template = description_template

	def charge(self, payer: User, amount: float, title: str, source_token: str) -> str:
		"""Charge ``amount`` (major units) against ``source_token`` in one attempt.

		Returns the processor's status string as-is.
		"""
		try:
			result = self.processor.charge(
				amount=to_minor_units(amount),
				currency=self.currency,
				description=self.description_template.format(title=title),
				source=source_token,
				metadata={"user_id": payer.id},
			)
		except PaymentProcessorError as exc:
			raise PaymentFailed(str(exc)) from exc
		return result.status
