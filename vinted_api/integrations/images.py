from __future__ import annotations

import base64
import hashlib
import time
from dataclasses import dataclass

import httpx

from vinted_api.core.logging import log_event


class ImageHostError(RuntimeError):
	pass


@dataclass
class ImageUpload:
	data: bytes
	content_type: str = "application/octet-stream"
	filename: str | None = None

	def as_data_uri(self) -> str:
		encoded = base64.b64encode(self.data).decode("ascii")
		return f"data:{self.content_type};base64,{encoded}"


@dataclass
class UploadedImage:
	public_id: str
	url: str
	raw: dict | None = None


class ImageHost:
	name = "unknown"

	def upload(self, image: ImageUpload, *, folder: str, public_id: str) -> UploadedImage:
		raise NotImplementedError

	def destroy(self, public_id: str) -> None:
		raise NotImplementedError


def sign_params(params: dict, api_secret: str) -> str:
	# Cloudinary: sha1 over alphabetically sorted "k=v" pairs joined by "&", secret appended
	sign_str = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] not in (None, ""))
	return hashlib.sha1(f"{sign_str}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryImageHost(ImageHost):
	name = "cloudinary"
	base_url = "https://api.cloudinary.com/v1_1"

	def __init__(self, cloud_name: str, api_key: str, api_secret: str, *, timeout: float = 30, http: httpx.Client | None = None):
		self.cloud_name = cloud_name
		self.api_key = api_key
		self.api_secret = api_secret
		self.http = http or httpx.Client(timeout=timeout)

	@property
	def configured(self) -> bool:
		return bool(self.cloud_name and self.api_key and self.api_secret)

	def _signed(self, params: dict) -> dict:
		params = {**params, "timestamp": int(time.time())}
		params["signature"] = sign_params(params, self.api_secret)
		params["api_key"] = self.api_key
		return params

	def _post(self, action: str, data: dict) -> dict:
		if not self.configured:
			raise ImageHostError("Cloudinary is not configured")
		url = f"{self.base_url}/{self.cloud_name}/image/{action}"
		try:
			r = self.http.post(url, data=data)
		except httpx.HTTPError as exc:
			raise ImageHostError(f"Cloudinary {action} failed: {exc}") from exc
		try:
			j = r.json() if r.content else {}
		except ValueError:
			j = {}
		if not isinstance(j, dict):
			j = {}
		if r.status_code < 200 or r.status_code >= 300:
			error = j.get("error")
			msg = str((error.get("message") if isinstance(error, dict) else error) or f"HTTP {r.status_code}").strip()
			raise ImageHostError(msg)
		return j

	def upload(self, image: ImageUpload, *, folder: str, public_id: str) -> UploadedImage:
		data = self._signed({"folder": folder, "public_id": public_id})
		data["file"] = image.as_data_uri()
		j = self._post("upload", data)
		uploaded = UploadedImage(
			public_id=str(j.get("public_id") or "").strip(),
			url=str(j.get("secure_url") or j.get("url") or "").strip(),
			raw=j,
		)
		if not uploaded.public_id or not uploaded.url:
			raise ImageHostError("Cloudinary upload returned no image reference")
		return uploaded

	def destroy(self, public_id: str) -> None:
		j = self._post("destroy", self._signed({"public_id": public_id}))
		if j.get("result") != "ok":
			raise ImageHostError(f"Cloudinary destroy returned {j.get('result')!r}")


def discard_image(images: ImageHost, public_id: str) -> None:
	"""Best-effort removal of an image nothing refers to anymore."""
	try:
		images.destroy(public_id)
	except ImageHostError as exc:
		log_event("image_cleanup_failed", public_id=public_id, error=str(exc))
