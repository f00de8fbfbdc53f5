from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette import status

from vinted_api.core.logging import log_event


class MarketError(Exception):
	"""Base for every failure a request can end with.

	Services raise these; the app-level handler turns them into a JSON error
	response. Collaborator exceptions are never let through to the boundary.
	"""

	status_code = status.HTTP_400_BAD_REQUEST
	code = "internal_error"
	default_message = "Something went wrong"

	def __init__(self, message: str | None = None):
		self.message = message or self.default_message
		super().__init__(self.message)


class MissingField(MarketError):
	code = "missing_field"
	default_message = "Missing parameters"

	def __init__(self, field: str | None = None):
		self.field = field
		super().__init__(f"Missing parameter: {field}" if field else None)


class DuplicateEmail(MarketError):
	code = "duplicate_email"
	default_message = "This email already has an account"


class Unauthorized(MarketError):
	status_code = status.HTTP_401_UNAUTHORIZED
	code = "unauthorized"
	default_message = "Unauthorized"


class MissingToken(MarketError):
	status_code = status.HTTP_401_UNAUTHORIZED
	code = "missing_token"
	default_message = "Token not sent"


class InvalidToken(MarketError):
	status_code = status.HTTP_401_UNAUTHORIZED
	code = "invalid_token"
	default_message = "Token sent but not valid"


class Forbidden(MarketError):
	status_code = status.HTTP_403_FORBIDDEN
	code = "forbidden"
	default_message = "Forbidden"


class MissingImage(MarketError):
	code = "missing_image"
	default_message = "A picture is required"


class ImageUploadFailed(MarketError):
	code = "image_upload_failed"
	default_message = "Image upload failed"


class NotFound(MarketError):
	status_code = status.HTTP_404_NOT_FOUND
	code = "not_found"
	default_message = "Not found"


class PaymentFailed(MarketError):
	code = "payment_failed"
	default_message = "Payment failed"


class InternalError(MarketError):
	pass


def error_response(request: Request, status_code: int, message: str, code: str | None = None, details=None):
	# Ensure details is serializable
	if isinstance(details, Exception):
		details = str(details)
	content = {
		"message": message,
		"error": code,
		"request_id": getattr(request.state, "request_id", None),
	}
	if details is not None:
		content["details"] = details
	return JSONResponse(status_code=status_code, content=content)

async def market_error_handler(request: Request, exc: MarketError):
	log_event(
		"request_failed",
		path=request.url.path,
		error=exc.code,
		message=exc.message,
		request_id=getattr(request.state, "request_id", None),
	)
	return error_response(request, exc.status_code, exc.message, code=exc.code)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
	return error_response(
		request,
		status.HTTP_422_UNPROCESSABLE_ENTITY,
		"Validation error",
		code="validation_error",
		details=jsonable_encoder(exc.errors()),
	)

async def unhandled_exception_handler(request: Request, exc: Exception):
	log_event(
		"request_crashed",
		path=request.url.path,
		error=type(exc).__name__,
		message=str(exc),
		request_id=getattr(request.state, "request_id", None),
	)
	fallback = InternalError()
	return error_response(request, fallback.status_code, fallback.message, code=fallback.code)
