from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from vinted_api.core.config import settings
from vinted_api.db.models import User
from vinted_api.db.session import get_db
from vinted_api.db.stores import CredentialStore, ListingStore
from vinted_api.integrations.images import CloudinaryImageHost, ImageHost
from vinted_api.integrations.payments import PaymentProcessor, StripePaymentProcessor
from vinted_api.services.auth_service import Authenticator
from vinted_api.services.offer_service import ListingService
from vinted_api.services.payment_service import PaymentGateway

# auto_error=False so a missing header reaches the authenticator as MissingToken
bearer = HTTPBearer(auto_error=False)

@lru_cache
def get_image_host() -> ImageHost:
	return CloudinaryImageHost(
		settings.CLOUDINARY_CLOUD_NAME,
		settings.CLOUDINARY_API_KEY,
		settings.CLOUDINARY_API_SECRET,
		timeout=settings.HTTP_TIMEOUT_SEC,
	)

@lru_cache
def get_payment_processor() -> PaymentProcessor:
	return StripePaymentProcessor(settings.STRIPE_API_SECRET, timeout=settings.HTTP_TIMEOUT_SEC)

def get_authenticator(
	db: Session = Depends(get_db),
	images: ImageHost = Depends(get_image_host),
) -> Authenticator:
	return Authenticator(CredentialStore(db), images, avatar_folder=settings.AVATAR_IMAGE_FOLDER)

def get_listing_service(
	db: Session = Depends(get_db),
	images: ImageHost = Depends(get_image_host),
) -> ListingService:
	return ListingService(ListingStore(db), images, image_folder=settings.OFFER_IMAGE_FOLDER)

def get_payment_gateway(processor: PaymentProcessor = Depends(get_payment_processor)) -> PaymentGateway:
	return PaymentGateway(
		processor,
		currency=settings.PAYMENT_CURRENCY,
		description_template=settings.PAYMENT_DESCRIPTION,
	)

def get_current_user(
	creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
	authenticator: Authenticator = Depends(get_authenticator),
) -> User:
	return authenticator.authenticate(creds.credentials if creds else None)
