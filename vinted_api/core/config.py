import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
	APP_NAME = os.getenv("APP_NAME", "Vinted API")
	DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./vinted.db")
	PORT = int(os.getenv("PORT", "3000"))

	ALLOW_ORIGINS = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "*").split(",") if o.strip()]

	CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "")
	CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY", "")
	CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET", "")
	OFFER_IMAGE_FOLDER = os.getenv("OFFER_IMAGE_FOLDER", "vinted/offers")
	AVATAR_IMAGE_FOLDER = os.getenv("AVATAR_IMAGE_FOLDER", "vinted/users")

	STRIPE_API_SECRET = os.getenv("STRIPE_API_SECRET", "")
	PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "eur")
	PAYMENT_DESCRIPTION = os.getenv("PAYMENT_DESCRIPTION", "Vinted payment for: {title}")

	HTTP_TIMEOUT_SEC = float(os.getenv("HTTP_TIMEOUT_SEC", "30"))

settings = Settings()
