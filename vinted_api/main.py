from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from vinted_api.core.config import settings
from vinted_api.core.logging import request_id_middleware
from vinted_api.core.errors import (
	MarketError, market_error_handler, unhandled_exception_handler, validation_exception_handler,
)
from vinted_api.db.session import engine
from vinted_api.db.base import Base
from vinted_api.db import models  # noqa: F401

from vinted_api.routers.users import router as users_router
from vinted_api.routers.offers import router as offers_router
from vinted_api.routers.payments import router as payments_router


def create_app() -> FastAPI:
	app = FastAPI(title=settings.APP_NAME)

	# DB init
	Base.metadata.create_all(bind=engine)

	# Middleware
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.ALLOW_ORIGINS,
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	app.middleware("http")(request_id_middleware)

	# Error handlers (consistent format)
	app.add_exception_handler(RequestValidationError, validation_exception_handler)
	app.add_exception_handler(MarketError, market_error_handler)
	app.add_exception_handler(Exception, unhandled_exception_handler)

	# Routers
	app.include_router(users_router)
	app.include_router(offers_router)
	app.include_router(payments_router)

	@app.get("/health")
	def health():
		return {"status": "OK"}

	return app

app = create_app()

if __name__ == "__main__":
	import uvicorn
	uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
