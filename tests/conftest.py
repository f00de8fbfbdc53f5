"""Shared fixtures: in-memory database, fake collaborators, HTTP client."""

import os

# Must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("PAYMENT_CURRENCY", "eur")

import pytest
from fastapi.testclient import TestClient

from vinted_api.db.base import Base
from vinted_api.db.session import engine, SessionLocal
from vinted_api.db.stores import CredentialStore, ListingStore
from vinted_api.dependencies import get_image_host, get_payment_processor
from vinted_api.integrations.images import ImageHost, ImageHostError, UploadedImage
from vinted_api.integrations.payments import ChargeResult, PaymentProcessor, PaymentProcessorError
from vinted_api.main import app
from vinted_api.services.auth_service import Authenticator
from vinted_api.services.offer_service import ListingService


class FakeImageHost(ImageHost):
	name = "fake"

	def __init__(self):
		self.uploads = []
		self.destroyed = []
		self.fail_upload = False
		self.fail_destroy = False

	def upload(self, image, *, folder, public_id):
		if self.fail_upload:
			raise ImageHostError("upload rejected")
		uploaded = UploadedImage(
			public_id=f"{folder}/{public_id}",
			url=f"https://images.test/{folder}/{public_id}",
		)
		self.uploads.append({"folder": folder, "public_id": public_id, "image": image, "result": uploaded})
		return uploaded

	def destroy(self, public_id):
		if self.fail_destroy:
			raise ImageHostError("destroy rejected")
		self.destroyed.append(public_id)


class FakePaymentProcessor(PaymentProcessor):
	name = "fake"

	def __init__(self):
		self.charges = []
		self.error = None
		self.status = "succeeded"

	def charge(self, *, amount, currency, description, source, metadata=None):
		if self.error:
			raise PaymentProcessorError(self.error)
		self.charges.append(
			{"amount": amount, "currency": currency, "description": description, "source": source, "metadata": metadata}
		)
		return ChargeResult(status=self.status, reference=f"ch_{len(self.charges)}")


@pytest.fixture(autouse=True)
def schema():
	Base.metadata.create_all(bind=engine)
	yield
	Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
	session = SessionLocal()
	try:
		yield session
	finally:
		session.close()


@pytest.fixture
def image_host():
	return FakeImageHost()


@pytest.fixture
def processor():
	return FakePaymentProcessor()


@pytest.fixture
def client(image_host, processor):
	app.dependency_overrides[get_image_host] = lambda: image_host
	app.dependency_overrides[get_payment_processor] = lambda: processor
	try:
		yield TestClient(app)
	finally:
		app.dependency_overrides.clear()


@pytest.fixture
def authenticator(db, image_host):
	return Authenticator(CredentialStore(db), image_host, avatar_folder="vinted/users")


@pytest.fixture
def listings(db, image_host):
	return ListingService(ListingStore(db), image_host, image_folder="vinted/offers")


@pytest.fixture
def alice(authenticator):
	return authenticator.register("a@x.com", "alice", "secret")


def auth(token):
	return {"Authorization": f"Bearer {token}"}


def signup(client, email="a@x.com", username="alice", password="secret"):
	res = client.post("/user/signup", data={"email": email, "username": username, "password": password})
	assert res.status_code == 200, res.text
	return res.json()
