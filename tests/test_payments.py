import pytest
from fastapi.testclient import TestClient

from vinted_api.core.errors import PaymentFailed
from vinted_api.db.models import User
from vinted_api.main import app
from vinted_api.services.payment_service import PaymentGateway, to_minor_units

from conftest import auth, signup


@pytest.fixture
def gateway(processor):
	return PaymentGateway(processor, currency="eur", description_template="Vinted payment for: {title}")


def test_to_minor_units_rounds():
	assert to_minor_units(19.99) == 1999
	assert to_minor_units(25) == 2500
	assert to_minor_units(0.1) == 10


def test_charge_forwards_to_processor(gateway, processor):
	status = gateway.charge(User(id="u1"), 19.99, "Blue Jacket", "tok_visa")
	assert status == "succeeded"
	assert processor.charges == [
		{
			"amount": 1999,
			"currency": "eur",
			"description": "Vinted payment for: Blue Jacket",
			"source": "tok_visa",
			"metadata": {"user_id": "u1"},
		}
	]


def test_charge_returns_status_verbatim(gateway, processor):
	processor.status = "pending"
	assert gateway.charge(User(id="u1"), 5, "Cap", "tok_visa") == "pending"


def test_charge_failure_becomes_payment_failed(gateway, processor):
	processor.error = "Your card was declined."
	with pytest.raises(PaymentFailed) as excinfo:
		gateway.charge(User(id="u1"), 5, "Cap", "tok_visa")
	assert excinfo.value.message == "Your card was declined."


def test_payment_endpoint(client, processor):
	token = signup(client)["token"]
	payload = {"amount": 12.5, "title": "Blue Jacket", "stripeToken": "tok_visa"}

	assert client.post("/payment", json=payload).status_code == 401

	res = client.post("/payment", json=payload, headers=auth(token))
	assert res.status_code == 200
	assert res.json() == {"status": "succeeded"}
	assert processor.charges[0]["amount"] == 1250

	processor.error = "Your card was declined."
	res = client.post("/payment", json=payload, headers=auth(token))
	assert res.status_code == 400
	assert res.json()["error"] == "payment_failed"
	assert res.json()["message"] == "Your card was declined."


def test_payment_requires_positive_amount(client):
	token = signup(client)["token"]
	res = client.post("/payment", json={"amount": 0, "title": "Cap", "stripeToken": "tok"}, headers=auth(token))
	assert res.status_code == 422


def test_to_minor_units_rounds_half_up():
	assert to_minor_units(0.125) == 13
	assert to_minor_units(1.005) == 101


@pytest.mark.parametrize("amount", [float("inf"), float("nan")])
def test_to_minor_units_rejects_non_finite(amount):
	with pytest.raises(PaymentFailed):
		to_minor_units(amount)


def test_payment_rejects_infinite_amount(client, processor):
	token = signup(client)["token"]
	res = client.post(
		"/payment",
		content='{"amount": Infinity, "title": "Cap", "stripeToken": "tok_visa"}',
		headers={**auth(token), "Content-Type": "application/json"},
	)
	assert res.status_code == 422
	assert res.json()["error"] == "validation_error"
	assert processor.charges == []


def test_unexpected_error_renders_internal_error(client, processor, monkeypatch):
	token = signup(client)["token"]

	def explode(**kwargs):
		raise RuntimeError("socket closed")

	monkeypatch.setattr(processor, "charge", explode)
	res = TestClient(app, raise_server_exceptions=False).post(
		"/payment",
		json={"amount": 5, "title": "Cap", "stripeToken": "tok_visa"},
		headers=auth(token),
	)
	assert res.status_code == 400
	assert res.json()["error"] == "internal_error"
	assert res.json()["message"] == "Something went wrong"
