from fastapi import APIRouter, Depends, Request

from vinted_api.core.logging import log_event
from vinted_api.db.models import User
from vinted_api.dependencies import get_current_user, get_payment_gateway
from vinted_api.schemas.payments import PaymentOut, PaymentRequest
from vinted_api.services.payment_service import PaymentGateway

router = APIRouter(tags=["payments"])

@router.post("/payment", response_model=PaymentOut)
def pay(
	request: Request,
	payload: PaymentRequest,
	user: User = Depends(get_current_user),
	gateway: PaymentGateway = Depends(get_payment_gateway),
):
	status = gateway.charge(user, payload.amount, payload.title, payload.source_token)
	log_event("payment_charged", user_id=user.id, amount=payload.amount, status=status, request_id=request.state.request_id)
	return {"status": status}
