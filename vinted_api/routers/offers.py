from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile

from vinted_api.core.logging import log_event
from vinted_api.db.models import User
from vinted_api.dependencies import get_current_user, get_listing_service
from vinted_api.routers.users import read_upload
from vinted_api.schemas.offers import OfferFields, OfferOut, OfferPage
from vinted_api.services.offer_service import ListingService

router = APIRouter(tags=["offers"])

@router.post("/offer/publish", response_model=OfferOut)
def publish_offer(
	request: Request,
	title: Optional[str] = Form(None),
	description: Optional[str] = Form(None),
	price: Optional[float] = Form(None, ge=0, allow_inf_nan=False),
	brand: Optional[str] = Form(None),
	size: Optional[str] = Form(None),
	condition: Optional[str] = Form(None),
	color: Optional[str] = Form(None),
	location: Optional[str] = Form(None),
	city: Optional[str] = Form(None),
	picture: Optional[UploadFile] = File(None),
	user: User = Depends(get_current_user),
	offers: ListingService = Depends(get_listing_service),
):
	fields = OfferFields(
		title=title,
		description=description,
		price=price,
		brand=brand,
		size=size,
		condition=condition,
		color=color,
		location=location or city,
	)
	offer = offers.publish(user, fields, read_upload(picture))
	log_event("offer_published", offer_id=offer.id, owner_id=user.id, request_id=request.state.request_id)
	return offer

@router.get("/offers", response_model=OfferPage)
def list_offers(
	title: Optional[str] = None,
	price_min: Optional[float] = Query(None, alias="priceMin", ge=0, allow_inf_nan=False),
	price_max: Optional[float] = Query(None, alias="priceMax", ge=0, allow_inf_nan=False),
	sort: Optional[str] = Query(None, pattern="^(price-asc|price-desc)$"),
	limit: int = Query(20, ge=1, le=100),
	offset: int = Query(0, ge=0),
	offers: ListingService = Depends(get_listing_service),
):
	rows = offers.search(
		title=title,
		price_min=price_min,
		price_max=price_max,
		sort=sort,
		limit=limit,
		offset=offset,
	)
	return {
		"count": offers.count(title=title, price_min=price_min, price_max=price_max),
		"offers": rows,
	}

@router.get("/offer/{offer_id}", response_model=OfferOut)
def get_offer(offer_id: str, offers: ListingService = Depends(get_listing_service)):
	return offers.get_by_id(offer_id)

@router.delete("/offer/delete/{offer_id}")
def delete_offer(
	request: Request,
	offer_id: str,
	user: User = Depends(get_current_user),
	offers: ListingService = Depends(get_listing_service),
):
	offers.delete(user, offer_id)
	log_event("offer_deleted", offer_id=offer_id, actor_id=user.id, request_id=request.state.request_id)
	return {"message": "Offer deleted"}
