from datetime import datetime
from typing import List, Optional

from vinted_api.core.errors import (
	Forbidden, ImageUploadFailed, MarketError, MissingField, MissingImage, NotFound,
)
from vinted_api.core.logging import log_event
from vinted_api.core.security import new_id
from vinted_api.db.models import Offer, User
from vinted_api.db.stores import ListingStore
from vinted_api.integrations.images import ImageHost, ImageHostError, ImageUpload, discard_image
from vinted_api.schemas.offers import OfferFields


class ListingService:
	def __init__(self, store: ListingStore, images: ImageHost, image_folder: str):
		self.store = store
		self.images = images
		self.image_folder = image_folder

	def publish(self, owner: User, fields: OfferFields, picture: Optional[ImageUpload]) -> Offer:
		if not fields.title:
			raise MissingField("title")
		if fields.price is None:
			raise MissingField("price")
		if picture is None or not picture.data:
			raise MissingImage()

		offer = Offer(
			id=new_id(),
			title=fields.title,
			description=fields.description,
			price=fields.price,
			attributes=fields.attributes(),
			created_at=datetime.utcnow(),
			owner_id=owner.id,
		)
		# nothing is written until the image is hosted
		try:
			uploaded = self.images.upload(picture, folder=self.image_folder, public_id=f"{fields.title} - {offer.id}")
		except ImageHostError as exc:
			raise ImageUploadFailed(str(exc)) from exc
		offer.image_public_id = uploaded.public_id
		offer.image_url = uploaded.url

		try:
			return self.store.create(offer)
		except MarketError:
			discard_image(self.images, uploaded.public_id)
			raise

	def search(
		self,
		title: Optional[str] = None,
		price_min: Optional[float] = None,
		price_max: Optional[float] = None,
		sort: Optional[str] = None,
		limit: Optional[int] = None,
		offset: int = 0,
	) -> List[Offer]:
		return self.store.find_many(
			title=title,
			price_min=price_min,
			price_max=price_max,
			sort=sort,
			limit=limit,
			offset=offset,
		)

	def count(self, title: Optional[str] = None, price_min: Optional[float] = None, price_max: Optional[float] = None) -> int:
		return self.store.count(title=title, price_min=price_min, price_max=price_max)

	def get_by_id(self, offer_id: str) -> Offer:
		offer = self.store.find_by_id(offer_id)
		if offer is None:
			raise NotFound("Offer not found")
		return offer

	def delete(self, actor: User, offer_id: str) -> None:
		offer = self.get_by_id(offer_id)
		if offer.owner_id != actor.id:
			raise Forbidden("Only the owner can delete this offer")

		try:
			self.images.destroy(offer.image_public_id)
		except ImageHostError as exc:
			log_event("offer_image_destroy_failed", offer_id=offer_id, public_id=offer.image_public_id, error=str(exc))

		if not self.store.delete_by_id(offer_id):
			raise NotFound("Offer not found")
