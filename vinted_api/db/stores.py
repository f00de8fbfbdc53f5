"""Storage access for users and offers.

Both stores wrap a SQLAlchemy session and only expose the handful of calls the
services need. Database faults come out as ``InternalError`` so callers never
see a raw driver exception.
"""

from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from vinted_api.core.errors import DuplicateEmail, InternalError
from vinted_api.core.logging import log_event
from vinted_api.db.models import User, Offer


@contextmanager
def _store_call(db: Session, action: str):
	try:
		yield
	except SQLAlchemyError as exc:
		db.rollback()
		log_event("store_error", action=action, error=str(exc))
		raise InternalError("Storage failure") from exc


class CredentialStore:
	def __init__(self, db: Session):
		self.db = db

	def find_by_email(self, email: str) -> Optional[User]:
		with _store_call(self.db, "user_find_by_email"):
			return self.db.query(User).filter(User.email == email).first()

	def find_by_token(self, token: str) -> Optional[User]:
		with _store_call(self.db, "user_find_by_token"):
			return self.db.query(User).filter(User.token == token).first()

	def find_by_id(self, user_id: str) -> Optional[User]:
		with _store_call(self.db, "user_find_by_id"):
			return self.db.get(User, user_id)

	def create(self, user: User) -> User:
		# a concurrent signup can still slip past find_by_email; the unique index decides
		with _store_call(self.db, "user_create"):
			self.db.add(user)
			try:
				self.db.commit()
			except IntegrityError as exc:
				self.db.rollback()
				raise DuplicateEmail() from exc
			self.db.refresh(user)
		return user


class ListingStore:
	def __init__(self, db: Session):
		self.db = db

	def _filtered(self, title: Optional[str], price_min: Optional[float], price_max: Optional[float]):
		query = self.db.query(Offer)
		if title:
			query = query.filter(Offer.title.icontains(title, autoescape=True))
		if price_min is not None:
			query = query.filter(Offer.price >= price_min)
		if price_max is not None:
			query = query.filter(Offer.price <= price_max)
		return query

	def create(self, offer: Offer) -> Offer:
		offer_id = offer.id
		with _store_call(self.db, "offer_create"):
			self.db.add(offer)
			self.db.commit()
		return self.find_by_id(offer_id)

	def find_many(
		self,
		title: Optional[str] = None,
		price_min: Optional[float] = None,
		price_max: Optional[float] = None,
		sort: Optional[str] = None,
		limit: Optional[int] = None,
		offset: int = 0,
	) -> List[Offer]:
		with _store_call(self.db, "offer_find_many"):
			query = self._filtered(title, price_min, price_max).options(joinedload(Offer.owner))
			if sort == "price-asc":
				query = query.order_by(Offer.price.asc())
			elif sort == "price-desc":
				query = query.order_by(Offer.price.desc())
			query = query.order_by(Offer.created_at.asc(), Offer.id.asc())
			if offset:
				query = query.offset(offset)
			if limit is not None:
				query = query.limit(limit)
			return query.all()

	def count(
		self,
		title: Optional[str] = None,
		price_min: Optional[float] = None,
		price_max: Optional[float] = None,
	) -> int:
		with _store_call(self.db, "offer_count"):
			return self._filtered(title, price_min, price_max).count()

	def find_by_id(self, offer_id: str) -> Optional[Offer]:
		with _store_call(self.db, "offer_find_by_id"):
			return (
				self.db.query(Offer)
				.options(joinedload(Offer.owner))
				.filter(Offer.id == offer_id)
				.first()
			)

	def delete_by_id(self, offer_id: str) -> bool:
		with _store_call(self.db, "offer_delete"):
			deleted = self.db.query(Offer).filter(Offer.id == offer_id).delete()
			self.db.commit()
		return deleted > 0
