from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from vinted_api.schemas.users import ImageOut, OwnerOut

# Facet order is part of the offer contract
FACETS = ("brand", "size", "condition", "color", "location")


class OfferFields(BaseModel):
	title: Optional[str] = None
	description: Optional[str] = None
	price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
	brand: Optional[str] = None
	size: Optional[str] = None
	condition: Optional[str] = None
	color: Optional[str] = None
	location: Optional[str] = None

	def attributes(self) -> List[dict]:
		return [{"name": facet, "value": getattr(self, facet)} for facet in FACETS]


class OfferAttribute(BaseModel):
	name: str
	value: Optional[str] = None


class OfferOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: str
	title: str
	description: Optional[str] = None
	price: float
	attributes: List[OfferAttribute]
	image: ImageOut
	created_at: datetime
	owner: OwnerOut


class OfferPage(BaseModel):
	count: int
	offers: List[OfferOut]
