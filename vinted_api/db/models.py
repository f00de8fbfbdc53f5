from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Boolean, Float, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from vinted_api.db.base import Base
from vinted_api.core.security import new_id

class User(Base):
	__tablename__ = "users"

	id = Column(String(32), primary_key=True, default=new_id)
	email = Column(String, unique=True, index=True, nullable=False)
	username = Column(String, nullable=False)
	avatar_public_id = Column(String, nullable=True)
	avatar_url = Column(String, nullable=True)
	newsletter = Column(Boolean, nullable=False, default=False)
	salt = Column(String, nullable=False)
	hash = Column(String, nullable=False)
	token = Column(String, unique=True, index=True, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow)

	offers = relationship("Offer", back_populates="owner")

	@property
	def avatar(self):
		if not self.avatar_public_id:
			return None
		return {"public_id": self.avatar_public_id, "url": self.avatar_url}

class Offer(Base):
	__tablename__ = "offers"

	id = Column(String(32), primary_key=True, default=new_id)
	title = Column(String, index=True, nullable=False)
	description = Column(Text, nullable=True)
	price = Column(Float, nullable=False)
	attributes = Column(JSON, nullable=False, default=list)  # [{"name": ..., "value": ...}, ...]
	image_public_id = Column(String, nullable=False)
	image_url = Column(String, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	owner_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)

	owner = relationship("User", back_populates="offers")

	@property
	def image(self):
		return {"public_id": self.image_public_id, "url": self.image_url}
