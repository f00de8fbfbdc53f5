from typing import Optional

from pydantic import BaseModel, ConfigDict


class LoginRequest(BaseModel):
	email: Optional[str] = None
	password: Optional[str] = None


class ImageOut(BaseModel):
	public_id: str
	url: str


class AccountOut(BaseModel):
	username: str
	avatar: Optional[ImageOut] = None


class SessionOut(BaseModel):
	id: str
	email: str
	token: str
	newsletter: bool
	account: AccountOut


class OwnerOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: str
	username: str
	avatar: Optional[ImageOut] = None
