from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from vinted_api.core.logging import log_event
from vinted_api.db.models import User
from vinted_api.dependencies import get_authenticator, get_current_user
from vinted_api.integrations.images import ImageUpload
from vinted_api.schemas.users import LoginRequest, SessionOut
from vinted_api.services.auth_service import Authenticator

router = APIRouter(prefix="/user", tags=["user"])

def session_view(user: User) -> dict:
	# salt and hash never leave the service
	return {
		"id": user.id,
		"email": user.email,
		"token": user.token,
		"newsletter": user.newsletter,
		"account": {"username": user.username, "avatar": user.avatar},
	}

def read_upload(upload: Optional[UploadFile]) -> Optional[ImageUpload]:
	if upload is None:
		return None
	data = upload.file.read()
	if not data:
		return None
	return ImageUpload(
		data=data,
		content_type=upload.content_type or "application/octet-stream",
		filename=upload.filename,
	)

@router.post("/signup", response_model=SessionOut)
def signup(
	request: Request,
	email: Optional[str] = Form(None),
	username: Optional[str] = Form(None),
	password: Optional[str] = Form(None),
	newsletter: bool = Form(False),
	avatar: Optional[UploadFile] = File(None),
	authenticator: Authenticator = Depends(get_authenticator),
):
	user = authenticator.register(
		email=email,
		username=username,
		password=password,
		newsletter=newsletter,
		avatar=read_upload(avatar),
	)
	log_event("user_registered", user_id=user.id, email=user.email, request_id=request.state.request_id)
	return session_view(user)

@router.post("/login", response_model=SessionOut)
def login(request: Request, payload: LoginRequest, authenticator: Authenticator = Depends(get_authenticator)):
	user = authenticator.login(payload.email, payload.password)
	log_event("user_login", user_id=user.id, request_id=request.state.request_id)
	return session_view(user)

@router.get("/me", response_model=SessionOut)
def get_me(user: User = Depends(get_current_user)):
	return session_view(user)
