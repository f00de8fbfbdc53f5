from typing import Optional

from vinted_api.core.errors import (
	DuplicateEmail, ImageUploadFailed, InvalidToken, MarketError, MissingField,
	MissingToken, Unauthorized,
)
from vinted_api.core.security import hash_password, new_id, new_salt, new_token, verify_password
from vinted_api.db.models import User
from vinted_api.db.stores import CredentialStore
from vinted_api.integrations.images import ImageHost, ImageHostError, ImageUpload, discard_image


class Authenticator:
	def __init__(self, store: CredentialStore, images: ImageHost, avatar_folder: str):
		self.store = store
		self.images = images
		self.avatar_folder = avatar_folder

	def register(
		self,
		email: Optional[str],
		username: Optional[str],
		password: Optional[str],
		newsletter: bool = False,
		avatar: Optional[ImageUpload] = None,
	) -> User:
		for field, value in (("email", email), ("username", username), ("password", password)):
			if not value:
				raise MissingField(field)
		if self.store.find_by_email(email) is not None:
			raise DuplicateEmail()

		salt = new_salt()
		user = User(
			id=new_id(),
			email=email,
			username=username,
			newsletter=bool(newsletter),
			salt=salt,
			hash=hash_password(password, salt),
			token=new_token(),
		)
		if avatar is not None and avatar.data:
			try:
				uploaded = self.images.upload(avatar, folder=f"{self.avatar_folder}/{user.id}", public_id="avatar")
			except ImageHostError as exc:
				raise ImageUploadFailed(str(exc)) from exc
			user.avatar_public_id = uploaded.public_id
			user.avatar_url = uploaded.url

		try:
			return self.store.create(user)
		except MarketError:
			if user.avatar_public_id:
				discard_image(self.images, user.avatar_public_id)
			raise

	def login(self, email: Optional[str], password: Optional[str]) -> User:
		if not email:
			raise MissingField("email")
		if not password:
			raise MissingField("password")
		user = self.store.find_by_email(email)
		if user is None or not verify_password(password, user.salt, user.hash):
			raise Unauthorized()
		return user

	def authenticate(self, token: Optional[str]) -> User:
		if not token:
			raise MissingToken()
		user = self.store.find_by_token(token)
		if user is None:
			raise InvalidToken()
		return user
