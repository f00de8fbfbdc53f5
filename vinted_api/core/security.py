import base64
import hashlib
import hmac
import secrets
import string
import uuid

SALT_LENGTH = 16
TOKEN_LENGTH = 32

_ALPHABET = string.ascii_letters + string.digits

def _random_string(length: int) -> str:
	return "".join(secrets.choice(_ALPHABET) for _ in range(length))

def new_id() -> str:
	return uuid.uuid4().hex

def new_salt() -> str:
	return _random_string(SALT_LENGTH)

def new_token() -> str:
	return _random_string(TOKEN_LENGTH)

def hash_password(password: str, salt: str) -> str:
	# base64(SHA-256(password + salt)); existing account hashes use this exact form
	digest = hashlib.sha256((password + salt).encode("utf-8")).digest()
	return base64.b64encode(digest).decode("ascii")

def verify_password(password: str, salt: str, password_hash: str) -> bool:
	return hmac.compare_digest(hash_password(password, salt), password_hash)
