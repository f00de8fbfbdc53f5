import string

from vinted_api.core.security import (
	SALT_LENGTH, TOKEN_LENGTH, hash_password, new_salt, new_token, verify_password,
)


def test_salt_and_token_are_alphanumeric_with_fixed_length():
	alphabet = set(string.ascii_letters + string.digits)
	salt, token = new_salt(), new_token()
	assert len(salt) == SALT_LENGTH
	assert len(token) == TOKEN_LENGTH
	assert set(salt) <= alphabet
	assert set(token) <= alphabet
	assert new_token() != token


def test_hash_depends_on_salt():
	assert hash_password("secret", "aaaa") == hash_password("secret", "aaaa")
	assert hash_password("secret", "aaaa") != hash_password("secret", "bbbb")


def test_hash_is_base64_sha256_of_password_then_salt():
	# sha256("secretsalt"), base64
	assert hash_password("secret", "salt") == "+E+iFJ27Yu1ODPH1UNKUmzOmUT06dwfghQJRHHnMsO4="


def test_verify_password():
	salt = new_salt()
	stored = hash_password("secret", salt)
	assert verify_password("secret", salt, stored)
	assert not verify_password("secreT", salt, stored)
