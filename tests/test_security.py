from datetime import datetime, timedelta, timezone

import jwt
import pytest

from config.settings import settings
from utils.security import create_access_token, decode_access_token, hash_password, verify_password


def test_password_hash_roundtrip():
    hashed = hash_password("secret")
    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)


def test_token_contains_user_identity():
    payload = decode_access_token(create_access_token(7, "anna"))
    assert payload["id"] == 7
    assert payload["username"] == "anna"


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode({"id": 1, "username": "x"}, "other-secret", algorithm="HS256")
    with pytest.raises(jwt.InvalidTokenError):
        decode_access_token(token)


def test_expired_token_is_rejected():
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    token = jwt.encode({"id": 1, "exp": past}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token)
