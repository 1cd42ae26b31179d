from __future__ import annotations

import time

import jwt
import pytest

from restaurant_backend.auth.config import AuthConfig
from restaurant_backend.auth.models import User
from restaurant_backend.auth.tokens import decode_token, user_from_token
from restaurant_backend.errors import AuthenticationError

SECRET = "test-secret-key-that-is-long-enough"
CONFIG = AuthConfig(secret=SECRET, algorithms=("HS256",), issuer=None, audience=None)

CLAIMS = {
    "sub": "user-1",
    "preferred_username": "max",
    "given_name": "Max",
    "family_name": "Eagan",
}


def _token(claims: dict | None = None, secret: str = SECRET) -> str:
    payload = {**CLAIMS, "exp": int(time.time()) + 300, **(claims or {})}
    return jwt.encode(payload, secret, algorithm="HS256")


def test_user_from_token_maps_claims():
    user = user_from_token(_token(), CONFIG)
    assert user == User(id="user-1", username="max", given_name="Max", family_name="Eagan")


def test_expired_token_rejected():
    with pytest.raises(AuthenticationError):
        decode_token(_token({"exp": int(time.time()) - 10}), CONFIG)


def test_wrong_signature_rejected():
    with pytest.raises(AuthenticationError):
        decode_token(_token(secret="another-secret-that-is-long-enough"), CONFIG)


def test_token_without_subject_rejected():
    payload = {"preferred_username": "max", "exp": int(time.time()) + 300}
    token = jwt.encode(payload, SECRET, algorithm="HS256")
    with pytest.raises(AuthenticationError):
        decode_token(token, CONFIG)


def test_issuer_checked_when_configured():
    config = AuthConfig(secret=SECRET, algorithms=("HS256",), issuer="https://auth.example.com", audience=None)
    with pytest.raises(AuthenticationError):
        decode_token(_token({"iss": "https://evil.example.com"}), config)
    assert decode_token(_token({"iss": "https://auth.example.com"}), config)["sub"] == "user-1"


def test_unconfigured_verification_rejects():
    config = AuthConfig(secret="", public_key="", jwks_url="", algorithms=("HS256",))
    with pytest.raises(AuthenticationError):
        decode_token(_token(), config)
