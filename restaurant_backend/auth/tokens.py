from __future__ import annotations

import logging
from functools import lru_cache

import jwt

from ..errors import AuthenticationError
from .config import AuthConfig
from .models import User

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _jwks_client(url: str) -> jwt.PyJWKClient:
    return jwt.PyJWKClient(url)


def _signing_key(token: str, config: AuthConfig):
    if config.jwks_url:
        return _jwks_client(config.jwks_url).get_signing_key_from_jwt(token).key
    if config.public_key:
        return config.public_key
    if config.secret:
        return config.secret
    raise AuthenticationError("Token verification is not configured")


def decode_token(token: str, config: AuthConfig) -> dict:
    """Verify the token's signature, expiry and (optionally) issuer/audience."""
    try:
        return jwt.decode(
            token,
            _signing_key(token, config),
            algorithms=list(config.algorithms),
            issuer=config.issuer,
            audience=config.audience,
            options={"require": ["sub"], "verify_aud": config.audience is not None},
        )
    except jwt.PyJWTError as e:
        logger.warning("Rejected bearer token: %s", e)
        raise AuthenticationError("Invalid or expired token") from e


def user_from_token(token: str, config: AuthConfig) -> User:
    return User.from_claims(decode_token(token, config))
