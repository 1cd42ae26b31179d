from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..errors import AuthenticationError
from .config import DEFAULT_AUTH_CONFIG, AuthConfig
from .models import User
from .tokens import user_from_token

_bearer = HTTPBearer(auto_error=False)


def get_auth_config() -> AuthConfig:
    return DEFAULT_AUTH_CONFIG


def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    config: AuthConfig = Depends(get_auth_config),
) -> User:
    """Raise 401 unless a valid bearer token is present."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")
    return user_from_token(credentials.credentials, config)
