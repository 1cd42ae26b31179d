from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _split(value: str) -> tuple[str, ...]:
    return tuple(v.strip() for v in value.split(",") if v.strip())


@dataclass(frozen=True)
class AuthConfig:
    """Verification settings for tokens issued by the external identity provider."""

    secret: str = os.getenv("JWT_SECRET", "")
    public_key: str = os.getenv("JWT_PUBLIC_KEY", "")
    jwks_url: str = os.getenv("JWT_JWKS_URL", "")
    algorithms: tuple[str, ...] = _split(os.getenv("JWT_ALGORITHMS", "RS256"))
    issuer: str | None = os.getenv("JWT_ISSUER") or None
    audience: str | None = os.getenv("JWT_AUDIENCE") or None


DEFAULT_AUTH_CONFIG = AuthConfig()
