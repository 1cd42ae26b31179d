from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Every failure the API reports, with its HTTP status and public message."""

    NOT_FOUND = (404, "The specified resource was not found")
    VALIDATION_FAILURE = (400, "The request is invalid")
    REVIEW_REJECTED = (400, "The specified review could not be created or updated.")
    UNAUTHORIZED = (401, "Authentication required")
    STORAGE_FAILURE = (500, "Unable to save or retrieve resources at this time")
    INTERNAL = (500, "An unexpected error occurred")

    def __init__(self, status: int, default_message: str) -> None:
        self.status = status
        self.default_message = default_message


class RestaurantAppError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.kind.default_message)
        self.message = message or self.kind.default_message


class RestaurantNotFoundError(RestaurantAppError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, restaurant_id: str) -> None:
        super().__init__(f"Restaurant with this ID does not exist: {restaurant_id}")
        self.restaurant_id = restaurant_id


class ReviewNotFoundError(RestaurantAppError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, review_id: str) -> None:
        super().__init__(f"Review with this ID does not exist: {review_id}")
        self.review_id = review_id


class ReviewNotAllowedError(RestaurantAppError):
    kind = ErrorKind.REVIEW_REJECTED


class ValidationFailure(RestaurantAppError):
    kind = ErrorKind.VALIDATION_FAILURE


class AuthenticationError(RestaurantAppError):
    kind = ErrorKind.UNAUTHORIZED


class StorageError(RestaurantAppError):
    kind = ErrorKind.STORAGE_FAILURE


def _public_message(exc: RestaurantAppError) -> str:
    # Storage details (paths, sizes) stay in the logs.
    if exc.kind is ErrorKind.STORAGE_FAILURE:
        return exc.kind.default_message
    if exc.kind is ErrorKind.NOT_FOUND and isinstance(exc, RestaurantNotFoundError):
        return "The specified restaurant was not found"
    return exc.message


def translate(exc: Exception) -> tuple[int, dict]:
    """Map any exception to ``(status, {"status", "message"})`` and log it."""
    if isinstance(exc, RestaurantAppError):
        kind = exc.kind
        if kind.status >= 500:
            logger.error("Caught %s", type(exc).__name__, exc_info=exc)
        else:
            logger.error("Caught %s: %s", type(exc).__name__, exc.message)
        message = _public_message(exc)
    else:
        kind = ErrorKind.INTERNAL
        # The server re-raises unhandled errors and logs their traceback itself.
        logger.error("Caught unexpected exception: %s", type(exc).__name__)
        message = kind.default_message

    return kind.status, {"status": kind.status, "message": message}


def format_validation_errors(errors: list[dict]) -> str:
    """Join pydantic/FastAPI errors into ``"field: message, field: message"``."""
    parts: list[str] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return ", ".join(parts)
