from __future__ import annotations

from pydantic import Field

from ..restaurants.models import CamelModel, NonBlankStr


class ReviewCreateUpdateRequest(CamelModel):
    content: NonBlankStr
    rating: int = Field(..., ge=1, le=5)
    photo_ids: list[str] = Field(default_factory=list)
