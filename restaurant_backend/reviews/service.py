from __future__ import annotations

import logging
import uuid
from datetime import datetime

from ..auth.models import User
from ..errors import (
    RestaurantNotFoundError,
    ReviewNotAllowedError,
    ReviewNotFoundError,
    ValidationFailure,
)
from ..photos.models import Photo
from ..restaurants.models import Page, Restaurant, Review
from ..restaurants.repository import RestaurantRepository
from .models import ReviewCreateUpdateRequest

logger = logging.getLogger(__name__)

# API sort field -> Review attribute
SORT_FIELDS = {
    "datePosted": "date_posted",
    "lastEdited": "last_edited",
    "rating": "rating",
}
DEFAULT_SORT = "datePosted,desc"


def parse_sort(sort: str | None) -> tuple[str, bool]:
    """Parse ``"field[,asc|desc]"`` into ``(attribute, descending)``."""
    field, _, direction = (sort or DEFAULT_SORT).partition(",")
    field = field.strip()
    direction = direction.strip().lower() or "asc"
    if field not in SORT_FIELDS:
        raise ValidationFailure(f"sort: unsupported field '{field}'")
    if direction not in ("asc", "desc"):
        raise ValidationFailure(f"sort: unsupported direction '{direction}'")
    return SORT_FIELDS[field], direction == "desc"


class ReviewService:
    def __init__(self, repository: RestaurantRepository) -> None:
        self.repository = repository

    def _get_restaurant_or_raise(self, restaurant_id: str) -> Restaurant:
        restaurant = self.repository.find_by_id(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        return restaurant

    def create_review(
        self,
        author: User,
        restaurant_id: str,
        request: ReviewCreateUpdateRequest,
    ) -> Review:
        restaurant = self._get_restaurant_or_raise(restaurant_id)

        if any(r.written_by.id == author.id for r in restaurant.reviews):
            raise ReviewNotAllowedError("User has already reviewed this restaurant")

        now = datetime.now()
        review = Review(
            id=str(uuid.uuid4()),
            content=request.content,
            rating=request.rating,
            date_posted=now,
            last_edited=now,
            photos=[Photo(url=photo_id, upload_date=now) for photo_id in request.photo_ids],
            written_by=author,
        )

        self.repository.save(
            restaurant.model_copy(update={"reviews": [*restaurant.reviews, review]})
        )
        logger.info("User %s reviewed restaurant %s", author.id, restaurant_id)
        return review

    def list_reviews(
        self,
        restaurant_id: str,
        page: int = 1,
        size: int = 20,
        sort: str | None = DEFAULT_SORT,
    ) -> Page[Review]:
        attribute, descending = parse_sort(sort)
        restaurant = self._get_restaurant_or_raise(restaurant_id)

        ordered = sorted(
            restaurant.reviews,
            key=lambda r: getattr(r, attribute),
            reverse=descending,
        )
        start = (page - 1) * size
        return Page.of(ordered[start:start + size], page, size, len(ordered))

    def get_review(self, restaurant_id: str, review_id: str) -> Review | None:
        restaurant = self._get_restaurant_or_raise(restaurant_id)
        return next((r for r in restaurant.reviews if r.id == review_id), None)

    def update_review(
        self,
        author: User,
        restaurant_id: str,
        review_id: str,
        request: ReviewCreateUpdateRequest,
    ) -> Review:
        restaurant = self._get_restaurant_or_raise(restaurant_id)

        existing = next((r for r in restaurant.reviews if r.id == review_id), None)
        if existing is None:
            raise ReviewNotFoundError(review_id)
        if existing.written_by.id != author.id:
            raise ReviewNotAllowedError("Only the author may edit this review")

        now = datetime.now()
        updated = existing.model_copy(update={
            "content": request.content,
            "rating": request.rating,
            "photos": [Photo(url=photo_id, upload_date=now) for photo_id in request.photo_ids],
            "last_edited": now,
        })

        reviews = [updated if r.id == review_id else r for r in restaurant.reviews]
        self.repository.save(restaurant.model_copy(update={"reviews": reviews}))
        return updated

    def delete_review(self, restaurant_id: str, review_id: str) -> None:
        restaurant = self._get_restaurant_or_raise(restaurant_id)

        remaining = [r for r in restaurant.reviews if r.id != review_id]
        if len(remaining) == len(restaurant.reviews):
            return
        self.repository.save(restaurant.model_copy(update={"reviews": remaining}))
