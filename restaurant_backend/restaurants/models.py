from __future__ import annotations

import math
from datetime import datetime
from typing import Annotated, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from ..auth.models import User
from ..photos.models import Photo

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TimeOfDay = Annotated[str, StringConstraints(pattern=r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")]

T = TypeVar("T")
U = TypeVar("U")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeoLocation(CamelModel):
    latitude: float
    longitude: float


class Address(CamelModel):
    street_number: NonBlankStr
    street_name: NonBlankStr
    unit: str | None = None
    city: NonBlankStr
    state: NonBlankStr
    postal_code: NonBlankStr
    country: NonBlankStr


class TimeRange(CamelModel):
    open_time: TimeOfDay | None = None
    close_time: TimeOfDay | None = None


class OperatingHours(CamelModel):
    monday: TimeRange | None = None
    tuesday: TimeRange | None = None
    wednesday: TimeRange | None = None
    thursday: TimeRange | None = None
    friday: TimeRange | None = None
    saturday: TimeRange | None = None
    sunday: TimeRange | None = None


class Review(CamelModel):
    id: str
    content: str
    rating: int
    date_posted: datetime
    last_edited: datetime
    photos: list[Photo] = Field(default_factory=list)
    written_by: User


class Restaurant(CamelModel):
    id: str | None = None
    name: str
    cuisine_type: str
    contact_information: str
    average_rating: float = 0.0
    geo_location: GeoLocation
    address: Address
    operating_hours: OperatingHours | None = None
    photos: list[Photo] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    created_by: User | None = None


class RestaurantCreateUpdateRequest(CamelModel):
    name: NonBlankStr
    cuisine_type: NonBlankStr
    contact_information: NonBlankStr
    address: Address
    operating_hours: OperatingHours | None = None
    photo_ids: list[str] = Field(..., min_length=1)


class RestaurantSummary(CamelModel):
    id: str
    name: str
    cuisine_type: str
    average_rating: float
    total_reviews: int
    address: Address
    photos: list[Photo]

    @classmethod
    def from_restaurant(cls, restaurant: Restaurant) -> "RestaurantSummary":
        return cls(
            id=restaurant.id,
            name=restaurant.name,
            cuisine_type=restaurant.cuisine_type,
            average_rating=restaurant.average_rating,
            total_reviews=len(restaurant.reviews),
            address=restaurant.address,
            photos=restaurant.photos,
        )


class Page(CamelModel, Generic[T]):
    """One page of results; ``page`` is 1-indexed."""

    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def of(cls, content: list[T], page: int, size: int, total_elements: int) -> "Page[T]":
        total_pages = math.ceil(total_elements / size) if size > 0 else 0
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages,
        )

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page.of([fn(item) for item in self.content], self.page, self.size, self.total_elements)
