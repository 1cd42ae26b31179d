from __future__ import annotations

import logging
from datetime import datetime

from ..auth.models import User
from ..errors import RestaurantNotFoundError
from ..geolocation.locator import GeoLocator
from ..photos.models import Photo
from .models import Page, Restaurant, RestaurantCreateUpdateRequest
from .repository import RestaurantRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def _photos_from_ids(photo_ids: list[str]) -> list[Photo]:
    now = datetime.now()
    return [Photo(url=photo_id, upload_date=now) for photo_id in photo_ids]


class RestaurantService:
    def __init__(self, repository: RestaurantRepository, geo_locator: GeoLocator) -> None:
        self.repository = repository
        self.geo_locator = geo_locator

    def create_restaurant(
        self,
        request: RestaurantCreateUpdateRequest,
        created_by: User | None = None,
    ) -> Restaurant:
        geo_location = self.geo_locator.geolocate(request.address)

        restaurant = Restaurant(
            name=request.name,
            cuisine_type=request.cuisine_type,
            contact_information=request.contact_information,
            address=request.address,
            geo_location=geo_location,
            operating_hours=request.operating_hours,
            average_rating=0.0,
            photos=_photos_from_ids(request.photo_ids),
            created_by=created_by,
        )
        saved = self.repository.save(restaurant)
        logger.info("Created restaurant %s (%s)", saved.id, saved.name)
        return saved

    def search_restaurants(
        self,
        query: str | None = None,
        min_rating: float | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
        radius: float | None = None,
        page: int = 1,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[Restaurant]:
        """
        Pick one search strategy; the first matching rule wins.

        1. ``min_rating`` without a text query: rating filter only.
        2. A text query: fuzzy name/cuisine match, rating >= ``min_rating`` (or 0).
        3. Latitude, longitude and radius all given: distance filter in miles.
        4. Otherwise every restaurant.
        """
        has_query = bool(query and query.strip())

        if min_rating is not None and not has_query:
            return self.repository.find_by_average_rating_gte(min_rating, page, size)

        if has_query:
            search_min_rating = 0.0 if min_rating is None else min_rating
            return self.repository.find_by_query_and_min_rating(
                query.strip(), search_min_rating, page, size,
            )

        if latitude is not None and longitude is not None and radius is not None:
            return self.repository.find_by_location_near(latitude, longitude, radius, page, size)

        return self.repository.find_all(page, size)

    def get_restaurant(self, restaurant_id: str) -> Restaurant | None:
        return self.repository.find_by_id(restaurant_id)

    def update_restaurant(self, restaurant_id: str, request: RestaurantCreateUpdateRequest) -> Restaurant:
        restaurant = self.get_restaurant(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)

        geo_location = self.geo_locator.geolocate(request.address)

        updated = restaurant.model_copy(update={
            "name": request.name,
            "cuisine_type": request.cuisine_type,
            "contact_information": request.contact_information,
            "address": request.address,
            "geo_location": geo_location,
            "operating_hours": request.operating_hours,
            "photos": _photos_from_ids(request.photo_ids),
        })
        return self.repository.save(updated)

    def delete_restaurant(self, restaurant_id: str) -> None:
        self.repository.delete_by_id(restaurant_id)
