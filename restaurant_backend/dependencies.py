"""
Service singletons for FastAPI ``Depends``.

Each getter is cached so the Elasticsearch client and the storage root are
created once per process; tests swap them with ``app.dependency_overrides``.
"""
from __future__ import annotations

from functools import lru_cache

from elasticsearch import Elasticsearch

from .geolocation.locator import RandomKansasCityGeoLocator
from .photos.service import PhotoService
from .restaurants.config import DEFAULT_ELASTICSEARCH_CONFIG
from .restaurants.repository import RestaurantRepository
from .restaurants.service import RestaurantService
from .reviews.service import ReviewService
from .storage.config import DEFAULT_STORAGE_CONFIG
from .storage.filesystem import FileSystemStorage


@lru_cache()
def get_elasticsearch_client() -> Elasticsearch:
    config = DEFAULT_ELASTICSEARCH_CONFIG
    basic_auth = (config.username, config.password) if config.username else None
    return Elasticsearch(config.url, basic_auth=basic_auth, request_timeout=config.timeout)


@lru_cache()
def get_restaurant_repository() -> RestaurantRepository:
    return RestaurantRepository(get_elasticsearch_client(), DEFAULT_ELASTICSEARCH_CONFIG)


@lru_cache()
def get_photo_service() -> PhotoService:
    return PhotoService(FileSystemStorage(DEFAULT_STORAGE_CONFIG))


@lru_cache()
def get_restaurant_service() -> RestaurantService:
    return RestaurantService(get_restaurant_repository(), RandomKansasCityGeoLocator())


@lru_cache()
def get_review_service() -> ReviewService:
    return ReviewService(get_restaurant_repository())
