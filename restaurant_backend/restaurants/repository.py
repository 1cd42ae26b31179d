from __future__ import annotations

import logging
import uuid
from typing import Any

from elasticsearch import Elasticsearch, NotFoundError

from .config import DEFAULT_ELASTICSEARCH_CONFIG, ElasticsearchConfig
from .models import GeoLocation, Page, Restaurant

logger = logging.getLogger(__name__)

_USER_PROPERTIES = {
    "id": {"type": "keyword"},
    "username": {"type": "keyword"},
    "givenName": {"type": "text"},
    "familyName": {"type": "text"},
}

_PHOTO_PROPERTIES = {
    "url": {"type": "keyword"},
    "uploadDate": {"type": "date"},
}

_TIME_RANGE = {
    "properties": {
        "openTime": {"type": "keyword"},
        "closeTime": {"type": "keyword"},
    }
}

INDEX_MAPPINGS: dict[str, Any] = {
    "properties": {
        "name": {"type": "text"},
        "cuisineType": {"type": "text"},
        "contactInformation": {"type": "keyword"},
        "averageRating": {"type": "float"},
        "geoLocation": {"type": "geo_point"},
        "address": {
            "type": "nested",
            "properties": {
                "streetNumber": {"type": "keyword"},
                "streetName": {"type": "text"},
                "unit": {"type": "keyword"},
                "city": {"type": "keyword"},
                "state": {"type": "keyword"},
                "postalCode": {"type": "keyword"},
                "country": {"type": "keyword"},
            },
        },
        "operatingHours": {
            "type": "nested",
            "properties": {
                day: _TIME_RANGE
                for day in ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
            },
        },
        "photos": {"type": "nested", "properties": _PHOTO_PROPERTIES},
        "reviews": {
            "type": "nested",
            "properties": {
                "id": {"type": "keyword"},
                "content": {"type": "text"},
                "rating": {"type": "integer"},
                "datePosted": {"type": "date"},
                "lastEdited": {"type": "date"},
                "photos": {"type": "nested", "properties": _PHOTO_PROPERTIES},
                "writtenBy": {"type": "nested", "properties": _USER_PROPERTIES},
            },
        },
        "createdBy": {"type": "nested", "properties": _USER_PROPERTIES},
    }
}


# ── Query construction ───────────────────────────────────────────────────


def match_all_query() -> dict:
    return {"match_all": {}}


def min_rating_query(min_rating: float) -> dict:
    return {"range": {"averageRating": {"gte": min_rating}}}


def fuzzy_query(query: str, min_rating: float) -> dict:
    """Rating must pass; the text must fuzzily match the name or the cuisine."""
    # Indexed text terms are lower-cased by the standard analyzer.
    term = query.lower()
    return {
        "bool": {
            "must": [min_rating_query(min_rating)],
            "should": [
                {"fuzzy": {"name": {"value": term, "fuzziness": "AUTO"}}},
                {"fuzzy": {"cuisineType": {"value": term, "fuzziness": "AUTO"}}},
            ],
            "minimum_should_match": 1,
        }
    }


def geo_distance_query(latitude: float, longitude: float, radius_mi: float) -> dict:
    return {
        "bool": {
            "must": [
                {
                    "geo_distance": {
                        "distance": f"{radius_mi}mi",
                        "geoLocation": {"lat": latitude, "lon": longitude},
                    }
                }
            ]
        }
    }


# ── Document mapping ─────────────────────────────────────────────────────


def to_document(restaurant: Restaurant) -> dict:
    doc = restaurant.model_dump(mode="json", by_alias=True, exclude={"id"})
    geo = restaurant.geo_location
    doc["geoLocation"] = {"lat": geo.latitude, "lon": geo.longitude}
    return doc


def from_document(doc_id: str, source: dict) -> Restaurant:
    data = dict(source)
    geo = data.get("geoLocation")
    if isinstance(geo, dict) and "lat" in geo:
        data["geoLocation"] = GeoLocation(latitude=geo["lat"], longitude=geo["lon"])
    data["id"] = doc_id
    return Restaurant.model_validate(data)


class RestaurantRepository:
    """Persists restaurants (with nested reviews) in one Elasticsearch index."""

    def __init__(
        self,
        client: Elasticsearch,
        config: ElasticsearchConfig = DEFAULT_ELASTICSEARCH_CONFIG,
    ) -> None:
        self.client = client
        self.config = config
        self.index = config.index_name

    def ensure_index(self) -> None:
        if self.client.indices.exists(index=self.index):
            return
        self.client.indices.create(index=self.index, mappings=INDEX_MAPPINGS)
        logger.info("Created index %s", self.index)

    def save(self, restaurant: Restaurant) -> Restaurant:
        if not restaurant.id:
            restaurant = restaurant.model_copy(update={"id": str(uuid.uuid4())})
        self.client.index(
            index=self.index,
            id=restaurant.id,
            document=to_document(restaurant),
            refresh=self.config.refresh,
        )
        return restaurant

    def find_by_id(self, restaurant_id: str) -> Restaurant | None:
        try:
            resp = self.client.get(index=self.index, id=restaurant_id)
        except NotFoundError:
            return None
        return from_document(resp["_id"], resp["_source"])

    def delete_by_id(self, restaurant_id: str) -> None:
        try:
            self.client.delete(index=self.index, id=restaurant_id, refresh=self.config.refresh)
        except NotFoundError:
            logger.info("Restaurant %s already absent, nothing to delete", restaurant_id)

    def find_all(self, page: int, size: int) -> Page[Restaurant]:
        return self._search(match_all_query(), page, size)

    def find_by_average_rating_gte(self, min_rating: float, page: int, size: int) -> Page[Restaurant]:
        return self._search(min_rating_query(min_rating), page, size)

    def find_by_query_and_min_rating(
        self, query: str, min_rating: float, page: int, size: int,
    ) -> Page[Restaurant]:
        return self._search(fuzzy_query(query, min_rating), page, size)

    def find_by_location_near(
        self, latitude: float, longitude: float, radius_mi: float, page: int, size: int,
    ) -> Page[Restaurant]:
        return self._search(geo_distance_query(latitude, longitude, radius_mi), page, size)

    def _search(self, query: dict, page: int, size: int) -> Page[Restaurant]:
        resp = self.client.search(
            index=self.index,
            query=query,
            from_=(page - 1) * size,
            size=size,
            track_total_hits=True,
        )
        hits = resp["hits"]
        content = [from_document(hit["_id"], hit["_source"]) for hit in hits["hits"]]
        total = hits["total"]["value"] if isinstance(hits["total"], dict) else int(hits["total"])
        return Page.of(content, page, size, total)
