from __future__ import annotations

import random
from unittest.mock import MagicMock

import pytest

from restaurant_backend.auth.models import User
from restaurant_backend.errors import RestaurantNotFoundError
from restaurant_backend.geolocation.locator import RandomKansasCityGeoLocator
from restaurant_backend.restaurants.models import (
    Address,
    GeoLocation,
    Page,
    Restaurant,
    RestaurantCreateUpdateRequest,
)
from restaurant_backend.restaurants.service import RestaurantService

ADDRESS = {
    "streetNumber": "1",
    "streetName": "Main Street",
    "city": "Kansas City",
    "state": "MO",
    "postalCode": "64101",
    "country": "USA",
}


def _request(**overrides) -> RestaurantCreateUpdateRequest:
    body = {
        "name": "A",
        "cuisineType": "Italian",
        "contactInformation": "+1 816-555-0000",
        "address": ADDRESS,
        "photoIds": ["p1"],
    }
    body.update(overrides)
    return RestaurantCreateUpdateRequest.model_validate(body)


def _service(repository: MagicMock | None = None) -> tuple[RestaurantService, MagicMock]:
    repo = repository or MagicMock()
    repo.save.side_effect = lambda r: r.model_copy(update={"id": r.id or "generated"})
    return RestaurantService(repo, RandomKansasCityGeoLocator(random.Random(3))), repo


def _existing(**overrides) -> Restaurant:
    data = {
        "id": "r1",
        "name": "Old",
        "cuisine_type": "Greek",
        "contact_information": "old",
        "average_rating": 4.2,
        "geo_location": GeoLocation(latitude=39.2, longitude=-94.6),
        "address": Address.model_validate(ADDRESS),
        "created_by": User(id="owner"),
    }
    data.update(overrides)
    return Restaurant(**data)


# ── Create ───────────────────────────────────────────────────────────────


def test_create_sets_zero_rating_and_wraps_photo_ids():
    service, repo = _service()

    restaurant = service.create_restaurant(_request())

    assert restaurant.average_rating == 0
    assert restaurant.photos[0].url == "p1"
    assert restaurant.id == "generated"
    assert 39.00 <= restaurant.geo_location.latitude <= 39.75
    repo.save.assert_called_once()


def test_create_records_creator():
    service, _ = _service()
    restaurant = service.create_restaurant(_request(), created_by=User(id="u1", username="max"))
    assert restaurant.created_by.id == "u1"


def test_create_keeps_duplicate_photo_ids():
    service, _ = _service()
    restaurant = service.create_restaurant(_request(photoIds=["p1", "p1"]))
    assert [p.url for p in restaurant.photos] == ["p1", "p1"]


# ── Search decision policy ───────────────────────────────────────────────


class TestSearchPolicy:
    def test_rating_only_when_no_query(self):
        service, repo = _service()
        service.search_restaurants(min_rating=4.0)
        repo.find_by_average_rating_gte.assert_called_once_with(4.0, 1, 20)

    def test_rating_only_beats_geo(self):
        service, repo = _service()
        service.search_restaurants(min_rating=4.0, latitude=39.1, longitude=-94.6, radius=5)
        repo.find_by_average_rating_gte.assert_called_once()
        repo.find_by_location_near.assert_not_called()

    def test_blank_query_counts_as_missing(self):
        service, repo = _service()
        service.search_restaurants(query="   ", min_rating=3.0)
        repo.find_by_average_rating_gte.assert_called_once_with(3.0, 1, 20)
        repo.find_by_query_and_min_rating.assert_not_called()

    def test_query_defaults_min_rating_to_zero(self):
        service, repo = _service()
        service.search_restaurants(query="pizza")
        repo.find_by_query_and_min_rating.assert_called_once_with("pizza", 0.0, 1, 20)

    def test_query_with_min_rating(self):
        service, repo = _service()
        service.search_restaurants(query="pizza", min_rating=4.5, page=2, size=10)
        repo.find_by_query_and_min_rating.assert_called_once_with("pizza", 4.5, 2, 10)

    def test_query_beats_geo(self):
        service, repo = _service()
        service.search_restaurants(query="sushi", latitude=39.1, longitude=-94.6, radius=5)
        repo.find_by_query_and_min_rating.assert_called_once()
        repo.find_by_location_near.assert_not_called()

    def test_geo_when_all_coordinates_present(self):
        service, repo = _service()
        service.search_restaurants(latitude=39.1, longitude=-94.6, radius=5.0)
        repo.find_by_location_near.assert_called_once_with(39.1, -94.6, 5.0, 1, 20)

    def test_partial_geo_falls_back_to_all(self):
        service, repo = _service()
        service.search_restaurants(latitude=39.1, radius=5.0)
        repo.find_by_location_near.assert_not_called()
        repo.find_all.assert_called_once_with(1, 20)

    def test_no_filters_returns_all_first_page(self):
        service, repo = _service()
        repo.find_all.return_value = Page.of([], 1, 20, 0)
        result = service.search_restaurants()
        repo.find_all.assert_called_once_with(1, 20)
        assert result.page == 1
        assert result.size == 20


# ── Get / update / delete ────────────────────────────────────────────────


def test_get_restaurant_passthrough():
    service, repo = _service()
    repo.find_by_id.return_value = None
    assert service.get_restaurant("missing") is None
    repo.find_by_id.assert_called_once_with("missing")


def test_update_missing_restaurant_raises():
    service, repo = _service()
    repo.find_by_id.return_value = None
    with pytest.raises(RestaurantNotFoundError):
        service.update_restaurant("missing", _request())
    repo.save.assert_not_called()


def test_update_overwrites_fields_but_keeps_rating_and_id():
    service, repo = _service()
    repo.find_by_id.return_value = _existing()

    updated = service.update_restaurant(
        "r1", _request(name="New", cuisineType="Thai", photoIds=["p2", "p3"]),
    )

    assert updated.id == "r1"
    assert updated.average_rating == 4.2
    assert updated.name == "New"
    assert updated.cuisine_type == "Thai"
    assert [p.url for p in updated.photos] == ["p2", "p3"]
    assert updated.created_by.id == "owner"


def test_delete_is_unconditional():
    service, repo = _service()
    service.delete_restaurant("r1")
    service.delete_restaurant("r1")
    assert repo.delete_by_id.call_count == 2
    repo.find_by_id.assert_not_called()
