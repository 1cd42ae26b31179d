from __future__ import annotations

import random
from typing import Protocol

from ..restaurants.models import Address, GeoLocation

# Kansas City bounding box
MIN_LATITUDE = 39.00
MAX_LATITUDE = 39.75
MIN_LONGITUDE = -94.75
MAX_LONGITUDE = -94.45


class GeoLocator(Protocol):
    def geolocate(self, address: Address) -> GeoLocation: ...


class RandomKansasCityGeoLocator:
    """Ignores the address and returns a uniform random point in Kansas City."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def geolocate(self, address: Address) -> GeoLocation:
        latitude = self.rng.uniform(MIN_LATITUDE, MAX_LATITUDE)
        longitude = self.rng.uniform(MIN_LONGITUDE, MAX_LONGITUDE)
        return GeoLocation(latitude=latitude, longitude=longitude)
