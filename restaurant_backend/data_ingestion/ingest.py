from __future__ import annotations

import logging
import mimetypes
from typing import List

import pandas as pd

from ..photos.service import PhotoService
from ..restaurants.models import (
    Address,
    OperatingHours,
    Restaurant,
    RestaurantCreateUpdateRequest,
    TimeRange,
)
from ..restaurants.service import RestaurantService
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

SAMPLE_COLUMNS: List[str] = [
    "name",
    "cuisine_type",
    "contact_information",
    "street_number",
    "street_name",
    "unit",
    "city",
    "state",
    "postal_code",
    "country",
    "weekday_open",
    "weekday_close",
    "weekend_open",
    "weekend_close",
    "photo",
]

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")
WEEKEND = ("saturday", "sunday")


def _clean(value) -> str | None:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _standard_hours(row: pd.Series) -> OperatingHours:
    """Same hours every weekday, and a separate pair for the weekend."""
    weekday = TimeRange(open_time=_clean(row["weekday_open"]), close_time=_clean(row["weekday_close"]))
    weekend = TimeRange(open_time=_clean(row["weekend_open"]), close_time=_clean(row["weekend_close"]))
    hours = {day: weekday for day in WEEKDAYS}
    hours.update({day: weekend for day in WEEKEND})
    return OperatingHours(**hours)


def _resolve_photo_id(photo: str, photo_service: PhotoService, config: IngestionConfig) -> str:
    image_path = config.image_dir / photo
    content_type = mimetypes.guess_type(image_path.name)[0]
    uploaded = photo_service.upload_photo(image_path.read_bytes(), content_type, image_path.name)
    return uploaded.url


def load_sample_frame(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> pd.DataFrame:
    """
    Read the sample CSV and check it before anything is indexed.

    Every row needs a ``photo`` that names a file in ``config.image_dir``,
    since a restaurant must carry at least one photo.
    """
    df = pd.read_csv(config.sample_csv, dtype=str)
    missing = [col for col in SAMPLE_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Sample data is missing columns: {', '.join(missing)}")

    photos = df["photo"].map(_clean)
    no_photo = df.loc[photos.isna(), "name"].tolist()
    if no_photo:
        raise ValueError(f"Sample rows have no photo: {', '.join(map(str, no_photo))}")
    absent = [p for p in photos if not (config.image_dir / p).is_file()]
    if absent:
        raise ValueError(f"Sample images not found in {config.image_dir}: {', '.join(absent)}")

    return df[SAMPLE_COLUMNS]


def build_request(row: pd.Series, photo_ids: list[str]) -> RestaurantCreateUpdateRequest:
    address = Address(
        street_number=_clean(row["street_number"]),
        street_name=_clean(row["street_name"]),
        unit=_clean(row["unit"]),
        city=_clean(row["city"]),
        state=_clean(row["state"]),
        postal_code=_clean(row["postal_code"]),
        country=_clean(row["country"]),
    )
    return RestaurantCreateUpdateRequest(
        name=_clean(row["name"]),
        cuisine_type=_clean(row["cuisine_type"]),
        contact_information=_clean(row["contact_information"]),
        address=address,
        operating_hours=_standard_hours(row),
        photo_ids=photo_ids,
    )


def run_ingestion(
    restaurant_service: RestaurantService,
    photo_service: PhotoService,
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
) -> list[Restaurant]:
    """
    Seed the index with the sample restaurants.

    Each row's image is uploaded through ``photo_service`` and the stored
    name becomes the restaurant's photo id.
    """
    df = load_sample_frame(config)

    created: list[Restaurant] = []
    for _, row in df.iterrows():
        photo_ids = [_resolve_photo_id(_clean(row["photo"]), photo_service, config)]
        restaurant = restaurant_service.create_restaurant(build_request(row, photo_ids))
        logger.info("Created restaurant: %s", restaurant.name)
        created.append(restaurant)

    return created


if __name__ == "__main__":
    from ..dependencies import get_photo_service, get_restaurant_repository, get_restaurant_service
    from ..logging_config import configure_logging

    configure_logging()
    get_restaurant_repository().ensure_index()
    restaurants = run_ingestion(get_restaurant_service(), get_photo_service())
    print(f"Ingestion complete. Created {len(restaurants)} restaurants.")
