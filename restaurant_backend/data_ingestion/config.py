from dataclasses import dataclass
from pathlib import Path

_SAMPLE_DIR = Path(__file__).resolve().parent.parent / "data" / "sample"


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the sample-data loader.
    """

    sample_csv: Path = _SAMPLE_DIR / "restaurants.csv"
    image_dir: Path = _SAMPLE_DIR / "images"


DEFAULT_INGESTION_CONFIG = IngestionConfig()
