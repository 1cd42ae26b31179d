from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class StorageConfig:
    location: Path = Path(os.getenv("STORAGE_LOCATION", "uploads"))
    max_file_size: int = 5 * 1024 * 1024  # 5MB
    allowed_extensions: frozenset[str] = frozenset({"jpg", "jpeg", "png", "gif"})


DEFAULT_STORAGE_CONFIG = StorageConfig()
