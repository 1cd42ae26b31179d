from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class ElasticsearchConfig:
    url: str = os.getenv("ELASTICSEARCH_URL", "http://localhost:9200")
    username: str = os.getenv("ELASTICSEARCH_USERNAME", "")
    password: str = os.getenv("ELASTICSEARCH_PASSWORD", "")
    index_name: str = os.getenv("ELASTICSEARCH_INDEX", "restaurants")
    refresh: str = os.getenv("ELASTICSEARCH_REFRESH", "wait_for")
    timeout: float = 10.0


DEFAULT_ELASTICSEARCH_CONFIG = ElasticsearchConfig()
