from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(_PROJECT_ROOT / ".env")


@dataclass(frozen=True)
class DatasetConfig:
    """
    Where city datasets are fetched from.

    ``base_url`` is either an ``http(s)://`` prefix or a local directory.
    """

    base_url: str = os.getenv("LOCATIONS_BASE_URL") or str(_PROJECT_ROOT / "data")
    timeout: float = float(os.getenv("LOCATIONS_TIMEOUT") or "10.0")

    @property
    def is_remote(self) -> bool:
        return self.base_url.startswith(("http://", "https://"))


@dataclass(frozen=True)
class QueryDefaults:
    city: str = "barcelona"
    limit: int = 20
    offset: int = 0
    radius_km: float = 10.0  # query_locations with a reference point
    nearby_radius_km: float = 5.0
    random_count: int = 10


DEFAULT_DATASET_CONFIG = DatasetConfig()
DEFAULT_QUERY_DEFAULTS = QueryDefaults()
