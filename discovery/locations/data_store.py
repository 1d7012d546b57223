from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from .cities import resource_name
from .config import DEFAULT_DATASET_CONFIG, DatasetConfig
from .models import CacheStats, Place

logger = logging.getLogger(__name__)


class DatasetLoadError(Exception):
    """A city resource could not be read or is not a JSON array."""


def parse_places(payload: Any, source: str = "<payload>") -> list[Place]:
    """
    Validate a decoded resource into places.

    Rows that fail validation, and rows repeating an already seen placeId,
    are skipped with a warning.
    """
    if not isinstance(payload, list):
        raise DatasetLoadError(f"{source}: expected a JSON array, got {type(payload).__name__}")

    places: list[Place] = []
    seen: set[str] = set()
    skipped = 0
    for index, row in enumerate(payload):
        try:
            place = Place.model_validate(row)
        except ValidationError as exc:
            skipped += 1
            logger.warning("%s: skipping malformed row %d (%d errors)", source, index, exc.error_count())
            continue
        if place.place_id in seen:
            skipped += 1
            logger.warning("%s: skipping duplicate placeId %s at row %d", source, place.place_id, index)
            continue
        seen.add(place.place_id)
        places.append(place)

    if skipped:
        logger.warning("%s: kept %d rows, skipped %d", source, len(places), skipped)
    return places


def fetch_city_dataset(
    city: str,
    config: DatasetConfig = DEFAULT_DATASET_CONFIG,
    client: httpx.Client | None = None,
) -> list[Place]:
    """
    Read and parse one city's resource.

    Raises DatasetLoadError on any transport, status or decoding failure.
    """
    file_name = resource_name(city)

    if config.is_remote:
        url = f"{config.base_url.rstrip('/')}/{file_name}"
        logger.info("Loading locations from %s", url)
        try:
            if client is not None:
                response = client.get(url, timeout=config.timeout)
            else:
                response = httpx.get(url, timeout=config.timeout)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise DatasetLoadError(f"Failed to load location data from {url}: {exc}") from exc
        return parse_places(payload, source=url)

    path = Path(config.base_url) / file_name
    logger.info("Loading locations from %s", path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise DatasetLoadError(f"Failed to load location data from {path}: {exc}") from exc
    return parse_places(payload, source=str(path))


class DatasetCache:
    """
    Single-city in-memory store.

    Holds at most one city's places. Every load attempt takes a generation
    number from ``begin_load``; a ``put`` carrying a generation older than
    the latest one is rejected so a slow load cannot overwrite newer data.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._city: str | None = None
        self._places: list[Place] | None = None
        self._generation = 0
        self._hits = 0
        self._misses = 0

    def get(self, city: str) -> list[Place] | None:
        with self._lock:
            if self._places is not None and self._city == city:
                self._hits += 1
                return self._places
            self._misses += 1
            return None

    def begin_load(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def put(self, city: str, places: list[Place], generation: int | None = None) -> bool:
        with self._lock:
            if generation is not None and generation != self._generation:
                logger.info(
                    "Discarding stale load for %s (generation %d, current %d)",
                    city, generation, self._generation,
                )
                return False
            self._city = city
            self._places = places
            return True

    def clear(self) -> None:
        with self._lock:
            self._city = None
            self._places = None
            # In-flight loads started before the clear must not repopulate
            self._generation += 1
        logger.info("Location cache cleared")

    @property
    def city(self) -> str | None:
        with self._lock:
            return self._city

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                city=self._city,
                size=len(self._places) if self._places is not None else 0,
                hits=self._hits,
                misses=self._misses,
                generation=self._generation,
            )
