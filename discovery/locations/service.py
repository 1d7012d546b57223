from __future__ import annotations

import logging
import random

import httpx

from .cities import get_available_cities, resolve_city
from .config import DEFAULT_DATASET_CONFIG, DEFAULT_QUERY_DEFAULTS, DatasetConfig, QueryDefaults
from .data_store import DatasetCache, DatasetLoadError, fetch_city_dataset
from .filters import (
    apply_filters,
    exclude_closed,
    filter_by_proximity,
    matches_text,
    paginate,
)
from .models import CacheStats, Coordinates, LocationQuery, Place, PlaceWithDistance

logger = logging.getLogger(__name__)


class LocationDataService:
    """
    Query surface over the active city's dataset.

    None of the public operations raise for data problems: a failed load
    yields an empty dataset and every query over it is empty.
    """

    def __init__(
        self,
        config: DatasetConfig = DEFAULT_DATASET_CONFIG,
        defaults: QueryDefaults = DEFAULT_QUERY_DEFAULTS,
        cache: DatasetCache | None = None,
        client: httpx.Client | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.defaults = defaults
        self.cache = cache or DatasetCache()
        self._client = client
        self._rng = rng or random.Random()

    def _city(self, city: str | None) -> str:
        return resolve_city(city or self.defaults.city)

    # ── Dataset access ───────────────────────────────────────────────────

    def load_locations(self, city: str | None = None) -> list[Place]:
        """Return the city's places, reading the resource only on a cache miss."""
        city_id = self._city(city)
        cached = self.cache.get(city_id)
        if cached is not None:
            logger.debug("Using cached locations for %s (%d items)", city_id, len(cached))
            return cached

        generation = self.cache.begin_load()
        try:
            places = fetch_city_dataset(city_id, self.config, self._client)
        except DatasetLoadError:
            logger.warning("Error loading location data for %s", city_id, exc_info=True)
            return []

        if self.cache.put(city_id, places, generation):
            logger.info("Loaded %d locations for %s", len(places), city_id)
        return places

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    # ── Queries ──────────────────────────────────────────────────────────

    def query_locations(self, params: LocationQuery | None = None) -> list[Place]:
        params = params or LocationQuery()
        places = self.load_locations(params.city)

        radius_km = params.radius_km if params.radius_km is not None else self.defaults.radius_km
        filtered = apply_filters(
            places,
            categories=params.categories,
            min_rating=params.min_rating,
            max_price=params.max_price,
            neighborhood=params.neighborhood,
            near_location=params.near_location,
            radius_km=radius_km,
        )

        offset = params.offset if params.offset is not None else self.defaults.offset
        limit = params.limit if params.limit is not None else self.defaults.limit
        return paginate(filtered, offset, limit)

    def get_nearby_locations(
        self,
        location: Coordinates,
        radius_km: float | None = None,
        limit: int | None = None,
        city: str | None = None,
    ) -> list[PlaceWithDistance]:
        places = exclude_closed(self.load_locations(city))
        radius_km = self.defaults.nearby_radius_km if radius_km is None else radius_km
        limit = self.defaults.limit if limit is None else limit
        return paginate(filter_by_proximity(places, location, radius_km), 0, limit)

    def search_locations(
        self,
        query: str,
        limit: int | None = None,
        city: str | None = None,
    ) -> list[Place]:
        places = exclude_closed(self.load_locations(city))
        limit = self.defaults.limit if limit is None else limit
        return paginate([p for p in places if matches_text(p, query)], 0, limit)

    def get_random_locations(self, count: int | None = None, city: str | None = None) -> list[Place]:
        """Uniform random sample of open places, at most ``count`` long."""
        open_places = exclude_closed(self.load_locations(city))
        count = self.defaults.random_count if count is None else count
        # random.shuffle is a Fisher-Yates pass
        self._rng.shuffle(open_places)
        return open_places[:max(count, 0)]

    def get_location_by_id(self, place_id: str, city: str | None = None) -> Place | None:
        """Look up a place by id. Closed places are returned too."""
        for place in self.load_locations(city):
            if place.place_id == place_id:
                return place
        return None

    def get_categories(self, city: str | None = None) -> list[str]:
        categories: set[str] = set()
        for place in self.load_locations(city):
            categories.update(c for c in place.categories if c)
        return sorted(categories)

    def get_neighborhoods(self, city: str | None = None) -> list[str]:
        return sorted({p.neighborhood for p in self.load_locations(city) if p.neighborhood})

    @staticmethod
    def get_available_cities() -> list[str]:
        return get_available_cities()


_service: LocationDataService | None = None


def get_location_service() -> LocationDataService:
    """Return the process-wide service, creating it on first call."""
    global _service
    if _service is None:
        _service = LocationDataService()
    return _service
