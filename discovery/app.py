from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Query

from .locations.models import CacheStats, Coordinates, LocationQuery, Place, PlaceWithDistance
from .locations.service import LocationDataService, get_location_service

app = FastAPI(title="Food Discovery Locations API", version="1.0.0")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/cities")
def cities(service: LocationDataService = Depends(get_location_service)) -> list[str]:
    return service.get_available_cities()


@app.get("/categories")
def categories(
    city: str | None = None,
    service: LocationDataService = Depends(get_location_service),
) -> list[str]:
    return service.get_categories(city)


@app.get("/neighborhoods")
def neighborhoods(
    city: str | None = None,
    service: LocationDataService = Depends(get_location_service),
) -> list[str]:
    return service.get_neighborhoods(city)


# ── Location queries ─────────────────────────────────────────────────────


@app.get("/locations")
def locations(
    city: str | None = None,
    categories: list[str] | None = Query(default=None),
    min_rating: float | None = Query(default=None, ge=0.0, le=5.0),
    max_price: str | None = None,
    neighborhood: str | None = None,
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    lat: float | None = Query(default=None, ge=-90.0, le=90.0),
    lng: float | None = Query(default=None, ge=-180.0, le=180.0),
    radius_km: float | None = Query(default=None, ge=0.0),
    service: LocationDataService = Depends(get_location_service),
):
    if (lat is None) != (lng is None):
        raise HTTPException(status_code=422, detail="lat and lng must be given together")

    params = LocationQuery(
        city=city,
        categories=categories,
        min_rating=min_rating,
        max_price=max_price,
        neighborhood=neighborhood,
        limit=limit,
        offset=offset,
        near_location=Coordinates(lat=lat, lng=lng) if lat is not None else None,
        radius_km=radius_km,
    )
    return service.query_locations(params)


@app.get("/locations/nearby", response_model=list[PlaceWithDistance])
def nearby_locations(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
    radius_km: float | None = Query(default=None, ge=0.0),
    limit: int | None = Query(default=None, ge=0),
    city: str | None = None,
    service: LocationDataService = Depends(get_location_service),
):
    return service.get_nearby_locations(Coordinates(lat=lat, lng=lng), radius_km, limit, city)


@app.get("/locations/search", response_model=list[Place])
def search_locations(
    q: str = Query(..., min_length=1),
    limit: int | None = Query(default=None, ge=0),
    city: str | None = None,
    service: LocationDataService = Depends(get_location_service),
):
    return service.search_locations(q, limit, city)


@app.get("/locations/random", response_model=list[Place])
def random_locations(
    count: int | None = Query(default=None, ge=0),
    city: str | None = None,
    service: LocationDataService = Depends(get_location_service),
):
    return service.get_random_locations(count, city)


@app.get("/locations/{place_id}", response_model=Place)
def location_by_id(
    place_id: str,
    city: str | None = None,
    service: LocationDataService = Depends(get_location_service),
):
    place = service.get_location_by_id(place_id, city)
    if place is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return place


# ── Cache endpoints ──────────────────────────────────────────────────────


@app.get("/cache/stats", response_model=CacheStats)
def cache_stats(service: LocationDataService = Depends(get_location_service)) -> CacheStats:
    return service.cache_stats()


@app.delete("/cache")
def clear_cache(service: LocationDataService = Depends(get_location_service)) -> dict[str, str]:
    service.clear_cache()
    return {"status": "cleared"}
