from __future__ import annotations

import logging
from typing import Sequence, TypeVar

from .distance import distance_km
from .models import Coordinates, Place, PlaceWithDistance, PriceLevel

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=Place)


def exclude_closed(places: Sequence[P]) -> list[P]:
    """Drop permanently or temporarily closed places."""
    return [p for p in places if not p.is_closed]


def filter_by_categories(places: Sequence[Place], categories: Sequence[str] | None) -> list[Place]:
    """Keep places where any category contains any requested term (case-insensitive)."""
    terms = [c.lower() for c in categories or [] if c]
    if not terms:
        return list(places)
    return [
        p for p in places
        if any(term in cat.lower() for cat in p.categories for term in terms)
    ]


def filter_by_min_rating(places: Sequence[Place], min_rating: float | None) -> list[Place]:
    if min_rating is None:
        return list(places)
    return [p for p in places if p.total_score >= min_rating]


def filter_by_max_price(places: Sequence[Place], max_price: str | None) -> list[Place]:
    if not max_price:
        return list(places)
    ceiling = PriceLevel.parse(max_price)
    if ceiling is None:
        logger.warning("Ignoring unparseable max price %r", max_price)
        return list(places)
    return [p for p in places if p.price_level <= ceiling]


def filter_by_neighborhood(places: Sequence[Place], neighborhood: str | None) -> list[Place]:
    if not neighborhood:
        return list(places)
    needle = neighborhood.lower()
    return [p for p in places if p.neighborhood and needle in p.neighborhood.lower()]


def filter_by_proximity(
    places: Sequence[Place],
    origin: Coordinates,
    radius_km: float,
) -> list[PlaceWithDistance]:
    """
    Attach distances from ``origin``, drop places beyond ``radius_km`` and
    sort nearest first.

    The sort is stable, so equidistant places keep dataset order.
    """
    in_range: list[tuple[float, Place]] = []
    for place in places:
        d = distance_km(origin.lat, origin.lng, place.location.lat, place.location.lng)
        if d <= radius_km:
            in_range.append((d, place))
    in_range.sort(key=lambda item: item[0])
    return [PlaceWithDistance.from_place(place, d) for d, place in in_range]


def paginate(places: Sequence[P], offset: int, limit: int) -> list[P]:
    offset = max(offset, 0)
    limit = max(limit, 0)
    return list(places[offset:offset + limit])


def matches_text(place: Place, query: str) -> bool:
    """Case-insensitive substring match on title, description and categories."""
    needle = query.lower()
    if needle in place.title.lower():
        return True
    if place.description and needle in place.description.lower():
        return True
    if place.category_name and needle in place.category_name.lower():
        return True
    return any(needle in cat.lower() for cat in place.categories)


def apply_filters(
    places: Sequence[Place],
    *,
    categories: Sequence[str] | None = None,
    min_rating: float | None = None,
    max_price: str | None = None,
    neighborhood: str | None = None,
    near_location: Coordinates | None = None,
    radius_km: float | None = None,
) -> list[Place]:
    """
    Run the filter stages in order: closed, category, rating, price,
    neighborhood, proximity. Omitted parameters skip their stage.

    Only the proximity stage reorders; without it the result keeps dataset
    order.
    """
    result: list[Place] = exclude_closed(places)
    result = filter_by_categories(result, categories)
    result = filter_by_min_rating(result, min_rating)
    result = filter_by_max_price(result, max_price)
    result = filter_by_neighborhood(result, neighborhood)
    if near_location is not None and radius_km is not None:
        result = list(filter_by_proximity(result, near_location, radius_km))
    return result
