from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

BASELINE_CITY = "barcelona"

CITY_FILES: dict[str, str] = {
    "barcelona": "MasterSet_barcelona.json",
    "hongkong": "MasterSet_hongkong.json",
    "mumbai": "MasterSet_mumbai.json",
    "singapore": "MasterSet_singapore.json",
    "bangkok": "MasterSet_bangkok.json",
    "mexicocity": "MasterSet_mexicocity.json",
    "london": "MasterSet_london.json",
    "tokyo": "MasterSet_tokyo.json",
    "paris": "MasterSet_paris.json",
    "newyork": "MasterSet_newyork.json",
}


def normalize_city(city: str | None) -> str:
    """Lower-case and strip whitespace so "New York" and "newyork" match."""
    if not city:
        return ""
    return "".join(city.split()).lower()


def resolve_city(city: str | None) -> str:
    """
    Map a caller-supplied city to a registered identifier.

    Unknown or empty identifiers fall back to the baseline city instead of
    failing.
    """
    key = normalize_city(city)
    if key in CITY_FILES:
        return key
    logger.warning("Unknown city %r, falling back to %s", city, BASELINE_CITY)
    return BASELINE_CITY


def resource_name(city: str | None) -> str:
    return CITY_FILES[resolve_city(city)]


def get_available_cities() -> list[str]:
    return list(CITY_FILES)
