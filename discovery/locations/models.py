from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Symbols that make up Google-style price strings ("$$", "€€€", "¥")
CURRENCY_SYMBOLS = frozenset("$€£¥₹฿₩₫₱₺₽₪")


class PriceLevel(IntEnum):
    BUDGET = 1
    MODERATE = 2
    EXPENSIVE = 3
    LUXURY = 4

    @classmethod
    def parse(cls, raw: str | int | None) -> PriceLevel | None:
        """
        Parse a raw price marker into a level.

        A run of one repeated currency symbol maps to its length (clamped to
        1..4), a bare digit maps directly. Anything else is unparseable.
        """
        if raw is None:
            return None
        if isinstance(raw, int):
            return cls(min(max(raw, cls.BUDGET), cls.LUXURY))
        text = raw.strip()
        if not text:
            return None
        if text.isdigit():
            return cls(min(max(int(text), cls.BUDGET), cls.LUXURY))
        if len(set(text)) == 1 and text[0] in CURRENCY_SYMBOLS:
            return cls(min(len(text), cls.LUXURY))
        return None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(_CamelModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)

    model_config = ConfigDict(frozen=True)


class Place(_CamelModel):
    """One point of interest from a city dataset."""

    place_id: str = Field(..., min_length=1)
    title: str = ""
    description: str | None = None

    category_name: str | None = None
    categories: list[str] = Field(default_factory=list)

    address: str | None = None
    neighborhood: str | None = None
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None
    state: str | None = None
    country_code: str | None = None
    location: Coordinates

    total_score: float = 0.0
    reviews_count: int = 0
    images_count: int = 0
    price: str | None = None

    permanently_closed: bool = False
    temporarily_closed: bool = False

    opening_hours: list[dict[str, Any]] | None = None
    reserve_table_url: str | None = None
    google_food_url: str | None = None
    additional_info: dict[str, Any] | None = None
    image_categories: list[str] | None = None

    # Remaining scrape metadata (cid, website, phone, scrapedAt, ...) is
    # carried through untouched as extra fields.
    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("title", mode="before")
    @classmethod
    def _title_or_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("categories", mode="before")
    @classmethod
    def _categories_or_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        # Anything other than a list (a bare string, a number) is left for
        # the list[str] check to reject
        if isinstance(value, (list, tuple)):
            return [c for c in value if c is not None]
        return value

    @field_validator("total_score", "reviews_count", "images_count", mode="before")
    @classmethod
    def _number_or_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("permanently_closed", "temporarily_closed", mode="before")
    @classmethod
    def _flag_or_false(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def is_closed(self) -> bool:
        return self.permanently_closed or self.temporarily_closed

    @property
    def price_level(self) -> PriceLevel:
        """Parsed price level; missing or unparseable prices count as moderate."""
        return PriceLevel.parse(self.price) or PriceLevel.MODERATE


class PlaceWithDistance(Place):
    distance: float = Field(..., ge=0.0, description="Kilometers from the reference point")

    @classmethod
    def from_place(cls, place: Place, distance: float) -> PlaceWithDistance:
        data = place.model_dump(by_alias=True)
        data["distance"] = distance
        return cls.model_validate(data)


class LocationQuery(_CamelModel):
    """
    Parameters of a filtered, paginated query.

    ``None`` means "use the configured default" for city, limit, offset and
    radius_km, and "skip this filter" for everything else.
    """

    city: str | None = None
    categories: list[str] | None = None
    min_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    max_price: str | None = None
    neighborhood: str | None = None
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    near_location: Coordinates | None = None
    radius_km: float | None = Field(default=None, ge=0.0)


class CacheStats(BaseModel):
    city: str | None
    size: int
    hits: int
    misses: int
    generation: int
