from __future__ import annotations

import math
import random

import httpx
import pytest

from discovery.locations.config import DatasetConfig
from discovery.locations.service import LocationDataService

BASE_URL = "https://data.example.test/data"

# Plaça de Catalunya
ORIGIN = {"lat": 41.3870, "lng": 2.1701}
KM_PER_DEGREE_LAT = 6371.0 * math.pi / 180


def north_of(point: dict, km: float) -> dict:
    return {"lat": point["lat"] + km / KM_PER_DEGREE_LAT, "lng": point["lng"]}


def place_row(place_id: str, **overrides) -> dict:
    row = {
        "placeId": place_id,
        "cid": f"cid-{place_id}",
        "title": f"Place {place_id}",
        "description": "",
        "categoryName": "Restaurant",
        "categories": ["Restaurant"],
        "address": "Carrer de Test 1, Barcelona",
        "neighborhood": "Eixample",
        "city": "Barcelona",
        "countryCode": "ES",
        "location": dict(ORIGIN),
        "totalScore": 4.0,
        "reviewsCount": 10,
        "imagesCount": 3,
        "price": "$$",
        "permanentlyClosed": False,
        "temporarilyClosed": False,
    }
    row.update(overrides)
    return row


# A: open, 4.5, 1 km away. B: temporarily closed, 4.9, 0.2 km. C: open, 3.0, 5 km.
SCENARIO_ROWS = [
    place_row(
        "A",
        title="Bar Alfa",
        description="Best Tapas in town",
        categoryName="Tapas bar",
        categories=["Bar", "Tapas"],
        neighborhood="El Born",
        totalScore=4.5,
        location=north_of(ORIGIN, 1.0),
    ),
    place_row(
        "B",
        title="Bodega Beta",
        description="Natural wine and vermouth",
        categories=["Restaurant", "Tapas"],
        neighborhood="Barri Gòtic",
        totalScore=4.9,
        price="$",
        temporarilyClosed=True,
        location=north_of(ORIGIN, 0.2),
    ),
    place_row(
        "C",
        title="Cafe Gamma",
        description="Coffee and pastries",
        categoryName="Cafe",
        categories=["Cafe"],
        neighborhood="Gràcia",
        totalScore=3.0,
        price="$$$",
        location=north_of(ORIGIN, 5.0),
    ),
]


@pytest.fixture
def origin() -> dict:
    return dict(ORIGIN)


@pytest.fixture
def datasets() -> dict:
    """City id -> JSON payload (or a ready httpx.Response) served by the mock transport."""
    return {"barcelona": list(SCENARIO_ROWS)}


@pytest.fixture
def fetched() -> list[str]:
    """Resource names requested over the mock transport, in order."""
    return []


@pytest.fixture
def transport(datasets, fetched) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        fetched.append(name)
        for city, payload in datasets.items():
            if name == f"MasterSet_{city}.json":
                if isinstance(payload, httpx.Response):
                    return payload
                return httpx.Response(200, json=payload)
        return httpx.Response(404, json={"error": "not found"})

    return httpx.MockTransport(handler)


@pytest.fixture
def service(transport):
    client = httpx.Client(transport=transport)
    yield LocationDataService(
        config=DatasetConfig(base_url=BASE_URL),
        client=client,
        rng=random.Random(1234),
    )
    client.close()
