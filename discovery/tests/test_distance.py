import math

import pytest

from discovery.locations.distance import EARTH_RADIUS_KM, distance_km

BARCELONA = (41.3870, 2.1701)
MADRID = (40.4168, -3.7038)
SYDNEY = (-33.8688, 151.2093)


def test_distance_is_zero_for_identical_points():
    assert distance_km(*BARCELONA, *BARCELONA) == 0.0


@pytest.mark.parametrize("a, b", [
    (BARCELONA, MADRID),
    (MADRID, SYDNEY),
    ((0.0, 179.9), (0.0, -179.9)),
    ((89.9, 0.0), (-89.9, 180.0)),
])
def test_distance_is_symmetric_and_non_negative(a, b):
    forward = distance_km(*a, *b)
    assert forward == distance_km(*b, *a)
    assert forward >= 0.0


def test_barcelona_to_madrid():
    assert distance_km(*BARCELONA, *MADRID) == pytest.approx(505, abs=5)


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_KM * math.pi / 180
    assert distance_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)


def test_crossing_the_antimeridian_takes_the_short_way():
    assert distance_km(0.0, 179.5, 0.0, -179.5) == pytest.approx(111.19, abs=0.1)


def test_antipodal_points_are_half_the_circumference():
    assert distance_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * EARTH_RADIUS_KM)
    assert distance_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(20015, abs=1)
