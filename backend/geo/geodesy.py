from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

from pyproj import Geod

from geo.types import BoundaryRing, Coordinate

# Mean Earth radius; the same sphere is used for distances and areas so that
# perimeter and area of a parcel stay mutually consistent.
EARTH_RADIUS_M = 6_371_000.0

SQUARE_METERS_PER_HECTARE = 10_000.0
ACRES_PER_HECTARE = 2.471
METERS_PER_KILOMETER = 1000.0
MILES_PER_KILOMETER = 0.621371


@dataclass(frozen=True)
class AreaMeasurement:
    square_meters: float
    hectares: float
    acres: float


@dataclass(frozen=True)
class PerimeterMeasurement:
    meters: float
    kilometers: float


@dataclass(frozen=True)
class DistanceMeasurement:
    meters: float
    kilometers: float
    miles: float


@lru_cache(maxsize=1)
def sphere_geod() -> Geod:
    return Geod(a=EARTH_RADIUS_M, b=EARTH_RADIUS_M)


def distance(a: Coordinate, b: Coordinate) -> float:
    """
    Great-circle distance in meters (haversine).
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)

    h = math.sin(dlat / 2.0) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2.0) ** 2
    # Rounding can push h a hair above 1 for antipodal points.
    h = min(1.0, h)
    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def area(ring: BoundaryRing) -> float:
    """
    Area of the ring in square meters, on the `EARTH_RADIUS_M` sphere.

    The ring is treated as implicitly closed and winding direction does not matter.
    Rings with fewer than three distinct points have no area.
    """
    if len(set(ring)) < 3:
        return 0.0
    lons = [p.lng for p in ring]
    lats = [p.lat for p in ring]
    signed_area, _perimeter = sphere_geod().polygon_area_perimeter(lons, lats)
    return abs(float(signed_area))


def perimeter(ring: BoundaryRing) -> float:
    """
    Sum of haversine edge lengths, including the closing edge back to the first point.
    """
    n = len(ring)
    if n < 2:
        return 0.0
    return sum(distance(ring[i], ring[(i + 1) % n]) for i in range(n))


def hectares(square_meters: float) -> float:
    return square_meters / SQUARE_METERS_PER_HECTARE


def acres(square_meters: float) -> float:
    return hectares(square_meters) * ACRES_PER_HECTARE


def kilometers(meters: float) -> float:
    return meters / METERS_PER_KILOMETER


def miles(meters: float) -> float:
    return kilometers(meters) * MILES_PER_KILOMETER


def measure_area(ring: BoundaryRing) -> AreaMeasurement:
    m2 = area(ring)
    return AreaMeasurement(square_meters=m2, hectares=hectares(m2), acres=acres(m2))


def measure_perimeter(ring: BoundaryRing) -> PerimeterMeasurement:
    m = perimeter(ring)
    return PerimeterMeasurement(meters=m, kilometers=kilometers(m))


def measure_distance(a: Coordinate, b: Coordinate) -> DistanceMeasurement:
    m = distance(a, b)
    return DistanceMeasurement(meters=m, kilometers=kilometers(m), miles=miles(m))
