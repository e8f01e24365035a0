from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from geo.types import Coordinate


@dataclass(frozen=True)
class BBox:
    """
    WGS84 bounding box in lon/lat degrees.

    Convention used throughout this repo:
    - minLon, minLat, maxLon, maxLat
    - north/south/east/west are read-only aliases for the map-facing API

    Rings crossing the antimeridian are not normalized; their box simply spans
    the long way round.
    """

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @classmethod
    def from_coords(cls, coords: Iterable[Coordinate]) -> "BBox":
        pts = list(coords)
        if not pts:
            raise ValueError("Cannot compute a bounding box of an empty ring")
        return cls(
            min_lon=min(p.lng for p in pts),
            min_lat=min(p.lat for p in pts),
            max_lon=max(p.lng for p in pts),
            max_lat=max(p.lat for p in pts),
        )

    @property
    def north(self) -> float:
        return self.max_lat

    @property
    def south(self) -> float:
        return self.min_lat

    @property
    def east(self) -> float:
        return self.max_lon

    @property
    def west(self) -> float:
        return self.min_lon

    @property
    def center(self) -> Coordinate:
        return Coordinate(
            lat=(self.min_lat + self.max_lat) / 2.0,
            lng=(self.min_lon + self.max_lon) / 2.0,
        )

    def normalized(self) -> "BBox":
        min_lon = min(self.min_lon, self.max_lon)
        max_lon = max(self.min_lon, self.max_lon)
        min_lat = min(self.min_lat, self.max_lat)
        max_lat = max(self.min_lat, self.max_lat)
        return BBox(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)

    def intersects(self, other: "BBox") -> bool:
        # Closed rectangles: shared edges or corners count as overlap.
        return (
            self.west <= other.east
            and self.east >= other.west
            and self.south <= other.north
            and self.north >= other.south
        )

    def contains(self, point: Coordinate) -> bool:
        return (
            self.min_lat <= point.lat <= self.max_lat
            and self.min_lon <= point.lng <= self.max_lon
        )

    def padded(self, fraction: float) -> "BBox":
        """
        Grow the box on every side by `fraction` of its own span.
        """
        if fraction <= 0:
            return self
        pad_lon = (self.max_lon - self.min_lon) * fraction
        pad_lat = (self.max_lat - self.min_lat) * fraction
        return BBox(
            min_lon=self.min_lon - pad_lon,
            min_lat=self.min_lat - pad_lat,
            max_lon=self.max_lon + pad_lon,
            max_lat=self.max_lat + pad_lat,
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "north": self.north,
            "south": self.south,
            "east": self.east,
            "west": self.west,
        }
