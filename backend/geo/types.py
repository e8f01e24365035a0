from __future__ import annotations

from typing import Any, Iterable, NamedTuple, Sequence, TypeAlias


class Coordinate(NamedTuple):
    """
    A WGS84 position in decimal degrees.

    Note the order: (lat, lng), as the map frontend sends it. GeoJSON positions are
    the other way round; conversion happens in `layers.loaders` and `exports.geojson`.
    """

    lat: float
    lng: float


BoundaryRing: TypeAlias = Sequence[Coordinate]


def as_coordinate(raw: Any) -> Coordinate:
    """
    Accept a `Coordinate`, a `(lat, lng)` pair or a `{"lat": .., "lng": ..}` mapping.
    """
    if isinstance(raw, Coordinate):
        return raw
    if isinstance(raw, dict):
        lat = raw.get("lat")
        lng = raw.get("lng", raw.get("lon"))
        if lat is None or lng is None:
            raise ValueError(f"Coordinate mapping needs lat and lng: {raw!r}")
        return Coordinate(float(lat), float(lng))
    if isinstance(raw, (str, bytes)) or len(raw) != 2:
        raise ValueError(f"Coordinate must be a (lat, lng) pair: {raw!r}")
    return Coordinate(float(raw[0]), float(raw[1]))


def as_ring(points: Iterable[Any]) -> tuple[Coordinate, ...]:
    return tuple(as_coordinate(p) for p in points)
