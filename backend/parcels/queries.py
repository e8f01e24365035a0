from __future__ import annotations

import logging
import math
from typing import Any, Iterable

from geo.aoi import BBox
from geo.geodesy import distance
from geo.types import as_coordinate, as_ring
from parcels.errors import InvalidRadius
from parcels.registry import ParcelRegistry
from parcels.types import NearbyParcel, OverlapResult

logger = logging.getLogger(__name__)


class SpatialQueryEngine:
    """
    Read-only queries over a `ParcelRegistry`.

    All tests here work on bounding boxes, not on the true polygon shapes:
    - overlap is rectangle intersection, so it can report false positives but never
      misses a real intersection
    - nearby measures to the bounding-box centroid, not the nearest edge
    Every query is a linear scan; registries are small enough not to need an index.
    """

    def __init__(self, registry: ParcelRegistry):
        self.registry = registry

    def overlaps(self, id_a: str, id_b: str) -> OverlapResult:
        a, b = self.registry.require(id_a, id_b)
        box_a, box_b = a.bbox, b.bbox
        return OverlapResult(overlaps=box_a.intersects(box_b), box_a=box_a, box_b=box_b)

    def nearby(self, center: Any, radius_m: float) -> list[NearbyParcel]:
        """
        Parcels whose bounding-box centroid lies within `radius_m` of `center`
        (inclusive), nearest first.
        """
        radius = float(radius_m)
        if math.isnan(radius) or radius < 0:
            logger.info("Rejected nearby search radius %r", radius_m)
            raise InvalidRadius(radius_m)

        c = as_coordinate(center)
        hits: list[NearbyParcel] = []
        for parcel in self.registry.snapshot():
            d = distance(c, parcel.bbox.center)
            if d <= radius:
                hits.append(NearbyParcel(id=parcel.id, distance_m=d))
        hits.sort(key=lambda h: (h.distance_m, h.id))
        return hits

    def parcels_at(self, point: Any) -> list[str]:
        """
        Ids of parcels whose bounding box contains `point`.
        """
        p = as_coordinate(point)
        return sorted(
            parcel.id for parcel in self.registry.snapshot() if parcel.bbox.contains(p)
        )

    def search(self, term: str) -> list[str]:
        """
        Case-insensitive substring match over parcel ids and attribute values.
        """
        needle = (term or "").strip().lower()
        if not needle:
            return []
        out: list[str] = []
        for parcel in self.registry.snapshot():
            haystack = [parcel.id, *parcel.attributes.values()]
            if any(needle in str(v).lower() for v in haystack):
                out.append(parcel.id)
        return sorted(out)


def contains_point(point: Any, ring: Iterable[Any]) -> bool:
    """
    Bounding-box containment, edges inclusive.

    This is an approximation, not a ray-casting test: points in a concave notch
    of the ring still count as inside. Callers needing exact containment must
    bring their own polygon test.
    """
    coords = as_ring(ring)
    if not coords:
        return False
    return BBox.from_coords(coords).contains(as_coordinate(point))
