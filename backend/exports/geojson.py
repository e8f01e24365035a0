from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from layers.types import FeatureGroup, LayerFeature, LineFeature, PointFeature, PolygonFeature
from parcels.registry import ParcelRegistry
from parcels.types import Parcel


class FeatureSource(Protocol):
    name: str

    def iter_features(self) -> Iterable[dict[str, Any]]: ...


@dataclass
class ParcelSource:
    registry: ParcelRegistry
    name: str = "parcels"

    def iter_features(self) -> Iterable[dict[str, Any]]:
        for parcel in self.registry.snapshot():
            yield parcel_feature(parcel)


@dataclass
class GroupSource:
    group: FeatureGroup

    @property
    def name(self) -> str:
        return self.group.name

    def iter_features(self) -> Iterable[dict[str, Any]]:
        for f in list(self.group.features):
            yield layer_feature(f)


def export_all(sources: Iterable[FeatureSource]) -> dict[str, Any]:
    """
    Concatenate every source into one GeoJSON FeatureCollection.

    Sources are visited in the given order; within a source, features come in
    whatever order the source yields them.
    """
    features: list[dict[str, Any]] = []
    for source in sources:
        features.extend(source.iter_features())
    return {"type": "FeatureCollection", "features": features}


def parcel_feature(parcel: Parcel) -> dict[str, Any]:
    ring = [[p.lng, p.lat] for p in parcel.boundary]
    return _feature(
        parcel.id,
        {"type": "Polygon", "coordinates": [_closed(ring)]},
        parcel.attributes,
    )


def layer_feature(f: LayerFeature) -> dict[str, Any]:
    if isinstance(f, PointFeature):
        geometry = {"type": "Point", "coordinates": [f.lon, f.lat]}
    elif isinstance(f, LineFeature):
        geometry = {"type": "LineString", "coordinates": [[x, y] for x, y in f.coords]}
    elif isinstance(f, PolygonFeature):
        geometry = {
            "type": "Polygon",
            "coordinates": [_closed([[x, y] for x, y in r]) for r in f.rings],
        }
    else:
        raise TypeError(f"Unsupported feature type: {type(f).__name__}")
    return _feature(f.id, geometry, f.props)


def _feature(fid: str, geometry: dict[str, Any], props: dict[str, Any]) -> dict[str, Any]:
    # Properties go out as-is (shallow copy only).
    return {"type": "Feature", "id": fid, "geometry": geometry, "properties": dict(props)}


def _closed(ring: list[list[float]]) -> list[list[float]]:
    if ring and ring[0] != ring[-1]:
        return [*ring, list(ring[0])]
    return ring
