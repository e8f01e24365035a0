from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias, Union


@dataclass(frozen=True)
class PointFeature:
    id: str
    lon: float
    lat: float
    props: dict[str, Any]


@dataclass(frozen=True)
class LineFeature:
    id: str
    coords: list[tuple[float, float]]  # [(lon, lat), ...]
    props: dict[str, Any]


@dataclass(frozen=True)
class PolygonFeature:
    id: str
    rings: list[
        list[tuple[float, float]]
    ]  # [outer_ring, ...]; each ring is [(lon, lat), ...]
    props: dict[str, Any]


LayerFeature: TypeAlias = Union[PointFeature, LineFeature, PolygonFeature]


@dataclass
class FeatureGroup:
    """
    A named, mutable collection of non-parcel map features (dispute markers, audit
    checkpoints, overlay boundaries, user GeoJSON).

    `visible` mirrors the layer toggle in the UI; hidden groups are still exported.
    """

    name: str
    features: list[LayerFeature] = field(default_factory=list)
    visible: bool = True

    def add(self, feature: LayerFeature) -> LayerFeature:
        self.features.append(feature)
        return feature

    def clear(self) -> None:
        self.features.clear()

    def __len__(self) -> int:
        return len(self.features)
