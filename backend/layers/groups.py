from __future__ import annotations

import itertools
import logging
from typing import Any, Iterable

from geo.types import as_coordinate, as_ring
from layers.types import FeatureGroup, LayerFeature, PointFeature, PolygonFeature

logger = logging.getLogger(__name__)

DISPUTES = "disputes"
AUDIT = "audit"
BOUNDARIES = "boundaries"
CUSTOM = "custom"
# Land registry markers share the group name of the parcel layer they annotate.
REGISTRY_MARKERS = "parcels"

# Audit checkpoint marker colors by status; anything else is "in progress".
_AUDIT_STATUS_COLORS: dict[str, str] = {
    "completed": "green",
    "pending": "orange",
}


class FeatureGroups:
    """
    Ordered set of named feature groups. Iteration follows creation order, which
    is also the export order.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._groups: dict[str, FeatureGroup] = {}
        self._seq = itertools.count(1)
        for name in names:
            self.create(name)

    def create(self, name: str) -> FeatureGroup:
        key = (name or "").strip()
        if not key:
            raise ValueError("Feature group name must not be empty")
        group = self._groups.get(key)
        if group is None:
            group = FeatureGroup(name=key)
            self._groups[key] = group
        return group

    def get(self, name: str) -> FeatureGroup | None:
        return self._groups.get((name or "").strip())

    def remove(self, name: str) -> None:
        self._groups.pop((name or "").strip(), None)

    def names(self) -> list[str]:
        return list(self._groups.keys())

    def __iter__(self):
        return iter(list(self._groups.values()))

    def show(self, name: str) -> bool:
        return self._set_visible(name, True)

    def hide(self, name: str) -> bool:
        return self._set_visible(name, False)

    def toggle(self, name: str) -> bool:
        group = self.get(name)
        if group is None:
            return False
        return self._set_visible(name, not group.visible)

    def _set_visible(self, name: str, visible: bool) -> bool:
        group = self.get(name)
        if group is None:
            return False
        group.visible = visible
        return True

    def clear(self) -> None:
        for group in self._groups.values():
            group.clear()
        self._groups.clear()

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._seq)}"

    # Markers and overlays

    def add_feature(self, group_name: str, feature: LayerFeature) -> LayerFeature:
        return self.create(group_name).add(feature)

    def add_dispute_marker(
        self,
        position: Any,
        description: str,
        *,
        dispute_id: str | None = None,
    ) -> PointFeature:
        p = as_coordinate(position)
        props: dict[str, Any] = {"kind": "dispute", "description": description}
        if dispute_id is not None:
            props["disputeId"] = dispute_id
        feature = PointFeature(
            id=dispute_id or self.next_id("dispute"), lon=p.lng, lat=p.lat, props=props
        )
        return self.add_feature(DISPUTES, feature)  # type: ignore[return-value]

    def add_audit_checkpoint(
        self,
        position: Any,
        status: str,
        *,
        checkpoint_id: str | None = None,
    ) -> PointFeature:
        p = as_coordinate(position)
        props: dict[str, Any] = {
            "kind": "audit",
            "status": status,
            "markerColor": _AUDIT_STATUS_COLORS.get((status or "").strip().lower(), "blue"),
        }
        if checkpoint_id is not None:
            props["checkpointId"] = checkpoint_id
        feature = PointFeature(
            id=checkpoint_id or self.next_id("audit"), lon=p.lng, lat=p.lat, props=props
        )
        return self.add_feature(AUDIT, feature)  # type: ignore[return-value]

    def add_boundary_polygon(
        self,
        ring: Iterable[Any],
        props: dict[str, Any] | None = None,
        *,
        feature_id: str | None = None,
    ) -> PolygonFeature:
        coords = as_ring(ring)
        if len(coords) < 3:
            raise ValueError(f"Boundary polygon needs at least 3 points, got {len(coords)}")
        feature = PolygonFeature(
            id=feature_id or self.next_id("boundary"),
            rings=[[(p.lng, p.lat) for p in coords]],
            props=dict(props or {}),
        )
        logger.debug("Added boundary polygon %r", feature.id)
        return self.add_feature(BOUNDARIES, feature)  # type: ignore[return-value]

    def add_land_registry_marker(
        self,
        position: Any,
        info: str,
        *,
        feature_id: str | None = None,
    ) -> PointFeature:
        p = as_coordinate(position)
        feature = PointFeature(
            id=feature_id or self.next_id("registry"),
            lon=p.lng,
            lat=p.lat,
            props={"kind": "registry", "info": info, "markerColor": "blue"},
        )
        return self.add_feature(REGISTRY_MARKERS, feature)  # type: ignore[return-value]
