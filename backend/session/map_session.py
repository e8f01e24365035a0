from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from exports.geojson import FeatureSource, GroupSource, ParcelSource, export_all
from geo import geodesy
from geo.aoi import BBox
from geo.types import as_coordinate, as_ring
from layers.groups import CUSTOM, FeatureGroups
from layers.loaders import geojson_features, outer_ring_coordinates
from layers.types import PolygonFeature
from parcels.highlight import HighlightController, MapSurface
from parcels.queries import SpatialQueryEngine, contains_point
from parcels.registry import ParcelRegistry, clean_attributes
from parcels.types import FocusCommand, NearbyParcel, OverlapResult, Parcel
from settings.types import MapSettings, ParcelStyle

logger = logging.getLogger(__name__)


class MapSession:
    """
    Everything one map instance owns: the parcel registry, the non-parcel feature
    groups, and the query/highlight services bound to them.

    Sessions are independent: two maps never share parcels. The host creates one
    per map and calls `dispose()` when the map goes away.
    """

    def __init__(
        self,
        settings: MapSettings | None = None,
        *,
        surface: MapSurface | None = None,
    ):
        self.settings = settings or MapSettings()
        self.registry = ParcelRegistry(default_style=self.settings.parcelStyle)
        self.queries = SpatialQueryEngine(self.registry)
        self.highlighter = HighlightController(
            self.registry,
            style=self.settings.highlightStyle,
            view=self.settings.view,
            surface=surface,
        )
        self.groups = FeatureGroups(self.settings.layerGroups)

    def __enter__(self) -> "MapSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    def attach_surface(self, surface: MapSurface | None) -> None:
        self.highlighter.surface = surface

    def dispose(self) -> None:
        """
        Drop all parcels and feature groups and detach the rendering surface.
        """
        self.registry.clear()
        self.groups.clear()
        self.highlighter.surface = None
        logger.debug("Map session disposed")

    # Registry

    def register(
        self,
        parcel_id: str,
        ring: Iterable[Any],
        attributes: Mapping[str, Any] | None = None,
        *,
        style: ParcelStyle | None = None,
    ) -> Parcel:
        return self.registry.register(parcel_id, ring, attributes, style=style)

    def get(self, parcel_id: str) -> Parcel | None:
        return self.registry.get(parcel_id)

    def remove(self, parcel_id: str) -> None:
        self.registry.remove(parcel_id)

    def bounding_box(self, parcel_id: str) -> BBox | None:
        return self.registry.bounding_box(parcel_id)

    # Queries

    def overlaps(self, id_a: str, id_b: str) -> OverlapResult:
        return self.queries.overlaps(id_a, id_b)

    def nearby(self, lat: float, lng: float, radius_m: float) -> list[NearbyParcel]:
        return self.queries.nearby((lat, lng), radius_m)

    def contains_point(self, point: Any, ring: Iterable[Any]) -> bool:
        return contains_point(point, ring)

    def parcels_at(self, point: Any) -> list[str]:
        return self.queries.parcels_at(point)

    def search(self, term: str) -> list[str]:
        return self.queries.search(term)

    # Highlight

    def highlight(self, parcel_id: str) -> FocusCommand:
        return self.highlighter.highlight(parcel_id)

    def unhighlight(self, parcel_id: str) -> Parcel:
        return self.highlighter.unhighlight(parcel_id)

    def display_style(self, parcel_id: str) -> ParcelStyle | None:
        parcel = self.registry.get(parcel_id)
        if parcel is None:
            return None
        return parcel.display_style(self.settings.highlightStyle)

    # Measurement

    def distance(self, a: Any, b: Any) -> geodesy.DistanceMeasurement:
        return geodesy.measure_distance(as_coordinate(a), as_coordinate(b))

    def area(self, ring: Iterable[Any]) -> geodesy.AreaMeasurement:
        return geodesy.measure_area(as_ring(ring))

    def perimeter(self, ring: Iterable[Any]) -> geodesy.PerimeterMeasurement:
        return geodesy.measure_perimeter(as_ring(ring))

    # Import / export

    def import_geojson(self, data: dict[str, Any], *, as_parcels: bool = True) -> list[str]:
        """
        Load a GeoJSON FeatureCollection.

        With `as_parcels`, polygons become parcels (properties as attributes) and
        every other geometry goes to the custom group; otherwise everything goes to
        the custom group. Returns the ids of the parcels registered.

        Null properties are dropped from parcel attributes. Any other non-string
        property fails the whole import with `InvalidAttributes` before anything
        is registered.
        """
        parcels: list[tuple[str, list, dict[str, str]]] = []
        others = []
        for feature in geojson_features(data):
            if as_parcels and isinstance(feature, PolygonFeature):
                props = {k: v for k, v in feature.props.items() if v is not None}
                parcels.append(
                    (
                        feature.id,
                        outer_ring_coordinates(feature),
                        clean_attributes(feature.id, props),
                    )
                )
            else:
                others.append(feature)

        registered: list[str] = []
        for parcel_id, ring, attrs in parcels:
            self.registry.register(parcel_id, ring, attrs)
            registered.append(parcel_id)
        for feature in others:
            self.groups.add_feature(CUSTOM, feature)
        logger.info("Imported GeoJSON: %d parcels", len(registered))
        return registered

    def sources(self) -> list[FeatureSource]:
        return [ParcelSource(self.registry), *[GroupSource(g) for g in self.groups]]

    def export_all(self) -> dict[str, Any]:
        return export_all(self.sources())
