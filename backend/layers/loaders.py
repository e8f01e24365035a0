from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from shapely.geometry import LineString, MultiPolygon, Point, Polygon, shape

from geo.types import Coordinate
from layers.types import LayerFeature, LineFeature, PointFeature, PolygonFeature

logger = logging.getLogger(__name__)


def load_geojson(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Invalid GeoJSON root: {path}")
    return data


def geojson_features(data: dict[str, Any]) -> list[LayerFeature]:
    """
    Convert a GeoJSON FeatureCollection (or a single Feature) into layer features.

    MultiPolygons are split into one feature per part (`<id>-<n>`). Features with
    unsupported or empty geometry are skipped.
    """
    if data.get("type") == "Feature":
        raw_features = [data]
    else:
        raw_features = data.get("features") or []

    out: list[LayerFeature] = []
    for i, feature in enumerate(raw_features):
        geom = (feature or {}).get("geometry")
        props = dict((feature or {}).get("properties") or {})
        if not geom:
            continue
        fid = str((feature or {}).get("id") or props.get("id") or f"feature-{i}")

        try:
            g = shape(geom)
        except Exception as e:
            logger.info("Skipping GeoJSON feature %r with unreadable geometry: %s", fid, e)
            continue
        if g.is_empty:
            continue

        if isinstance(g, Point):
            out.append(PointFeature(id=fid, lon=float(g.x), lat=float(g.y), props=props))
        elif isinstance(g, LineString):
            out.append(LineFeature(id=fid, coords=_xy(g.coords), props=props))
        elif isinstance(g, Polygon):
            out.append(PolygonFeature(id=fid, rings=_rings(g), props=props))
        elif isinstance(g, MultiPolygon):
            for j, part in enumerate(g.geoms):
                out.append(PolygonFeature(id=f"{fid}-{j}", rings=_rings(part), props=props))
        else:
            logger.info("Skipping GeoJSON feature %r of type %s", fid, g.geom_type)

    return out


def outer_ring_coordinates(feature: PolygonFeature) -> list[Coordinate]:
    """
    Outer ring of a polygon feature as (lat, lng) coordinates, without the
    repeated closing position GeoJSON requires.
    """
    if not feature.rings:
        return []
    ring = list(feature.rings[0])
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring = ring[:-1]
    return [Coordinate(lat=lat, lng=lon) for lon, lat in ring]


def _rings(poly: Polygon) -> list[list[tuple[float, float]]]:
    return [_xy(poly.exterior.coords), *[_xy(r.coords) for r in poly.interiors]]


def _xy(coords: Any) -> list[tuple[float, float]]:
    # Drop any Z value; positions stay (lon, lat).
    return [(float(c[0]), float(c[1])) for c in coords]
