from __future__ import annotations

import math

from geo.aoi import BBox
from geo.types import Coordinate


def fit_view_to_bbox(
    bbox: BBox,
    *,
    viewport: dict[str, int] | None,
    padding: float = 0.0,
    max_zoom: float = 19.0,
) -> tuple[Coordinate, float]:
    """
    Center and zoom that frame `bbox` in a viewport of the given pixel size.
    """
    b = bbox.normalized().padded(padding)
    center = b.center

    width = int((viewport or {}).get("width") or 900)
    height = int((viewport or {}).get("height") or 600)
    zoom = bbox_to_zoom(
        b.min_lon, b.min_lat, b.max_lon, b.max_lat, width=width, height=height
    )
    return center, float(max(0.0, min(max_zoom, zoom)))


def bbox_to_zoom(
    min_lon: float,
    min_lat: float,
    max_lon: float,
    max_lat: float,
    *,
    width: int,
    height: int,
) -> float:
    # WebMercator bbox -> zoom heuristic.
    def lat_to_rad(lat: float) -> float:
        # Clamp so the poles don't blow up the log.
        s = math.sin(max(-85.0, min(85.0, lat)) * math.pi / 180.0)
        return math.log((1 + s) / (1 - s)) / 2.0

    lat_rad_min = lat_to_rad(min_lat)
    lat_rad_max = lat_to_rad(max_lat)
    lon_delta = max_lon - min_lon
    lat_delta = (lat_rad_max - lat_rad_min) * 180.0 / math.pi

    # avoid division by zero
    lon_delta = max(lon_delta, 1e-6)
    lat_delta = max(lat_delta, 1e-6)

    # 256px tiles
    zoom_x = math.log2((width * 360.0) / (256.0 * lon_delta))
    zoom_y = math.log2((height * 170.0) / (256.0 * lat_delta))
    return float(min(zoom_x, zoom_y))
