from .errors import (
    InvalidAttributes,
    InvalidGeometry,
    InvalidRadius,
    ParcelError,
    ParcelNotFound,
)
from .highlight import HighlightController, MapSurface
from .queries import SpatialQueryEngine, contains_point
from .registry import ParcelRegistry
from .types import FocusCommand, HighlightState, NearbyParcel, OverlapResult, Parcel

__all__ = [
    "FocusCommand",
    "HighlightController",
    "HighlightState",
    "InvalidAttributes",
    "InvalidGeometry",
    "InvalidRadius",
    "MapSurface",
    "NearbyParcel",
    "OverlapResult",
    "Parcel",
    "ParcelError",
    "ParcelNotFound",
    "ParcelRegistry",
    "SpatialQueryEngine",
    "contains_point",
]
