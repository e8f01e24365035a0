from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property

from geo.aoi import BBox
from geo.types import Coordinate
from settings.types import HighlightStyle, ParcelStyle


class HighlightState(str, Enum):
    normal = "Normal"
    highlighted = "Highlighted"


@dataclass(frozen=True)
class Parcel:
    """
    A cadastral land unit.

    Parcels are immutable: highlight transitions and re-registration swap in a new
    instance, so the cached bounding box can never go stale.
    """

    id: str
    boundary: tuple[Coordinate, ...]
    attributes: dict[str, str]
    highlight_state: HighlightState = HighlightState.normal
    # Base style; the highlight look is derived, never stored here.
    style: ParcelStyle = field(default_factory=ParcelStyle)

    @cached_property
    def bbox(self) -> BBox:
        return BBox.from_coords(self.boundary)

    @property
    def is_highlighted(self) -> bool:
        return self.highlight_state is HighlightState.highlighted

    def display_style(self, highlight: HighlightStyle) -> ParcelStyle:
        return highlight.apply(self.style) if self.is_highlighted else self.style


@dataclass(frozen=True)
class OverlapResult:
    overlaps: bool
    box_a: BBox
    box_b: BBox


@dataclass(frozen=True)
class NearbyParcel:
    id: str
    distance_m: float


@dataclass(frozen=True)
class FocusCommand:
    """
    What the rendering surface must do when a parcel gets highlighted:
    frame `bbox` (at `center` / `zoom`) and open a popup with `attributes`.
    """

    parcel_id: str
    bbox: BBox
    center: Coordinate
    zoom: float
    attributes: dict[str, str]
