from __future__ import annotations

from typing import Protocol

from geo.aoi import BBox
from geo.view import fit_view_to_bbox
from parcels.registry import ParcelRegistry
from parcels.types import FocusCommand, HighlightState, Parcel
from settings.types import HighlightStyle, ViewSettings


class MapSurface(Protocol):
    """
    Rendering side of the map (Leaflet in the browser, or a test double).

    Only the commands the highlight flow needs are part of the contract.
    """

    def fit_bounds(self, bbox: BBox) -> None: ...

    def open_popup(self, parcel_id: str, attributes: dict[str, str]) -> None: ...


class HighlightController:
    """
    Normal <-> Highlighted transitions for registered parcels.

    Transitions only touch the parcel's highlight state; boundary and attributes
    are carried over untouched. Repeating a transition is a no-op.
    """

    def __init__(
        self,
        registry: ParcelRegistry,
        *,
        style: HighlightStyle | None = None,
        view: ViewSettings | None = None,
        surface: MapSurface | None = None,
    ):
        self.registry = registry
        self.style = style or HighlightStyle()
        self.view = view or ViewSettings()
        self.surface = surface

    def highlight(self, parcel_id: str) -> FocusCommand:
        parcel = self.registry.set_highlight_state(parcel_id, HighlightState.highlighted)
        cmd = self.focus_command(parcel)
        if self.surface is not None:
            self.surface.fit_bounds(cmd.bbox)
            self.surface.open_popup(cmd.parcel_id, cmd.attributes)
        return cmd

    def unhighlight(self, parcel_id: str) -> Parcel:
        return self.registry.set_highlight_state(parcel_id, HighlightState.normal)

    def focus_command(self, parcel: Parcel) -> FocusCommand:
        center, zoom = fit_view_to_bbox(
            parcel.bbox,
            viewport=self.view.viewport.model_dump(),
            padding=self.view.focusPadding,
            max_zoom=self.view.maxFocusZoom,
        )
        return FocusCommand(
            parcel_id=parcel.id,
            bbox=parcel.bbox,
            center=center,
            zoom=zoom,
            attributes=dict(parcel.attributes),
        )
