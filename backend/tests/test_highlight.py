from __future__ import annotations

import pytest

from geo.aoi import BBox
from parcels.errors import ParcelNotFound
from parcels.highlight import HighlightController
from parcels.registry import ParcelRegistry
from parcels.types import HighlightState
from settings.types import HighlightStyle, ParcelStyle, ViewSettings

RING = [(-15.42, 28.27), (-15.42, 28.29), (-15.40, 28.29), (-15.40, 28.27)]


class RecordingSurface:
    def __init__(self):
        self.calls: list[tuple] = []

    def fit_bounds(self, bbox: BBox) -> None:
        self.calls.append(("fit_bounds", bbox))

    def open_popup(self, parcel_id: str, attributes: dict[str, str]) -> None:
        self.calls.append(("open_popup", parcel_id, attributes))


def _setup(surface=None) -> tuple[ParcelRegistry, HighlightController]:
    reg = ParcelRegistry()
    reg.register("P1", RING, {"owner": "Jane"})
    return reg, HighlightController(reg, surface=surface)


def test_highlight_then_unhighlight_restores_parcel():
    reg, hl = _setup()
    before = reg.get("P1")

    hl.highlight("P1")
    assert reg.get("P1").highlight_state is HighlightState.highlighted
    hl.unhighlight("P1")

    after = reg.get("P1")
    assert after == before
    assert after.boundary == before.boundary
    assert after.attributes == before.attributes


def test_transitions_are_idempotent():
    reg, hl = _setup()
    hl.highlight("P1")
    once = reg.get("P1")
    hl.highlight("P1")
    assert reg.get("P1") is once

    hl.unhighlight("P1")
    hl.unhighlight("P1")
    assert reg.get("P1").highlight_state is HighlightState.normal


def test_unknown_parcel_fails_both_ways():
    _reg, hl = _setup()
    with pytest.raises(ParcelNotFound):
        hl.highlight("nope")
    with pytest.raises(ParcelNotFound):
        hl.unhighlight("nope")


def test_highlight_returns_focus_command_for_parcel_bounds():
    _reg, hl = _setup()
    cmd = hl.highlight("P1")
    assert cmd.parcel_id == "P1"
    assert cmd.bbox.as_dict() == {"north": -15.40, "south": -15.42, "east": 28.29, "west": 28.27}
    assert cmd.center.lat == pytest.approx(-15.41)
    assert cmd.center.lng == pytest.approx(28.28)
    assert cmd.attributes == {"owner": "Jane"}
    # A ~2 km parcel should be framed well past the country-wide default zoom.
    assert 10.0 < cmd.zoom <= 19.0


def test_focus_zoom_is_capped_for_tiny_parcels():
    reg = ParcelRegistry()
    reg.register("tiny", [(0.0, 0.0), (0.0, 1e-7), (1e-7, 1e-7)])
    hl = HighlightController(reg, view=ViewSettings(maxFocusZoom=18.0))
    assert hl.highlight("tiny").zoom == 18.0


def test_highlight_drives_the_attached_surface():
    surface = RecordingSurface()
    _reg, hl = _setup(surface)
    hl.highlight("P1")
    assert [c[0] for c in surface.calls] == ["fit_bounds", "open_popup"]
    assert surface.calls[1] == ("open_popup", "P1", {"owner": "Jane"})

    hl.unhighlight("P1")
    assert len(surface.calls) == 2


def test_display_style_follows_state():
    reg, hl = _setup()
    highlight = HighlightStyle()
    assert reg.get("P1").display_style(highlight) == ParcelStyle()

    hl.highlight("P1")
    style = reg.get("P1").display_style(highlight)
    assert style.color == "#FFFF00"
    assert style.weight == 5.0
    assert style.fillColor == ParcelStyle().fillColor
    # The stored base style never changes.
    assert reg.get("P1").style == ParcelStyle()
