from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ParcelStyle(BaseModel):
    """
    Display style of a parcel boundary, as handed to the rendering surface.

    Defaults match the cadastral layer of the land audit map (orange outline,
    gold fill).
    """

    model_config = ConfigDict(frozen=True)

    color: str = "#FF7800"
    weight: float = Field(default=3.0, gt=0.0)
    opacity: float = Field(default=0.8, ge=0.0, le=1.0)
    fillOpacity: float = Field(default=0.3, ge=0.0, le=1.0)
    fillColor: str = "#FFD700"


class HighlightStyle(BaseModel):
    """
    Style applied on top of the parcel style while a parcel is highlighted.

    `fillColor` is optional: when unset the parcel keeps its own fill color.
    """

    model_config = ConfigDict(frozen=True)

    color: str = "#FFFF00"
    weight: float = Field(default=5.0, gt=0.0)
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)
    fillOpacity: float = Field(default=0.6, ge=0.0, le=1.0)
    fillColor: str | None = None

    def apply(self, base: ParcelStyle) -> ParcelStyle:
        return ParcelStyle(
            color=self.color,
            weight=self.weight,
            opacity=self.opacity,
            fillOpacity=self.fillOpacity,
            fillColor=self.fillColor or base.fillColor,
        )


class MapCenter(BaseModel):
    lat: float = Field(default=-15.4167, ge=-90.0, le=90.0)
    lng: float = Field(default=28.2833, ge=-180.0, le=180.0)


class Viewport(BaseModel):
    width: int = Field(default=900, gt=0)
    height: int = Field(default=600, gt=0)


class ViewSettings(BaseModel):
    # Lusaka, whole-country zoom.
    center: MapCenter = Field(default_factory=MapCenter)
    zoom: float = Field(default=6.0, ge=0.0, le=24.0)
    viewport: Viewport = Field(default_factory=Viewport)
    # Fraction of the parcel's own span added around it when focusing.
    focusPadding: float = Field(default=0.0, ge=0.0)
    maxFocusZoom: float = Field(default=19.0, ge=0.0, le=24.0)


class MapSettings(BaseModel):
    parcelStyle: ParcelStyle = Field(default_factory=ParcelStyle)
    highlightStyle: HighlightStyle = Field(default_factory=HighlightStyle)
    view: ViewSettings = Field(default_factory=ViewSettings)
    # Non-parcel feature groups, created in this order for every session.
    layerGroups: list[str] = Field(
        default_factory=lambda: ["disputes", "audit", "boundaries", "custom"]
    )
