from __future__ import annotations

from pydantic import BaseModel, Field

from geo.aoi import BBox
from parcels.types import FocusCommand, NearbyParcel, OverlapResult, Parcel
from settings.types import HighlightStyle, ParcelStyle


class ApiCoordinate(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class ApiPosition(BaseModel):
    # Output only: echoes whatever the registry holds, in range or not.
    lat: float
    lng: float


class ApiBounds(BaseModel):
    north: float
    south: float
    east: float
    west: float

    @classmethod
    def from_bbox(cls, b: BBox) -> "ApiBounds":
        return cls(**b.as_dict())


class ApiRegisterParcel(BaseModel):
    # Ring length is checked by the registry so the error kind stays InvalidGeometry.
    ring: list[ApiCoordinate]
    attributes: dict[str, str] = Field(default_factory=dict)
    style: ParcelStyle | None = None


class ApiParcel(BaseModel):
    id: str
    ring: list[ApiPosition]
    attributes: dict[str, str]
    highlightState: str
    style: ParcelStyle
    bounds: ApiBounds

    @classmethod
    def from_parcel(cls, p: Parcel, *, highlight: HighlightStyle) -> "ApiParcel":
        return cls(
            id=p.id,
            ring=[ApiPosition(lat=c.lat, lng=c.lng) for c in p.boundary],
            attributes=dict(p.attributes),
            highlightState=p.highlight_state.value,
            style=p.display_style(highlight),
            bounds=ApiBounds.from_bbox(p.bbox),
        )


class ApiOverlap(BaseModel):
    overlaps: bool
    boxA: ApiBounds
    boxB: ApiBounds

    @classmethod
    def from_result(cls, r: OverlapResult) -> "ApiOverlap":
        return cls(
            overlaps=r.overlaps,
            boxA=ApiBounds.from_bbox(r.box_a),
            boxB=ApiBounds.from_bbox(r.box_b),
        )


class ApiNearbyParcel(BaseModel):
    id: str
    distanceMeters: float

    @classmethod
    def from_hit(cls, h: NearbyParcel) -> "ApiNearbyParcel":
        return cls(id=h.id, distanceMeters=h.distance_m)


class ApiFocus(BaseModel):
    parcelId: str
    bounds: ApiBounds
    center: ApiPosition
    zoom: float
    attributes: dict[str, str]

    @classmethod
    def from_command(cls, c: FocusCommand) -> "ApiFocus":
        return cls(
            parcelId=c.parcel_id,
            bounds=ApiBounds.from_bbox(c.bbox),
            center=ApiPosition(lat=c.center.lat, lng=c.center.lng),
            zoom=c.zoom,
            attributes=dict(c.attributes),
        )


class ApiDistanceRequest(BaseModel):
    a: ApiCoordinate
    b: ApiCoordinate


class ApiRingRequest(BaseModel):
    ring: list[ApiCoordinate]
