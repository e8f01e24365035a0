from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from api.models import (
    ApiBounds,
    ApiDistanceRequest,
    ApiFocus,
    ApiNearbyParcel,
    ApiOverlap,
    ApiParcel,
    ApiRegisterParcel,
    ApiRingRequest,
)
from session.map_session import MapSession

logger = logging.getLogger(__name__)

router = APIRouter()


def get_session(request: Request) -> MapSession:
    return request.app.state.session


def _parcel_out(session: MapSession, parcel_id: str) -> ApiParcel:
    parcel = session.get(parcel_id)
    if parcel is None:
        # Plain absence: no error kind, unlike a failed operation.
        raise HTTPException(status_code=404, detail="Parcel not registered")
    return ApiParcel.from_parcel(parcel, highlight=session.settings.highlightStyle)


@router.get("/queries/overlaps", response_model=ApiOverlap)
def parcels_overlap(
    a: str = Query(...),
    b: str = Query(...),
    session: MapSession = Depends(get_session),
) -> ApiOverlap:
    return ApiOverlap.from_result(session.overlaps(a, b))


@router.get("/queries/nearby", response_model=list[ApiNearbyParcel])
def parcels_nearby(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
    radius: float = Query(...),
    session: MapSession = Depends(get_session),
) -> list[ApiNearbyParcel]:
    return [ApiNearbyParcel.from_hit(h) for h in session.nearby(lat, lng, radius)]


@router.get("/queries/search", response_model=list[str])
def parcels_search(q: str = "", session: MapSession = Depends(get_session)) -> list[str]:
    return session.search(q)


@router.put("/parcels/{parcel_id}", response_model=ApiParcel)
def register_parcel(
    parcel_id: str,
    body: ApiRegisterParcel,
    session: MapSession = Depends(get_session),
) -> ApiParcel:
    session.register(
        parcel_id,
        [(c.lat, c.lng) for c in body.ring],
        body.attributes,
        style=body.style,
    )
    return _parcel_out(session, parcel_id)


@router.get("/parcels/{parcel_id}", response_model=ApiParcel)
def get_parcel(parcel_id: str, session: MapSession = Depends(get_session)) -> ApiParcel:
    return _parcel_out(session, parcel_id)


@router.delete("/parcels/{parcel_id}", status_code=204)
def remove_parcel(parcel_id: str, session: MapSession = Depends(get_session)) -> Response:
    session.remove(parcel_id)
    return Response(status_code=204)


@router.get("/parcels/{parcel_id}/bbox", response_model=ApiBounds)
def parcel_bbox(parcel_id: str, session: MapSession = Depends(get_session)) -> ApiBounds:
    bbox = session.bounding_box(parcel_id)
    if bbox is None:
        raise HTTPException(status_code=404, detail="Parcel not registered")
    return ApiBounds.from_bbox(bbox)


@router.post("/parcels/{parcel_id}/highlight", response_model=ApiFocus)
def highlight_parcel(parcel_id: str, session: MapSession = Depends(get_session)) -> ApiFocus:
    return ApiFocus.from_command(session.highlight(parcel_id))


@router.post("/parcels/{parcel_id}/unhighlight", response_model=ApiParcel)
def unhighlight_parcel(
    parcel_id: str, session: MapSession = Depends(get_session)
) -> ApiParcel:
    session.unhighlight(parcel_id)
    return _parcel_out(session, parcel_id)


@router.post("/measure/distance")
def measure_distance(
    body: ApiDistanceRequest, session: MapSession = Depends(get_session)
) -> dict[str, float]:
    m = session.distance((body.a.lat, body.a.lng), (body.b.lat, body.b.lng))
    return {"meters": m.meters, "kilometers": m.kilometers, "miles": m.miles}


@router.post("/measure/area")
def measure_area(
    body: ApiRingRequest, session: MapSession = Depends(get_session)
) -> dict[str, float]:
    m = session.area([(c.lat, c.lng) for c in body.ring])
    return {"squareMeters": m.square_meters, "hectares": m.hectares, "acres": m.acres}


@router.post("/measure/perimeter")
def measure_perimeter(
    body: ApiRingRequest, session: MapSession = Depends(get_session)
) -> dict[str, float]:
    m = session.perimeter([(c.lat, c.lng) for c in body.ring])
    return {"meters": m.meters, "kilometers": m.kilometers}


@router.get("/export/geojson")
def export_geojson(session: MapSession = Depends(get_session)) -> dict:
    return session.export_all()
