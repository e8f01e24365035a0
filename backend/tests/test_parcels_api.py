from __future__ import annotations

from fastapi.testclient import TestClient

from main import create_app
from settings.types import MapSettings

RING = [
    {"lat": -15.42, "lng": 28.27},
    {"lat": -15.42, "lng": 28.29},
    {"lat": -15.40, "lng": 28.29},
    {"lat": -15.40, "lng": 28.27},
]


def _client() -> TestClient:
    return TestClient(create_app(MapSettings()))


def test_register_then_get_parcel():
    client = _client()
    resp = client.put("/parcels/P1", json={"ring": RING, "attributes": {"owner": "Jane"}})
    assert resp.status_code == 200
    body = client.get("/parcels/P1").json()
    assert body["attributes"] == {"owner": "Jane"}
    assert body["highlightState"] == "Normal"
    assert body["bounds"] == {"north": -15.40, "south": -15.42, "east": 28.29, "west": 28.27}
    assert body["style"]["color"] == "#FF7800"


def test_short_ring_is_invalid_geometry():
    client = _client()
    resp = client.put("/parcels/P1", json={"ring": RING[:2]})
    assert resp.status_code == 422
    assert resp.json()["error"] == "InvalidGeometry"


def test_missing_parcel_is_plain_404_but_failed_overlap_is_parcel_not_found():
    client = _client()
    client.put("/parcels/P1", json={"ring": RING})

    resp = client.get("/parcels/P2")
    assert resp.status_code == 404
    assert "error" not in resp.json()

    resp = client.get("/queries/overlaps", params={"a": "P1", "b": "P2"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "ParcelNotFound"


def test_overlaps_and_nearby():
    client = _client()
    client.put("/parcels/A", json={"ring": RING})
    client.put("/parcels/B", json={"ring": [{"lat": p["lat"] + 0.01, "lng": p["lng"]} for p in RING]})

    resp = client.get("/queries/overlaps", params={"a": "A", "b": "B"})
    assert resp.status_code == 200
    assert resp.json()["overlaps"] is True
    assert set(resp.json()["boxA"].keys()) == {"north", "south", "east", "west"}

    resp = client.get("/queries/nearby", params={"lat": -15.41, "lng": 28.28, "radius": 5000})
    assert resp.status_code == 200
    rows = resp.json()
    assert [r["id"] for r in rows] == ["A", "B"]
    assert rows[0]["distanceMeters"] <= rows[1]["distanceMeters"] <= 5000


def test_negative_radius_is_rejected():
    client = _client()
    resp = client.get("/queries/nearby", params={"lat": 0, "lng": 0, "radius": -1})
    assert resp.status_code == 422
    assert resp.json()["error"] == "InvalidRadius"


def test_highlight_round_trip():
    client = _client()
    client.put("/parcels/P1", json={"ring": RING, "attributes": {"owner": "Jane"}})

    resp = client.post("/parcels/P1/highlight")
    assert resp.status_code == 200
    focus = resp.json()
    assert focus["parcelId"] == "P1"
    assert focus["attributes"] == {"owner": "Jane"}
    assert client.get("/parcels/P1").json()["style"]["color"] == "#FFFF00"

    resp = client.post("/parcels/P1/unhighlight")
    assert resp.json()["highlightState"] == "Normal"
    assert resp.json()["style"]["color"] == "#FF7800"

    assert client.post("/parcels/nope/highlight").json()["error"] == "ParcelNotFound"


def test_delete_is_idempotent():
    client = _client()
    client.put("/parcels/P1", json={"ring": RING})
    assert client.delete("/parcels/P1").status_code == 204
    assert client.delete("/parcels/P1").status_code == 204
    assert client.get("/parcels/P1/bbox").status_code == 404


def test_measure_endpoints():
    client = _client()
    d = client.post(
        "/measure/distance", json={"a": {"lat": 0, "lng": 0}, "b": {"lat": 0, "lng": 1}}
    ).json()
    assert abs(d["kilometers"] - 111.19) < 0.01
    assert d["miles"] == d["kilometers"] * 0.621371

    a = client.post("/measure/area", json={"ring": RING}).json()
    assert a["hectares"] == a["squareMeters"] / 10_000

    p = client.post("/measure/perimeter", json={"ring": RING}).json()
    assert p["kilometers"] == p["meters"] / 1000


def test_export_geojson():
    client = _client()
    client.put("/parcels/P1", json={"ring": RING, "attributes": {"owner": "Jane"}})
    fc = client.get("/export/geojson").json()
    assert fc["type"] == "FeatureCollection"
    assert fc["features"][0]["properties"] == {"owner": "Jane"}


def test_parcel_ids_named_like_queries_stay_addressable():
    client = _client()
    for parcel_id in ("search", "overlaps", "nearby"):
        resp = client.put(f"/parcels/{parcel_id}", json={"ring": RING, "attributes": {"n": parcel_id}})
        assert resp.status_code == 200

        body = client.get(f"/parcels/{parcel_id}").json()
        assert body["id"] == parcel_id
        assert body["attributes"] == {"n": parcel_id}


def test_search_endpoint_matches_ids_and_attributes():
    client = _client()
    client.put("/parcels/P1", json={"ring": RING, "attributes": {"owner": "Jane Banda"}})
    client.put("/parcels/P2", json={"ring": RING, "attributes": {"owner": "John Phiri"}})

    assert client.get("/queries/search", params={"q": "banda"}).json() == ["P1"]
    assert client.get("/queries/search", params={"q": "p"}).json() == ["P1", "P2"]
    assert client.get("/queries/search", params={"q": "nobody"}).json() == []


def test_non_string_attribute_values_are_rejected():
    client = _client()
    resp = client.put("/parcels/P1", json={"ring": RING, "attributes": {"area": 12.5}})
    assert resp.status_code == 422
    assert client.get("/parcels/P1").status_code == 404


def test_parcel_with_out_of_range_coordinates_still_serializes():
    app = create_app(MapSettings())
    app.state.session.register("far", [(95.0, 200.0), (95.0, 201.0), (96.0, 201.0)])
    client = TestClient(app)

    resp = client.get("/parcels/far")
    assert resp.status_code == 200
    assert resp.json()["ring"][0] == {"lat": 95.0, "lng": 200.0}

    resp = client.post("/parcels/far/highlight")
    assert resp.status_code == 200
    assert resp.json()["center"]["lng"] == 200.5
