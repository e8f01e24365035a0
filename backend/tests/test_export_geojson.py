from __future__ import annotations

import json

from exports.geojson import export_all
from session.map_session import MapSession
from settings.types import MapSettings


def test_export_concatenates_parcels_then_groups_in_order():
    session = MapSession()
    session.register("P1", [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)], {"owner": "Jane"})
    session.groups.add_dispute_marker((-15.4, 28.3), "Fence moved", dispute_id="D-7")
    session.groups.add_audit_checkpoint((-15.5, 28.2), "Pending", checkpoint_id="A-1")

    fc = session.export_all()
    assert fc["type"] == "FeatureCollection"
    assert [f["id"] for f in fc["features"]] == ["P1", "D-7", "A-1"]
    # Serializable as-is at the boundary.
    assert json.loads(json.dumps(fc)) == fc


def test_parcel_feature_is_closed_lng_lat_polygon_with_untouched_attributes():
    session = MapSession()
    attrs = {"owner": "Jane", "titleDeed": "LUS/123"}
    session.register("P1", [(-15.0, 28.0), (-15.0, 28.1), (-15.1, 28.1)], attrs)

    (feature,) = session.export_all()["features"]
    assert feature["type"] == "Feature"
    assert feature["properties"] == attrs
    assert feature["geometry"] == {
        "type": "Polygon",
        "coordinates": [[[28.0, -15.0], [28.1, -15.0], [28.1, -15.1], [28.0, -15.0]]],
    }


def test_hidden_groups_are_still_exported():
    session = MapSession()
    session.groups.add_dispute_marker((1.0, 2.0), "x")
    assert session.groups.hide("disputes") is True
    assert len(session.export_all()["features"]) == 1


def test_group_order_follows_settings_then_later_groups():
    session = MapSession(MapSettings(layerGroups=["audit", "disputes"]))
    session.groups.create("survey")
    session.groups.add_feature(
        "survey",
        session.groups.add_boundary_polygon([(0, 0), (0, 1), (1, 1)], feature_id="B1"),
    )
    session.groups.add_dispute_marker((1.0, 2.0), "x", dispute_id="D1")
    session.groups.add_audit_checkpoint((1.0, 2.0), "Completed", checkpoint_id="A1")

    assert session.groups.names() == ["audit", "disputes", "survey", "boundaries"]
    ids = [f["id"] for f in session.export_all()["features"]]
    assert ids == ["A1", "D1", "B1", "B1"]


def test_export_of_nothing_is_an_empty_collection():
    assert export_all([]) == {"type": "FeatureCollection", "features": []}
    assert MapSession().export_all() == {"type": "FeatureCollection", "features": []}
