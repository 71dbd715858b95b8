# File: tests/test_measure.py

import pytest

from landpro.gis.measure import MODE_AREA, MODE_DISTANCE, MODE_NONE, MeasureTool


def test_toggle_same_mode_returns_to_none():
    tool = MeasureTool()
    assert tool.toggle(MODE_DISTANCE) == MODE_DISTANCE
    assert tool.toggle(MODE_DISTANCE) == MODE_NONE
    assert not tool.active


def test_switching_mode_clears_points():
    tool = MeasureTool()
    tool.toggle(MODE_DISTANCE)
    tool.add_point(0, 0)
    tool.add_point(0.01, 0)
    assert tool.result is not None

    tool.toggle(MODE_AREA)
    assert tool.mode == MODE_AREA
    assert tool.points == []
    assert tool.result is None
    assert tool.preview()["features"] == []


def test_clicks_ignored_when_inactive():
    tool = MeasureTool()
    assert tool.add_point(0, 0) is None
    assert tool.points == []


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        MeasureTool().toggle("volume")


def test_distance_in_feet():
    tool = MeasureTool()
    tool.toggle(MODE_DISTANCE)
    assert tool.add_point(0, 0) is None
    label = tool.add_point(0.001, 0)
    # ~111 m
    assert label == f"{int(tool.measurement.value)} ft"
    assert 360 < tool.measurement.value < 370


def test_distance_switches_to_miles():
    tool = MeasureTool()
    tool.toggle(MODE_DISTANCE)
    tool.add_point(0, 0)
    tool.add_point(0.1, 0)
    assert tool.measurement.unit == "miles"
    assert tool.result == f"{tool.measurement.value:.2f} miles"
    assert 6.8 < tool.measurement.value < 7.0


def test_area_in_acres_and_square_feet():
    tool = MeasureTool()
    tool.toggle(MODE_AREA)
    for lon, lat in [(0, 0), (0.001, 0), (0.001, 0.001)]:
        tool.add_point(lon, lat)
    tool.add_point(0, 0.001)
    assert tool.measurement.unit == "acres"
    assert tool.result.endswith(" acres")
    assert 3.0 < tool.measurement.value < 3.1

    small = MeasureTool()
    small.toggle(MODE_AREA)
    for lon, lat in [(0, 0), (0.0001, 0), (0.0001, 0.0001), (0, 0.0001)]:
        small.add_point(lon, lat)
    assert small.measurement.unit == "sq ft"
    assert small.result == f"{int(small.measurement.value)} sq ft"


def test_area_needs_three_points():
    tool = MeasureTool()
    tool.toggle(MODE_AREA)
    tool.add_point(0, 0)
    assert tool.add_point(0.001, 0) is None


def test_preview_layer():
    tool = MeasureTool()
    tool.toggle(MODE_AREA)
    for lon, lat in [(0, 0), (0.001, 0), (0.001, 0.001)]:
        tool.add_point(lon, lat)
    features = tool.preview()["features"]
    assert features[0]["geometry"]["type"] == "Polygon"
    ring = features[0]["geometry"]["coordinates"][0]
    assert ring[0] == ring[-1]
    assert sum(1 for f in features if f["geometry"]["type"] == "Point") == 3


def test_measure_endpoint(client, auth_headers):
    resp = client.post(
        "/api/v1/measure",
        json={"mode": "distance", "points": [[0, 0], [0.1, 0]]},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["unit"] == "miles"
    assert data["result"].endswith(" miles")

    resp = client.post("/api/v1/measure", json={"mode": "area", "points": [[0, 0]]}, headers=auth_headers)
    assert resp.json()["result"] is None
