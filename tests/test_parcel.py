# File: tests/test_parcel.py

import pytest

from conftest import MALFORMED_BOUNDARIES, square
from landpro.models.analysis import AnalysisJob
from landpro.services.parcel_service import classify_property


@pytest.mark.parametrize(
    "acreage, ndvi, expected",
    [
        (0.5, 0.8, "residential"),
        (None, None, "residential"),
        (5, 0.6, "wooded"),
        (5, 0.3, "mixed"),
        (40, 0.1, "pasture"),
        (40, 0.5, "mixed"),
        (15, 0.1, "mixed"),
    ],
)
def test_classify_property(acreage, ndvi, expected):
    assert classify_property(acreage, ndvi) == expected


def test_preprocess_parcel_queues_job(client, auth_headers, db_session):
    # ~0.01 deg square near Oklahoma City: roughly 250 acres
    resp = client.post(
        "/functions/v1/preprocess-parcel",
        json={"parcel_geometry": square(0.01, lon0=-97.5, lat0=35.2), "property_goal": "farm", "ndvi": 0.1},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["property_type"] == "pasture"
    assert 200 < body["acreage"] < 300

    db_session.expire_all()
    job = db_session.get(AnalysisJob, body["job_id"])
    assert job.status == "pending"
    assert job.payload["property_goal"] == "farm"
    assert job.payload["lat"] == pytest.approx(35.204)


def test_preprocess_parcel_rejects_bad_geometry(client, auth_headers):
    resp = client.post(
        "/functions/v1/preprocess-parcel",
        json={"parcel_geometry": {"type": "Point", "coordinates": [0, 0]}},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_preprocess_parcel_requires_auth(client):
    resp = client.post("/functions/v1/preprocess-parcel", json={"parcel_geometry": square(0.001)})
    assert resp.status_code == 401


@pytest.mark.parametrize("geometry", MALFORMED_BOUNDARIES)
def test_preprocess_parcel_rejects_malformed_rings(client, auth_headers, db_session, geometry):
    resp = client.post(
        "/functions/v1/preprocess-parcel",
        json={"parcel_geometry": geometry},
        headers=auth_headers,
    )
    assert resp.status_code == 400, resp.text
    assert resp.json()["code"] == "invalid_request"
    assert db_session.query(AnalysisJob).count() == 0
