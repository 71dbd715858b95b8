# File: tests/test_health.py

"""
Smoke tests for the app shell.

These use FastAPI's TestClient. To run:
    pytest -q
"""


def test_health_endpoint(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_request_id_header(client):
    resp = client.get("/healthz", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"
    assert "X-Process-Time" in resp.headers


def test_public_config(client):
    resp = client.get("/api/v1/public-config")
    assert resp.status_code == 200
    assert "mapbox_token" in resp.json()


def test_lead_capture(client):
    resp = client.post(
        "/api/v1/leads",
        json={"name": "Sam", "company": "Sam's Lawn", "email": "sam@example.com", "message": "Interested"},
    )
    assert resp.status_code == 201
    assert resp.json()["email"] == "sam@example.com"


def test_unknown_invoice_is_404_with_error_body(client, auth_headers):
    resp = client.get("/api/v1/invoices/does-not-exist", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Invoice not found", "code": "not_found"}
