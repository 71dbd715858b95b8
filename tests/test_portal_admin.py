# File: tests/test_portal_admin.py

import pytest

from conftest import register


@pytest.fixture
def portal(client, auth_headers):
    """A client record linked to a separate portal login, with one open quote."""
    customer = register(client, email="jane@example.com", business="Smith Household")
    record = client.post("/api/v1/clients/", json={"client_name": "Jane Smith"}, headers=auth_headers).json()
    linked = client.post(
        f"/api/v1/clients/{record['id']}/portal-access",
        json={"email": "jane@example.com"},
        headers=auth_headers,
    )
    assert linked.status_code == 200, linked.text
    quote = client.post(
        "/api/v1/quotes/",
        json={"client_name": "Jane Smith", "job_description": "Hedges", "client_id": record["id"], "labor_cost": 500},
        headers=auth_headers,
    ).json()
    return {"headers": customer, "client": record, "quote": quote}


def test_portal_shows_client_quotes(client, portal):
    resp = client.get("/api/v1/portal/", headers=portal["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["client"]["id"] == portal["client"]["id"]
    assert body["landscaper_name"] == "Green Acres"
    assert [q["id"] for q in body["quotes"]] == [portal["quote"]["id"]]
    assert body["invoices"] == []


def _decide(client, headers, quote, decision):
    return client.post(
        f"/api/v1/portal/quotes/{quote['id']}/{decision}",
        json={"version": quote["version"]},
        headers=headers,
    )


def test_client_approves_quote(client, auth_headers, portal):
    resp = _decide(client, portal["headers"], portal["quote"], "approve")
    assert resp.status_code == 200
    approved = resp.json()
    assert approved["status"] == "approved"

    jobs = client.get("/api/v1/jobs/", headers=auth_headers).json()
    assert [q["id"] for q in jobs["scheduled"]] == [portal["quote"]["id"]]

    again = _decide(client, portal["headers"], approved, "decline")
    assert again.status_code == 409
    assert again.json()["code"] == "invalid_transition"


def test_decision_on_stale_quote_conflicts(client, auth_headers, portal):
    quote = portal["quote"]
    edited = client.patch(
        f"/api/v1/quotes/{quote['id']}",
        json={"labor_cost": 650, "version": quote["version"]},
        headers=auth_headers,
    )
    assert edited.status_code == 200

    resp = _decide(client, portal["headers"], quote, "approve")
    assert resp.status_code == 409
    assert resp.json()["code"] == "conflict"

    current = client.get(f"/api/v1/quotes/{quote['id']}", headers=auth_headers).json()
    assert current["status"] == "pending"


def test_unknown_decision_is_rejected(client, portal):
    resp = _decide(client, portal["headers"], portal["quote"], "maybe")
    assert resp.status_code == 422


def test_portal_requires_link(client, auth_headers):
    resp = client.get("/api/v1/portal/", headers=auth_headers)
    assert resp.status_code == 403
    assert resp.json()["code"] == "forbidden"


def test_client_cannot_decide_foreign_quote(client, auth_headers, portal):
    other = client.post(
        "/api/v1/quotes/", json={"client_name": "Someone", "job_description": "Trim"}, headers=auth_headers
    ).json()
    resp = _decide(client, portal["headers"], other, "approve")
    assert resp.status_code == 404


def test_portal_access_needs_existing_account(client, auth_headers):
    record = client.post("/api/v1/clients/", json={"client_name": "Jane"}, headers=auth_headers).json()
    resp = client.post(
        f"/api/v1/clients/{record['id']}/portal-access",
        json={"email": "nobody@example.com"},
        headers=auth_headers,
    )
    assert resp.status_code == 400

    own = client.post(
        f"/api/v1/clients/{record['id']}/portal-access",
        json={"email": "owner@example.com"},
        headers=auth_headers,
    )
    assert own.status_code == 400


def test_admin_metrics(client, auth_headers, admin_headers):
    for name in ("A", "B", "C"):
        client.post("/api/v1/quotes/", json={"client_name": name, "job_description": "Mow"}, headers=auth_headers)

    resp = client.get("/api/v1/admin/metrics", headers=admin_headers)
    assert resp.status_code == 200
    metrics = resp.json()
    assert metrics["total_users"] == 2
    assert metrics["total_quotes"] == 3
    # 1.5 rounds half up
    assert metrics["average_quotes_per_user"] == 2
    assert metrics["users"][0]["email"] == "owner@example.com"
    assert metrics["users"][0]["quote_count"] == 3
    assert len(metrics["recent_quotes"]) == 3
    assert {q["business_name"] for q in metrics["recent_quotes"]} == {"Green Acres"}


def test_admin_metrics_forbidden_for_landscapers(client, auth_headers):
    resp = client.get("/api/v1/admin/metrics", headers=auth_headers)
    assert resp.status_code == 403


def test_session_reports_role(client, admin_headers):
    body = client.get("/api/v1/auth/session", headers=admin_headers).json()
    assert body["profile"]["role"] == "admin"
