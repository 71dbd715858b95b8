# File: tests/test_analyze_land.py

import json

import pytest

from conftest import ANALYSIS, MALFORMED_BOUNDARIES, chat_reply, square


def _request(**extra):
    return {"boundary": square(0.001, lon0=-97.5, lat0=35.2), "acreage": 3.04, **extra}


def test_returns_versioned_analysis(client, auth_headers, llm):
    llm.reply(chat_reply(content=json.dumps(ANALYSIS)))
    resp = client.post("/functions/v1/analyze-land", json=_request(), headers=auth_headers)
    assert resp.status_code == 200, resp.text
    analysis = resp.json()["analysis"]
    assert analysis["version"] == 1
    assert analysis["terrain"]["slope_estimate"] == "3-8%"
    assert analysis["hazards"] == ["fire ants"]
    assert "next_steps" not in analysis


def test_prompt_contents(client, auth_headers, llm):
    llm.reply(chat_reply(content=json.dumps(ANALYSIS)))
    client.post(
        "/functions/v1/analyze-land",
        json=_request(location="Norman, OK"),
        headers=auth_headers,
    )
    prompt = llm.requests[0]["messages"][1]["content"]
    assert "3.04 acres (12302 square meters)" in prompt
    assert "Polygon vertices: 4 points" in prompt
    assert "°N" in prompt and "°W" in prompt
    assert "Norman, OK" in prompt
    assert "next_steps" not in prompt


def test_intent_selects_template(client, auth_headers, llm):
    llm.reply(chat_reply(content=json.dumps({**ANALYSIS, "next_steps": ["Get a soil test"]})))
    resp = client.post("/functions/v1/analyze-land", json=_request(intent="farm"), headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["analysis"]["next_steps"] == ["Get a soil test"]
    prompt = llm.requests[0]["messages"][1]["content"]
    assert "FARM" in prompt
    assert "next_steps" in prompt


def test_fenced_reply_is_accepted(client, auth_headers, llm):
    llm.reply(chat_reply(content="```json\n" + json.dumps(ANALYSIS) + "\n```"))
    resp = client.post("/functions/v1/analyze-land", json=_request(), headers=auth_headers)
    assert resp.status_code == 200


def test_shape_mismatch_is_rejected(client, auth_headers, llm):
    broken = {k: v for k, v in ANALYSIS.items() if k != "terrain"}
    llm.reply(chat_reply(content=json.dumps(broken)))
    resp = client.post("/functions/v1/analyze-land", json=_request(), headers=auth_headers)
    assert resp.status_code == 500
    assert resp.json()["code"] == "parse_failure"


def test_non_finite_cost_is_parse_failure(client, auth_headers, llm):
    reply = {**ANALYSIS, "cost_factors": {**ANALYSIS["cost_factors"], "estimated_total": float("inf")}}
    llm.reply(chat_reply(content=json.dumps(reply)))
    resp = client.post("/functions/v1/analyze-land", json=_request(), headers=auth_headers)
    assert resp.status_code == 500
    assert resp.json()["code"] == "parse_failure"


def test_missing_boundary_is_400(client, auth_headers, llm):
    resp = client.post("/functions/v1/analyze-land", json={"acreage": 3}, headers=auth_headers)
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert llm.requests == []


@pytest.mark.parametrize("boundary", MALFORMED_BOUNDARIES)
def test_malformed_boundary_is_400(client, auth_headers, llm, boundary):
    resp = client.post(
        "/functions/v1/analyze-land",
        json={"boundary": boundary, "acreage": 1},
        headers=auth_headers,
    )
    assert resp.status_code == 400, resp.text
    assert resp.json()["code"] == "invalid_request"
    assert llm.requests == []


def test_missing_key_is_500_without_call(client, auth_headers, llm):
    llm.api_key = None
    resp = client.post("/functions/v1/analyze-land", json=_request(), headers=auth_headers)
    assert resp.status_code == 500
    assert llm.requests == []


def test_no_caching(client, auth_headers, llm):
    llm.reply(chat_reply(content=json.dumps(ANALYSIS)))
    llm.reply(chat_reply(content=json.dumps(ANALYSIS)))
    client.post("/functions/v1/analyze-land", json=_request(), headers=auth_headers)
    client.post("/functions/v1/analyze-land", json=_request(), headers=auth_headers)
    assert len(llm.requests) == 2


def test_rate_limit_passthrough(client, auth_headers, llm):
    llm.reply("slow down", status_code=429)
    resp = client.post("/functions/v1/analyze-land", json=_request(), headers=auth_headers)
    assert resp.status_code == 429
    assert resp.json()["code"] == "rate_limited"
