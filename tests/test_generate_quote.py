# File: tests/test_generate_quote.py

import pytest

from conftest import QUOTE_REQUEST, chat_reply
from landpro.core.config import settings
from landpro.services.quote_service import format_completion_time, format_currency


def _post(client, headers, body=None):
    return client.post("/functions/v1/generate-quote", json=body or QUOTE_REQUEST, headers=headers)


def test_total_is_sum_of_rounded_components(client, auth_headers, llm):
    llm.reply(chat_reply(tool_args={
        "jobTitle": "Brush clearing",
        "laborCost": 500,
        "materialCost": 300,
        "completionTime": 2,
        "notes": "",
    }))
    resp = _post(client, auth_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["laborCost"] == 500
    assert data["materialCost"] == 300
    assert data["totalEstimate"] == 800
    assert all(isinstance(data[k], int) for k in ("laborCost", "materialCost", "totalEstimate"))
    assert "equipmentCost" not in data
    assert data["clientName"] == "Jane Smith"
    assert data["timestamp"]


def test_fractional_costs_round_half_up(client, auth_headers, llm):
    llm.reply(chat_reply(tool_args={
        "jobTitle": "Grading",
        "laborCost": 1199.5,
        "materialCost": 200.4,
        "equipmentCost": 350.5,
        "completionTime": 2.5,
        "notes": "Rocky soil",
    }))
    data = _post(client, auth_headers).json()
    assert data["laborCost"] == 1200
    assert data["materialCost"] == 200
    assert data["equipmentCost"] == 351
    assert data["totalEstimate"] == 1200 + 200 + 351
    assert data["completionTime"] == 3


def test_request_uses_forced_tool_call(client, auth_headers, llm):
    llm.reply(chat_reply(tool_args={
        "jobTitle": "Mowing", "laborCost": 100, "materialCost": 0, "completionTime": 1, "notes": "",
    }))
    _post(client, auth_headers)
    sent = llm.requests[0]
    assert sent["model"] == settings.quote_model
    assert sent["tools"][0]["function"]["name"] == "create_quote"
    assert sent["tool_choice"]["function"]["name"] == "create_quote"
    prompt = sent["messages"][1]["content"]
    assert "Jane Smith" in prompt
    assert "2.5 acres" in prompt


def test_plain_json_reply_with_code_fences(client, auth_headers, llm, monkeypatch):
    monkeypatch.setattr(settings, "quote_use_tool_calling", False)
    llm.reply(chat_reply(content=(
        "```json\n"
        '{"jobTitle": "Sod install", "laborCost": 1200, "materialCost": 200, '
        '"completionTime": 3, "notes": "Includes haul-off"}\n'
        "```"
    )))
    resp = _post(client, auth_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert "tools" not in llm.requests[0]
    assert format_currency(data["totalEstimate"]) == "$1,400"
    assert format_completion_time(data["completionTime"]) == "3 days"


def test_missing_api_key_fails_before_any_call(client, auth_headers, llm):
    llm.api_key = None
    resp = _post(client, auth_headers)
    assert resp.status_code == 500
    assert resp.json()["code"] == "configuration_error"
    assert llm.requests == []


def test_malformed_reply_is_parse_failure(client, auth_headers, llm, monkeypatch):
    monkeypatch.setattr(settings, "quote_use_tool_calling", False)
    llm.reply(chat_reply(content="Sure! Here is your quote: about $800."))
    resp = _post(client, auth_headers)
    assert resp.status_code == 500
    assert resp.json()["code"] == "parse_failure"
    assert "error" in resp.json()


def test_reply_missing_fields_is_parse_failure(client, auth_headers, llm):
    llm.reply(chat_reply(tool_args={"jobTitle": "Oops"}))
    resp = _post(client, auth_headers)
    assert resp.status_code == 500
    assert resp.json()["code"] == "parse_failure"


@pytest.mark.parametrize("value", ["Infinity", "NaN"])
def test_non_finite_cost_is_parse_failure(client, auth_headers, llm, monkeypatch, value):
    monkeypatch.setattr(settings, "quote_use_tool_calling", False)
    llm.reply(chat_reply(content=(
        '{"jobTitle": "Mulch", "laborCost": ' + value + ', "materialCost": 100, '
        '"completionTime": 2, "notes": ""}'
    )))
    resp = _post(client, auth_headers)
    assert resp.status_code == 500
    assert resp.json()["code"] == "parse_failure"


def test_non_finite_property_size_is_rejected(client, auth_headers, llm):
    resp = client.post(
        "/functions/v1/generate-quote",
        content='{"clientName": "Jane", "jobDescription": "Mow", "propertySize": Infinity, "propertyUnit": "acres"}',
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert llm.requests == []


@pytest.mark.parametrize("upstream, expected", [(429, 429), (402, 402), (503, 500)])
def test_upstream_status_passthrough(client, auth_headers, llm, upstream, expected):
    llm.reply({"error": {"message": "nope"}}, status_code=upstream)
    resp = _post(client, auth_headers)
    assert resp.status_code == expected
    assert resp.json()["error"]
    # single attempt, no retries
    assert len(llm.requests) == 1


def test_invalid_request_is_400(client, auth_headers, llm):
    resp = _post(client, auth_headers, {**QUOTE_REQUEST, "propertySize": 0})
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_request"
    assert llm.requests == []


def test_requires_authentication(client, llm):
    resp = client.post("/functions/v1/generate-quote", json=QUOTE_REQUEST)
    assert resp.status_code == 401


def test_display_helpers():
    assert format_currency(1400) == "$1,400"
    assert format_currency(999.5) == "$1,000"
    assert format_completion_time(1) == "1 day"
    assert format_completion_time(3) == "3 days"
