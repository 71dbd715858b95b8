"""
Shared fixtures for the LandPro API test suite.

Every test gets a fresh in-memory SQLite database wired in through the
``get_db`` override. The LLM is never contacted: ``FakeLLM`` answers through
an ``httpx.MockTransport`` and records each outbound request.
"""

import asyncio
import hashlib
import hmac
import json
import os
import time

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FORMAT", "text")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from landpro.api.deps import get_db, get_llm_client
from landpro.core.config import settings
from landpro.db.init_db import init_db
from landpro.main import app
from landpro.models.base import Base
from landpro.models.user import ROLE_ADMIN, Profile
from landpro.services.llm_client import ChatCompletionClient

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

WEBHOOK_SECRET = "whsec_test_secret"


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------

def square(side_deg: float, lon0: float = 0.0, lat0: float = 0.0, closed: bool = True) -> dict:
    ring = [
        [lon0, lat0],
        [lon0 + side_deg, lat0],
        [lon0 + side_deg, lat0 + side_deg],
        [lon0, lat0 + side_deg],
    ]
    if closed:
        ring.append([lon0, lat0])
    return {"type": "Polygon", "coordinates": [ring]}


# Sides of ~63.6 m at the equator: 4046.86 m², i.e. one acre
ONE_ACRE = {
    "type": "Polygon",
    "coordinates": [[
        [0.0, 0.0],
        [0.00057146, 0.0],
        [0.00057146, 0.00057531],
        [0.0, 0.00057531],
        [0.0, 0.0],
    ]],
}


QUOTE_REQUEST = {
    "clientName": "Jane Smith",
    "jobDescription": "Clear brush and mulch the back lot",
    "propertySize": 2.5,
    "propertyUnit": "acres",
}


# Polygon-shaped input that must be rejected as a bad request
MALFORMED_BOUNDARIES = [
    {"type": "Polygon", "coordinates": [[]]},
    {"type": "Polygon", "coordinates": [[[None, 0], [1, 0], [1, 1], [None, 0]]]},
    {"type": "Polygon", "coordinates": ["not a ring"]},
    {"type": "Polygon", "coordinates": [[[0, 0], [0.001, 0], [0, 0]]]},
    {"type": "Feature", "geometry": "Polygon"},
    {"type": "FeatureCollection", "features": {"type": "Feature"}},
]


# Well-formed land analysis reply
ANALYSIS = {
    "vegetation": {"type": "mixed grass", "density": "medium", "recommendations": ["Mow quarterly"]},
    "terrain": {"type": "rolling hills", "slope_estimate": "3-8%", "drainage": "good", "recommendations": []},
    "equipment": {"recommended": ["skid steer"], "considerations": ["soft ground after rain"]},
    "labor": {"estimated_crew_size": 3, "estimated_hours": 16, "difficulty": "moderate"},
    "hazards": ["fire ants"],
    "cost_factors": {"base_rate_per_acre": 450, "estimated_total": 1400, "factors_affecting_cost": ["access"]},
    "summary": "Gently rolling pasture with moderate brush.",
}


# ---------------------------------------------------------------------------
# Fake LLM
# ---------------------------------------------------------------------------

def chat_reply(content=None, tool_args=None, tool_name="create_quote") -> dict:
    message = {"role": "assistant", "content": content}
    if tool_args is not None:
        message["tool_calls"] = [
            {
                "id": "call_1",
                "type": "function",
                "function": {"name": tool_name, "arguments": json.dumps(tool_args)},
            }
        ]
    return {"choices": [{"index": 0, "message": message, "finish_reason": "stop"}]}


class FakeLLM:
    def __init__(self):
        self.requests = []
        self.replies = []
        self.api_key = "test-llm-key"

    def reply(self, body=None, status_code=200):
        self.replies.append((status_code, body))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        status_code, body = self.replies.pop(0)
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body)

    def client(self) -> ChatCompletionClient:
        return ChatCompletionClient(
            api_key=self.api_key,
            api_url="https://llm.test/v1/chat/completions",
            timeout=5,
            transport=httpx.MockTransport(self._handle),
        )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def db_session():
    init_db(engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def llm():
    fake = FakeLLM()
    app.dependency_overrides[get_llm_client] = fake.client
    return fake


@pytest.fixture
def stripe_settings(monkeypatch):
    monkeypatch.setattr(settings, "stripe_secret_key", "sk_test_123")
    monkeypatch.setattr(settings, "stripe_webhook_secret", WEBHOOK_SECRET)
    return settings


def register(client, email="owner@example.com", password="secret123", business="Green Acres") -> dict:
    resp = client.post(
        "/api/v1/auth/register",
        json={
            "email": email,
            "password": password,
            "full_name": "Pat Owner",
            "business_name": business,
        },
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return register(client)


@pytest.fixture
def admin_headers(client, db_session):
    headers = register(client, email="admin@example.com", business="LandPro HQ")
    profile = db_session.query(Profile).filter(Profile.email == "admin@example.com").one()
    profile.role = ROLE_ADMIN
    db_session.commit()
    return headers


def on_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def sign_webhook(payload: str, secret: str = WEBHOOK_SECRET, timestamp=None) -> str:
    ts = int(timestamp if timestamp is not None else time.time())
    signed = f"{ts}.{payload}".encode("utf-8")
    sig = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={sig}"
