"""
Tests for the query API routes with the router and session store overridden.
"""

import pytest
from fastapi.testclient import TestClient

from app.ai_core.exceptions import (
    AnswerTransportError,
    CompletionTransportError,
    MalformedServiceResponse,
)
from app.api.routes.query import get_query_router, get_session_store
from app.main import app
from app.services.query_router import QueryRouter
from app.services.session_store import SessionStore


@pytest.fixture
def sessions():
    return SessionStore(max_messages=10)


@pytest.fixture
def client_for(
    sessions, scripted_completion, single_category_index, catalog, customer_store
):
    """Factory building a TestClient whose router replays the given replies."""

    def _make(*replies):
        completion = scripted_completion(*replies)
        router = QueryRouter(single_category_index, catalog, customer_store, completion)
        app.dependency_overrides[get_query_router] = lambda: router
        app.dependency_overrides[get_session_store] = lambda: sessions
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_query_returns_answer_and_records_history(client_for):
    client = client_for("loans", "Yes, you have a device loan.")

    response = client.post("/api/query", json={"query": "  Do I have an active loan?  "})

    assert response.status_code == 200
    assert response.json() == {"answer": "Yes, you have a device loan.", "error": None}

    history = client.get("/api/load").json()["history"]
    assert history == [
        {"role": "user", "content": "Do I have an active loan?"},
        {"role": "assistant", "content": "Yes, you have a device loan."},
    ]


def test_sessions_are_isolated(client_for):
    client = client_for("loans", "answer A")

    client.post("/api/query", json={"query": "q"}, headers={"X-Session-Id": "alice"})

    assert len(client.get("/api/load", headers={"X-Session-Id": "alice"}).json()["history"]) == 2
    assert client.get("/api/load", headers={"X-Session-Id": "bob"}).json()["history"] == []


@pytest.mark.parametrize("body", [{"query": ""}, {"query": "   "}, {}])
def test_blank_query_rejected(client_for, body):
    client = client_for()

    response = client.post("/api/query", json=body)

    assert response.status_code == 400
    data = response.json()
    assert data["answer"] is None
    assert "query" in data["error"]


def test_routing_error_returns_generic_message(client_for):
    client = client_for("loans", CompletionTransportError("secret upstream detail"))

    response = client.post("/api/query", json={"query": "q"})

    assert response.status_code == 502
    body = response.json()
    assert body["answer"] is None
    assert AnswerTransportError.__name__ in body["error"]
    assert "secret upstream detail" not in body["error"]
    assert client.get("/api/load").json()["history"] == []


def test_non_text_answer_returns_generic_error(client_for):
    client = client_for("loans", None)

    response = client.post("/api/query", json={"query": "q"})

    assert response.status_code == 502
    assert MalformedServiceResponse.__name__ in response.json()["error"]
    assert client.get("/api/load").json()["history"] == []


def test_api_home_and_health(client_for):
    client = client_for()

    assert "usage" in client.get("/api").json()
    assert client.get("/health").json()["status"] == "healthy"
