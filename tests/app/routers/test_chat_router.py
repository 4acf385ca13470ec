"""Tests for the chat API."""

from unittest.mock import patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.constants.chat_copy import ChatCopy
from app.core.app_state import state
from app.core.session_registry import ChatSessionRegistry
from app.db import get_db
from app.main import create_app
from tests.fixtures.chatbot_fixtures import FakePersistence, make_orchestrator


@pytest.fixture
def persistence():
    return FakePersistence()


@pytest.fixture
def client(db, persistence):
    """Client with db override; chats are wired with test collaborators."""
    app = create_app(testing=True)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    def fake_build_orchestrator(config, settings):
        return make_orchestrator(config=config, persistence=persistence)

    app.dependency_overrides[get_db] = override_get_db
    with patch(
        "app.routers.chat_router.build_orchestrator", side_effect=fake_build_orchestrator
    ):
        with TestClient(app) as c:
            yield c
    app.dependency_overrides.clear()


def _open(client, chatbot):
    r = client.post(f"/chatbots/{chatbot.id}/chats")
    assert r.status_code == 201
    return r.json()


def test_open_chat_returns_handle_and_welcome(client, setup_chatbot):
    data = _open(client, setup_chatbot)
    assert data["chatbot_id"] == str(setup_chatbot.id)
    assert data["chat_id"]
    assert [m["text"] for m in data["messages"]] == ["Welcome to support!"]
    assert state.chats.get(data["chat_id"]) is not None


def test_open_chat_default_welcome(client, setup_plain_chatbot):
    data = _open(client, setup_plain_chatbot)
    assert [m["text"] for m in data["messages"]] == [ChatCopy.WELCOME]


def test_open_chat_unknown_chatbot(client):
    r = client.post(f"/chatbots/{uuid4()}/chats")
    assert r.status_code == 404


def test_send_message_runs_turn(client, setup_chatbot, persistence):
    chat_id = _open(client, setup_chatbot)["chat_id"]

    r = client.post(f"/chats/{chat_id}/messages", json={"text": "What are your opening hours?"})

    assert r.status_code == 200
    data = r.json()
    assert [m["sender"] for m in data["messages"]] == ["user", "bot"]
    assert data["messages"][1]["text"] == "Here is what I found."
    assert data["is_escalated"] is False
    assert data["active_collection_field"] is None
    assert [m[3] for m in persistence.messages] == ["user", "assistant"]


def test_send_message_starts_collection(client, setup_chatbot):
    chat_id = _open(client, setup_chatbot)["chat_id"]

    r = client.post(f"/chats/{chat_id}/messages", json={"text": "My order is broken"})

    assert r.status_code == 200
    assert r.json()["active_collection_field"] == "email"


def test_send_message_validation(client, setup_chatbot):
    chat_id = _open(client, setup_chatbot)["chat_id"]
    r = client.post(f"/chats/{chat_id}/messages", json={"text": ""})
    assert r.status_code == 422
    r = client.post(f"/chats/{chat_id}/messages", json={})
    assert r.status_code == 422


def test_send_message_unknown_chat(client):
    r = client.post("/chats/nope/messages", json={"text": "hi"})
    assert r.status_code == 404


def test_send_message_while_generating_conflicts(client, setup_chatbot):
    chat_id = _open(client, setup_chatbot)["chat_id"]
    state.chats.get(chat_id).session.is_generating = True

    r = client.post(f"/chats/{chat_id}/messages", json={"text": "hello"})

    assert r.status_code == 409


def test_get_chat_state(client, setup_chatbot):
    chat_id = _open(client, setup_chatbot)["chat_id"]
    client.post(f"/chats/{chat_id}/messages", json={"text": "What are your opening hours?"})

    r = client.get(f"/chats/{chat_id}")

    assert r.status_code == 200
    data = r.json()
    assert data["chat_id"] == chat_id
    assert data["session_id"].startswith("session_")
    assert data["conversation_id"] == "conv-1"
    assert len(data["messages"]) == 3


def test_delete_chat(client, setup_chatbot):
    chat_id = _open(client, setup_chatbot)["chat_id"]

    r = client.delete(f"/chats/{chat_id}")

    assert r.status_code == 204
    assert client.get(f"/chats/{chat_id}").status_code == 404
    assert client.delete(f"/chats/{chat_id}").status_code == 404


def test_idle_chat_expires_and_answers_404(client, setup_chatbot, monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(
        state, "chats", ChatSessionRegistry(ttl_seconds=60, clock=lambda: now[0])
    )
    chat_id = _open(client, setup_chatbot)["chat_id"]
    assert client.get(f"/chats/{chat_id}").status_code == 200

    now[0] += 61

    assert client.get(f"/chats/{chat_id}").status_code == 404
    r = client.post(f"/chats/{chat_id}/messages", json={"text": "hello"})
    assert r.status_code == 404
    assert len(state.chats) == 0


def test_abandoned_chats_are_capped(client, setup_chatbot, monkeypatch):
    monkeypatch.setattr(state, "chats", ChatSessionRegistry(max_chats=50))

    handles = [_open(client, setup_chatbot)["chat_id"] for _ in range(200)]

    assert len(state.chats) == 50
    assert client.get(f"/chats/{handles[0]}").status_code == 404
    assert client.get(f"/chats/{handles[-1]}").status_code == 200
