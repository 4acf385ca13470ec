"""Tests for session ids, per-chat state and the chat registry."""

import re

from app.config import Settings
from app.core.app_state import AppState
from app.core.conversation_session import ConversationSession
from app.core.session_key import mint_session_id
from app.core.session_registry import ChatSessionRegistry
from app.schemas.chat import ChatMessage, SentimentResult


def test_mint_session_id_format():
    session_id = mint_session_id(now_ms=1700000000123)
    assert re.fullmatch(r"session_1700000000123_[0-9a-f]{16}", session_id)
    assert mint_session_id() != mint_session_id()


def test_record_sentiment_evicts_oldest():
    session = ConversationSession()
    for sentiment in ["happy", "neutral", "unhappy"]:
        session.record_sentiment(SentimentResult(sentiment=sentiment), limit=2)
    assert [r.sentiment for r in session.sentiment_history] == ["neutral", "unhappy"]
    assert session.latest_sentiment == "negative"


def test_latest_sentiment_defaults_to_neutral():
    assert ConversationSession().latest_sentiment == "neutral"


def test_reset_clears_everything_but_guard():
    session = ConversationSession(
        session_id="s",
        conversation_id="c",
        is_escalated=True,
        collected_fields={"email": "a@b.co"},
        active_collection_field="phone",
    )
    welcome = ChatMessage.from_bot("Hi")
    session.reset([welcome])
    assert session.messages == [welcome]
    assert session.session_id is None
    assert session.conversation_id is None
    assert session.is_escalated is False
    assert session.collected_fields == {}
    assert session.active_collection_field is None


def test_registry_register_get_remove():
    registry = ChatSessionRegistry()
    chat = object()
    handle = registry.register(chat)
    assert registry.get(handle) is chat
    assert len(registry) == 1
    assert registry.remove(handle) is chat
    assert registry.get(handle) is None
    assert registry.remove(handle) is None


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_registry_evicts_idle_chat_after_ttl():
    clock = FakeClock()
    registry = ChatSessionRegistry(ttl_seconds=60, clock=clock)
    idle = registry.register(object())
    clock.now += 30
    active = registry.register(object())

    clock.now += 40
    assert registry.get(active) is not None
    assert registry.get(idle) is None
    assert len(registry) == 1

    clock.now += 59
    assert registry.evict_expired() == 0
    clock.now += 1
    assert registry.evict_expired() == 1
    assert registry.get(active) is None


def test_registry_get_refreshes_last_use():
    clock = FakeClock()
    registry = ChatSessionRegistry(ttl_seconds=60, clock=clock)
    handle = registry.register(object())
    for _ in range(5):
        clock.now += 50
        assert registry.get(handle) is not None


def test_registry_limit_drops_least_recently_used():
    clock = FakeClock()
    registry = ChatSessionRegistry(max_chats=2, clock=clock)
    first = registry.register(object())
    second = registry.register(object())
    registry.get(first)
    third = registry.register(object())

    assert len(registry) == 2
    assert registry.get(second) is None
    assert registry.get(first) is not None
    assert registry.get(third) is not None


def test_registry_without_limits_keeps_everything():
    clock = FakeClock()
    registry = ChatSessionRegistry(clock=clock)
    handles = [registry.register(object()) for _ in range(50)]
    clock.now += 10**6
    assert registry.evict_expired() == 0
    assert all(registry.get(h) is not None for h in handles)


def test_app_state_reads_limits_from_settings():
    app_state = AppState(Settings(chat_idle_ttl_seconds=120, max_live_chats=7))
    assert app_state.chats.ttl_seconds == 120
    assert app_state.chats.max_chats == 7
