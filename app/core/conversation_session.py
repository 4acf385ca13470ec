"""Mutable per-chat state owned by one orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from app.schemas.chat import ChatMessage, SentimentResult, StoredSentiment


@dataclass
class ConversationSession:
    messages: list[ChatMessage] = field(default_factory=list)
    session_id: Optional[str] = None
    conversation_id: Optional[str] = None
    sentiment_history: list[SentimentResult] = field(default_factory=list)
    is_escalated: bool = False
    collected_fields: dict[str, str] = field(default_factory=dict)
    active_collection_field: Optional[str] = None
    is_generating: bool = False

    def reset(self, messages: Optional[list[ChatMessage]] = None) -> None:
        self.messages = list(messages or [])
        self.session_id = None
        self.conversation_id = None
        self.sentiment_history = []
        self.is_escalated = False
        self.collected_fields = {}
        self.active_collection_field = None

    def record_sentiment(self, result: SentimentResult, limit: int) -> None:
        """Append, dropping the oldest entries beyond `limit`."""
        self.sentiment_history.append(result)
        if len(self.sentiment_history) > limit:
            del self.sentiment_history[: len(self.sentiment_history) - limit]

    @property
    def latest_sentiment(self) -> StoredSentiment:
        if not self.sentiment_history:
            return "neutral"
        return self.sentiment_history[-1].stored_value

    def transcript(self) -> list[str]:
        return [m.text for m in self.messages]
