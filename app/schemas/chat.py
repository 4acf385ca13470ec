"""Pydantic schemas for chat messages and the values passed between pipeline stages."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field

from app.config import Settings
from app.constants.chat_copy import ChatCopy

MessageSender = Literal["user", "bot"]
MessageRole = Literal["user", "assistant"]
Sentiment = Literal["happy", "neutral", "unhappy"]
StoredSentiment = Literal["positive", "neutral", "negative"]

_STORED_SENTIMENT: dict[str, StoredSentiment] = {
    "happy": "positive",
    "neutral": "neutral",
    "unhappy": "negative",
}


# -----------------------------------------------------------------------------
# Transcript
# -----------------------------------------------------------------------------


class ChatMessage(BaseModel):
    """One entry in the visible transcript."""

    id: str
    text: str
    sender: MessageSender
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    sources: Optional[list[str]] = None
    conversation_id: Optional[str] = None

    @classmethod
    def from_user(cls, text: str) -> "ChatMessage":
        return cls(id=f"user-{uuid.uuid4().hex}", text=text, sender="user")

    @classmethod
    def from_bot(
        cls,
        text: str,
        kind: str = "bot",
        sources: Optional[list[str]] = None,
    ) -> "ChatMessage":
        return cls(
            id=f"{kind}-{uuid.uuid4().hex}",
            text=text,
            sender="bot",
            sources=sources or None,
        )

    @property
    def role(self) -> MessageRole:
        return "user" if self.sender == "user" else "assistant"


class HistoryMessage(BaseModel):
    """Role/content pair handed to the text generator."""

    role: Literal["system", "user", "assistant"]
    content: str


# -----------------------------------------------------------------------------
# Stage results
# -----------------------------------------------------------------------------


class ClassificationResult(BaseModel):
    needs_knowledge_base: bool
    is_relevant: bool
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str = ""

    @classmethod
    def fail_open(cls, reasoning: str) -> "ClassificationResult":
        """Default used when the classifier cannot be trusted: search and answer."""
        return cls(
            needs_knowledge_base=True,
            is_relevant=True,
            confidence=0.5,
            reasoning=reasoning,
        )


class SentimentResult(BaseModel):
    sentiment: Sentiment = "neutral"
    should_escalate: bool = False

    @property
    def stored_value(self) -> StoredSentiment:
        return _STORED_SENTIMENT[self.sentiment]


class KnowledgeChunk(BaseModel):
    chunk_text: str
    similarity: Optional[float] = None
    document_id: Optional[str] = None


class RetrievedContext(BaseModel):
    context: str = ""
    sources: list[str] = Field(default_factory=list)


class GeneratedResponse(BaseModel):
    message: str
    sources: Optional[list[str]] = None


# -----------------------------------------------------------------------------
# Turn policy
# -----------------------------------------------------------------------------


class TurnPolicy(BaseModel):
    """Thresholds, window sizes and fixed copy used by the orchestrator."""

    irrelevance_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    retrieval_top_k: int = Field(default=5, ge=1)
    history_window: int = Field(default=5, ge=0)
    sentiment_window: int = Field(default=4, ge=0)
    sentiment_history_limit: int = Field(default=5, ge=1)

    empathy_message: str = ChatCopy.EMPATHY
    irrelevant_message: str = ChatCopy.IRRELEVANT
    apology_message: str = ChatCopy.APOLOGY
    collection_start_message: str = ChatCopy.COLLECTION_START
    collection_next_message: str = ChatCopy.COLLECTION_NEXT
    collection_done_message: str = ChatCopy.COLLECTION_DONE

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Settings) -> "TurnPolicy":
        return cls(
            irrelevance_threshold=settings.irrelevance_threshold,
            retrieval_top_k=settings.retrieval_top_k,
            history_window=settings.history_window,
            sentiment_window=settings.sentiment_window,
            sentiment_history_limit=settings.sentiment_history_limit,
        )


# -----------------------------------------------------------------------------
# API
# -----------------------------------------------------------------------------


class ChatOpenResponse(BaseModel):
    """Response for opening a chat: handle plus the seeded transcript."""

    chat_id: str
    chatbot_id: str
    messages: list[ChatMessage]


class ChatTurnRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=4000)


class ChatState(BaseModel):
    """Snapshot of a chat for API responses."""

    chat_id: str
    session_id: Optional[str] = None
    conversation_id: Optional[str] = None
    is_escalated: bool = False
    active_collection_field: Optional[str] = None
    collected_fields: dict[str, str] = Field(default_factory=dict)
    messages: list[ChatMessage] = Field(default_factory=list)


class ChatTurnResponse(BaseModel):
    """Messages appended by one turn plus the resulting session flags."""

    messages: list[ChatMessage]
    is_escalated: bool
    active_collection_field: Optional[str] = None
