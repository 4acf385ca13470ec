"""
Collaborator interfaces for the turn pipeline.

Concrete implementations wrap a vendor or the database; the pipeline only sees
these contracts, so tests can substitute fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from app.exceptions import ClassifierError
from app.schemas.chat import GeneratedResponse, HistoryMessage, KnowledgeChunk


@dataclass(frozen=True)
class ClassifierOutcome:
    """Result of a classification call: parsed JSON object or the reason it failed."""

    data: Optional[dict[str, Any]] = None
    error: Optional[ClassifierError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.data is not None

    @classmethod
    def success(cls, data: dict[str, Any]) -> "ClassifierOutcome":
        return cls(data=data)

    @classmethod
    def failure(cls, reason: str) -> "ClassifierOutcome":
        return cls(error=ClassifierError(reason))


class TextClassifier(ABC):
    """Prompted classifier returning a structured JSON object."""

    @abstractmethod
    async def classify(self, prompt: str, text: str) -> ClassifierOutcome:
        """
        Classify `text` under the instructions in `prompt`.
        Never raises: unavailable, failing or malformed responses become a failed outcome.
        """
        ...


class TextGenerator(ABC):
    """Chat completion over a role/content message list."""

    @abstractmethod
    async def complete(
        self,
        messages: Sequence[HistoryMessage],
        options: Optional[dict[str, Any]] = None,
    ) -> GeneratedResponse:
        """Return the assistant reply. Raise on failure."""
        ...


class VectorSearch(ABC):
    """Similarity search over a chatbot's knowledge base."""

    @abstractmethod
    async def similarity_search(
        self, query: str, k: int, scope_id: str
    ) -> list[KnowledgeChunk]:
        """Return up to `k` chunks, most similar first. Raise on failure."""
        ...


class ChatPersistence(ABC):
    """Storage used by the pipeline for messages, conversation ids and leads."""

    @abstractmethod
    async def insert_message(
        self, chatbot_id: str, session_id: str, content: str, role: str
    ) -> None:
        """Store one message, creating the session's conversation on first use. Raise on failure."""
        ...

    @abstractmethod
    async def find_conversation_id(
        self, chatbot_id: str, session_id: str
    ) -> Optional[str]:
        """Return the conversation id for the session, or None if there is none yet."""
        ...

    @abstractmethod
    async def insert_lead(
        self,
        chatbot_id: str,
        fields: dict[str, str],
        sentiment: str,
        transcript: list[str],
        conversation_id: Optional[str],
    ) -> None:
        """Store a captured lead. Raise on failure."""
        ...
