"""In-process registry of live chats, keyed by an opaque handle."""

from __future__ import annotations

import secrets
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from app.infra.logging_config import get_logger

if TYPE_CHECKING:
    from app.services.conversation_orchestrator import ConversationOrchestrator

logger = get_logger("session_registry")


@dataclass
class _LiveChat:
    orchestrator: "ConversationOrchestrator"
    last_used: float


class ChatSessionRegistry:
    """
    Chats unused for `ttl_seconds` are dropped, and at most `max_chats` are
    kept, evicting the least recently used first. Zero or None disables
    either limit. Entries are ordered by last use, oldest first.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_chats: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_chats = max_chats
        self._clock = clock
        self._chats: "OrderedDict[str, _LiveChat]" = OrderedDict()

    def register(self, orchestrator: "ConversationOrchestrator") -> str:
        self.evict_expired()
        handle = secrets.token_urlsafe(16)
        while handle in self._chats:
            handle = secrets.token_urlsafe(16)
        self._chats[handle] = _LiveChat(orchestrator, self._clock())
        while self.max_chats and len(self._chats) > self.max_chats:
            evicted, _ = self._chats.popitem(last=False)
            logger.info("Evicted chat %s: live chat limit reached", evicted)
        return handle

    def get(self, handle: str) -> "ConversationOrchestrator | None":
        """Return the chat and mark it used, or None if unknown or expired."""
        self.evict_expired()
        entry = self._chats.get(handle)
        if entry is None:
            return None
        entry.last_used = self._clock()
        self._chats.move_to_end(handle)
        return entry.orchestrator

    def remove(self, handle: str) -> "ConversationOrchestrator | None":
        entry = self._chats.pop(handle, None)
        return entry.orchestrator if entry else None

    def evict_expired(self) -> int:
        """Drop chats idle longer than the TTL. Returns how many were dropped."""
        if not self.ttl_seconds:
            return 0
        cutoff = self._clock() - self.ttl_seconds
        evicted = 0
        while self._chats:
            handle, entry = next(iter(self._chats.items()))
            if entry.last_used > cutoff:
                break
            del self._chats[handle]
            evicted += 1
            logger.info("Evicted idle chat %s", handle)
        return evicted

    def __len__(self) -> int:
        return len(self._chats)

    def clear(self) -> None:
        self._chats.clear()
