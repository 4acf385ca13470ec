from typing import Optional

from app.config import Settings, get_settings
from app.core.session_registry import ChatSessionRegistry


class AppState:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        self.chats = ChatSessionRegistry(
            ttl_seconds=settings.chat_idle_ttl_seconds,
            max_chats=settings.max_live_chats,
        )


state = AppState()
