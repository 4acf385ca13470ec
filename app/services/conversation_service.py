"""Conversation CRUD, get_or_create by (chatbot, session_id), and message storage."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DBSession

from app.models.conversation import Conversation, ConversationMessage


class ConversationService:
    def __init__(self, db: DBSession) -> None:
        self.db = db

    def get_by_session(
        self, chatbot_id: UUID, session_id: str
    ) -> Optional[Conversation]:
        return (
            self.db.query(Conversation)
            .filter(
                Conversation.chatbot_id == chatbot_id,
                Conversation.session_id == session_id,
            )
            .first()
        )

    def get_or_create(
        self, chatbot_id: UUID, session_id: str
    ) -> Tuple[Conversation, bool]:
        """Get the session's conversation or create it. Returns (conversation, created)."""
        conversation = self.get_by_session(chatbot_id, session_id)
        if conversation is not None:
            return conversation, False
        conversation = Conversation(chatbot_id=chatbot_id, session_id=session_id)
        self.db.add(conversation)
        try:
            self.db.commit()
        except IntegrityError:
            # Created concurrently under the same (chatbot, session) key.
            self.db.rollback()
            existing = self.get_by_session(chatbot_id, session_id)
            if existing is None:
                raise
            return existing, False
        self.db.refresh(conversation)
        return conversation, True

    def add_message(
        self, chatbot_id: UUID, session_id: str, content: str, role: str
    ) -> ConversationMessage:
        """Append a message to the session's conversation, creating it if needed."""
        conversation, _ = self.get_or_create(chatbot_id, session_id)
        message = ConversationMessage(
            conversation_id=conversation.id,
            role=role,
            content=content,
        )
        self.db.add(message)
        conversation.last_message_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(message)
        return message
