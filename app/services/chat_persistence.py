"""SQLAlchemy-backed storage for the turn pipeline."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.adapters.base import ChatPersistence
from app.exceptions import PersistenceError
from app.infra.logging_config import get_logger
from app.schemas.lead import LeadCreate
from app.services.conversation_service import ConversationService
from app.services.lead_service import LeadService
from app.utils.db.db_session_helper import db_session

logger = get_logger("chat_persistence")


class SqlChatPersistence(ChatPersistence):
    """
    Each call opens its own short-lived session, so one orchestrator can
    outlive the request that created it. Database work runs in a worker
    thread to keep the event loop free.
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        self._session_factory = session_factory

    async def insert_message(
        self, chatbot_id: str, session_id: str, content: str, role: str
    ) -> None:
        await asyncio.to_thread(self._insert_message, chatbot_id, session_id, content, role)

    async def find_conversation_id(
        self, chatbot_id: str, session_id: str
    ) -> Optional[str]:
        return await asyncio.to_thread(self._find_conversation_id, chatbot_id, session_id)

    async def insert_lead(
        self,
        chatbot_id: str,
        fields: dict[str, str],
        sentiment: str,
        transcript: list[str],
        conversation_id: Optional[str],
    ) -> None:
        await asyncio.to_thread(
            self._insert_lead, chatbot_id, fields, sentiment, transcript, conversation_id
        )

    def _insert_message(
        self, chatbot_id: str, session_id: str, content: str, role: str
    ) -> None:
        try:
            with db_session(self._session_factory) as db:
                ConversationService(db).add_message(
                    UUID(chatbot_id), session_id, content, role
                )
        except (SQLAlchemyError, ValueError) as e:
            raise PersistenceError(f"Failed to store {role} message: {e}") from e

    def _find_conversation_id(self, chatbot_id: str, session_id: str) -> Optional[str]:
        try:
            with db_session(self._session_factory) as db:
                conversation = ConversationService(db).get_by_session(
                    UUID(chatbot_id), session_id
                )
        except (SQLAlchemyError, ValueError) as e:
            logger.warning("Could not resolve conversation for session %s: %s", session_id, e)
            return None
        return str(conversation.id) if conversation else None

    def _insert_lead(
        self,
        chatbot_id: str,
        fields: dict[str, str],
        sentiment: str,
        transcript: list[str],
        conversation_id: Optional[str],
    ) -> None:
        try:
            data = LeadCreate(
                chatbot_id=UUID(chatbot_id),
                conversation_id=UUID(conversation_id) if conversation_id else None,
                fields=fields,
                sentiment=sentiment,
                conversation_history=transcript,
            )
            with db_session(self._session_factory) as db:
                LeadService(db).create_lead(data)
        except (SQLAlchemyError, ValueError) as e:
            raise PersistenceError(f"Failed to store lead: {e}") from e
