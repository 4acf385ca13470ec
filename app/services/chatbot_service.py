"""Chatbot lookup and configuration loading."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session as DBSession

from app.models.chatbot import Chatbot
from app.schemas.chatbot import ChatbotConfig


class ChatbotService:
    def __init__(self, db: DBSession) -> None:
        self.db = db

    def get_chatbot(self, chatbot_id: UUID) -> Optional[Chatbot]:
        return self.db.query(Chatbot).filter(Chatbot.id == chatbot_id).first()

    def get_config(self, chatbot_id: UUID) -> Optional[ChatbotConfig]:
        """Load a chatbot and resolve its configuration, or None if it does not exist."""
        chatbot = self.get_chatbot(chatbot_id)
        if chatbot is None:
            return None
        return ChatbotConfig.from_record(chatbot)
