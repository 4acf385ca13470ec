"""Chatbot model: one row per tenant-configured chatbot."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import JSONType, TimestampMixin


class Chatbot(Base, TimestampMixin):
    """Chatbot definition. `configuration` holds template, prompt, persona and widget settings."""

    __tablename__ = "chatbots"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    name = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    knowledge_base_id = Column(String(256), nullable=True)
    configuration = Column(JSONType, nullable=True, default=dict)

    conversations = relationship(
        "Conversation",
        back_populates="chatbot",
        cascade="all, delete-orphan",
    )
