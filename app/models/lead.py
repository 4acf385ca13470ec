"""Lead model: contact details captured by the data collection flow."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, ForeignKey, String, Uuid

from app.db import Base
from app.models.mixins import JSONType, TimestampMixin


class Lead(Base, TimestampMixin):
    """
    One row per completed collection flow.

    `fields` keeps everything collected; name/email/phone are copied out for filtering.
    """

    __tablename__ = "leads"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    chatbot_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("chatbots.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    conversation_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("conversations.id", ondelete="SET NULL"),
        nullable=True,
    )
    name = Column(String(256), nullable=True)
    email = Column(String(320), nullable=True, index=True)
    phone = Column(String(64), nullable=True)
    fields = Column(JSONType, nullable=False, default=dict)
    sentiment = Column(String(16), nullable=False, default="neutral")
    reaction = Column(String(16), nullable=False, default="neutral")
    conversation_history = Column(JSONType, nullable=False, default=list)
