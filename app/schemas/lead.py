"""Pydantic schemas for Lead."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

Reaction = Literal["good", "neutral", "worse"]


class LeadCreate(BaseModel):
    """Schema for creating a lead from a finished collection flow."""

    chatbot_id: UUID
    conversation_id: Optional[UUID] = None
    fields: dict[str, str] = Field(default_factory=dict)
    sentiment: Literal["positive", "neutral", "negative"] = "neutral"
    reaction: Reaction = "neutral"
    conversation_history: list[str] = Field(default_factory=list)


class LeadRead(BaseModel):
    """Lead for API responses."""

    id: UUID
    chatbot_id: UUID
    conversation_id: Optional[UUID] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    fields: dict[str, str]
    sentiment: str
    reaction: str
    conversation_history: list[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class LeadReactionUpdate(BaseModel):
    reaction: Reaction


class ResponseAccuracyRead(BaseModel):
    chatbot_id: UUID
    accuracy: int = Field(ge=0, le=100)
    total_leads: int
