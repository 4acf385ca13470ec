from uuid import UUID

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.app_state import state
from app.db import get_db
from app.models.chatbot import Chatbot
from app.models.lead import Lead
from app.schemas.chatbot import ChatbotConfig
from app.services.chatbot_service import ChatbotService
from app.services.conversation_orchestrator import ConversationOrchestrator
from app.services.lead_service import LeadService


def get_chatbot_by_id(
    chatbot_id: UUID,
    db: Session = Depends(get_db),
) -> Chatbot:
    """FastAPI dependency to get a chatbot by ID."""
    chatbot = ChatbotService(db).get_chatbot(chatbot_id)
    if chatbot is None:
        raise HTTPException(status_code=404, detail="Chatbot not found")
    return chatbot


def get_chatbot_config(
    chatbot_id: UUID,
    db: Session = Depends(get_db),
) -> ChatbotConfig:
    """FastAPI dependency to load a chatbot's resolved configuration by ID."""
    config = ChatbotService(db).get_config(chatbot_id)
    if config is None:
        raise HTTPException(status_code=404, detail="Chatbot not found")
    return config


def get_lead_by_id(
    lead_id: UUID,
    db: Session = Depends(get_db),
) -> Lead:
    """FastAPI dependency to get a lead by ID."""
    lead = LeadService(db).get_lead(lead_id)
    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


def get_chat_by_handle(handle: str) -> ConversationOrchestrator:
    """FastAPI dependency to get a live chat by its handle."""
    orchestrator = state.chats.get(handle)
    if orchestrator is None:
        raise HTTPException(status_code=404, detail="Chat not found")
    return orchestrator
