"""Leads API: captured contact details, reactions and response accuracy."""

from fastapi import APIRouter, Depends
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db import get_db
from app.models.chatbot import Chatbot
from app.models.lead import Lead
from app.routers.utils.dependencies import get_chatbot_by_id, get_lead_by_id
from app.schemas.lead import LeadRead, LeadReactionUpdate, ResponseAccuracyRead
from app.services.lead_service import LeadService

router = APIRouter(
    prefix="",
    tags=["leads"],
    responses={404: {"description": "Not found"}},
)


@router.get("/chatbots/{chatbot_id}/leads", response_model=Page[LeadRead])
def list_leads(
    params: Params = Depends(),
    chatbot: Chatbot = Depends(get_chatbot_by_id),
    db: Session = Depends(get_db),
) -> Page[LeadRead]:
    """List leads captured by a chatbot, newest first."""
    query = LeadService(db).get_leads_query(chatbot.id)
    return paginate(query, params=params)


@router.get(
    "/chatbots/{chatbot_id}/leads/accuracy", response_model=ResponseAccuracyRead
)
def get_response_accuracy(
    chatbot: Chatbot = Depends(get_chatbot_by_id),
    db: Session = Depends(get_db),
) -> ResponseAccuracyRead:
    service = LeadService(db)
    return ResponseAccuracyRead(
        chatbot_id=chatbot.id,
        accuracy=service.get_response_accuracy(
            chatbot.id, default=get_settings().default_response_accuracy
        ),
        total_leads=service.count_leads(chatbot.id),
    )


@router.patch("/leads/{lead_id}/reaction", response_model=LeadRead)
def update_lead_reaction(
    body: LeadReactionUpdate,
    lead: Lead = Depends(get_lead_by_id),
    db: Session = Depends(get_db),
) -> Lead:
    return LeadService(db).set_reaction(lead.id, body.reaction)
