"""Lead creation, listing, reactions and response accuracy."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Query, Session as DBSession

from app.models.lead import Lead
from app.schemas.lead import LeadCreate

DEFAULT_RESPONSE_ACCURACY = 85
POSITIVE_REACTION = "good"


class LeadService:
    def __init__(self, db: DBSession) -> None:
        self.db = db

    def create_lead(self, data: LeadCreate) -> Lead:
        fields = dict(data.fields)
        lead = Lead(
            chatbot_id=data.chatbot_id,
            conversation_id=data.conversation_id,
            name=fields.get("name"),
            email=fields.get("email"),
            phone=fields.get("phone"),
            fields=fields,
            sentiment=data.sentiment,
            reaction=data.reaction,
            conversation_history=list(data.conversation_history),
        )
        self.db.add(lead)
        self.db.commit()
        self.db.refresh(lead)
        return lead

    def get_lead(self, lead_id: UUID) -> Optional[Lead]:
        return self.db.query(Lead).filter(Lead.id == lead_id).first()

    def get_leads_query(self, chatbot_id: UUID) -> Query[Lead]:
        """Leads for a chatbot, newest first (for pagination)."""
        return (
            self.db.query(Lead)
            .filter(Lead.chatbot_id == chatbot_id)
            .order_by(Lead.created_at.desc())
        )

    def set_reaction(self, lead_id: UUID, reaction: str) -> Optional[Lead]:
        lead = self.get_lead(lead_id)
        if lead is None:
            return None
        lead.reaction = reaction
        self.db.commit()
        self.db.refresh(lead)
        return lead

    def get_response_accuracy(
        self,
        chatbot_id: UUID,
        default: int = DEFAULT_RESPONSE_ACCURACY,
    ) -> int:
        """
        Percentage of leads with a 'good' reaction, rounded.
        Returns `default` when the chatbot has no leads yet.
        """
        total = self.db.query(Lead).filter(Lead.chatbot_id == chatbot_id).count()
        if total == 0:
            return default
        positive = (
            self.db.query(Lead)
            .filter(Lead.chatbot_id == chatbot_id, Lead.reaction == POSITIVE_REACTION)
            .count()
        )
        return round(positive / total * 100)

    def count_leads(self, chatbot_id: UUID) -> int:
        return self.db.query(Lead).filter(Lead.chatbot_id == chatbot_id).count()
