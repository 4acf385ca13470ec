"""Typed chatbot configuration resolved once when a chatbot is loaded."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

from app.constants.chat_copy import ChatCopy
from app.constants.templates import TemplatePrompt, get_template_prompt


class ChatbotConfig(BaseModel):
    """
    Immutable view of a chatbot used by the turn pipeline.

    Optional settings fall back to the chosen template (system prompt, persona)
    and to the default welcome text.
    """

    id: str
    name: str
    description: Optional[str] = None
    knowledge_base_id: Optional[str] = None
    template: Optional[str] = None
    system_prompt: Optional[str] = None
    personality: Optional[str] = None
    welcome_message: str = ChatCopy.WELCOME
    template_prompt: Optional[TemplatePrompt] = None

    model_config = {"frozen": True}

    @property
    def classification_context(self) -> str:
        return self.description or self.name

    @property
    def has_knowledge_base(self) -> bool:
        return bool(self.knowledge_base_id)

    @classmethod
    def resolve(
        cls,
        chatbot_id: str,
        name: str,
        description: Optional[str] = None,
        knowledge_base_id: Optional[str] = None,
        configuration: Optional[dict[str, Any]] = None,
    ) -> "ChatbotConfig":
        configuration = configuration or {}
        template_id = configuration.get("template") or None
        template = get_template_prompt(template_id)
        system_prompt = configuration.get("systemPrompt") or (
            template.system_prompt if template else None
        )
        personality = configuration.get("personality") or (
            template.default_personality if template else None
        )
        return cls(
            id=chatbot_id,
            name=name or "AI Assistant",
            description=description or None,
            knowledge_base_id=knowledge_base_id or None,
            template=template_id,
            template_prompt=template,
            system_prompt=system_prompt,
            personality=personality,
            welcome_message=configuration.get("welcomeMessage") or ChatCopy.WELCOME,
        )

    @classmethod
    def from_record(cls, chatbot) -> "ChatbotConfig":
        """Build from a Chatbot ORM row."""
        return cls.resolve(
            chatbot_id=str(chatbot.id),
            name=chatbot.name,
            description=chatbot.description,
            knowledge_base_id=chatbot.knowledge_base_id,
            configuration=chatbot.configuration,
        )
