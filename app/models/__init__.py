from app.models.chatbot import Chatbot
from app.models.conversation import Conversation, ConversationMessage
from app.models.lead import Lead

__all__ = [
    "Chatbot",
    "Conversation",
    "ConversationMessage",
    "Lead",
]
