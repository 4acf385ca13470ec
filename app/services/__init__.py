from app.services.chatbot_service import ChatbotService
from app.services.conversation_orchestrator import ConversationOrchestrator
from app.services.conversation_service import ConversationService
from app.services.lead_service import LeadService

__all__ = [
    "ChatbotService",
    "ConversationOrchestrator",
    "ConversationService",
    "LeadService",
]
