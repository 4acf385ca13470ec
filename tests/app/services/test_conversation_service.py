"""Tests for ConversationService."""

from app.models.conversation import ConversationMessage
from app.services.conversation_service import ConversationService


def test_get_or_create_creates_once(db, setup_chatbot):
    svc = ConversationService(db)
    conversation, created = svc.get_or_create(setup_chatbot.id, "session_1_abc")
    assert created is True
    again, created_again = svc.get_or_create(setup_chatbot.id, "session_1_abc")
    assert created_again is False
    assert again.id == conversation.id


def test_add_message_creates_conversation(db, setup_chatbot):
    svc = ConversationService(db)
    svc.add_message(setup_chatbot.id, "session_2_abc", "Hello", "user")
    svc.add_message(setup_chatbot.id, "session_2_abc", "Hi there", "assistant")

    conversation = svc.get_by_session(setup_chatbot.id, "session_2_abc")
    assert conversation is not None
    messages = (
        db.query(ConversationMessage)
        .filter(ConversationMessage.conversation_id == conversation.id)
        .order_by(ConversationMessage.created_at)
        .all()
    )
    assert [(m.role, m.content) for m in messages] == [
        ("user", "Hello"),
        ("assistant", "Hi there"),
    ]


def test_get_by_session_unknown(db, setup_chatbot):
    svc = ConversationService(db)
    assert svc.get_by_session(setup_chatbot.id, "missing") is None
