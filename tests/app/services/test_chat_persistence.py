"""Tests for SqlChatPersistence against the test database."""

import threading
from uuid import uuid4

import pytest

from app.db import SessionLocal
from app.exceptions import PersistenceError
from app.models.lead import Lead
from app.services.chat_persistence import SqlChatPersistence
from app.services.conversation_service import ConversationService


@pytest.mark.asyncio
async def test_insert_message_and_find_conversation(db, setup_chatbot):
    persistence = SqlChatPersistence()
    chatbot_id = str(setup_chatbot.id)

    assert await persistence.find_conversation_id(chatbot_id, "session_9_ff") is None
    await persistence.insert_message(chatbot_id, "session_9_ff", "Hello", "user")
    conversation_id = await persistence.find_conversation_id(chatbot_id, "session_9_ff")

    assert conversation_id is not None
    conversation = ConversationService(db).get_by_session(setup_chatbot.id, "session_9_ff")
    assert str(conversation.id) == conversation_id


@pytest.mark.asyncio
async def test_insert_lead_with_and_without_conversation(db, setup_chatbot):
    persistence = SqlChatPersistence()
    chatbot_id = str(setup_chatbot.id)
    await persistence.insert_message(chatbot_id, "session_7_aa", "Hello", "user")
    conversation_id = await persistence.find_conversation_id(chatbot_id, "session_7_aa")

    await persistence.insert_lead(
        chatbot_id, {"email": "a@b.co"}, "negative", ["Hello"], conversation_id
    )
    await persistence.insert_lead(chatbot_id, {"email": "c@d.co"}, "neutral", [], None)

    leads = db.query(Lead).filter(Lead.chatbot_id == setup_chatbot.id).all()
    by_email = {lead.email: lead for lead in leads}
    assert str(by_email["a@b.co"].conversation_id) == conversation_id
    assert by_email["a@b.co"].sentiment == "negative"
    assert by_email["c@d.co"].conversation_id is None


@pytest.mark.asyncio
async def test_insert_message_bad_chatbot_id_raises():
    with pytest.raises(PersistenceError):
        await SqlChatPersistence().insert_message("not-a-uuid", "s", "Hello", "user")


@pytest.mark.asyncio
async def test_insert_lead_invalid_sentiment_raises():
    with pytest.raises(PersistenceError):
        await SqlChatPersistence().insert_lead(str(uuid4()), {}, "furious", [], None)


@pytest.mark.asyncio
async def test_database_work_runs_off_the_event_loop(db, setup_chatbot):
    loop_thread = threading.get_ident()
    session_threads = []

    def session_factory():
        session_threads.append(threading.get_ident())
        return SessionLocal()

    persistence = SqlChatPersistence(session_factory=session_factory)
    chatbot_id = str(setup_chatbot.id)
    await persistence.insert_message(chatbot_id, "session_5_bb", "Hello", "user")
    conversation_id = await persistence.find_conversation_id(chatbot_id, "session_5_bb")
    await persistence.insert_lead(chatbot_id, {"email": "a@b.co"}, "neutral", [], conversation_id)

    assert conversation_id is not None
    assert len(session_threads) == 3
    assert loop_thread not in session_threads
