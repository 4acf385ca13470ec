"""Chat API: open a chat for a chatbot, send turns, inspect and close it."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.config import get_settings
from app.core.app_state import state
from app.infra.logging_config import get_logger
from app.routers.utils.dependencies import get_chat_by_handle, get_chatbot_config
from app.schemas.chat import (
    ChatOpenResponse,
    ChatState,
    ChatTurnRequest,
    ChatTurnResponse,
)
from app.schemas.chatbot import ChatbotConfig
from app.services.conversation_orchestrator import (
    ConversationOrchestrator,
    build_orchestrator,
)

logger = get_logger("chats")

router = APIRouter(
    prefix="",
    tags=["chats"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/chatbots/{chatbot_id}/chats",
    response_model=ChatOpenResponse,
    status_code=status.HTTP_201_CREATED,
)
def open_chat(config: ChatbotConfig = Depends(get_chatbot_config)) -> ChatOpenResponse:
    """Start a chat with a chatbot. Returns the chat handle and the welcome transcript."""
    orchestrator = build_orchestrator(config, get_settings())
    messages = orchestrator.initialize_chat()
    handle = state.chats.register(orchestrator)
    logger.info("Opened chat %s for chatbot %s", handle, config.id)
    return ChatOpenResponse(chat_id=handle, chatbot_id=config.id, messages=messages)


@router.post("/chats/{handle}/messages", response_model=ChatTurnResponse)
async def send_chat_message(
    body: ChatTurnRequest,
    orchestrator: ConversationOrchestrator = Depends(get_chat_by_handle),
) -> ChatTurnResponse:
    if orchestrator.is_generating:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A reply is still being generated for this chat",
        )
    messages = await orchestrator.send_message(body.text)
    session = orchestrator.session
    return ChatTurnResponse(
        messages=messages,
        is_escalated=session.is_escalated,
        active_collection_field=session.active_collection_field,
    )


@router.get("/chats/{handle}", response_model=ChatState)
def get_chat(
    handle: str,
    orchestrator: ConversationOrchestrator = Depends(get_chat_by_handle),
) -> ChatState:
    return orchestrator.state(handle)


@router.delete("/chats/{handle}", status_code=status.HTTP_204_NO_CONTENT)
def delete_chat(
    handle: str,
    orchestrator: ConversationOrchestrator = Depends(get_chat_by_handle),
) -> None:
    if orchestrator.is_generating:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A reply is still being generated for this chat",
        )
    orchestrator.clear_chat()
    state.chats.remove(handle)
