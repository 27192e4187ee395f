# =============================================================================
# Chat API — Ask the Advisory Agent
# =============================================================================
#
# POST /chat forwards a question to the manager agent and stores both sides
# of the exchange.
#
# FLOW:
#   1. Validate the message (blank → 422), resolve or create the conversation
#   2. Call the manager agent with {user_id, session_id}
#   3. Successful reply → extract recommendations + render blocks
#      Failed reply      → error text, rendered, no recommendations
#      Network failure   → fixed network error text, no recommendations
#   4. Return the assistant message with the routing ids
#
# Upstream failures are reported inside a normal 200 response: the client
# shows them as an assistant message.
# =============================================================================

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_agent_client, get_conversation_store
from app.config import settings
from app.models.requests import ChatRequest
from app.models.responses import (
    ChatResponse,
    ConversationListResponse,
    ConversationOut,
    ConversationSummary,
    MessageOut,
    SessionResponse,
)
from app.services.agent_client import (
    NETWORK_ERROR_MESSAGE,
    AgentClient,
    resolve_answer_text,
)
from app.services.conversations import (
    ConversationStore,
    Message,
    new_session_id,
    new_user_id,
)
from app.services.extractor import extract, policy_from_settings
from app.services.renderer import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Chat"])


# ---------------------------------------------------------------------------
# POST /chat — Ask a question
# ---------------------------------------------------------------------------


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Ask the stock advisory agent a question",
    description=(
        "Send a question to the manager agent. The reply is returned as raw "
        "text, structured stock recommendations, and display blocks."
    ),
)
async def chat_endpoint(
    request: ChatRequest,
    client: AgentClient = Depends(get_agent_client),
    store: ConversationStore = Depends(get_conversation_store),
) -> ChatResponse:
    if request.conversation_id is not None:
        try:
            conversation = store.get(request.conversation_id)
        except KeyError as e:
            raise HTTPException(
                status_code=404,
                detail=f"Conversation {request.conversation_id} not found.",
            ) from e
    else:
        conversation = store.create(request.message)

    session_id = request.session_id or new_session_id()
    user_id = request.user_id or new_user_id()

    store.append(conversation.id, Message(role="user", content=request.message))

    recommendations = []
    try:
        result = await client.call(
            message=request.message,
            agent_id=settings.manager_agent_id,
            user_id=user_id,
            session_id=session_id,
        )
    except httpx.HTTPError as e:
        logger.warning("Agent call failed: %s", e)
        content = NETWORK_ERROR_MESSAGE
    else:
        content = resolve_answer_text(result)
        if result.success:
            recommendations = extract(
                content, policy_from_settings(settings, "chat"),
            )

    reply = Message(
        role="assistant",
        content=content,
        recommendations=recommendations,
        blocks=render(content),
    )
    store.append(conversation.id, reply)

    logger.info(
        "Chat reply for %s: %d recommendations, %d blocks",
        conversation.id,
        len(reply.recommendations),
        len(reply.blocks),
    )

    return ChatResponse(
        conversation_id=conversation.id,
        session_id=session_id,
        user_id=user_id,
        message=MessageOut.from_message(reply),
    )


# ---------------------------------------------------------------------------
# Conversations & Sessions
# ---------------------------------------------------------------------------


@router.get(
    "/conversations",
    response_model=ConversationListResponse,
    summary="List conversations, newest first",
)
async def list_conversations(
    store: ConversationStore = Depends(get_conversation_store),
) -> ConversationListResponse:
    conversations = store.list()
    return ConversationListResponse(
        conversations=[ConversationSummary.from_conversation(c) for c in conversations],
        total=len(conversations),
    )


@router.get(
    "/conversations/{conversation_id}",
    response_model=ConversationOut,
    summary="Get a conversation with all its messages",
)
async def get_conversation(
    conversation_id: str,
    store: ConversationStore = Depends(get_conversation_store),
) -> ConversationOut:
    try:
        conversation = store.get(conversation_id)
    except KeyError as e:
        raise HTTPException(
            status_code=404,
            detail=f"Conversation {conversation_id} not found.",
        ) from e
    return ConversationOut.from_conversation(conversation)


@router.post(
    "/sessions",
    response_model=SessionResponse,
    status_code=201,
    summary="Start a new agent session",
)
async def create_session() -> SessionResponse:
    """Issue a fresh session id; the next /chat without conversation_id starts a new thread."""
    return SessionResponse(session_id=new_session_id())
