# =============================================================================
# API Dependencies — FastAPI Dependency Injection
# =============================================================================
#
# Route handlers receive their collaborators through Depends(), so tests can
# swap them with app.dependency_overrides:
#
#   get_agent_client()        — remote advisory agent (503 if unconfigured)
#   get_conversation_store()  — process-wide in-memory conversation store,
#                               seeded with the sample conversation
# =============================================================================

from __future__ import annotations

import logging

from fastapi import HTTPException

from app.config import settings
from app.services.agent_client import AgentClient
from app.services.agent_client import get_agent_client as _get_agent_client
from app.services.conversations import ConversationStore
from app.services.showcase import sample_conversation

logger = logging.getLogger(__name__)

_store = ConversationStore(title_length=settings.conversation_title_length)
_store.add(sample_conversation())


def get_conversation_store() -> ConversationStore:
    return _store


def get_agent_client() -> AgentClient:
    """
    Resolve the agent client for a request.

    Raises:
        HTTPException 503: AGENT_API_URL is not configured.
    """
    try:
        return _get_agent_client()
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        raise HTTPException(
            status_code=503,
            detail=f"Service configuration error: {e}",
        ) from e
