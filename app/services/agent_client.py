# =============================================================================
# Advisory Agent Client — Remote Multi-Agent Service over HTTP
# =============================================================================
#
# Sends a user question to the manager agent and normalises the reply into
# an AgentResult (success flag, opaque payload, error message).
#
# ARCHITECTURE:
#   AgentClient
#   ├── call()               — POST the question, map the JSON reply
#   ├── get_agent_client()   — Singleton factory, reads from config
#   extract_text()           — Find the answer text inside the opaque payload
#   resolve_answer_text()    — Text shown to the user for any AgentResult
#
# Transport failures (timeouts, refused connections) are raised as
# httpx.HTTPError; the chat route turns them into a user-visible message.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

NO_TEXT_FALLBACK = "Analysis complete. No detailed text was returned by the agent."
AGENT_ERROR_FALLBACK = "An error occurred while analyzing stocks. Please try again."
NETWORK_ERROR_MESSAGE = (
    "A network error occurred. Please check your connection and try again."
)

# Keys searched, in order, when digging the answer out of a payload.
_TEXT_KEYS = ("text", "message", "response", "result", "content", "answer")
_MAX_PAYLOAD_DEPTH = 6


# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------


@dataclass
class AgentResult:
    """
    Normalised reply from the advisory agent.

    `response` is whatever the service returned under "response"; its shape
    is not part of our contract, only the text inside it.
    """

    success: bool
    response: Any = None
    error: str | None = None


# ---------------------------------------------------------------------------
# Payload Helpers
# ---------------------------------------------------------------------------


def extract_text(payload: Any, _depth: int = 0) -> str:
    """
    Return the first non-empty answer string found in an agent payload.

    Strings are returned as-is (stripped). Dicts are searched under the
    keys in _TEXT_KEYS, in order, recursing into nested dicts and lists.
    Returns "" when no text is found.
    """
    if _depth > _MAX_PAYLOAD_DEPTH or payload is None:
        return ""

    if isinstance(payload, str):
        return payload.strip()

    if isinstance(payload, dict):
        for key in _TEXT_KEYS:
            if key in payload:
                text = extract_text(payload[key], _depth + 1)
                if text:
                    return text
        return ""

    if isinstance(payload, list):
        for item in payload:
            text = extract_text(item, _depth + 1)
            if text:
                return text

    return ""


def resolve_answer_text(result: AgentResult) -> str:
    """Text to show the user for an agent result, never empty."""
    if result.success:
        return extract_text(result.response) or NO_TEXT_FALLBACK
    return result.error or AGENT_ERROR_FALLBACK


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class AgentClient:
    """
    Async client for the remote advisory agent.

    Constructor kwargs override settings, which lets tests inject an
    httpx.MockTransport without touching the global singleton.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url or settings.agent_api_url
        if not self._base_url:
            raise ValueError(
                "No advisory agent URL configured. Set AGENT_API_URL in .env"
            )
        self._api_key = api_key or settings.agent_api_key
        self._timeout = timeout or settings.agent_timeout_seconds
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["x-api-key"] = self._api_key
        return headers

    async def call(
        self,
        message: str,
        agent_id: str,
        user_id: str,
        session_id: str,
    ) -> AgentResult:
        """
        Ask the agent a question.

        Returns:
            AgentResult. Non-2xx replies and malformed bodies come back with
            success=False rather than raising.

        Raises:
            httpx.HTTPError: Transport-level failure (timeout, DNS, refused).
        """
        body = {
            "message": message,
            "agent_id": agent_id,
            "user_id": user_id,
            "session_id": session_id,
        }

        logger.info(
            "Calling agent %s: session=%s, message='%s'",
            agent_id,
            session_id,
            message[:80],
        )

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        ) as client:
            response = await client.post(
                self._base_url,
                json=body,
                headers=self._headers(),
            )

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            error = data.get("error") if isinstance(data, dict) else None
            logger.warning(
                "Agent returned HTTP %d: %s",
                response.status_code,
                error or response.reason_phrase,
            )
            return AgentResult(
                success=False,
                error=error or f"Agent service returned HTTP {response.status_code}",
            )

        if not isinstance(data, dict):
            logger.warning("Agent returned a non-JSON-object body")
            return AgentResult(success=False, error=None)

        result = AgentResult(
            success=bool(data.get("success", False)),
            response=data.get("response"),
            error=data.get("error"),
        )
        logger.info("Agent reply: success=%s", result.success)
        return result


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

_client: AgentClient | None = None


def get_agent_client() -> AgentClient:
    """
    Return the configured AgentClient (created on first use).

    Raises:
        ValueError: If AGENT_API_URL is not configured.
    """
    global _client
    if _client is None:
        _client = AgentClient()
        logger.info("Agent client initialised for %s", settings.agent_api_url)
    return _client
