# =============================================================================
# Conversation Store — In-Memory Chat Bookkeeping
# =============================================================================
#
# Keeps conversations and their messages for the lifetime of the process.
# Nothing is written to disk; a restart starts from an empty store.
#
# Assistant messages carry the pipeline output (recommendations + display
# blocks) next to the raw text so clients never re-parse.
# =============================================================================

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal

from app.services.extractor import Recommendation
from app.services.renderer import DisplayBlock

logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}_{secrets.token_hex(6)}"


def new_session_id() -> str:
    return _new_id("session")


def new_user_id() -> str:
    return _new_id("user")


def make_title(first_message: str, max_length: int = 50) -> str:
    """Conversation title: the first message, cut to `max_length` plus "..."."""
    if len(first_message) > max_length:
        return first_message[:max_length] + "..."
    return first_message


# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------


@dataclass
class Message:
    role: Literal["user", "assistant"]
    content: str
    recommendations: list[Recommendation] = field(default_factory=list)
    blocks: list[DisplayBlock] = field(default_factory=list)
    id: str = field(default_factory=lambda: _new_id("msg"))
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class Conversation:
    title: str
    messages: list[Message] = field(default_factory=list)
    id: str = field(default_factory=lambda: _new_id("conv"))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ConversationStore:
    """Process-local conversation registry, newest conversation first."""

    def __init__(self, title_length: int = 50) -> None:
        self._conversations: dict[str, Conversation] = {}
        self._title_length = title_length

    def create(self, first_message: str) -> Conversation:
        conversation = Conversation(
            title=make_title(first_message, self._title_length),
        )
        self._conversations[conversation.id] = conversation
        logger.info(
            "Created conversation %s ('%s')", conversation.id, conversation.title,
        )
        return conversation

    def add(self, conversation: Conversation) -> None:
        """Register a pre-built conversation, e.g. the showcase sample."""
        self._conversations[conversation.id] = conversation

    def get(self, conversation_id: str) -> Conversation:
        """
        Look up a conversation.

        Raises:
            KeyError: If no conversation has this id.
        """
        return self._conversations[conversation_id]

    def append(self, conversation_id: str, message: Message) -> Conversation:
        conversation = self.get(conversation_id)
        conversation.messages.append(message)
        return conversation

    def list(self) -> list[Conversation]:
        # dicts keep insertion order, so reversing gives newest first
        return list(reversed(self._conversations.values()))

    def clear(self) -> None:
        self._conversations.clear()

    def __len__(self) -> int:
        return len(self._conversations)
