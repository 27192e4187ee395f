# =============================================================================
# API Response Models — Pydantic V2 Schemas
# =============================================================================
#
# These models define the shape of data coming OUT of the API. They are
# separate from the service dataclasses (Recommendation, display blocks,
# Conversation) and are built from them with the from_* helpers below.
#
# The tier strings ("Low"/"Medium"/"High", "Buy"/"Hold"/"Sell") and block
# kinds are the contract with the card and layout renderers in the client.
# =============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.services.conversations import Conversation, Message
from app.services.extractor import Recommendation
from app.services.lexicon import Emphasis, Span
from app.services.renderer import DisplayBlock, Heading, ListItem


class HealthResponse(BaseModel):
    """Response for GET /health — confirms the API is running."""

    status: str = "ok"
    version: str
    service: str


# ---------------------------------------------------------------------------
# Pipeline Output
# ---------------------------------------------------------------------------


class RecommendationOut(BaseModel):
    """A stock recommendation card."""

    ticker: str = Field(description="Exchange ticker, e.g. THYAO")
    name: str = Field(description="Company name, or the ticker when unknown")
    volatility: Literal["Low", "Medium", "High"]
    rating: Literal["Buy", "Hold", "Sell"]
    rationale: str = Field(default="", description="Short justification, may be empty")

    @classmethod
    def from_record(cls, record: Recommendation) -> RecommendationOut:
        return cls(
            ticker=record.ticker,
            name=record.name,
            volatility=record.volatility.value,
            rating=record.rating.value,
            rationale=record.rationale,
        )


class SpanOut(BaseModel):
    """An inline run of text; `emphasis` marks bold runs."""

    text: str
    emphasis: bool = False

    @classmethod
    def from_span(cls, span: Span) -> SpanOut:
        return cls(text=span.text, emphasis=isinstance(span, Emphasis))


class DisplayBlockOut(BaseModel):
    """
    One rendered line.

    `level` is set for headings (2-4), `ordered` for list items; `spans` is
    empty for separators and spacers.
    """

    kind: Literal["heading", "list_item", "separator", "spacer", "paragraph"]
    level: int | None = None
    ordered: bool | None = None
    spans: list[SpanOut] = Field(default_factory=list)

    @classmethod
    def from_block(cls, block: DisplayBlock) -> DisplayBlockOut:
        spans = [SpanOut.from_span(s) for s in getattr(block, "spans", ())]
        return cls(
            kind=block.kind,
            level=block.level if isinstance(block, Heading) else None,
            ordered=block.ordered if isinstance(block, ListItem) else None,
            spans=spans,
        )


class AnalyzeResponse(BaseModel):
    """Response for POST /analyze — pipeline output for the supplied text."""

    variant: Literal["chat", "dashboard"]
    recommendations: list[RecommendationOut]
    blocks: list[DisplayBlockOut]


# ---------------------------------------------------------------------------
# Conversations
# ---------------------------------------------------------------------------


class MessageOut(BaseModel):
    """A chat message; assistant messages carry the pipeline output."""

    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime
    recommendations: list[RecommendationOut] = Field(default_factory=list)
    blocks: list[DisplayBlockOut] = Field(default_factory=list)

    @classmethod
    def from_message(cls, message: Message) -> MessageOut:
        return cls(
            id=message.id,
            role=message.role,
            content=message.content,
            timestamp=message.timestamp,
            recommendations=[
                RecommendationOut.from_record(r) for r in message.recommendations
            ],
            blocks=[DisplayBlockOut.from_block(b) for b in message.blocks],
        )


class ChatResponse(BaseModel):
    """Response for POST /chat — the assistant's reply and routing ids."""

    conversation_id: str
    session_id: str
    user_id: str
    message: MessageOut = Field(description="The assistant message just added")


class ConversationSummary(BaseModel):
    id: str
    title: str
    created_at: datetime
    message_count: int

    @classmethod
    def from_conversation(cls, conversation: Conversation) -> ConversationSummary:
        return cls(
            id=conversation.id,
            title=conversation.title,
            created_at=conversation.created_at,
            message_count=len(conversation.messages),
        )


class ConversationOut(BaseModel):
    """Response for GET /conversations/{id} and GET /sample."""

    id: str
    title: str
    created_at: datetime
    messages: list[MessageOut]

    @classmethod
    def from_conversation(cls, conversation: Conversation) -> ConversationOut:
        return cls(
            id=conversation.id,
            title=conversation.title,
            created_at=conversation.created_at,
            messages=[MessageOut.from_message(m) for m in conversation.messages],
        )


class ConversationListResponse(BaseModel):
    conversations: list[ConversationSummary]
    total: int


class SessionResponse(BaseModel):
    """Response for POST /sessions — a fresh agent session id."""

    session_id: str


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class AgentInfoOut(BaseModel):
    id: str
    name: str
    role: str


class SuggestedPromptOut(BaseModel):
    text: str
