# =============================================================================
# API Request Models — Pydantic V2 Schemas
# =============================================================================
#
# These models define the shape of data coming INTO the API.
# FastAPI uses them for request body validation (automatic 422 errors) and
# OpenAPI documentation (visible at /docs).
# =============================================================================

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatRequest(BaseModel):
    """
    Request body for POST /chat — ask the advisory agent a question.

    Omit `conversation_id` to start a new conversation. `session_id` and
    `user_id` are forwarded to the agent so it can keep its own context;
    the server generates them when missing.

    Example:
        {
            "message": "Low volatility banking stocks",
            "conversation_id": "conv_1a2b3c4d5e6f",
            "session_id": "session_0f9e8d7c6b5a"
        }
    """

    message: str = Field(
        ...,
        max_length=4000,
        description="The question to send to the advisory agent",
        examples=["Most reliable BIST 100 stocks"],
    )
    conversation_id: str | None = Field(
        default=None,
        description="Existing conversation to continue. Omit to start a new one.",
    )
    session_id: str | None = Field(
        default=None,
        description="Agent session identifier. Generated when omitted.",
    )
    user_id: str | None = Field(
        default=None,
        description="Caller identifier forwarded to the agent. Generated when omitted.",
    )

    @field_validator("message")
    @classmethod
    def strip_message(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("message must not be blank")
        return value

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"message": "Most reliable BIST 100 stocks"},
                {
                    "message": "Which of these is the least volatile?",
                    "conversation_id": "conv_1a2b3c4d5e6f",
                    "session_id": "session_0f9e8d7c6b5a",
                },
            ]
        }
    )


class AnalyzeRequest(BaseModel):
    """
    Request body for POST /analyze — run the parsing pipeline on raw text.

    `variant` picks the result cap: "chat" (10) or "dashboard" (15).
    """

    text: str = Field(
        ...,
        max_length=100_000,
        description="Agent answer text to extract recommendations from and render",
    )
    variant: Literal["chat", "dashboard"] = Field(
        default="chat",
        description="Deployment variant controlling the recommendation cap",
    )
