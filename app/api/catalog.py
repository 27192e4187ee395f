# =============================================================================
# Catalog API — Static Showcase Content
# =============================================================================
#
# Read-only endpoints backing the client's empty state:
#   - GET /agents  : the agent roster (manager + specialists)
#   - GET /prompts : suggested starter questions
#   - GET /sample  : a sample conversation with pipeline-derived cards
# =============================================================================

from __future__ import annotations

from fastapi import APIRouter

from app.models.responses import AgentInfoOut, ConversationOut, SuggestedPromptOut
from app.services.showcase import AGENTS, SUGGESTED_PROMPTS, sample_conversation

router = APIRouter(tags=["Catalog"])


@router.get("/agents", response_model=list[AgentInfoOut], summary="List advisory agents")
async def list_agents() -> list[AgentInfoOut]:
    return [AgentInfoOut(id=a.id, name=a.name, role=a.role) for a in AGENTS]


@router.get(
    "/prompts",
    response_model=list[SuggestedPromptOut],
    summary="List suggested starter prompts",
)
async def list_prompts() -> list[SuggestedPromptOut]:
    return [SuggestedPromptOut(text=p) for p in SUGGESTED_PROMPTS]


@router.get("/sample", response_model=ConversationOut, summary="Get the sample conversation")
async def get_sample() -> ConversationOut:
    return ConversationOut.from_conversation(sample_conversation())
