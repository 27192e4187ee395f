# =============================================================================
# Showcase Data — Suggested Prompts, Agent Roster, Sample Conversation
# =============================================================================
#
# Static content the client shows before the first question is asked.
# The sample conversation's cards are produced by the real pipeline so the
# showcase never drifts from what extract()/render() actually return.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass

from app.config import settings
from app.services.conversations import Conversation, Message
from app.services.extractor import extract, policy_from_settings
from app.services.renderer import render


@dataclass(frozen=True)
class AgentInfo:
    id: str
    name: str
    role: str


SUGGESTED_PROMPTS: tuple[str, ...] = (
    "Most reliable BIST 100 stocks",
    "Low volatility banking stocks",
    "Best analyst-rated ISE stocks",
    "Safe dividend stocks in BIST",
)

AGENTS: tuple[AgentInfo, ...] = (
    AgentInfo(
        id=settings.manager_agent_id,
        name="ISE Stock Advisor Manager",
        role="Coordinator",
    ),
    AgentInfo(
        id="69996128730bbd74d53e89c9",
        name="Volatility Research Agent",
        role="Volatility Analysis",
    ),
    AgentInfo(
        id="69996128a63b170a3b8170e0",
        name="Analyst Ratings Agent",
        role="Ratings Research",
    ),
)

SAMPLE_CONVERSATION_ID = "sample_1"
SAMPLE_QUESTION = (
    "What are the most reliable BIST 100 stocks for long-term investment?"
)
SAMPLE_ANSWER = """\
## Top Reliable BIST 100 Stocks

Based on comprehensive volatility research and analyst sentiment analysis, here are the most reliable stocks on the Istanbul Stock Exchange:

### 1. **THYAO** - Turkish Airlines
- Low volatility over the past 12 months
- Strong buy consensus from major analysts
- Rationale: Dominant market position in aviation with growing international routes

### 2. **ASELS** - Aselsan
- Low volatility profile
- Buy rating from most coverage analysts
- Rationale: Leading defense electronics company with government contracts providing stable revenue

### 3. **BIMAS** - BIM Birlesik Magazalar
- Low volatility, defensive retail sector
- Strong buy consensus
- Rationale: Largest discount retail chain with consistent growth and defensive positioning

### 4. **TUPRS** - Tupras
- Medium volatility, energy sector
- Buy consensus
- Rationale: Only domestic oil refinery, benefiting from strong demand and pricing power

### 5. **KCHOL** - Koc Holding
- Low volatility conglomerate
- Hold to buy rating
- Rationale: Diversified exposure across banking, automotive, energy, and consumer goods

---

These stocks combine low-to-medium volatility with positive analyst sentiment, making them suitable for conservative, long-term portfolios on the ISE."""


def sample_conversation() -> Conversation:
    """Build the showcase conversation (fresh objects on every call)."""
    return Conversation(
        id=SAMPLE_CONVERSATION_ID,
        title="Most reliable BIST 100 stocks",
        messages=[
            Message(role="user", content=SAMPLE_QUESTION),
            Message(
                role="assistant",
                content=SAMPLE_ANSWER,
                recommendations=extract(
                    SAMPLE_ANSWER, policy_from_settings(settings, "chat"),
                ),
                blocks=render(SAMPLE_ANSWER),
            ),
        ],
    )
