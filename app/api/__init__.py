# =============================================================================
# API Package — FastAPI Route Handlers
# =============================================================================
# Each module defines a FastAPI APIRouter for a specific feature:
#   - chat.py: Ask the agent, list/get conversations, start sessions
#   - analysis.py: Run the parsing pipeline on supplied text
#   - catalog.py: Agent roster, suggested prompts, sample conversation
#   - deps.py: Dependency providers (agent client, conversation store)
#   - request_log.py: Per-request logging middleware
# =============================================================================
