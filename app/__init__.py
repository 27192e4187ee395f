# =============================================================================
# ISE Stock Advisor
# =============================================================================
# Chat back end for a remote multi-agent stock advisory service covering the
# Istanbul Stock Exchange. Agent answers are turned into structured stock
# recommendations and display blocks for a constrained markdown dialect.
#
# Package structure:
#   app/
#   ├── api/          → FastAPI route handlers (chat, analysis, catalog)
#   ├── models/       → Pydantic V2 request/response schemas
#   ├── services/     → Business logic (extraction, rendering, agent client,
#   │                    conversation store, showcase data)
#   └── main.py       → Application assembly and logging setup
# =============================================================================
