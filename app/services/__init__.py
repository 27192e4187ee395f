# =============================================================================
# Services Package — Business Logic
# =============================================================================
# Contains the core business logic, separated from API handlers:
#   - extractor.py: Agent answer → Recommendation records (ticker heuristic)
#   - renderer.py: Agent answer → display blocks (line-oriented markdown)
#   - lexicon.py: Emphasis splitting and per-market stopword tables
#   - agent_client.py: Async HTTP client for the remote advisory agent
#   - conversations.py: In-memory conversation/message store
#   - showcase.py: Suggested prompts, agent roster, sample conversation
# =============================================================================
