# =============================================================================
# Models Package — Pydantic V2 Schemas
# =============================================================================
# Defines request/response schemas for the API.
# These are SEPARATE from the service dataclasses (Recommendation, display
# blocks, Conversation); response models are built from them explicitly.
# =============================================================================
