# =============================================================================
# Application Configuration — Pydantic Settings
# =============================================================================
#
# Pydantic V2 `BaseSettings` loads values in this priority order (highest
# first):
#   1. Environment variables (e.g., `AGENT_API_URL=...`)
#   2. Values from the .env file
#   3. Default values defined below
#
# USAGE:
#   from app.config import settings
#   print(settings.agent_api_url)
# =============================================================================

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults are suitable for local development. The remote agent URL has
    no default and must be provided before POST /chat can be used.
    """

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    app_name: str = "ISE Stock Advisor"
    app_version: str = "0.1.0"
    debug: bool = True
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Remote Advisory Agent
    # -------------------------------------------------------------------------
    # The manager agent coordinates the volatility research and analyst
    # ratings agents; we only ever talk to the manager.
    # -------------------------------------------------------------------------
    agent_api_url: str | None = None
    agent_api_key: str | None = None
    manager_agent_id: str = "699961350ab3a50ca24854a8"
    agent_timeout_seconds: float = Field(default=120.0, gt=0.0)

    # -------------------------------------------------------------------------
    # Recommendation Extraction
    # -------------------------------------------------------------------------
    # The chat view shows at most 10 cards, the dashboard view 15.
    # Ticker bounds and stopword markets differ between deployments, so both
    # are configuration rather than code. Market names map onto the tables
    # in app/services/lexicon.py ("common", "ise", "us").
    # -------------------------------------------------------------------------
    recommendation_cap_chat: int = Field(default=10, ge=1)
    recommendation_cap_dashboard: int = Field(default=15, ge=1)
    ticker_min_length: int = Field(default=2, ge=1)
    ticker_max_length: int = Field(default=12, ge=1)
    stopword_markets: list[str] = Field(default_factory=lambda: ["common", "ise"])
    extra_stopwords: list[str] = Field(default_factory=list)

    # -------------------------------------------------------------------------
    # Conversations
    # -------------------------------------------------------------------------
    conversation_title_length: int = Field(default=50, ge=1)

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def check_ticker_bounds(self) -> "Settings":
        if self.ticker_min_length > self.ticker_max_length:
            raise ValueError(
                "ticker_min_length must not exceed ticker_max_length"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Create and cache a Settings instance.

    In tests, override with FastAPI's dependency_overrides:
        app.dependency_overrides[get_settings] = lambda: Settings(debug=False)
    """
    return Settings()


# ---------------------------------------------------------------------------
# Module-level convenience instance
# ---------------------------------------------------------------------------
settings = Settings()
