from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "PodTracker"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./podtracker.db"

    scryfall_api_url: str = "https://api.scryfall.com"
    scryfall_timeout: float = 10.0

    # Max suggestions returned by commander name search
    commander_suggestion_limit: int = 8

    # Collision probes before giving up on a new friend ID
    friend_id_max_attempts: int = 10


settings = Settings()


# =============================================================================
# STATISTICS LIMITS
# =============================================================================

# Monthly win/loss series keeps only the most recent buckets
MONTHLY_STATS_WINDOW = 12

# Commander name search needs at least this many characters
MIN_COMMANDER_QUERY_LENGTH = 2
