from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = "2.0.0"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="YGO_")

    app_name: str = "YGO CLI"
    debug: bool = False

    api_base_url: str = "https://db.ygoprodeck.com/api/v7"

    # Upper bound, in seconds, for every request to the card database
    request_timeout: float = 10.0

    user_agent: str = f"ygocli/{VERSION}"

    collection_path: Path = Path.home() / ".ygo-collection.json"
    wishlist_path: Path = Path.home() / ".ygo-wishlist.json"


settings = Settings()


# =============================================================================
# REST LIMITS
# =============================================================================

# Cards returned by a search endpoint (the full match count is still reported)
MAX_SEARCH_RESULTS = 20
