"""Application configuration loaded from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings

DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    # Feeds: http(s) URL or a path (relative paths resolve against DATA_DIR)
    SPEEDRUN_LEVELS_SOURCE: str = "speedrun-levels.json"
    HARD_LEVELS_SOURCE: str = "hard-levels.json"
    PROFILES_SOURCE: str = "profiles.json"  # empty = no profile feed
    FETCH_TIMEOUT: float = 10.0  # seconds

    # Rating sub-score schemas
    RATING_SCHEMAS_PATH: str = str(DATA_DIR / "rating_schemas.yaml")
    SPEEDRUN_RATING_SCHEMA: str | None = None  # overrides the YAML default version
    HARD_RATING_SCHEMA: str | None = None

    # Profile fallbacks
    DEFAULT_AVATAR: str = "assets/default-avatar.png"
    DEFAULT_BANNER: str = "assets/default-banner.png"

    # Redis (raw feed cache)
    REDIS_URL: str = "redis://localhost:6379/0"
    FEED_CACHE_ENABLED: bool = False
    FEED_CACHE_TTL: int = 300  # seconds to keep a fetched feed

    # App
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
