"""Application configuration management."""
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from sqlalchemy.engine.url import make_url, URL
from typing import Optional
import logging

SQLITE_LOCAL_URL = "sqlite+aiosqlite:///./party_engine.db"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = SQLITE_LOCAL_URL
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Demo mode overrides
    demo_play_duration_seconds: int = 15  # Replaces the configured play duration for demo parties
    demo_finale_animation_speed: float = 2.0  # Finale animation multiplier for demo parties
    demo_code_max_attempts: int = 100  # Attempts to find an unused demo party code

    # Theme scoring
    theme_bonus_base: float = 0.5  # Bonus before the round theme multiplier is applied
    theme_bonus_threshold: float = 4.0  # Minimum average adherence (inclusive) for the bonus

    @model_validator(mode="after")
    def validate_all_config(self):
        """Validate game tuning values and normalize Postgres URLs."""
        logger = logging.getLogger(__name__)

        if self.demo_play_duration_seconds < 1:
            raise ValueError("demo_play_duration_seconds must be at least 1 second")

        if self.demo_finale_animation_speed <= 0:
            raise ValueError("demo_finale_animation_speed must be positive")

        if self.demo_code_max_attempts < 1:
            raise ValueError("demo_code_max_attempts must be at least 1")

        if not 1 <= self.theme_bonus_threshold <= 5:
            raise ValueError("theme_bonus_threshold must be within the 1-5 adherence scale")

        # Database URL normalization
        url = self.database_url
        if not url:
            logger.warning("Empty DATABASE_URL, using SQLite fallback")
            self.database_url = SQLITE_LOCAL_URL
            return self

        parsed: Optional[URL] = None
        try:
            parsed = make_url(url)
        except Exception as e:  # pragma: no cover
            logger.error(f"Failed to parse DATABASE_URL: {e}")
            logger.warning(f"Invalid DATABASE_URL; falling back to default sqlite database.")
            self.database_url = SQLITE_LOCAL_URL
            return self

        drivername = parsed.drivername
        if drivername.startswith("postgres") and "+asyncpg" not in drivername:
            old_drivername = drivername
            parsed = parsed.set(drivername="postgresql+asyncpg")
            logger.info(f"Driver normalized: {old_drivername} -> {parsed.drivername}")

        # Use render_as_string to properly re-encode special characters in password
        self.database_url = parsed.render_as_string(hide_password=False)
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
