from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load .env early for local development
load_dotenv()


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./listing.db")

    # Reviews
    review_rating_min: float = float(os.getenv("REVIEW_RATING_MIN", "1"))
    review_rating_max: float = float(os.getenv("REVIEW_RATING_MAX", "5"))
    review_comment_max_length: int = int(os.getenv("REVIEW_COMMENT_MAX_LENGTH", "2000"))

    # HTTP
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")  # comma-separated

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_dir: str = os.getenv("LOG_DIR", "./logs")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
