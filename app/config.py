"""Application configuration using Pydantic Settings.

This module centralizes all configuration values that may vary between environments.
Values can be overridden via environment variables or .env file.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # ===== Persistence =====
    DATABASE_URL: str = "sqlite:///./cityinfo.db"
    USE_DB_REPOS: bool = False
    SEED_DATA: bool = True

    # ===== Pagination Defaults =====
    DEFAULT_PAGE_SIZE: int = 10
    MAX_CITIES_PAGE_SIZE: int = 20

    # ===== Authentication =====
    AUTH_ENABLED: bool = False
    AUTH_SECRET_KEY: str = "change-me-in-production-please-32b"
    AUTH_ISSUER: str = "https://localhost:8000"
    AUTH_AUDIENCE: str = "cityinfoapi"
    AUTH_TOKEN_LIFETIME_MINUTES: int = 60

    # ===== Mail =====
    MAIL_FROM: str = "noreply@cityinfo.local"
    MAIL_TO: str = "admin@cityinfo.local"
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None

    # ===== Logging =====
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True
        # Allow extra fields from .env that aren't defined here
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure singleton pattern - settings are loaded once.
    """
    return Settings()


# Global settings instance for easy import
settings = get_settings()
