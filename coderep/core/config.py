"""
Application configuration using Pydantic Settings.

Centralizes all configuration with environment variable support
(``CODEREP_`` prefix, optional ``.env`` file).
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="CODEREP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/coderep.db"
    database_echo: bool = False  # Set to True for SQL debugging

    # Environment
    environment: str = "development"
    log_level: str = "INFO"
    log_to_file: bool = False
    logs_dir: str = "logs"

    # Search: minimum partial-match similarity for fuzzy name search
    search_threshold: float = Field(default=0.75, ge=0.0, le=1.0)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
