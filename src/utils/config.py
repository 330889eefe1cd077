"""
Configuration management for RecruitCRM search.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.constants import KeywordMatchMode


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent
SRC_DIR = ROOT_DIR / "src"
DATA_DIR = ROOT_DIR / "data"


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "recruit_crm"
    username: str | None = None
    password: str | None = None


class EmbeddingSettings(BaseSettings):
    """External embedding provider configuration."""

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_")

    api_key: str | None = Field(default=None, validate_default=True)
    model: str = "models/text-embedding-004"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = 30.0

    @field_validator("api_key", mode="before")
    @classmethod
    def fallback_to_gemini_env(cls, v: str | None) -> str | None:
        """Accept the provider's own env var names when no explicit key is set."""
        if v:
            return v
        return os.environ.get("GEMINI_API_KEY") or os.environ.get("GEMINI_API_TOKEN") or None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


class FetchSettings(BaseSettings):
    """Remote résumé fetching configuration."""

    model_config = SettingsConfigDict(env_prefix="FETCH_")

    timeout_seconds: float = 20.0
    user_agent: str = "RecruitCRM-ResumeFetcher/1.0"
    max_bytes: int = 20 * 1024 * 1024


class SearchSettings(BaseSettings):
    """Semantic search and embedding pipeline tuning."""

    model_config = SettingsConfigDict(env_prefix="SEARCH_")

    max_limit: int = 20
    min_similarity: float = 0.30
    keyword_match_mode: KeywordMatchMode = KeywordMatchMode.ANY
    search_text_max_chars: int = 50_000

    # Background embedding work
    scheduler_workers: int = 4
    rebuild_concurrency: int = 1

    @field_validator("max_limit", "scheduler_workers", "rebuild_concurrency")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v


class ApiSettings(BaseSettings):
    """HTTP API configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "recruit_crm.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True
    file_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "RecruitCRM"
    version: str = "0.1.0"
    description: str = "Candidate semantic search for the recruitment CRM"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    fetch: FetchSettings = Field(default_factory=FetchSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
