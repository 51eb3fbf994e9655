"""
Application configuration using Pydantic Settings.
Loads from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Dispatch"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # API
    api_v1_prefix: str = "/api/v1"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Database - Individual settings (recommended)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_database: str = "dispatch"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"

    # Full URL override, e.g. "sqlite+aiosqlite:///./dispatch.db" for local runs
    database_url_override: str = ""

    # Database pool settings
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_echo: bool = False

    @property
    def database_url(self) -> str:
        """Build database URL from individual components."""
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_database}"

    # LLM Providers
    anthropic_api_key: str = ""
    openai_api_key: str = ""

    # Default LLM Provider: "anthropic" or "openai"
    default_llm_provider: str = "anthropic"

    # LLM Model Configuration
    anthropic_model_primary: str = "claude-sonnet-4-6"
    openai_model_primary: str = "gpt-4o"

    # LLM Settings
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1024
    llm_timeout: int = 60
    llm_max_retries: int = 2

    # Cascade Settings
    cascade_topic_prefix_length: int = 80

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Sentry (Error Tracking)
    sentry_dsn: str = ""
    sentry_environment: str = "development"
    sentry_traces_sample_rate: float = 0.1


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
