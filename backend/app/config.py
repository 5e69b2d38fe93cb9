"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - Defaults provided for all non-secret settings

Design Decisions:
    - cors_origins defaults to ["*"]: the API has always been fully open to
      browsers; set CORS_ORIGINS to tighten it
    - copy_visibility and session_require_all_exercises are product policies,
      kept here instead of hardcoded in services
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.domain_types import Visibility


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://fitness:fitness@db:5432/fitness"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Server
    host: str = "0.0.0.0"  # nosec B104
    port: int = 3333
    cors_origins: list[str] = ["*"]

    # Anthropic (AI workout plans)
    anthropic_api_key: str = "sk-ant-placeholder"
    anthropic_max_retries: int = 3
    anthropic_timeout_seconds: int = 120
    anthropic_base_delay_ms: int = 1000
    anthropic_max_delay_ms: int = 30_000
    plan_model: str = "claude-sonnet-4-5"
    plan_max_tokens: int = 4096

    # Domain policies
    copy_visibility: Visibility = Visibility.PRIVATE
    session_require_all_exercises: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
