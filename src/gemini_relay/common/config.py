"""Configuration for the relay.

Uses Pydantic Settings so values come from environment variables or a local
.env file. Each deployment form has its own defaults; the environment still
overrides them.
"""
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings shared by every deployment form."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upstream
    gemini_api_key: str | None = None
    gemini_model_id: str = "gemini-2.5-flash"

    # Service
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    # CORS
    cors_allow_origins: str = ""
    models_allowed_origin: str | None = None

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Parse allowed origins as list."""
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


class ServerSettings(Settings):
    """Long-running server: open CORS on every route."""

    cors_allow_origins: str = "*"


class FunctionSettings(Settings):
    """Per-invocation function: only /models is exposed cross-origin."""

    models_allowed_origin: str | None = "https://quickstats-analysis.vercel.app"
