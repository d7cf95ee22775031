"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_ACCEPTED_TYPES = ("image/*", "application/pdf")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    upstream_base_url: str = "http://localhost:8000"
    upstream_timeout_seconds: float | None = None
    accepted_file_types: str | None = None
    workspace_ttl_seconds: int = 6 * 60 * 60
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_accepted_types(raw: str | None) -> tuple[str, ...]:
    """Parse accepted upload MIME patterns from env."""
    if raw is None:
        return DEFAULT_ACCEPTED_TYPES
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return DEFAULT_ACCEPTED_TYPES
    patterns: list[str] = []
    for chunk in cleaned.split(","):
        value = chunk.strip().lower()
        if not value or "/" not in value:
            continue
        patterns.append(value)
    return tuple(patterns) or DEFAULT_ACCEPTED_TYPES
