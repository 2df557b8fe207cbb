"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_emails: str | None = None
    page_cache_ttl_seconds: int = 120
    session_cache_ttl_seconds: int = 300
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_admin_emails(raw: str | None) -> frozenset[str]:
    """Parse the comma separated admin allow-list from env."""
    if raw is None:
        return frozenset()
    emails: set[str] = set()
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if value and "@" in value:
            emails.add(value)
    return frozenset(emails)
