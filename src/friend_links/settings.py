"""
friend_links.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-level settings. Runtime toggles that admins flip without a restart
    (apply switch, crontab switch, checker UA, webhook override) live in the
    config store instead; see `friend_links.services.config_store`.
    """

    model_config = SettingsConfigDict(env_prefix="FRIEND_LINKS_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "friend-links"
    log_level: str = "INFO"
    # Human-readable console logs instead of JSON (local development).
    log_console: bool = False

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "friend-links"
    jwt_audience: str = "friend-links-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./friend_links.db"

    # Public site root, used to build links in notifications.
    frontend_url: str = "http://localhost:3000"
    # Fallback webhook when the server config has no `webhook_url`.
    webhook_url: str = Field(default="", repr=False)

    # Outbound HTTP (webhook delivery + link checks)
    http_timeout_seconds: float = 10.0

    # Health-check schedule; 0 disables the in-process scheduler.
    friend_check_interval_seconds: int = 24 * 60 * 60
    # Run one check as soon as the scheduler starts instead of waiting an interval.
    friend_check_on_startup: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Every other module depends on this one; keep field names stable since they
# double as environment variable names (FRIEND_LINKS_<FIELD>).
