"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Inter-service auth (empty = development mode, auth disabled)
    service_auth_token: str = ""

    # You.com (a missing key is reported per tool call, not at startup)
    ydc_api_key: str = ""
    ydc_search_url: str = "https://api.ydc-index.io/v1/search"
    ydc_contents_url: str = "https://ydc-index.io/v1/contents"
    ydc_agents_url: str = "https://api.you.com/v1/agents/runs"

    # Outbound identification
    user_agent_product: str = "MCP"
    support_email: str = "support@you.com"

    # Transport timeout for upstream calls, in seconds
    upstream_timeout: float = 60.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
