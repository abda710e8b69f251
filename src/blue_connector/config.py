"""Configuration management for the Blue connector."""

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Connector settings, read from ``BLUE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BLUE_",
        env_file=".env" if os.getenv("BLUE_ENVIRONMENT") != "test" else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Endpoint
    api_url: str = Field(
        default="https://api.blue.cc/graphql",
        description="Blue GraphQL endpoint",
    )
    default_timeout_ms: int = Field(
        default=30000,
        description="Per-request timeout used when an item does not set one",
    )

    # Header names
    token_id_header: str = Field(default="X-Bloo-Token-ID")
    token_secret_header: str = Field(default="X-Bloo-Token-Secret")
    company_header: str = Field(
        default="X-Bloo-Company-ID",
        description="Company-scope header sent by company-scoped operations",
    )

    # Credentials (optional; hosts usually pass them explicitly)
    token_id: Optional[str] = Field(default=None)
    token_secret: Optional[str] = Field(default=None)

    @field_validator("default_timeout_ms")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("default_timeout_ms must be positive")
        return v

    @field_validator("api_url", mode="before")
    @classmethod
    def validate_api_url(cls, v):
        url = str(v).strip()
        if not url.startswith(("http://", "https://")):
            raise ValueError("api_url must be an http(s) URL")
        return url


@lru_cache()
def get_settings() -> Settings:
    """Get cached connector settings."""
    return Settings()
