"""
Configuration management for the IPTV addon.
Uses pydantic-settings for environment variable loading.
"""
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Addon Configuration
    app_name: str = "IPTV"
    app_version: str = "1.1.0"
    debug: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = Field(3000, validation_alias=AliasChoices("IPTV_PORT", "PORT"))
    public_url: Optional[str] = None  # Overrides the manifest URL shown on the config page

    # CORS Configuration
    # Stremio clients do not send a predictable origin
    cors_origins: list[str] = ["*"]

    # Data Sources (iptv-org API)
    iptv_api_base: str = "https://iptv-org.github.io/api"
    upstream_timeout_seconds: float = 60.0

    # Cache Configuration
    catalog_ttl_seconds: int = 3600  # 1 hour
    logos_ttl_seconds: int = 86400  # 24 hours

    # User selection of countries/genres
    settings_path: str = "data/config.json"

    # Pydantic V2 configuration
    model_config = SettingsConfigDict(
        env_prefix="IPTV_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
