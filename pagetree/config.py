"""
Engine Configuration

Uses pydantic-settings for environment variable loading with validation.
All resolution tunables are centralized here.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Environment variables can be set directly or via .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PAGETREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Collection Resolution
    # ==========================================================================
    default_items_per_page: int = Field(
        default=10,
        ge=1,
        description="Items per page when a paginated binding does not set one"
    )

    slug_field_key: str = Field(
        default="slug",
        description="Field key whose value is used as an item's URL slug"
    )

    resolve_references: bool = Field(
        default=True,
        description="Follow reference fields when injecting item data"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
