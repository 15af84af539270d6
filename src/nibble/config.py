"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: Literal["local", "supabase"] = "local"
    local_storage_path: str = ".nibble/storage.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_user_id: str | None = None
    ai_provider: Literal["mock", "openai"] = "mock"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org/api/v2/product"
    food_database_path: str | None = None
    timezone: str = "UTC"
    history_days: int = 30
    max_suggestions: int = 3
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
