from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal
from functools import lru_cache


class Settings(BaseSettings):
    """
    Engine wide settings loaded from environment variables or .env file.
    Invalid values fail on first access instead of silently falling back.
    """

    APP_NAME: str = "Review Grid"
    ENVIRONMENT: Literal["development", "production", "testing"] = "development"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["text", "json"] = "text"

    # Drag & Drop
    # Pointer travel (px) before a press turns into a drag instead of a click
    DRAG_ACTIVATION_DISTANCE: float = Field(5.0, ge=0)
    KEYBOARD_REORDER_ENABLED: bool = True

    # Filtering
    DEFAULT_FILTER_CONDITION: Literal["is_any_of", "is_none_of"] = "is_any_of"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars passed by system that aren't defined here
    )


@lru_cache()
def get_settings() -> Settings:
    """Cached singleton of engine settings."""
    return Settings()
