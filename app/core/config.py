"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import string
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "URL Shortener API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Short links that expire on their own"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    DEBUG: bool = False

    # Record store
    STORE_PATH: Path = Path("db.json")

    # Short id generation (nanoid-style URL-safe alphabet)
    URL_ID_LENGTH: int = 8
    URL_ID_CHARS: str = string.ascii_letters + string.digits + "_-"
    URL_ID_MAX_ATTEMPTS: int = 5  # Retries on id collision

    # Expiration and cleanup
    EXPIRATION_HOURS: float = 3
    CLEANUP_ENABLED: bool = True
    CLEANUP_INTERVAL_MINUTES: float = 5
    CLEANUP_START_ON_STARTUP: bool = True  # Sweep once as soon as the app starts

    # Scheduler settings
    SCHEDULER_JOB_COALESCE: bool = True  # Combine multiple pending executions of a job into a single execution
    SCHEDULER_JOB_MAX_INSTANCES: int = 1
    SCHEDULER_MISFIRE_GRACE_TIME: int = 60  # Seconds to still run misfired job after scheduled time

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_FILE_ENABLED: bool = True
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"
    LOG_JSON: bool = True
    REQUEST_LOGGING_ENABLED: bool = True

    @field_validator("EXPIRATION_HOURS", "CLEANUP_INTERVAL_MINUTES")
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @field_validator("URL_ID_LENGTH", "URL_ID_MAX_ATTEMPTS")
    def validate_at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("URL_ID_CHARS")
    def validate_id_chars(cls, v: Any) -> str:
        """Reject alphabets that would produce ambiguous or degenerate ids."""
        if len(set(v)) < 2:
            raise ValueError("URL_ID_CHARS needs at least two distinct characters")
        return v

    @computed_field
    def EXPIRATION_WINDOW(self) -> timedelta:
        """Age at which a record becomes eligible for removal."""
        return timedelta(hours=self.EXPIRATION_HOURS)

    @computed_field
    def CLEANUP_INTERVAL(self) -> timedelta:
        return timedelta(minutes=self.CLEANUP_INTERVAL_MINUTES)


# Create a singleton instance of the settings
settings = Settings()
