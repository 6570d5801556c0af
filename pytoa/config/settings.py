import logging
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pytoa.errors import ConfigurationError

DEFAULT_BASE_URL = "https://theorangealliance.org/api"
DEFAULT_APPLICATION_NAME = "pytoa"


class AppSettings(BaseSettings):
    """Client settings loaded from environment variables or .env file."""

    # The Orange Alliance credentials
    toa_api_key: Optional[str] = Field(
        None, description="API key issued by The Orange Alliance."
    )
    toa_application_name: str = Field(
        DEFAULT_APPLICATION_NAME,
        description="Sent as X-Application-Origin so the API can attribute requests.",
    )

    # Transport
    toa_base_url: str = Field(
        DEFAULT_BASE_URL, description="Base URL that request paths are appended to."
    )
    request_timeout: float = Field(
        30.0, gt=0, description="Per-request timeout in seconds."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates client settings."""
    try:
        settings = AppSettings()
    except ValidationError as e:
        logging.exception(f"Error loading pytoa settings: {e}")
        raise ConfigurationError("Failed to load pytoa settings.") from e

    log_level_upper = settings.log_level.upper()
    if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        logging.warning(
            f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
        )
        settings.log_level = "INFO"
    else:
        settings.log_level = log_level_upper
    return settings


settings: AppSettings = load_settings()
