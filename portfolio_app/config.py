"""Application settings and logging setup."""

import sys
from functools import lru_cache
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict

from portfolio_app.utils.upload_validation import MAX_UPLOAD_BYTES


class GeminiSettings(BaseSettings):
    """Gemini API configuration settings."""

    google_api_key: Optional[str] = None
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.0-flash"
    gemini_image_model: str = "gemini-2.0-flash-exp"
    gemini_timeout: float = 60.0

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # .env is shared with the Streamlit front-end
    )


class AppSettings(BaseSettings):
    """Service-level settings."""

    portfolio_storage_dir: Path = Path(".portfolio")
    log_level: str = "INFO"
    max_upload_bytes: int = MAX_UPLOAD_BYTES

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_app_settings() -> AppSettings:
    return AppSettings()


@lru_cache
def get_gemini_settings() -> GeminiSettings:
    return GeminiSettings()


def configure_logging(level: str = "INFO") -> None:
    """
    Route loguru output to stderr at the given level.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}",
    )
