"""
Configuration loader with type-safe Pydantic models.
Loads and validates environment variables for the Slides tools.
"""

import os
from pathlib import Path
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = Path(os.getenv("SLIDES_CONFIG_DIR", str(PROJECT_ROOT / "config")))

# Load .env file if it exists
env_path = CONFIG_DIR / ".env"
if env_path.exists():
    load_dotenv(env_path)


class AppConfig(BaseSettings):
    """
    Main application configuration."""

    model_config = SettingsConfigDict(
        env_file="config/.env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True
    )

    # Google OAuth token (authorized user file)
    token_path: Path = Field(
        default=CONFIG_DIR / "google_workspace_token.json",
        alias="GOOGLE_TOKEN_PATH"
    )

    # Logging
    log_level: str = Field(default="INFO", alias="APP_LOG_LEVEL")
    log_dir: Path = Field(default=PROJECT_ROOT / "logs", alias="APP_LOG_DIR")
    enable_file_logging: bool = Field(default=False, alias="APP_ENABLE_FILE_LOGGING")

    # Tool defaults
    search_context_chars: int = Field(default=50, alias="SEARCH_CONTEXT_CHARS")
    comments_page_size: int = Field(default=100, alias="COMMENTS_PAGE_SIZE")
    translate_batch_size: int = Field(default=128, alias="TRANSLATE_BATCH_SIZE")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.upper()

    @field_validator("search_context_chars")
    @classmethod
    def validate_context_chars(cls, v):
        if v < 0:
            raise ValueError("Search context must be non-negative")
        return v

    @field_validator("comments_page_size", "translate_batch_size")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Page and batch sizes must be positive")
        return v


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global application configuration.

    Returns:
        AppConfig instance
    """
    global _config

    if _config is None:
        _config = AppConfig()

    return _config
