"""
Configuration management for DataChange.

This module provides environment-based configuration using Pydantic
BaseSettings. Unprefixed uppercase fields (LOG_LEVEL, ENVIRONMENT,
DATABASE_URL) are read as-is; everything else uses the DCH_ prefix, for
example DCH_DIALECT overrides the ``dialect`` setting.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("DCH_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Unprefixed fields:
    - ENVIRONMENT: Deployment environment (dev, staging, prod)
    - LOG_LEVEL: Logging level (uppercase)
    - DATABASE_URL: SQLAlchemy URL used by ``data_change.cli apply``

    Prefixed fields (DCH_*): dialect, identifier quoting, large-object
    handling and file logging.
    """

    ENVIRONMENT: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        validation_alias="ENVIRONMENT",
        description="Deployment environment",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )
    DATABASE_URL: Optional[str] = Field(
        default=None,
        validation_alias="DATABASE_URL",
        description="SQLAlchemy database URL for applying changelogs",
    )

    dialect: str = Field(
        default="postgresql",
        description="Dialect used when rendering SQL without a live connection",
    )
    identifier_quoting: Literal["legacy", "quote_all"] = Field(
        default="legacy",
        description="'legacy' quotes identifiers only when needed, 'quote_all' always",
    )
    lob_buffer_size: int = Field(
        default=8192,
        gt=0,
        description="Buffer size in bytes for large-object read handles",
    )
    clob_encoding: str = Field(
        default="utf-8",
        description="Text encoding of text-stream (CLOB) source files",
    )

    log_to_file: bool = Field(default=False, description="Enable file logging")
    log_file_dir: str = Field(default="logs", description="Directory for log files")

    model_config = SettingsConfigDict(
        env_prefix="DCH_",
        env_file=SETTINGS_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported LOG_LEVEL: {value}")
        return level

    @field_validator("DATABASE_URL")
    @classmethod
    def _fix_postgres_scheme(cls, value: Optional[str]) -> Optional[str]:
        # SQLAlchemy 2.x no longer accepts the deprecated postgres:// scheme
        if value and value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql://", 1)
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Tests that change environment variables must call
    ``get_settings.cache_clear()`` before and after.
    """
    return Settings()
