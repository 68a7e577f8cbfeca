"""
Application configuration for log-sentinel.

Provides environment-aware settings with conservative defaults. Every value
can be overridden with a ``LOG_SENTINEL_`` prefixed environment variable or a
``.env`` file; nested values use ``__`` as delimiter, e.g.
``LOG_SENTINEL_ANALYSIS__SAMPLE_CAPACITY=50``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AnalysisConfig(BaseModel):
    """
    Aggregation settings.

    Notes:
    - sample_capacity: how many ERROR and WARN events are kept verbatim in
      the report. Events beyond it are counted but not stored.
    """

    sample_capacity: int = Field(100, ge=1, description="Max stored samples per level")


class IngestionConfig(BaseModel):
    """
    Line source settings.

    Notes:
    - read_buffer_size: bytes buffered per read; the file is never loaded whole.
    """

    encoding: str = Field("utf-8", description="Input file encoding")
    read_buffer_size: int = Field(64 * 1024, ge=1024, description="Read buffer in bytes")


class Config(BaseSettings):
    """
    Global configuration with environment overrides.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOG_SENTINEL_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = Field("INFO", description="Default logging level")
    logs_dir: Optional[Path] = Field(None, description="Directory for log files (console only if unset)")
    analysis: AnalysisConfig = AnalysisConfig()
    ingestion: IngestionConfig = IngestionConfig()

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    def model_post_init(self, __context: object) -> None:
        if self.logs_dir is not None:
            self.logs_dir.mkdir(parents=True, exist_ok=True)


def load_config(**overrides: Any) -> Config:
    """
    Build a Config from the environment plus explicit overrides.

    Args:
        **overrides: Field values taking precedence over the environment

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If any value fails validation
    """
    try:
        return Config(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


config = load_config()
