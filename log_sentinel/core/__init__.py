"""
Core module: Configuration, logging, and exception handling.
"""

from .config import Config, config, load_config
from .exceptions import (
    ArgumentError,
    ConfigurationError,
    LogIngestionError,
    LogSentinelError,
    ReportWriteError,
)

__all__ = [
    "Config",
    "config",
    "load_config",
    "LogSentinelError",
    "ArgumentError",
    "LogIngestionError",
    "ReportWriteError",
    "ConfigurationError",
]
