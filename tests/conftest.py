"""
Pytest configuration and shared fixtures.

Provides test configuration instances, sample log lines and a helper for
writing temporary log files.
"""

import logging

import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List

from log_sentinel.core.config import Config
from log_sentinel.data.schema import LogEntry, LogLevel


BASE_TIME = datetime(2024, 1, 15, 8, 23, 45, 123000, tzinfo=timezone.utc)


def make_line(level: str, message: str, ts: datetime = BASE_TIME) -> str:
    """Build a well-formed log line."""
    stamp = ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"
    return f"{stamp} [{level}] {message}"


def make_entry(level: LogLevel, message: str, ts: datetime = BASE_TIME) -> LogEntry:
    """Build a LogEntry without going through the parser."""
    return LogEntry(
        timestamp=ts,
        level=level,
        message=message,
        raw=make_line(level.value, message, ts),
    )


@pytest.fixture
def mock_config() -> Config:
    """
    Fixture providing test configuration with explicit values.

    Ensures tests run consistently regardless of .env settings.
    """
    return Config(
        _env_file=None,
        log_level="WARNING",  # Reduce noise in test output
        logs_dir=None,
        analysis={"sample_capacity": 100},
        ingestion={"encoding": "utf-8", "read_buffer_size": 4096},
    )


@pytest.fixture
def sample_log_lines() -> List[str]:
    """
    Fixture providing a small, realistic log.

    Contains every level, one blank line and two malformed lines.
    Timestamps are deliberately out of order.
    """
    return [
        make_line("INFO", "Server started on port 3000", BASE_TIME),
        make_line("DEBUG", "Loaded 12 routes", BASE_TIME + timedelta(seconds=1)),
        make_line("WARN", "Slow query took 1200ms", BASE_TIME + timedelta(seconds=30)),
        "",
        make_line("ERROR", "Database connection refused", BASE_TIME + timedelta(minutes=5)),
        make_line("INFO", "Retrying connection", BASE_TIME - timedelta(minutes=1)),
        "this line is not a log line",
        make_line("TRACE", "Entering handler", BASE_TIME + timedelta(seconds=2)),
        make_line("ERROR", "Request failed with status 500", BASE_TIME + timedelta(minutes=6)),
    ]


@pytest.fixture
def write_log(tmp_path) -> Callable[..., Path]:
    """
    Fixture returning a function that writes lines to a temporary log file.

    Usage:
        path = write_log(["line 1", "line 2"])
        path = write_log(lines, newline="\\r\\n", name="windows.log")
    """
    def _write(lines: List[str], newline: str = "\n", name: str = "app.log") -> Path:
        path = tmp_path / name
        path.write_bytes(newline.join(lines).encode("utf-8") + newline.encode("utf-8"))
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so each test starts clean."""
    yield
    logger = logging.getLogger("log_sentinel")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (deferred CI)"
    )
