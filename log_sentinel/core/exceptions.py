"""
Custom exceptions for log-sentinel.

These exceptions provide clear error semantics across the pipeline.
Use them to tell bad arguments, unreadable input and unwritable output apart.
Parse failures are not exceptions at this level; they are folded into the
analysis as statistics.
"""


class LogSentinelError(Exception):
    """Base exception for all fatal analysis failures."""
    pass


class ArgumentError(LogSentinelError):
    """Raised when command-line input is missing or invalid."""
    pass


class LogIngestionError(LogSentinelError):
    """Raised when the input log cannot be opened or read."""
    pass


class ReportWriteError(LogSentinelError):
    """Raised when the report cannot be written to its destination."""
    pass


class ConfigurationError(LogSentinelError):
    """Raised when configuration is invalid or missing."""
    pass
