"""
Log line parsing.

Converts one raw text line into a LogEntry, or into a ParseFailure naming the
first check the line failed. Parsing is pure and deterministic: no state, no
I/O, no logging.

Design:
- One fixed grammar, matched with a single anchored regex (no backtracking
  across alternatives)
- Checks run in order structure -> level -> timestamp, so the most specific
  reason is reported
- Internally each check raises ParsingError; ``parse`` turns it into a
  ParseFailure, so failures never escape to the caller
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from log_sentinel.data.schema import (
    LogEntry,
    LogLevel,
    ParseFailure,
    ParseFailureReason,
    ParseOutcome,
    ParseSuccess,
)


class ParsingError(Exception):
    """Raised internally when a line fails one of the parsing checks."""

    def __init__(self, reason: ParseFailureReason):
        super().__init__(reason.value)
        self.reason = reason


class BaseParser(ABC):
    """
    Abstract base for line parsers.

    Subclasses implement ``parse_entry``; ``parse`` wraps it into a
    ParseOutcome.
    """

    @abstractmethod
    def parse_entry(self, raw: str) -> LogEntry:
        """
        Parse a raw line into a LogEntry.

        Args:
            raw: One line of text, without its line terminator

        Returns:
            The parsed entry

        Raises:
            ParsingError: If the line fails any check
        """
        pass

    def parse(self, raw: str) -> ParseOutcome:
        """
        Parse a raw line without raising.

        Args:
            raw: One line of text

        Returns:
            ParseSuccess with the entry, or ParseFailure with the reason
        """
        try:
            return ParseSuccess(self.parse_entry(raw))
        except ParsingError as e:
            return ParseFailure(reason=e.reason, raw=raw)


class StandardTextLineParser(BaseParser):
    """
    Parses text logs with format:

        TIMESTAMP [LEVEL] MESSAGE

    Examples:
        2024-01-15T08:23:45.123Z [INFO] Server started on port 3000
        2024-01-15T08:24:01.002Z [ERROR] Database connection refused

    Pattern:
    - Timestamp: ISO 8601, millisecond precision, ``Z`` designator
    - Level: INFO, WARN, ERROR, DEBUG (case-sensitive, in square brackets)
    - Message: remaining text, at least one character
    """

    TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

    def __init__(self):
        """Initialize parser with the line pattern."""
        # The bracket accepts any token so unknown levels are reported as such
        self.line_pattern = re.compile(
            r"^([0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}Z)\s+\[([^\]]*)\]\s+(.+)$"
        )

    def parse_entry(self, raw: str) -> LogEntry:
        # str.strip leaves U+FEFF, which a UTF-8 BOM decodes to
        line = raw.strip().lstrip("\ufeff").lstrip()
        if not line:
            raise ParsingError(ParseFailureReason.EMPTY_LINE)

        match = self.line_pattern.match(line)
        if match is None:
            raise ParsingError(ParseFailureReason.GRAMMAR_MISMATCH)
        timestamp_str, level_token, message = match.groups()

        level = LogLevel.from_token(level_token)
        if level is None:
            raise ParsingError(ParseFailureReason.UNRECOGNIZED_LEVEL)

        try:
            timestamp = datetime.strptime(timestamp_str, self.TIMESTAMP_FORMAT)
        except ValueError:
            # e.g. 2024-02-30 or hour 25
            raise ParsingError(ParseFailureReason.INVALID_TIMESTAMP) from None

        return LogEntry(
            timestamp=timestamp.replace(tzinfo=timezone.utc),
            level=level,
            message=message,
            raw=raw,
        )


_default_parser = StandardTextLineParser()


def parse_line(raw: str) -> ParseOutcome:
    """
    Parse one log line with the standard text parser.

    Args:
        raw: One line of text, without its line terminator

    Returns:
        ParseSuccess or ParseFailure

    Example:
        outcome = parse_line("2024-01-15T08:23:45.123Z [INFO] Server started")
        if outcome.ok:
            print(outcome.entry.level)
    """
    return _default_parser.parse(raw)
