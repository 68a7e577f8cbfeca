"""
Canonical data model for log-sentinel.

Defines the parsed representation of a single log line, the outcome of
parsing it, and the immutable summary produced at the end of a run.

Design rationale:
- Log levels are a closed set; an unknown token is a parse failure
- All timestamps are timezone-aware UTC with millisecond precision
- Report models serialize with the camelCase keys of the report format
  (``model_dump_json(by_alias=True)``) and read back with the same keys
- Everything exported from a run is frozen
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

# Default number of ERROR / WARN events kept verbatim in a report
MAX_STORED_ENTRIES = 100


def format_instant(ts: datetime) -> str:
    """
    Render a datetime in the report's instant format.

    Example: ``2024-01-15T08:23:45.123Z``. This is the same form the line
    parser accepts, so report instants can be fed back to it.

    Args:
        ts: Timezone-aware datetime (naive values are taken as UTC)

    Returns:
        UTC instant with millisecond precision and ``Z`` designator
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LogLevel(str, Enum):
    """
    Recognized log severity levels.

    Matching is exact and case-sensitive: ``[info]`` or ``[WARNING]`` are not
    levels.
    """
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    DEBUG = "DEBUG"

    @classmethod
    def from_token(cls, token: str) -> Optional["LogLevel"]:
        """Return the level spelled exactly ``token``, or None."""
        return cls.__members__.get(token)


class LogEntry(BaseModel):
    """
    One successfully parsed log line.

    Attributes:
        timestamp: UTC instant of the event
        level: Severity level
        message: Everything after the level bracket
        raw: The original line, untrimmed
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="UTC timestamp of the event")
    level: LogLevel = Field(..., description="Severity level")
    message: str = Field(..., min_length=1, description="Log message text")
    raw: str = Field(..., description="Original line text")

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class ParseFailureReason(str, Enum):
    """Why a line could not be parsed."""
    EMPTY_LINE = "empty line"
    GRAMMAR_MISMATCH = "grammar mismatch"
    UNRECOGNIZED_LEVEL = "unrecognized level"
    INVALID_TIMESTAMP = "invalid timestamp"


@dataclass(frozen=True)
class ParseSuccess:
    """A line that parsed into a LogEntry."""

    entry: LogEntry

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ParseFailure:
    """A line that did not parse, with the first check it failed."""

    reason: ParseFailureReason
    raw: str

    @property
    def ok(self) -> bool:
        return False


ParseOutcome = Union[ParseSuccess, ParseFailure]


class _ReportModel(BaseModel):
    """Base for report models: frozen, accepts field names or aliases."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class LevelCounts(_ReportModel):
    """
    Number of parsed entries per level.

    One field per level, so every level is always present in the report.
    """

    info: int = Field(0, ge=0, alias="INFO")
    warn: int = Field(0, ge=0, alias="WARN")
    error: int = Field(0, ge=0, alias="ERROR")
    debug: int = Field(0, ge=0, alias="DEBUG")

    @classmethod
    def from_counts(cls, counts: Mapping[LogLevel, int]) -> "LevelCounts":
        return cls(**{level.value.lower(): counts.get(level, 0) for level in LogLevel})

    def count(self, level: LogLevel) -> int:
        return getattr(self, level.value.lower())


class SampleEvent(_ReportModel):
    """Reduced projection of an ERROR or WARN entry kept in a report."""

    timestamp: str = Field(..., description="Instant as text (format_instant)")
    message: str


class EventCollection(_ReportModel):
    """
    Bounded sample of matching events.

    Attributes:
        items: The first N matching events, in stream order
        total_count: How many matching events were seen in total
        truncated: True when total_count exceeded the sample capacity

    Notes:
        - items holds ``min(total_count, capacity)`` events, so
          ``truncated == (total_count > len(items))``
    """

    items: Tuple[SampleEvent, ...] = ()
    total_count: int = Field(0, ge=0, alias="totalCount")
    truncated: bool = False

    @model_validator(mode="after")
    def check_truncation(self) -> "EventCollection":
        if len(self.items) > self.total_count:
            raise ValueError("more sampled items than totalCount")
        if self.truncated != (self.total_count > len(self.items)):
            raise ValueError("truncated must be true exactly when events were dropped")
        return self


class TimeRange(_ReportModel):
    """Earliest and latest timestamp across all parsed entries."""

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def check_order(self) -> "TimeRange":
        if self.start > self.end:
            raise ValueError("time range start is after end")
        return self

    @field_serializer("start", "end")
    def serialize_instant(self, value: datetime) -> str:
        return format_instant(value)


class AnalysisMeta(_ReportModel):
    """Run metadata."""

    analyzed_at: datetime = Field(..., alias="analyzedAt")
    input_file: str = Field(..., alias="inputFile")
    total_lines: int = Field(0, ge=0, alias="totalLines")
    parsed_lines: int = Field(0, ge=0, alias="parsedLines")
    parse_errors: int = Field(0, ge=0, alias="parseErrors")

    @model_validator(mode="after")
    def check_line_totals(self) -> "AnalysisMeta":
        if self.total_lines != self.parsed_lines + self.parse_errors:
            raise ValueError("totalLines must equal parsedLines + parseErrors")
        return self

    @field_serializer("analyzed_at")
    def serialize_instant(self, value: datetime) -> str:
        return format_instant(value)


class AnalysisSummary(_ReportModel):
    """
    Final, immutable result of one analysis run.

    This is the only thing a run exports; it is what the report file holds.
    """

    meta: AnalysisMeta
    time_range: Optional[TimeRange] = Field(None, alias="timeRange")
    summary: LevelCounts = LevelCounts()
    errors: EventCollection = EventCollection()
    warnings: EventCollection = EventCollection()

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize with the report's key names."""
        return self.model_dump_json(by_alias=True, indent=indent)
