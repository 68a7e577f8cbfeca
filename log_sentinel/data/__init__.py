"""
Data module: Log ingestion, parsing, aggregation, and reporting.

Responsible for turning a raw log file into one summary report. Pipeline:

    Raw log lines (text)
        ↓
    Ingestion (log_sentinel/data/ingestion.py)
        ↓
    Parsing (log_sentinel/data/parsers.py) → LogEntry | ParseFailure
        ↓
    Aggregation (log_sentinel/data/aggregation.py) → AnalysisSummary
        ↓
    Reporting (log_sentinel/data/reporting.py) → JSON report
"""

from log_sentinel.data.aggregation import (
    AggregationError,
    LogAggregator,
    SampleBuffer,
)
from log_sentinel.data.ingestion import (
    TextLineSource,
    stream_lines,
)
from log_sentinel.data.parsers import (
    BaseParser,
    ParsingError,
    StandardTextLineParser,
    parse_line,
)
from log_sentinel.data.reporting import (
    format_summary,
    write_report,
)
from log_sentinel.data.schema import (
    MAX_STORED_ENTRIES,
    AnalysisMeta,
    AnalysisSummary,
    EventCollection,
    LevelCounts,
    LogEntry,
    LogLevel,
    ParseFailure,
    ParseFailureReason,
    ParseOutcome,
    ParseSuccess,
    SampleEvent,
    TimeRange,
    format_instant,
)

__all__ = [
    # Schema
    "LogEntry",
    "LogLevel",
    "ParseFailure",
    "ParseFailureReason",
    "ParseOutcome",
    "ParseSuccess",
    "LevelCounts",
    "SampleEvent",
    "EventCollection",
    "TimeRange",
    "AnalysisMeta",
    "AnalysisSummary",
    "MAX_STORED_ENTRIES",
    "format_instant",

    # Ingestion
    "TextLineSource",
    "stream_lines",

    # Parsing
    "parse_line",
    "BaseParser",
    "StandardTextLineParser",
    "ParsingError",

    # Aggregation
    "LogAggregator",
    "SampleBuffer",
    "AggregationError",

    # Reporting
    "write_report",
    "format_summary",
]
