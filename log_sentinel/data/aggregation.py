"""
Streaming aggregation of parsed log lines.

Folds one line at a time into running counters and bounded samples, and
produces an immutable AnalysisSummary on demand.

Design:
- One LogAggregator per input; all working state lives on the instance
- Memory is constant in the number of lines: scalar counters plus two
  fixed-capacity sample buffers (ERROR and WARN)
- Samples keep the first N matching events in stream order; later events
  are counted but not stored
- Nothing here can fail on valid input and nothing is ever un-folded
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from log_sentinel.data.schema import (
    MAX_STORED_ENTRIES,
    AnalysisMeta,
    AnalysisSummary,
    EventCollection,
    LevelCounts,
    LogEntry,
    LogLevel,
    ParseOutcome,
    SampleEvent,
    TimeRange,
    format_instant,
)

logger = logging.getLogger(__name__)


class AggregationError(Exception):
    """Raised when the aggregator is configured incorrectly."""
    pass


class SampleBuffer:
    """
    Bounded, insertion-ordered store of the first ``capacity`` events.

    The total count keeps growing after the buffer is full.
    """

    def __init__(self, capacity: int = MAX_STORED_ENTRIES):
        if capacity < 1:
            raise AggregationError("Sample capacity must be positive")
        self.capacity = capacity
        self.total_count = 0
        self._items: List[SampleEvent] = []

    def __len__(self) -> int:
        return len(self._items)

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    @property
    def truncated(self) -> bool:
        return self.total_count > self.capacity

    def add(self, entry: LogEntry) -> None:
        """Count the entry and keep its projection if there is room."""
        self.total_count += 1
        if not self.is_full:
            self._items.append(
                SampleEvent(timestamp=format_instant(entry.timestamp), message=entry.message)
            )

    def to_collection(self) -> EventCollection:
        return EventCollection(
            items=tuple(self._items),
            total_count=self.total_count,
            truncated=self.truncated,
        )


class LogAggregator:
    """
    Accumulates statistics for one input file.

    Call ``observe_line`` once per input line, then either ``record_entry``
    or ``record_failure`` depending on the parse outcome (``observe`` does the
    latter dispatch). ``snapshot`` returns the summary at any point; take the
    first snapshot after the last line as the final result.

    Example:
        aggregator = LogAggregator("app.log")
        for line in lines:
            aggregator.observe_line()
            aggregator.observe(parse_line(line))
        summary = aggregator.snapshot()
    """

    def __init__(self, input_file: str, sample_capacity: int = MAX_STORED_ENTRIES):
        """
        Initialize an empty aggregator.

        Args:
            input_file: Identifier of the input, copied into the report
            sample_capacity: Max ERROR and WARN events stored (each)

        Raises:
            AggregationError: If sample_capacity is not positive
        """
        self.input_file = input_file
        self.sample_capacity = sample_capacity

        self.total_lines = 0
        self.parsed_lines = 0
        self.parse_errors = 0

        self._level_counts: Dict[LogLevel, int] = {level: 0 for level in LogLevel}
        self._first_timestamp: Optional[datetime] = None
        self._last_timestamp: Optional[datetime] = None

        self.errors = SampleBuffer(sample_capacity)
        self.warnings = SampleBuffer(sample_capacity)

    def observe_line(self) -> None:
        """Count one input line, before its parse outcome is known."""
        self.total_lines += 1

    def record_failure(self) -> None:
        """Count one line that failed to parse."""
        self.parse_errors += 1

    def record_entry(self, entry: LogEntry) -> None:
        """
        Fold one parsed entry into the running state.

        Args:
            entry: Successfully parsed line
        """
        self.parsed_lines += 1
        self._level_counts[entry.level] += 1

        ts = entry.timestamp
        if self._first_timestamp is None or ts < self._first_timestamp:
            self._first_timestamp = ts
        if self._last_timestamp is None or ts > self._last_timestamp:
            self._last_timestamp = ts

        if entry.level == LogLevel.ERROR:
            self.errors.add(entry)
        elif entry.level == LogLevel.WARN:
            self.warnings.add(entry)

    def observe(self, outcome: ParseOutcome) -> None:
        """Record a parse outcome as an entry or a failure."""
        if outcome.ok:
            self.record_entry(outcome.entry)
        else:
            self.record_failure()

    def level_count(self, level: LogLevel) -> int:
        return self._level_counts[level]

    def get_time_range(self) -> Optional[TimeRange]:
        """
        Get the earliest and latest timestamp seen so far.

        Returns:
            TimeRange, or None if no line parsed successfully
        """
        if self._first_timestamp is None or self._last_timestamp is None:
            return None
        return TimeRange(start=self._first_timestamp, end=self._last_timestamp)

    def snapshot(self) -> AnalysisSummary:
        """
        Build the summary of everything observed so far.

        State is not reset; a later call reflects later observations.

        Returns:
            Immutable AnalysisSummary
        """
        meta = AnalysisMeta(
            analyzed_at=datetime.now(timezone.utc),
            input_file=self.input_file,
            total_lines=self.total_lines,
            parsed_lines=self.parsed_lines,
            parse_errors=self.parse_errors,
        )

        summary = AnalysisSummary(
            meta=meta,
            time_range=self.get_time_range(),
            summary=LevelCounts.from_counts(self._level_counts),
            errors=self.errors.to_collection(),
            warnings=self.warnings.to_collection(),
        )

        logger.debug(
            f"Snapshot of {self.input_file}: {self.parsed_lines}/{self.total_lines} lines parsed"
        )
        return summary
