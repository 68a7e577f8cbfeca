"""
Unit tests for the data model.

Tests the Pydantic models, enums and the report key names.
"""

import json
import pytest
from datetime import datetime, timezone

from pydantic import ValidationError

from log_sentinel.data.schema import (
    AnalysisMeta,
    AnalysisSummary,
    EventCollection,
    LevelCounts,
    LogEntry,
    LogLevel,
    ParseFailure,
    ParseFailureReason,
    ParseSuccess,
    SampleEvent,
    TimeRange,
    format_instant,
)


class TestLogLevel:
    """Test LogLevel enum."""

    def test_valid_levels(self):
        """Test that exactly the four levels exist."""
        assert [level.value for level in LogLevel] == ["INFO", "WARN", "ERROR", "DEBUG"]

    def test_from_token_exact_match(self):
        """Test reverse lookup from token."""
        assert LogLevel.from_token("WARN") is LogLevel.WARN
        assert LogLevel.from_token("DEBUG") is LogLevel.DEBUG

    def test_from_token_is_case_sensitive(self):
        """Test that lowercase and variant spellings are rejected."""
        assert LogLevel.from_token("info") is None
        assert LogLevel.from_token("WARNING") is None
        assert LogLevel.from_token("") is None


class TestFormatInstant:
    """Test instant rendering."""

    def test_millisecond_precision_with_z(self):
        """Test the canonical form."""
        ts = datetime(2024, 1, 15, 8, 23, 45, 123456, tzinfo=timezone.utc)

        assert format_instant(ts) == "2024-01-15T08:23:45.123Z"

    def test_zero_milliseconds_are_kept(self):
        """Test that .000 is always written."""
        ts = datetime(2024, 1, 15, 8, 23, 45, tzinfo=timezone.utc)

        assert format_instant(ts) == "2024-01-15T08:23:45.000Z"

    def test_naive_datetime_taken_as_utc(self):
        """Test that naive datetimes are not shifted."""
        ts = datetime(2024, 1, 15, 8, 23, 45, 1000)

        assert format_instant(ts) == "2024-01-15T08:23:45.001Z"


class TestLogEntry:
    """Test LogEntry model."""

    def test_minimal_valid_entry(self):
        """Test creating a LogEntry."""
        ts = datetime(2024, 1, 15, 8, 23, 45, 123000, tzinfo=timezone.utc)

        entry = LogEntry(
            timestamp=ts,
            level=LogLevel.INFO,
            message="Server started",
            raw="2024-01-15T08:23:45.123Z [INFO] Server started",
        )

        assert entry.timestamp == ts
        assert entry.level == LogLevel.INFO
        assert entry.message == "Server started"

    def test_entry_is_immutable(self):
        """Test that fields cannot be reassigned."""
        entry = LogEntry(
            timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
            level=LogLevel.INFO,
            message="x",
            raw="x",
        )

        with pytest.raises(ValidationError):
            entry.message = "changed"

    def test_empty_message_rejected(self):
        """Test that message must not be empty."""
        with pytest.raises(ValidationError):
            LogEntry(
                timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
                level=LogLevel.INFO,
                message="",
                raw="",
            )

    def test_unknown_level_rejected(self):
        """Test that level must be one of the enum values."""
        with pytest.raises(ValidationError):
            LogEntry(
                timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
                level="TRACE",
                message="x",
                raw="x",
            )


class TestParseOutcome:
    """Test the success/failure outcome types."""

    def test_success_is_ok(self):
        """Test ParseSuccess.ok."""
        entry = LogEntry(
            timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
            level=LogLevel.INFO,
            message="x",
            raw="x",
        )

        assert ParseSuccess(entry).ok is True

    def test_failure_is_not_ok(self):
        """Test ParseFailure.ok and reason text."""
        failure = ParseFailure(reason=ParseFailureReason.EMPTY_LINE, raw="   ")

        assert failure.ok is False
        assert failure.reason.value == "empty line"
        assert failure.raw == "   "


class TestLevelCounts:
    """Test LevelCounts record."""

    def test_all_levels_present_by_default(self):
        """Test zero-initialized counts serialize every level."""
        dumped = LevelCounts().model_dump(by_alias=True)

        assert dumped == {"INFO": 0, "WARN": 0, "ERROR": 0, "DEBUG": 0}

    def test_from_counts_fills_missing_levels(self):
        """Test building from a partial mapping."""
        counts = LevelCounts.from_counts({LogLevel.ERROR: 3})

        assert counts.count(LogLevel.ERROR) == 3
        assert counts.count(LogLevel.INFO) == 0

    def test_negative_count_rejected(self):
        """Test that counts are non-negative."""
        with pytest.raises(ValidationError):
            LevelCounts(info=-1)


class TestEventCollection:
    """Test EventCollection invariants."""

    def test_not_truncated_when_all_items_kept(self):
        """Test consistent untruncated collection."""
        items = (SampleEvent(timestamp="2024-01-15T08:23:45.123Z", message="boom"),)

        collection = EventCollection(items=items, total_count=1, truncated=False)

        assert collection.total_count == 1
        assert not collection.truncated

    def test_truncated_flag_must_match_counts(self):
        """Test that a wrong truncated flag is rejected."""
        items = (SampleEvent(timestamp="2024-01-15T08:23:45.123Z", message="boom"),)

        with pytest.raises(ValidationError):
            EventCollection(items=items, total_count=5, truncated=False)
        with pytest.raises(ValidationError):
            EventCollection(items=items, total_count=1, truncated=True)

    def test_more_items_than_total_rejected(self):
        """Test items cannot exceed totalCount."""
        items = (
            SampleEvent(timestamp="2024-01-15T08:23:45.123Z", message="a"),
            SampleEvent(timestamp="2024-01-15T08:23:45.124Z", message="b"),
        )

        with pytest.raises(ValidationError):
            EventCollection(items=items, total_count=1, truncated=False)


class TestAnalysisMeta:
    """Test AnalysisMeta model."""

    def test_line_totals_must_add_up(self):
        """Test totalLines == parsedLines + parseErrors is enforced."""
        with pytest.raises(ValidationError):
            AnalysisMeta(
                analyzed_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
                input_file="app.log",
                total_lines=3,
                parsed_lines=1,
                parse_errors=1,
            )


class TestTimeRange:
    """Test TimeRange model."""

    def test_start_after_end_rejected(self):
        """Test that the range cannot be inverted."""
        with pytest.raises(ValidationError):
            TimeRange(
                start=datetime(2024, 1, 16, tzinfo=timezone.utc),
                end=datetime(2024, 1, 15, tzinfo=timezone.utc),
            )


class TestAnalysisSummary:
    """Test the report document shape."""

    def _summary(self, time_range=None) -> AnalysisSummary:
        return AnalysisSummary(
            meta=AnalysisMeta(
                analyzed_at=datetime(2024, 1, 15, 9, 0, 0, tzinfo=timezone.utc),
                input_file="logs.txt",
                total_lines=2,
                parsed_lines=1,
                parse_errors=1,
            ),
            time_range=time_range,
            summary=LevelCounts(error=1),
            errors=EventCollection(
                items=(SampleEvent(timestamp="2024-01-15T08:23:45.123Z", message="boom"),),
                total_count=1,
                truncated=False,
            ),
        )

    def test_report_keys(self):
        """Test field names and nesting of the serialized document."""
        doc = json.loads(self._summary().to_json())

        assert set(doc) == {"meta", "timeRange", "summary", "errors", "warnings"}
        assert set(doc["meta"]) == {
            "analyzedAt", "inputFile", "totalLines", "parsedLines", "parseErrors"
        }
        assert set(doc["errors"]) == {"items", "totalCount", "truncated"}
        assert doc["errors"]["items"] == [
            {"timestamp": "2024-01-15T08:23:45.123Z", "message": "boom"}
        ]
        assert doc["meta"]["analyzedAt"] == "2024-01-15T09:00:00.000Z"

    def test_null_time_range_is_written(self):
        """Test that a missing time range serializes as null."""
        doc = json.loads(self._summary().to_json())

        assert doc["timeRange"] is None

    def test_time_range_uses_instant_format(self):
        """Test start/end rendering."""
        ts = datetime(2024, 1, 15, 8, 23, 45, 123000, tzinfo=timezone.utc)

        doc = json.loads(self._summary(TimeRange(start=ts, end=ts)).to_json())

        assert doc["timeRange"] == {
            "start": "2024-01-15T08:23:45.123Z",
            "end": "2024-01-15T08:23:45.123Z",
        }

    def test_round_trip(self):
        """Test that a serialized report reads back to the same values."""
        ts = datetime(2024, 1, 15, 8, 23, 45, 123000, tzinfo=timezone.utc)
        original = self._summary(TimeRange(start=ts, end=ts))

        restored = AnalysisSummary.model_validate_json(original.to_json())

        assert restored == original
        assert restored.to_json() == original.to_json()
