"""
Report output.

Writes an AnalysisSummary to disk as one JSON document, and renders a short
human-readable version for the console.

Design:
- The document is written to a temporary file next to the destination and
  moved into place with ``os.replace``, so a failed write never leaves a
  truncated report behind (and never clobbers an existing one)
- The report gets the permissions a plain write would give it: those of
  the file it replaces, or the umask default for a new file
- Any failure surfaces as ReportWriteError
"""

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from log_sentinel.core.exceptions import ReportWriteError
from log_sentinel.data.schema import AnalysisSummary, LogLevel, format_instant

logger = logging.getLogger(__name__)


def _report_mode(output_path: Path) -> int:
    """Permission bits for the report: the existing file's, else the umask default."""
    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_report(summary: AnalysisSummary, output_path: Union[str, Path]) -> Path:
    """
    Write the analysis summary to a JSON file.

    Args:
        summary: The summary to persist
        output_path: Destination path of the report

    Returns:
        The destination path

    Raises:
        ReportWriteError: If the report cannot be written
    """
    output_path = Path(output_path)
    directory = output_path.parent
    payload = summary.to_json(indent=2)

    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=directory,
            prefix=f".{output_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        # NamedTemporaryFile creates the file owner-only
        os.chmod(tmp_path, _report_mode(output_path))
        os.replace(tmp_path, output_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        logger.error(f"Error writing report {output_path}: {e}")
        raise ReportWriteError(f"Failed to write report: {e}") from e

    logger.info(f"Report written to {output_path}")
    return output_path


def format_summary(summary: AnalysisSummary) -> str:
    """
    Create a human-readable summary of an analysis.

    Args:
        summary: Summary to render

    Returns:
        Multi-line string

    Example output:
        Total lines: 3
        Parsed lines: 2
        Parse errors: 1

        Log level counts:
          INFO: 1
          WARN: 0
          ERROR: 1
          DEBUG: 0

        Time range: 2024-01-15T08:23:45.123Z to 2024-01-15T08:30:00.000Z
    """
    meta = summary.meta
    lines = [
        f"Total lines: {meta.total_lines}",
        f"Parsed lines: {meta.parsed_lines}",
        f"Parse errors: {meta.parse_errors}",
        "",
        "Log level counts:",
    ]
    for level in LogLevel:
        lines.append(f"  {level.value}: {summary.summary.count(level)}")

    lines.append("")
    if summary.time_range is None:
        lines.append("Time range: none (no parsed lines)")
    else:
        lines.append(
            f"Time range: {format_instant(summary.time_range.start)} "
            f"to {format_instant(summary.time_range.end)}"
        )

    for label, collection in (("errors", summary.errors), ("warnings", summary.warnings)):
        if collection.truncated:
            lines.append(
                f"Note: {collection.total_count} {label}, first {len(collection.items)} kept in report"
            )

    return "\n".join(lines)
