"""
End-to-end analysis pipeline.

Wires the pieces together in a single forward pass:

    Log file
        ↓
    Line source (log_sentinel/data/ingestion.py)
        ↓
    Parser (log_sentinel/data/parsers.py) → ParseOutcome
        ↓
    Aggregator (log_sentinel/data/aggregation.py) → AnalysisSummary
        ↓
    Report (log_sentinel/data/reporting.py) → JSON file

Source errors abort the run before anything is written.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from log_sentinel.core.config import Config, config
from log_sentinel.data.aggregation import LogAggregator
from log_sentinel.data.ingestion import TextLineSource
from log_sentinel.data.parsers import BaseParser, StandardTextLineParser
from log_sentinel.data.reporting import write_report
from log_sentinel.data.schema import AnalysisSummary

logger = logging.getLogger(__name__)


def analyze_log_file(
    input_file: Union[str, Path],
    settings: Optional[Config] = None,
    parser: Optional[BaseParser] = None,
) -> AnalysisSummary:
    """
    Read, parse and aggregate one log file.

    Args:
        input_file: Path to the log file; recorded verbatim in the report
        settings: Configuration (module-level config if omitted)
        parser: Line parser (standard text parser if omitted)

    Returns:
        Summary of the whole file

    Raises:
        LogIngestionError: If the file cannot be opened or read
    """
    settings = settings or config
    parser = parser or StandardTextLineParser()

    source = TextLineSource(
        input_file,
        encoding=settings.ingestion.encoding,
        buffer_size=settings.ingestion.read_buffer_size,
    )
    aggregator = LogAggregator(
        str(input_file),
        sample_capacity=settings.analysis.sample_capacity,
    )

    logger.info(f"Analyzing log file: {input_file}")
    for line_number, line in enumerate(source, start=1):
        aggregator.observe_line()
        outcome = parser.parse(line)
        if not outcome.ok:
            logger.debug(f"Line {line_number} skipped: {outcome.reason.value}")
        aggregator.observe(outcome)

    summary = aggregator.snapshot()
    logger.info(
        f"Analyzed {summary.meta.total_lines} lines "
        f"({summary.meta.parsed_lines} parsed, {summary.meta.parse_errors} errors)"
    )
    return summary


def run_analysis(
    input_file: Union[str, Path],
    output_file: Union[str, Path],
    settings: Optional[Config] = None,
) -> AnalysisSummary:
    """
    Analyze a log file and write the JSON report.

    Args:
        input_file: Path to the log file
        output_file: Destination of the report
        settings: Configuration (module-level config if omitted)

    Returns:
        The summary that was written

    Raises:
        LogIngestionError: If the log cannot be read (nothing is written)
        ReportWriteError: If the report cannot be written
    """
    summary = analyze_log_file(input_file, settings=settings)
    write_report(summary, output_file)
    return summary
