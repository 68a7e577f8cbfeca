"""
Command-line entry point.

    log-sentinel <input_file> <output_file>

Exit codes: 0 on success, 1 when the log cannot be read or the report cannot
be written, 2 on bad arguments.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from log_sentinel import __version__
from log_sentinel.core.config import LOG_LEVELS
from log_sentinel.core.exceptions import ArgumentError, LogSentinelError
from log_sentinel.core.logging_config import setup_logging
from log_sentinel.data.reporting import format_summary
from log_sentinel.pipeline import run_analysis

logger = logging.getLogger(__name__)


class CLIOptions(BaseModel):
    """Validated positional arguments."""

    input_file: str = Field(..., min_length=1, description="Input log file path is required")
    output_file: str = Field(..., min_length=1, description="Output report path is required")


def validate_args(input_file: str, output_file: str) -> CLIOptions:
    """
    Validate positional arguments.

    Raises:
        ArgumentError: If either path is empty
    """
    try:
        return CLIOptions(input_file=input_file, output_file=output_file)
    except ValidationError as e:
        details = "\n".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ArgumentError(f"Invalid CLI arguments:\n{details}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="log-sentinel",
        description="Analyze a log file and write a JSON summary report",
        epilog="Example: log-sentinel logs.txt report.json",
    )
    parser.add_argument("input_file", help="Log file to analyze")
    parser.add_argument("output_file", help="Where to write the JSON report")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        help="Logging level (defaults to LOG_SENTINEL_LOG_LEVEL or INFO)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not print the summary")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = validate_args(args.input_file, args.output_file)
    except ArgumentError as e:
        parser.error(str(e))

    setup_logging(level=args.log_level)

    try:
        summary = run_analysis(options.input_file, options.output_file)
    except LogSentinelError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print("\n✓ Analysis complete!")
        print(format_summary(summary))
        print(f"\nReport written to: {options.output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
