"""
Log ingestion from text files.

Streams a log file one line at a time so files larger than memory can be
analyzed. Lines are handed over undecorated; parsing is deferred to the
parser layer.

Design:
- Iterator-based, forward-only, consumed once (reopen to restart)
- Universal newlines: ``\\r\\n`` is one terminator, not a blank line
- Blank lines are yielded; they are input lines like any other
- Undecodable bytes become U+FFFD; they never abort a run
- Open and read failures raise LogIngestionError, which is distinct from
  simply reaching the end of the file
"""

import logging
from pathlib import Path
from typing import Iterator, Union

from log_sentinel.core.exceptions import LogIngestionError

logger = logging.getLogger(__name__)

DEFAULT_READ_BUFFER_SIZE = 64 * 1024


class TextLineSource:
    """
    Sequential feed of text lines from one file.

    Example input:
        2024-01-15T08:23:45.123Z [INFO] Server started on port 3000
        2024-01-15T08:23:46.001Z [ERROR] Database connection refused
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        encoding: str = "utf-8",
        buffer_size: int = DEFAULT_READ_BUFFER_SIZE,
    ):
        """
        Initialize log source.

        Args:
            filepath: Path to log file
            encoding: File encoding (default utf-8)
            buffer_size: Read buffer size in bytes

        Raises:
            LogIngestionError: If the path does not exist, is not a file or
                cannot be accessed
        """
        self.filepath = Path(filepath)
        self.encoding = encoding
        self.buffer_size = buffer_size

        try:
            exists = self.filepath.exists()
            is_file = exists and self.filepath.is_file()
        except OSError as e:
            # e.g. a parent directory without search permission
            raise LogIngestionError(f"Cannot access log file {self.filepath}: {e}") from e

        if not exists:
            raise LogIngestionError(f"Log file not found: {self.filepath}")
        if not is_file:
            raise LogIngestionError(f"Log path is not a file: {self.filepath}")

    def __iter__(self) -> Iterator[str]:
        return self.lines()

    def lines(self) -> Iterator[str]:
        """
        Read the file line by line.

        Yields:
            Each line with its terminator removed and nothing else changed

        Raises:
            LogIngestionError: If the file cannot be opened or read, or the
                encoding is unknown
        """
        try:
            with open(
                self.filepath,
                "r",
                encoding=self.encoding,
                errors="replace",
                newline=None,
                buffering=self.buffer_size,
            ) as f:
                for line in f:
                    yield line[:-1] if line.endswith("\n") else line
        except (OSError, LookupError) as e:
            logger.error(f"Error reading log file {self.filepath}: {e}")
            raise LogIngestionError(f"Failed to read file: {e}") from e


def stream_lines(
    filepath: Union[str, Path],
    encoding: str = "utf-8",
    buffer_size: int = DEFAULT_READ_BUFFER_SIZE,
) -> Iterator[str]:
    """
    Convenience function to stream lines from a log file.

    Args:
        filepath: Path to log file
        encoding: File encoding
        buffer_size: Read buffer size in bytes

    Yields:
        Lines of the file, terminators removed

    Raises:
        LogIngestionError: If file not found or unreadable

    Example:
        for line in stream_lines("app.log"):
            outcome = parse_line(line)
            ...
    """
    source = TextLineSource(filepath, encoding=encoding, buffer_size=buffer_size)
    yield from source.lines()
