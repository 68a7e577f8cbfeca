"""
log-sentinel: single-pass log file analyzer.

Reads a line-oriented log file, folds every line into aggregate statistics
and bounded samples of ERROR/WARN events, and writes one JSON report.
"""

__version__ = "1.0.0"
