"""
Mindtrace Utils - logging, text and timestamp helpers.
"""

from mindtrace.utils.logging import setup_logging, get_logger
from mindtrace.utils.text import parse_timestamp, truncate, utc_now

__all__ = [
    "setup_logging",
    "get_logger",
    "parse_timestamp",
    "truncate",
    "utc_now",
]
