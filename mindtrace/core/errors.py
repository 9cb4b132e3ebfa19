"""
Exception types for Mindtrace.

The graph and timeline engines never raise for bad data; these cover
configuration and snapshot loading only.
"""

from __future__ import annotations


class MindtraceError(Exception):
    """Base class for all Mindtrace errors."""


class ConfigError(MindtraceError, ValueError):
    """Raised when a configuration file or value is invalid."""


class SnapshotError(MindtraceError):
    """Raised when a snapshot file cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load snapshot {path}: {reason}")
