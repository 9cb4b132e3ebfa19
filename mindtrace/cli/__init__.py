"""Mindtrace command line interface."""

from mindtrace.cli.main import app, main

__all__ = ["app", "main"]
