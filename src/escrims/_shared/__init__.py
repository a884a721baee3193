# Area: Shared
"""
Shared utilities used across the lifecycle, organizer and matchmaking code.

This package contains:
- Logging configuration
- A logging notification sink
- An in-memory user directory
"""

from .logging_config import setup_logging, log_scrim_error, TerminalFormatter, JSONFormatter
from .notifications import LoggingNotificationSink
from .directory import InMemoryUserDirectory

__all__ = [
    "setup_logging",
    "log_scrim_error",
    "TerminalFormatter",
    "JSONFormatter",
    "LoggingNotificationSink",
    "InMemoryUserDirectory",
]
