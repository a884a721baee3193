# Area: Shared
"""
escrims._shared.logging_config — Structured logging setup
=========================================================

Configures dual logging for the ``escrims`` logger hierarchy:
a colored terminal stream and a JSON-lines file. Loggers used by the
package:

    escrims.lifecycle     state transitions, applications
    escrims.organizer     executed and undone organizer actions
    escrims.matchmaking   selection summaries
    escrims.repository    persistence
    escrims.notifications lifecycle events delivered to the log sink
"""

from __future__ import annotations
import copy
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ..errors import ScrimError

# Package logger
logger = logging.getLogger("escrims")

# Extra record attributes copied into JSON lines when present
CONTEXT_FIELDS = ("scrim_id", "state", "event", "error_type")


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Other handlers share the record, so color a copy
        colored = copy.copy(record)
        color = self.COLORS.get(record.levelname, self.RESET)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class JSONFormatter(logging.Formatter):
    """One JSON object per line for file output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def setup_logging(
    log_file_path: str = "escrims.log",
    level: Union[int, str] = logging.INFO,
) -> logging.Logger:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str
        Path to the JSON-lines log file.
    level : int or str
        Logging level, e.g. ``logging.DEBUG`` or ``"DEBUG"``.

    Returns
    -------
    logging.Logger
        The configured ``escrims`` logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    pkg_logger = logging.getLogger("escrims")
    pkg_logger.setLevel(level)
    # Replace only handlers installed by an earlier call
    for handler in list(pkg_logger.handlers):
        if isinstance(handler.formatter, (TerminalFormatter, JSONFormatter)):
            pkg_logger.removeHandler(handler)
            handler.close()

    terminal_handler = logging.StreamHandler(sys.stdout)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    pkg_logger.addHandler(terminal_handler)

    try:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        pkg_logger.addHandler(file_handler)
    except OSError as e:
        pkg_logger.warning(f"Could not create log file: {e}")

    pkg_logger.propagate = False
    return pkg_logger


def log_scrim_error(error: "ScrimError") -> None:
    """
    Log a rejected scrim operation in the structured format.

    The formatted block goes to stderr as-is; a one-line ERROR record
    carrying the scrim id and error type goes through the logger.
    """
    print(error.format_error_log(), file=sys.stderr)
    logger.error(
        f"Scrim operation rejected: {error.__class__.__name__}: {error.message}",
        extra={
            "scrim_id": error.scrim_id,
            "state": error.state,
            "error_type": error.error_type,
        },
    )
