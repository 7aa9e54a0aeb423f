"""Logging configuration for Schema Compat using structlog.

Console output is always human-readable through Rich; an optional log file
receives JSON lines for machine parsing.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

import structlog
from rich.console import Console
from rich.logging import RichHandler
from structlog.typing import EventDict, WrappedLogger

from schema_compat import __version__

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def add_app_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to log entries.

    Args:
        logger: The wrapped logger instance
        method_name: The name of the logger method called
        event_dict: The event dictionary to be logged

    Returns:
        EventDict: Modified event dictionary with app context
    """
    event_dict["app"] = "schema-compat"
    event_dict["version"] = __version__
    return event_dict


def _strip_ansi_codes(text: str) -> str:
    """Remove ANSI escape codes from text."""
    return _ANSI_PATTERN.sub("", text)


class JSONFileFormatter(logging.Formatter):
    """Formatter that writes one JSON object per record for file logging.

    structlog has already rendered the event with ConsoleRenderer, so the
    message is taken as-is and wrapped with record metadata.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": _strip_ansi_codes(record.getMessage()),
            "app": "schema-compat",
            "version": __version__,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def configure_logging(
    level: str = "WARNING",
    log_format: str = "json",
    log_file: str | None = None,
    file_level: str | None = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: WARNING
        log_format: File output format ('json' or 'console'). Console output is
                   always human-readable.
        log_file: Optional path to log file
        file_level: File log level (defaults to DEBUG)
    """
    console_level = getattr(logging, level.upper(), logging.WARNING)
    file_log_level = getattr(logging, (file_level or "DEBUG").upper(), logging.DEBUG)

    rich_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,  # structlog adds timestamps
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(console_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # handlers filter
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(rich_handler)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(colors=False),  # RichHandler handles coloring
    ]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(file_log_level)
        if log_format == "json":
            file_handler.setFormatter(JSONFileFormatter())
        else:
            file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(file_handler)

    # The bound logger filters at the most verbose of the two handler levels
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            min(console_level, file_log_level) if log_file else console_level
        ),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional logger name (typically __name__)

    Returns:
        structlog.stdlib.BoundLogger: Configured logger instance
    """
    return structlog.get_logger(name)
