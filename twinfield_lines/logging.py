"""Structured logging configuration for twinfield-lines."""

from __future__ import annotations

import logging
import sys
from typing import IO, TYPE_CHECKING, Any

from twinfield_lines.exceptions import ConfigurationError

if TYPE_CHECKING:
    from twinfield_lines.config import LinesConfig

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def build_formatter(format_type: str) -> logging.Formatter:
    """Return the formatter for ``"standard"`` or ``"json"`` output."""
    if format_type == "json":
        return JsonFormatter()
    if format_type == "standard":
        return logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    raise ConfigurationError(f"Unknown log format: {format_type!r}")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: IO[str] | None = None,
) -> None:
    """Configure logging for twinfield-lines.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names
        fall back to INFO.
    format_type : str
        Format type: "standard" or "json".
    stream : IO[str] | None
        Output stream, stdout by default.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = build_formatter(format_type)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("twinfield_lines").setLevel(log_level)
    # Faker logs every provider lookup at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


def configure_logging(config: LinesConfig) -> None:
    """Apply the logging settings of a ``LinesConfig``."""
    setup_logging(config.log_level, config.log_format)


class JsonFormatter(logging.Formatter):
    """JSON log formatter.

    Context passed as ``extra={"extra": {...}}`` (the line kind, line type and
    field of a rejected set, for instance) is merged into the top-level object.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        import json
        from datetime import datetime, timezone

        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_data.update(record.extra)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name (usually ``__name__``)."""
    return logging.getLogger(name)
