"""Structured JSON logging for the ftpbridge package logger.

ftpbridge never configures logging on import. Applications that want the
JSON format call configure_logging(), which only touches the "ftpbridge"
logger; the root logger and any handlers the application installed are
left alone.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional, TextIO

from ..config import Settings, get_settings
from .session import NO_SESSION_ID

PACKAGE_LOGGER = "ftpbridge"
PLAIN_FORMAT = "%(asctime)s - %(levelname)s - %(session_id)s - %(name)s - %(message)s"

# Extra record fields copied into the JSON payload when a logger supplies them
CONTEXT_FIELDS = ("protocol", "host")


class SessionIDFilter(logging.Filter):
    """Give records logged outside a session the placeholder session_id.

    Records from a SessionLogger already carry their own ID and are
    left untouched.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "session_id", None):
            record.session_id = NO_SESSION_ID
        return True


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "session_id": getattr(record, "session_id", NO_SESSION_ID),
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["error"] = str(record.exc_info[1])
            log_data["traceback"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class _PackageHandler(logging.StreamHandler):
    """Marker type so configure_logging() can find the handler it installed."""


def configure_logging(
    level: str = "INFO",
    json_format: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Attach a formatted handler to the ftpbridge package logger.

    Calling it again replaces the handler from the previous call instead of
    adding a second one.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: If True, use JSONFormatter; otherwise a plain text format
        stream: Output stream (default: sys.stderr)

    Returns:
        logging.Handler: The installed handler
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level.upper())

    for handler in list(package_logger.handlers):
        if isinstance(handler, _PackageHandler):
            package_logger.removeHandler(handler)
            handler.close()

    handler = _PackageHandler(stream)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(PLAIN_FORMAT))
    handler.addFilter(SessionIDFilter())
    package_logger.addHandler(handler)

    # paramiko logs every packet-level event of the transport at DEBUG/INFO
    logging.getLogger("paramiko.transport").setLevel(logging.WARNING)

    return handler


def configure_logging_from_settings(settings: Optional[Settings] = None) -> logging.Handler:
    """Configure logging from the LOG_LEVEL and LOG_JSON settings."""
    settings = settings or get_settings()
    return configure_logging(settings.LOG_LEVEL, json_format=settings.LOG_JSON)
