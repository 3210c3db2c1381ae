"""Observability module for ftpbridge.

Provides opt-in structured logging and per-session log correlation.
"""

from .logging_config import (
    JSONFormatter,
    SessionIDFilter,
    configure_logging,
    configure_logging_from_settings,
)
from .session import NO_SESSION_ID, SessionLogger, new_session_id

__all__ = [
    # Logging
    "JSONFormatter",
    "SessionIDFilter",
    "configure_logging",
    "configure_logging_from_settings",
    # Sessions
    "NO_SESSION_ID",
    "SessionLogger",
    "new_session_id",
]
