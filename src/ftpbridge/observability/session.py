"""Session-scoped log correlation.

Every Client.connect() starts a session with a fresh ID. The client and the
Connection it hands out both log through a SessionLogger bound to that ID,
so two clients open side by side never share one.
"""

import logging
import uuid
from typing import Any, MutableMapping, Optional, Tuple

NO_SESSION_ID = "no-session-id"


def new_session_id() -> str:
    """Generate a short random session ID (12 hex characters)."""
    return uuid.uuid4().hex[:12]


class SessionLogger(logging.LoggerAdapter):
    """Logger adapter that stamps session_id (plus fixed fields) on every record.

    Example:
        log = SessionLogger(logging.getLogger(__name__), session_id, protocol="ftp")
        log.info("Listing /pub")   # record.session_id, record.protocol are set
    """

    def __init__(self, logger: logging.Logger, session_id: Optional[str] = None, **fields: Any):
        super().__init__(logger, {"session_id": session_id or NO_SESSION_ID, **fields})

    @property
    def session_id(self) -> str:
        return self.extra["session_id"]

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        # Per-call extra wins over the bound fields
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs
