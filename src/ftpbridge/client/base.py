"""Client base class - host, port and credential holder for every backend.

Concrete clients (FtpClient, SftpClient) open a session with their
protocol library and hand back a Connection adapter.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..config import Settings
from ..connection.port import Connection
from ..exceptions import ConnectionInitialisationException, FtpException
from ..observability.session import SessionLogger, new_session_id

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "anonymous"
DEFAULT_PASSWORD = ""
DEFAULT_TIMEOUT = 30.0


class Client(ABC):
    """Base class for transfer-protocol clients.

    Credentials default to an anonymous login. The port defaults to the
    protocol's well-known port (DEFAULT_PORT on the subclass).

    Example:
        client = SftpClient()
        client.set_host("sftp.example.com")
        client.set_credentials("user", "secret")

        with client as connection:
            files = connection.list_files()
    """

    PROTOCOL: str = ""
    DEFAULT_PORT: int = 0

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: str = DEFAULT_USERNAME,
        password: str = DEFAULT_PASSWORD,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.host = host
        self.port = port if port is not None else self.DEFAULT_PORT
        self.username = username
        self.password = password
        self.timeout = timeout
        self.session_id: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Client":
        """Build a client configured from Settings.

        Args:
            settings: Loaded Settings instance

        Returns:
            Client: Unconnected client
        """
        client = cls(
            host=settings.HOST,
            port=settings.PORT,
            username=settings.USERNAME,
            password=settings.PASSWORD.get_secret_value(),
            timeout=settings.TIMEOUT,
        )
        client._apply_settings(settings)
        return client

    def _apply_settings(self, settings: Settings) -> None:
        """Hook for protocol-specific settings."""
        pass

    def set_credentials(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    def set_host(self, host: str) -> None:
        self.host = host

    def set_port(self, port: int) -> None:
        self.port = port

    @abstractmethod
    def connect(self) -> Connection:
        """Open a session with the server.

        Returns:
            Connection: Adapter over the open session

        Raises:
            ConnectionInitialisationException: If the server cannot be reached
                or the login is refused
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the session opened by connect().

        Raises:
            ClientDisconnectionException: If no session was opened, or it
                cannot be closed cleanly
        """
        pass

    def _begin_session(self) -> None:
        """Validate the target and start a new session with a fresh ID."""
        if not self.host:
            raise ConnectionInitialisationException("No host has been set.")

        self.session_id = new_session_id()
        self._session_logger().info(
            f"Connecting to {self.PROTOCOL} server {self.host}:{self.port} as {self.username}"
        )

    def _abort_session(self) -> None:
        """Forget the session started by a connect() that then failed."""
        self.session_id = None

    def _end_session(self) -> None:
        self._session_logger().info(f"Disconnected from {self.PROTOCOL} server {self.host}:{self.port}")
        self.session_id = None

    def _session_logger(self, module_logger: logging.Logger = logger) -> SessionLogger:
        """Logger stamping this client's session ID, protocol and host on records."""
        return SessionLogger(module_logger, self.session_id, protocol=self.PROTOCOL, host=self.host)

    def __enter__(self) -> Connection:
        """Context manager entry - connect and return the Connection."""
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - disconnect.

        If the block raised, a failing disconnect is logged and the block's
        exception propagates unchanged.
        """
        if exc_type is None:
            self.disconnect()
            return False

        try:
            self.disconnect()
        except FtpException as e:
            self._session_logger().warning(
                f"Disconnect after {exc_type.__name__} also failed: {e}"
            )
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(host={self.host!r}, port={self.port}, username={self.username!r})"
