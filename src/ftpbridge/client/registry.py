"""
Client Registry - Central registration and resolution of protocol clients

The ClientRegistry maintains a mapping of protocol names to Client classes,
so callers can pick a backend from configuration instead of importing it.
"""

from typing import Dict, Optional, Type

from ..config import Settings, get_settings
from .base import Client


class ClientRegistry:
    """
    Registry for protocol client implementations.

    Usage:
        # Register a client (done for "ftp" and "sftp" on package import)
        ClientRegistry.register("ftp", FtpClient)

        # Get a client instance at runtime
        client = ClientRegistry.get("sftp")
        client.set_host("sftp.example.com")

    Registration should happen only at import time in the main thread.
    """

    _clients: Dict[str, Type[Client]] = {}

    @classmethod
    def register(cls, protocol: str, implementation: Type[Client]) -> None:
        """
        Register a client implementation.

        Args:
            protocol: Protocol name (e.g., 'sftp'), case-insensitive
            implementation: Class inheriting from Client

        Raises:
            ValueError: If protocol is empty or implementation doesn't inherit from Client
            RuntimeError: If protocol is already registered (prevents accidental override)
        """
        if not protocol or not protocol.strip():
            raise ValueError("protocol cannot be empty")

        if not isinstance(implementation, type) or not issubclass(implementation, Client):
            raise ValueError(
                f"Implementation must inherit from Client, "
                f"got {getattr(implementation, '__name__', implementation)!r}"
            )

        key = protocol.strip().lower()
        if key in cls._clients:
            raise RuntimeError(
                f"Protocol '{key}' is already registered. "
                f"Use unregister() first if you need to replace it."
            )

        cls._clients[key] = implementation

    @classmethod
    def get_class(cls, protocol: str) -> Type[Client]:
        """
        Get the client class registered for a protocol.

        Raises:
            ValueError: If protocol is not registered
        """
        key = (protocol or "").strip().lower()
        if key not in cls._clients:
            available = ', '.join(sorted(cls._clients)) if cls._clients else 'none'
            raise ValueError(
                f"Unknown protocol: '{protocol}'. "
                f"Available protocols: {available}"
            )
        return cls._clients[key]

    @classmethod
    def get(cls, protocol: str) -> Client:
        """
        Get a new, unconfigured client instance for a protocol.

        Raises:
            ValueError: If protocol is not registered
        """
        return cls.get_class(protocol)()

    @classmethod
    def list_protocols(cls) -> list[str]:
        """
        List all registered protocol names.

        Example:
            >>> ClientRegistry.list_protocols()
            ['ftp', 'sftp']
        """
        return sorted(cls._clients.keys())

    @classmethod
    def is_registered(cls, protocol: str) -> bool:
        return (protocol or "").strip().lower() in cls._clients

    @classmethod
    def unregister(cls, protocol: str) -> None:
        """
        Remove a client from the registry.

        Raises:
            ValueError: If protocol is not registered
        """
        key = (protocol or "").strip().lower()
        if key not in cls._clients:
            raise ValueError(f"Protocol '{protocol}' is not registered")

        del cls._clients[key]

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered clients.

        Only meant for tests.
        """
        cls._clients.clear()


def register_default_clients() -> None:
    """Register the built-in FTP and SFTP clients if they are missing."""
    from .ftp_client import FtpClient
    from .sftp_client import SftpClient

    for implementation in (FtpClient, SftpClient):
        if not ClientRegistry.is_registered(implementation.PROTOCOL):
            ClientRegistry.register(implementation.PROTOCOL, implementation)


def create_client(settings: Optional[Settings] = None) -> Client:
    """Build a configured, unconnected client from settings.

    Args:
        settings: Settings to use (default: get_settings())

    Returns:
        Client: FtpClient or SftpClient depending on settings.PROTOCOL

    Raises:
        ValueError: If settings.PROTOCOL is not registered
    """
    settings = settings or get_settings()
    implementation = ClientRegistry.get_class(settings.PROTOCOL)
    return implementation.from_settings(settings)
