"""Protocol clients and their registry."""

from .base import Client
from .ftp_client import FtpClient
from .sftp_client import SftpClient
from .registry import ClientRegistry, create_client, register_default_clients

register_default_clients()

__all__ = [
    "Client",
    "ClientRegistry",
    "FtpClient",
    "SftpClient",
    "create_client",
    "register_default_clients",
]
