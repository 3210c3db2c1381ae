"""ftpbridge - one connect/list/download/upload interface over FTP and SFTP.

Example:
    from ftpbridge import SftpClient

    with SftpClient(host="sftp.example.com", username="user", password="secret") as connection:
        connection.set_remote_directory("/outgoing")
        for remote_file in connection.list_files():
            connection.download(remote_file, "/tmp/inbox")
"""

from .client import Client, ClientRegistry, FtpClient, SftpClient, create_client
from .config import Settings, get_settings
from .connection import Connection, FtpConnection, FtpFile, SftpConnection
from .observability import configure_logging, configure_logging_from_settings
from .exceptions import (
    ClientDisconnectionException,
    ConnectionInitialisationException,
    DownloadFailedException,
    FileListingException,
    FtpException,
    NoSuchDirectoryException,
    UploadFailedException,
)

__version__ = "1.0.0"

__all__ = [
    "Client",
    "ClientRegistry",
    "FtpClient",
    "SftpClient",
    "create_client",
    "Settings",
    "get_settings",
    "Connection",
    "FtpConnection",
    "FtpFile",
    "SftpConnection",
    "FtpException",
    "NoSuchDirectoryException",
    "FileListingException",
    "DownloadFailedException",
    "UploadFailedException",
    "ConnectionInitialisationException",
    "ClientDisconnectionException",
    "configure_logging",
    "configure_logging_from_settings",
]
