"""Connection port and its FTP/SFTP adapters."""

from .ftp_file import FtpFile
from .port import Connection, join_remote_path
from .ftp_connection import FtpConnection
from .sftp_connection import SftpConnection

__all__ = [
    "Connection",
    "FtpConnection",
    "FtpFile",
    "SftpConnection",
    "join_remote_path",
]
