"""Domain exceptions raised by ftpbridge clients and connections.

Every backend error (ftplib, paramiko, socket) is caught at the operation
boundary and re-raised as one of these, with the original error chained
as ``__cause__``.
"""


class FtpException(Exception):
    """Base exception for all transfer operations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class NoSuchDirectoryException(FtpException):
    """Raised when the remote directory cannot be entered."""
    pass


class FileListingException(FtpException):
    """Raised when a remote directory listing fails."""
    pass


class DownloadFailedException(FtpException):
    """Raised when a remote file cannot be fetched or written locally."""
    pass


class UploadFailedException(FtpException):
    """Raised when a local file cannot be read or stored remotely."""
    pass


class ConnectionInitialisationException(FtpException):
    """Raised when the client cannot connect or authenticate."""
    pass


class ClientDisconnectionException(FtpException):
    """Raised when the client cannot be disconnected cleanly."""
    pass
