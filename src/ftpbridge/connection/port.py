"""Connection Port - Backend-neutral interface for remote file operations.

FtpConnection (ftplib) and SftpConnection (paramiko) implement this
interface so callers can list, download and upload files without knowing
which protocol is in use.

Architecture: Hexagonal - Port interface, adapters live beside it
"""

from abc import ABC, abstractmethod
from typing import List

from .ftp_file import FtpFile

REMOTE_SEPARATOR = "/"


def join_remote_path(directory: str, name: str) -> str:
    """Join a remote directory and an entry name with a single '/'.

    A trailing slash on the directory is tolerated, so "remote/dir" and
    "remote/dir/" both give "remote/dir/name".

    Args:
        directory: Remote directory (may be empty)
        name: Entry name

    Returns:
        str: Joined remote path
    """
    if not directory:
        return name
    return f"{directory.rstrip(REMOTE_SEPARATOR)}{REMOTE_SEPARATOR}{name}"


def listing_base_path(current_directory: str, relative_path: str) -> str:
    """Directory that listed entry names are joined onto.

    An absolute path replaces the working directory instead of being
    appended to it.
    """
    if relative_path in ("", "."):
        return current_directory
    if relative_path.startswith(REMOTE_SEPARATOR):
        return relative_path
    return join_remote_path(current_directory, relative_path)


class Connection(ABC):
    """Port interface for an open session with a remote file server.

    Every method either succeeds or raises a subclass of FtpException;
    the backend library's own errors never escape.

    Example Usage:
        connection = client.connect()
        connection.set_remote_directory("/outgoing")

        for remote_file in connection.list_files():
            if not remote_file.is_directory:
                connection.download(remote_file, "/tmp/inbox")

        connection.upload("/tmp/report.csv", "/incoming/")
    """

    @abstractmethod
    def set_remote_directory(self, directory: str) -> None:
        """Change the working directory on the server.

        Args:
            directory: Absolute or relative remote directory

        Raises:
            NoSuchDirectoryException: If the directory cannot be entered
            FtpException: If the server fails for another reason
        """
        pass

    @abstractmethod
    def list_files(self, relative_path: str = ".") -> List[FtpFile]:
        """List the entries of a remote directory.

        Args:
            relative_path: Directory relative to the working directory, or
                an absolute remote path

        Returns:
            List[FtpFile]: One FtpFile per entry, in server order

        Raises:
            FileListingException: If the listing fails
        """
        pass

    @abstractmethod
    def download(self, file: FtpFile, local_directory: str) -> None:
        """Download a remote file into a local directory.

        The local file keeps the remote file's name.

        Args:
            file: Remote file, as returned by list_files()
            local_directory: Existing local directory to write into

        Raises:
            DownloadFailedException: If the download fails
        """
        pass

    @abstractmethod
    def upload(self, local_file_path: str, remote_directory: str) -> None:
        """Upload a local file into a remote directory.

        The remote file keeps the local file's name.

        Args:
            local_file_path: Path of the local file to send
            remote_directory: Remote directory (trailing slash allowed)

        Raises:
            UploadFailedException: If the upload fails
        """
        pass
