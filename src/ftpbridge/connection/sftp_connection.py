"""SFTP Connection - Implementation of the Connection port using paramiko.

Adapts an open paramiko.SFTPClient channel to the Connection interface.
paramiko reports SFTP status codes as IOError subclasses and channel
failures as SSHException; both are translated into domain exceptions.
"""

import logging
import os
import stat
from typing import List, Optional

import paramiko

from ..exceptions import (
    DownloadFailedException,
    FileListingException,
    NoSuchDirectoryException,
    UploadFailedException,
)
from ..observability.session import SessionLogger
from .ftp_file import FtpFile
from .port import Connection, join_remote_path, listing_base_path

logger = logging.getLogger(__name__)

SFTP_ERRORS = (OSError, EOFError, paramiko.SSHException)


class SftpConnection(Connection):
    """Connection backed by an SFTP channel.

    Example:
        ssh = paramiko.SSHClient()
        ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        ssh.connect("sftp.example.com", username="user", password="secret")

        connection = SftpConnection(ssh.open_sftp())
        files = connection.list_files("exports")
    """

    def __init__(self, sftp: paramiko.SFTPClient, session_id: Optional[str] = None):
        self._sftp = sftp
        self._log = SessionLogger(logger, session_id, protocol="sftp")
        self.current_directory = "."

    def set_remote_directory(self, directory: str) -> None:
        try:
            self._sftp.chdir(directory)
            self.current_directory = self._sftp.getcwd()
        except SFTP_ERRORS as e:
            self._log.warning(f"SFTP directory change to {directory} failed: {e}")
            raise NoSuchDirectoryException(f"Directory {directory} does not exist.") from e

        self._log.debug(f"SFTP working directory is now {self.current_directory}")

    def list_files(self, relative_path: str = ".") -> List[FtpFile]:
        base_path = listing_base_path(self.current_directory, relative_path)

        try:
            entries = self._sftp.listdir_attr(relative_path)
            files = [self._to_ftp_file(entry, base_path) for entry in entries]
        except SFTP_ERRORS + (ValueError,) as e:
            self._log.warning(f"SFTP listing of {relative_path} failed: {e}")
            raise FileListingException(
                f"Unable to list files in directory {self.current_directory}"
            ) from e

        self._log.debug(f"Listed {len(files)} entries in {base_path}")
        return files

    def download(self, file: FtpFile, local_directory: str) -> None:
        local_path = os.path.join(local_directory, file.name)

        try:
            self._sftp.get(file.full_path, local_path)
        except SFTP_ERRORS as e:
            self._log.warning(f"SFTP download of {file.full_path} failed: {e}")
            raise DownloadFailedException(f"Unable to download file {file.name}") from e

        self._log.debug(f"Downloaded {file.full_path} -> {local_path}")

    def upload(self, local_file_path: str, remote_directory: str) -> None:
        remote_path = join_remote_path(remote_directory, os.path.basename(local_file_path))

        try:
            local_file = open(local_file_path, "rb")
        except OSError as e:
            raise UploadFailedException(f"Could not find file: {local_file_path}") from e

        with local_file:
            try:
                self._sftp.putfo(local_file, remote_path)
            except SFTP_ERRORS as e:
                self._log.warning(f"SFTP upload to {remote_path} failed: {e}")
                raise UploadFailedException("Upload failed.") from e

        self._log.debug(f"Uploaded {local_file_path} -> {remote_path}")

    def _to_ftp_file(self, entry: paramiko.SFTPAttributes, base_path: str) -> FtpFile:
        return FtpFile.from_timestamp(
            name=entry.filename,
            size=entry.st_size or 0,
            full_path=join_remote_path(base_path, entry.filename),
            mtime_seconds=entry.st_mtime or 0,
            is_directory=stat.S_ISDIR(entry.st_mode or 0),
        )
