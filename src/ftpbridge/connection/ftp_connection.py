"""FTP Connection - Implementation of the Connection port using ftplib.

Adapts an authenticated ftplib.FTP session to the Connection interface.
ftplib raises error_perm/error_temp/error_reply when the server answers
with a failure code, and OSError/EOFError when the socket breaks; both
kinds are translated into domain exceptions here.

Listings use MLSD. Servers that reject MLSD as an unknown command get a
LIST instead, whose "ls -l" (or DOS "dir") lines are parsed by ftputil.
"""

import ftplib
import logging
import os
import stat
from datetime import datetime, timezone
from typing import List, Optional

import ftputil.error
import ftputil.stat

from ..exceptions import (
    DownloadFailedException,
    FileListingException,
    FtpException,
    NoSuchDirectoryException,
    UploadFailedException,
)
from ..observability.session import SessionLogger
from .ftp_file import FtpFile
from .port import Connection, join_remote_path, listing_base_path

logger = logging.getLogger(__name__)

# ftplib errors raised for a negative (4xx/5xx) or unexpected server reply
SERVER_REPLY_ERRORS = (ftplib.error_perm, ftplib.error_temp, ftplib.error_reply)

# Malformed MLSD facts surface as ValueError, unparseable LIST lines as ParserError
LISTING_ERRORS = ftplib.all_errors + (ValueError, ftputil.error.ParserError)

MLSD_FACTS = ["type", "size", "modify"]
MLSD_SKIPPED_TYPES = ("cdir", "pdir")
MLSD_TIME_FORMAT = "%Y%m%d%H%M%S"
# Replies meaning "command not implemented", not "directory refused"
MLSD_UNSUPPORTED_REPLIES = ("500", "501", "502", "504")

LIST_SKIPPED_NAMES = (".", "..")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_mlsd_time(value: str) -> datetime:
    """Parse an MLSD 'modify' fact (YYYYMMDDHHMMSS[.fff], always UTC)."""
    if not value:
        return EPOCH
    whole, _, fraction = value.partition(".")
    parsed = datetime.strptime(whole, MLSD_TIME_FORMAT).replace(tzinfo=timezone.utc)
    if fraction:
        parsed = parsed.replace(microsecond=int(fraction.ljust(6, "0")[:6]))
    return parsed


class FtpConnection(Connection):
    """Connection backed by a plain FTP session.

    Example:
        ftp = ftplib.FTP()
        ftp.connect("ftp.example.com", 21)
        ftp.login("user", "secret")

        connection = FtpConnection(ftp)
        connection.set_remote_directory("pub")
        files = connection.list_files()
    """

    def __init__(self, ftp: ftplib.FTP, session_id: Optional[str] = None):
        self._ftp = ftp
        self._log = SessionLogger(logger, session_id, protocol="ftp")
        self.current_directory = "."
        self.use_mlsd = True
        self._list_parser = ftputil.stat.UnixParser()

    def set_remote_directory(self, directory: str) -> None:
        try:
            self._ftp.cwd(directory)
        except ftplib.error_perm as e:
            self._log.warning(f"FTP server refused directory change to {directory}: {e}")
            raise NoSuchDirectoryException(
                f"The directory {directory} doesn't exist on the remote server."
            ) from e
        except ftplib.all_errors as e:
            self._log.warning(f"FTP directory change to {directory} failed: {e}")
            raise FtpException("Remote server was unable to change directory.") from e

        # The server has moved; track it even if PWD fails below
        self.current_directory = listing_base_path(self.current_directory, directory)
        try:
            self.current_directory = self._ftp.pwd()
        except ftplib.all_errors as e:
            self._log.warning(f"FTP server entered {directory} but PWD failed: {e}")
            raise FtpException("Remote server was unable to report the working directory.") from e

        self._log.debug(f"FTP working directory is now {self.current_directory}")

    def list_files(self, relative_path: str = ".") -> List[FtpFile]:
        base_path = listing_base_path(self.current_directory, relative_path)

        try:
            files = self._list_entries(relative_path, base_path)
        except LISTING_ERRORS as e:
            self._log.warning(f"FTP listing of {relative_path} failed: {e}")
            raise FileListingException(
                f"Unable to list files in directory {self.current_directory}"
            ) from e

        self._log.debug(f"Listed {len(files)} entries in {base_path}")
        return files

    def download(self, file: FtpFile, local_directory: str) -> None:
        local_path = os.path.join(local_directory, file.name)

        try:
            local_file = open(local_path, "wb")
        except OSError as e:
            raise DownloadFailedException(
                f"Unable to write to local directory {local_path}"
            ) from e

        with local_file:
            try:
                self._ftp.retrbinary(f"RETR {file.full_path}", local_file.write)
            except SERVER_REPLY_ERRORS as e:
                self._log.warning(f"FTP server rejected download of {file.full_path}: {e}")
                raise DownloadFailedException("Server returned failure while downloading.") from e
            except ftplib.all_errors as e:
                self._log.warning(f"FTP download of {file.full_path} interrupted: {e}")
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
                self._ftp.storbinary(f"STOR {remote_path}", local_file)
            except SERVER_REPLY_ERRORS as e:
                self._log.warning(f"FTP server rejected upload to {remote_path}: {e}")
                raise UploadFailedException("Upload failed.") from e
            except ftplib.all_errors as e:
                self._log.warning(f"FTP upload to {remote_path} interrupted: {e}")
                raise UploadFailedException("Upload may not have completed.") from e

        self._log.debug(f"Uploaded {local_file_path} -> {remote_path}")

    def _list_entries(self, relative_path: str, base_path: str) -> List[FtpFile]:
        if self.use_mlsd:
            try:
                return self._list_mlsd(relative_path, base_path)
            except ftplib.error_perm as e:
                if not str(e).startswith(MLSD_UNSUPPORTED_REPLIES):
                    raise
                self._log.info(f"FTP server does not support MLSD ({e}), using LIST")
                self.use_mlsd = False

        return self._list_long_format(relative_path, base_path)

    def _list_mlsd(self, relative_path: str, base_path: str) -> List[FtpFile]:
        return [
            FtpFile(
                name=name,
                size=int(facts.get("size", 0) or 0),
                full_path=join_remote_path(base_path, name),
                last_modified=parse_mlsd_time(facts.get("modify", "")),
                is_directory=facts.get("type", "").lower() == "dir",
            )
            for name, facts in self._ftp.mlsd(relative_path, facts=MLSD_FACTS)
            if facts.get("type", "").lower() not in MLSD_SKIPPED_TYPES
        ]

    def _list_long_format(self, relative_path: str, base_path: str) -> List[FtpFile]:
        lines: List[str] = []
        if relative_path in ("", "."):
            self._ftp.retrlines("LIST", lines.append)
        else:
            self._ftp.retrlines(f"LIST {relative_path}", lines.append)

        files = []
        for line in lines:
            if self._list_parser.ignores_line(line):
                continue
            stat_result = self._parse_list_line(line)
            name = stat_result._st_name
            if name in LIST_SKIPPED_NAMES:
                continue
            files.append(
                FtpFile.from_timestamp(
                    name=name,
                    size=stat_result.st_size or 0,
                    full_path=join_remote_path(base_path, name),
                    mtime_seconds=stat_result.st_mtime or 0,
                    is_directory=stat.S_ISDIR(stat_result.st_mode or 0),
                )
            )
        return files

    def _parse_list_line(self, line: str) -> ftputil.stat.StatResult:
        """Parse one LIST line, switching to the DOS format if Unix parsing fails."""
        try:
            return self._list_parser.parse_line(line)
        except ftputil.error.ParserError:
            if isinstance(self._list_parser, ftputil.stat.MSParser):
                raise
            self._log.debug("LIST output is not in Unix format, trying DOS format")
            self._list_parser = ftputil.stat.MSParser()
            return self._list_parser.parse_line(line)
