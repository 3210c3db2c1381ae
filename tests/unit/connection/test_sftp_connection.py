"""Unit tests for SftpConnection.

Tests paramiko exception translation, SFTPAttributes mapping (including
seconds-to-datetime conversion) and upload path joining.
"""

import os
import stat
from datetime import timezone

import paramiko
import pytest

from ftpbridge.connection.ftp_file import FtpFile
from ftpbridge.connection.sftp_connection import SftpConnection
from ftpbridge.exceptions import (
    DownloadFailedException,
    FileListingException,
    NoSuchDirectoryException,
    UploadFailedException,
)

DIRECTORY = "this/is/the/pwd"


def create_entry(filename, size, mtime, directory):
    attributes = paramiko.SFTPAttributes()
    attributes.filename = filename
    attributes.st_size = size
    attributes.st_mtime = mtime
    attributes.st_mode = (stat.S_IFDIR if directory else stat.S_IFREG) | 0o755
    return attributes


@pytest.fixture
def connection(mock_sftp):
    mock_sftp.listdir_attr.return_value = [
        create_entry("File 1", 123, 1394525265, True),
        create_entry("File 2", 456, 1394652161, False),
        create_entry("File 3", 789, 1391879364, True),
    ]
    mock_sftp.getcwd.return_value = DIRECTORY
    return SftpConnection(mock_sftp)


@pytest.fixture
def remote_file():
    return FtpFile.from_timestamp("File Name.txt", 1000, "/remote/server/dir/File Name.txt", 123456789)


class TestSetRemoteDirectory:
    """Test changing the remote working directory."""

    def test_changes_directory_and_reads_it_back(self, connection, mock_sftp):
        connection.set_remote_directory("directory/path")

        mock_sftp.chdir.assert_called_once_with("directory/path")
        mock_sftp.getcwd.assert_called_once_with()
        assert connection.current_directory == DIRECTORY

    def test_missing_directory_raises_no_such_directory(self, connection, mock_sftp):
        error = FileNotFoundError(2, "No such file")
        mock_sftp.chdir.side_effect = error

        with pytest.raises(NoSuchDirectoryException) as exc_info:
            connection.set_remote_directory("not/a/directory")

        assert str(exc_info.value) == "Directory not/a/directory does not exist."
        assert exc_info.value.__cause__ is error

    def test_channel_failure_raises_no_such_directory(self, connection, mock_sftp):
        mock_sftp.chdir.side_effect = paramiko.SSHException("channel closed")

        with pytest.raises(NoSuchDirectoryException):
            connection.set_remote_directory("directory/path")


class TestListFiles:
    """Test directory listings and attribute mapping."""

    def test_lists_present_directory_by_default(self, connection, mock_sftp):
        connection.list_files()

        mock_sftp.listdir_attr.assert_called_once_with(".")

    def test_listing_error_raises_file_listing_exception(self, connection, mock_sftp):
        mock_sftp.listdir_attr.side_effect = IOError("Permission denied")

        with pytest.raises(FileListingException) as exc_info:
            connection.list_files()

        assert str(exc_info.value) == "Unable to list files in directory ."

    def test_entries_are_mapped_to_ftp_files(self, connection):
        connection.set_remote_directory(DIRECTORY)

        files = connection.list_files()

        assert [f.name for f in files] == ["File 1", "File 2", "File 3"]
        assert [f.size for f in files] == [123, 456, 789]
        assert [f.full_path for f in files] == [
            DIRECTORY + "/File 1",
            DIRECTORY + "/File 2",
            DIRECTORY + "/File 3",
        ]
        assert [f.is_directory for f in files] == [True, False, True]

    def test_relative_path_is_included_in_full_path(self, connection, mock_sftp):
        connection.set_remote_directory(DIRECTORY)

        files = connection.list_files("sub")

        mock_sftp.listdir_attr.assert_called_once_with("sub")
        assert files[0].full_path == DIRECTORY + "/sub/File 1"

    def test_absolute_path_replaces_working_directory(self, connection, mock_sftp):
        mock_sftp.getcwd.return_value = "/home/user"
        mock_sftp.listdir_attr.return_value = [create_entry("a.txt", 10, 1394525265, False)]
        connection.set_remote_directory("/home/user")

        files = connection.list_files("/pub")

        mock_sftp.listdir_attr.assert_called_once_with("/pub")
        assert files[0].full_path == "/pub/a.txt"

    def test_modification_seconds_are_converted_to_utc_datetimes(self, connection):
        files = connection.list_files()

        stamps = [f.last_modified.strftime("%d/%m/%Y %H:%M:%S") for f in files]
        assert stamps == ["11/03/2014 08:07:45", "12/03/2014 19:22:41", "08/02/2014 17:09:24"]
        assert all(f.last_modified.tzinfo == timezone.utc for f in files)


class TestDownload:
    """Test file downloads."""

    def test_gets_remote_file_into_local_directory(self, connection, mock_sftp, remote_file):
        connection.download(remote_file, "some/directory")

        mock_sftp.get.assert_called_once_with(
            "/remote/server/dir/File Name.txt",
            os.path.join("some/directory", "File Name.txt"),
        )

    def test_channel_error_raises_download_failed(self, connection, mock_sftp, remote_file):
        mock_sftp.get.side_effect = IOError("No such file")

        with pytest.raises(DownloadFailedException) as exc_info:
            connection.download(remote_file, "some/directory")

        assert str(exc_info.value) == "Unable to download file File Name.txt"


class TestUpload:
    """Test file uploads and remote path joining."""

    @pytest.fixture
    def local_file(self, tmp_path):
        path = tmp_path / "path.txt"
        path.write_bytes(b"upload contents")
        return str(path)

    def test_puts_file_in_remote_directory(self, connection, mock_sftp, local_file):
        connection.upload(local_file, "remote/directory")

        stream, remote_path = mock_sftp.putfo.call_args[0]
        assert remote_path == "remote/directory/path.txt"
        assert stream.closed

    def test_trailing_slash_on_remote_directory(self, connection, mock_sftp, local_file):
        connection.upload(local_file, "remote/directory/")

        assert mock_sftp.putfo.call_args[0][1] == "remote/directory/path.txt"

    def test_missing_local_file_raises_upload_failed(self, connection, mock_sftp):
        with pytest.raises(UploadFailedException) as exc_info:
            connection.upload("local/file/to/upload.txt", "remote/directory")

        assert str(exc_info.value) == "Could not find file: local/file/to/upload.txt"
        mock_sftp.putfo.assert_not_called()

    def test_remote_error_raises_upload_failed(self, connection, mock_sftp, local_file):
        mock_sftp.putfo.side_effect = IOError("Permission denied")

        with pytest.raises(UploadFailedException) as exc_info:
            connection.upload(local_file, "remote/directory")

        assert str(exc_info.value) == "Upload failed."
