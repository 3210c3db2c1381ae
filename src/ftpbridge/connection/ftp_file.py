"""FtpFile value object shared by every connection backend."""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class FtpFile:
    """Metadata for one entry of a remote directory listing.

    Attributes:
        name: Entry name as reported by the server
        size: Size in bytes
        full_path: Remote path of the entry, always joined with '/'
        last_modified: Modification time (timezone-aware, UTC)
        is_directory: True if the entry is a directory
    """
    name: str
    size: int
    full_path: str
    last_modified: datetime
    is_directory: bool = False

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.size}")

    @classmethod
    def from_timestamp(
        cls,
        name: str,
        size: int,
        full_path: str,
        mtime_seconds: float,
        is_directory: bool = False,
    ) -> "FtpFile":
        """Build an FtpFile from a POSIX modification time in seconds.

        Args:
            name: Entry name
            size: Size in bytes
            full_path: Remote path of the entry
            mtime_seconds: Seconds since the epoch (UTC)
            is_directory: True if the entry is a directory

        Returns:
            FtpFile with last_modified converted to a UTC datetime
        """
        last_modified = datetime.fromtimestamp(mtime_seconds or 0, tz=timezone.utc)
        return cls(name, size, full_path, last_modified, is_directory)
