"""FTP client built on ftplib."""

import ftplib
import logging
from typing import Optional

from ..config import Settings
from ..connection.ftp_connection import FtpConnection
from ..exceptions import ClientDisconnectionException, ConnectionInitialisationException
from .base import Client, DEFAULT_PASSWORD, DEFAULT_TIMEOUT, DEFAULT_USERNAME

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Unable to connect to host {host} on port {port}"
LOGIN_ERROR_MESSAGE = "Unable to login for user {username}"


class FtpClient(Client):
    """Plain FTP client.

    Logs in and switches the session to passive mode (unless disabled)
    before handing out an FtpConnection. Transfers always use binary mode.
    """

    PROTOCOL = "ftp"
    DEFAULT_PORT = 21

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: str = DEFAULT_USERNAME,
        password: str = DEFAULT_PASSWORD,
        timeout: float = DEFAULT_TIMEOUT,
        passive_mode: bool = True,
    ):
        super().__init__(host, port, username, password, timeout)
        self.passive_mode = passive_mode
        self._ftp: Optional[ftplib.FTP] = None

    def _apply_settings(self, settings: Settings) -> None:
        self.passive_mode = settings.PASSIVE_MODE

    def connect(self) -> FtpConnection:
        self._begin_session()
        log = self._session_logger(logger)
        ftp = ftplib.FTP()

        try:
            ftp.connect(self.host, self.port, timeout=self.timeout)
        except ftplib.all_errors as e:
            # A refusing welcome reply (e.g. 421) arrives after the socket is open
            ftp.close()
            self._abort_session()
            log.warning(f"FTP connection to {self.host}:{self.port} failed: {e}")
            raise ConnectionInitialisationException(
                CONNECTION_ERROR_MESSAGE.format(host=self.host, port=self.port)
            ) from e

        try:
            ftp.login(self.username, self.password)
        except ftplib.error_perm as e:
            ftp.close()
            self._abort_session()
            log.warning(f"FTP login refused for {self.username}: {e}")
            raise ConnectionInitialisationException(
                LOGIN_ERROR_MESSAGE.format(username=self.username)
            ) from e
        except ftplib.all_errors as e:
            ftp.close()
            self._abort_session()
            log.warning(f"FTP login to {self.host}:{self.port} failed: {e}")
            raise ConnectionInitialisationException(
                CONNECTION_ERROR_MESSAGE.format(host=self.host, port=self.port)
            ) from e

        ftp.set_pasv(self.passive_mode)
        self._ftp = ftp
        log.info(f"FTP connection established (passive={self.passive_mode})")
        return FtpConnection(ftp, session_id=self.session_id)

    def disconnect(self) -> None:
        if self._ftp is None:
            raise ClientDisconnectionException("The underlying connection was never initially made.")

        ftp, self._ftp = self._ftp, None
        try:
            ftp.quit()
        except ftplib.all_errors as e:
            ftp.close()
            self._session_logger(logger).warning(f"FTP QUIT failed, socket closed: {e}")
            self._end_session()
            raise ClientDisconnectionException(
                "There was an unexpected error while trying to disconnect."
            ) from e

        self._end_session()
