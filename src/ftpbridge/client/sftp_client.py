"""SFTP client built on paramiko.

By default unknown host keys are accepted (AutoAddPolicy). With
strict_host_key_checking enabled, the system known_hosts (plus an optional
extra file) is loaded and unknown keys are rejected.
"""

import logging
from typing import Optional

import paramiko

from ..config import Settings
from ..connection.sftp_connection import SftpConnection
from ..exceptions import ClientDisconnectionException, ConnectionInitialisationException
from .base import Client, DEFAULT_PASSWORD, DEFAULT_TIMEOUT, DEFAULT_USERNAME

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Unable to connect to host {host} on port {port}"


class SftpClient(Client):
    """SFTP client using password authentication.

    Example:
        client = SftpClient(host="sftp.example.com", username="user", password="secret")
        connection = client.connect()
        try:
            connection.upload("report.csv", "/incoming")
        finally:
            client.disconnect()
    """

    PROTOCOL = "sftp"
    DEFAULT_PORT = 22

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: str = DEFAULT_USERNAME,
        password: str = DEFAULT_PASSWORD,
        timeout: float = DEFAULT_TIMEOUT,
        strict_host_key_checking: bool = False,
        known_hosts_file: Optional[str] = None,
    ):
        super().__init__(host, port, username, password, timeout)
        self.strict_host_key_checking = strict_host_key_checking
        self.known_hosts_file = known_hosts_file
        self._ssh_client: Optional[paramiko.SSHClient] = None
        self._sftp_client: Optional[paramiko.SFTPClient] = None

    def _apply_settings(self, settings: Settings) -> None:
        self.strict_host_key_checking = settings.STRICT_HOST_KEY_CHECKING
        self.known_hosts_file = settings.KNOWN_HOSTS_FILE

    def connect(self) -> SftpConnection:
        self._begin_session()
        log = self._session_logger(logger)
        ssh_client = paramiko.SSHClient()

        try:
            if self.strict_host_key_checking:
                ssh_client.load_system_host_keys()
                if self.known_hosts_file:
                    ssh_client.load_host_keys(self.known_hosts_file)
                ssh_client.set_missing_host_key_policy(paramiko.RejectPolicy())
            else:
                ssh_client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

            ssh_client.connect(
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                timeout=self.timeout,
                look_for_keys=False,
                allow_agent=False,
            )
            sftp_client = ssh_client.open_sftp()

        except (paramiko.SSHException, OSError, EOFError) as e:
            ssh_client.close()
            self._abort_session()
            log.warning(f"SFTP connection to {self.host}:{self.port} failed: {e}")
            raise ConnectionInitialisationException(
                CONNECTION_ERROR_MESSAGE.format(host=self.host, port=self.port)
            ) from e

        self._ssh_client = ssh_client
        self._sftp_client = sftp_client
        log.info("SFTP connection established")
        return SftpConnection(sftp_client, session_id=self.session_id)

    def disconnect(self) -> None:
        if self._ssh_client is None or self._sftp_client is None:
            raise ClientDisconnectionException("The underlying connection was never initially made.")

        self._sftp_client.close()
        self._sftp_client = None
        self._ssh_client.close()
        self._ssh_client = None
        self._end_session()
