"""Client configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_PROTOCOLS = ("ftp", "sftp")


class Settings(BaseSettings):
    """Connection settings loaded from environment variables.

    Every variable is prefixed with FTPBRIDGE_, e.g. FTPBRIDGE_HOST.

    Environment Variables:
        PROTOCOL: Backend to use, "ftp" or "sftp" (default ftp)
        HOST: Remote server hostname
        PORT: Remote server port (default: 21 for ftp, 22 for sftp)
        USERNAME: Login name (default anonymous)
        PASSWORD: Login password (default empty)
        TIMEOUT: Socket timeout in seconds (default 30)
        PASSIVE_MODE: Use passive data connections for FTP (default True)
        STRICT_HOST_KEY_CHECKING: Reject unknown SSH host keys (default False)
        KNOWN_HOSTS_FILE: Extra known_hosts file for strict checking
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
    """

    PROTOCOL: str = "ftp"
    HOST: Optional[str] = None
    PORT: Optional[int] = None
    USERNAME: str = "anonymous"
    PASSWORD: SecretStr = SecretStr("")
    TIMEOUT: float = 30.0

    # FTP
    PASSIVE_MODE: bool = True

    # SFTP
    STRICT_HOST_KEY_CHECKING: bool = False
    KNOWN_HOSTS_FILE: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    model_config = SettingsConfigDict(
        env_prefix="FTPBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator('PROTOCOL')
    @classmethod
    def validate_protocol(cls, v: str) -> str:
        """Validate PROTOCOL names a supported backend"""
        if v.lower() not in SUPPORTED_PROTOCOLS:
            raise ValueError(
                f"Invalid protocol: {v}. Must be one of: {', '.join(SUPPORTED_PROTOCOLS)}"
            )
        return v.lower()

    @field_validator('TIMEOUT')
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("TIMEOUT must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
