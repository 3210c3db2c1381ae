"""Pytest fixtures shared by the ftpbridge test suite.

Provides:
- Mock ftplib.FTP session and mock paramiko SFTP channel
- Registry snapshot/restore so tests can register throwaway clients
- Settings cache reset and isolation from FTPBRIDGE_* environment variables
"""

import ftplib
import os
from unittest.mock import Mock

import paramiko
import pytest

from ftpbridge.client.registry import ClientRegistry
from ftpbridge.config import get_settings


@pytest.fixture
def mock_ftp():
    """Mock ftplib.FTP session."""
    return Mock(spec=ftplib.FTP)


@pytest.fixture
def mock_sftp():
    """Mock paramiko SFTP channel."""
    return Mock(spec=paramiko.SFTPClient)


@pytest.fixture
def registry_snapshot():
    """Restore ClientRegistry contents after the test."""
    saved = dict(ClientRegistry._clients)
    yield ClientRegistry
    ClientRegistry._clients.clear()
    ClientRegistry._clients.update(saved)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep host FTPBRIDGE_* variables and cached settings out of tests."""
    for key in list(os.environ):
        if key.startswith("FTPBRIDGE_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
