"""Shared fixtures."""

import pytest

from crossfs import MemoryHost


@pytest.fixture
def posix_host():
    """An empty in-memory host with POSIX path rules."""
    return MemoryHost("posix")


@pytest.fixture
def windows_host():
    """An empty in-memory host with Windows path rules (root C:\\)."""
    return MemoryHost("windows")
