"""Shared pytest configuration.

Points the config/log directory at a throwaway location before any project
module is imported, so tests never touch the real user directory.
"""

import os
import tempfile

os.environ["MINI_METARS_HOME"] = tempfile.mkdtemp(prefix="mini-metars-tests-")

import pytest  # noqa: E402

from helpers import FakeClock  # noqa: E402


@pytest.fixture
def clock():
    """A controllable monotonic clock starting at t=1000s."""
    return FakeClock(1000.0)
