"""
Pytest configuration and shared fixtures for flowdeploy tests.

Provides fake shells, tool lookups, probes and env files so the deployment
pipeline can be exercised without Docker or a live service.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import io
from typing import Dict

import pytest
from rich.console import Console as RichConsole

from flowdeploy.core.errors import set_error_handler
from tests.fixtures.fakes import FakeShell, SleepRecorder


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def fake_shell():
    """Shell where every command succeeds."""
    return FakeShell()


@pytest.fixture
def all_tools():
    """Tool lookup where every executable is installed."""
    return lambda tool: f"/usr/bin/{tool}"


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def quiet_console():
    """Rich console that writes nowhere."""
    return RichConsole(file=io.StringIO(), force_terminal=False)


@pytest.fixture
def write_env(tmp_path):
    """Factory writing a .env file with the given settings."""

    def _write(values: Dict[str, str], name: str = ".env"):
        path = tmp_path / name
        path.write_text("".join(f"{key}={value}\n" for key, value in values.items()))
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_error_handler():
    """Keep the global error handler from leaking between tests."""
    yield
    set_error_handler(None)
