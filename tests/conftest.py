from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the user data directory and the process-wide context.
3. Shared fixtures for contexts and fixed clocks used across tests.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from adminlog import api  # noqa: E402
from adminlog.core.context import LoggerContext, clear_context  # noqa: E402
from adminlog.infra.logging import reset_diagnostics  # noqa: E402

FIXED_NOW = datetime(2024, 5, 1, 14, 3, 22)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "gui: tests touching the Tk dialog layer")


# -----------------------------------------------------------------------------
# Isolation Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """
    Redirect the user data directory into the test's temp folder.

    Prevents tests from reading or writing the real OS user folder and
    resets every piece of process-wide state before and after each test.
    """
    home = tmp_path / "adminlog_home"
    monkeypatch.setenv("ADMINLOG_HOME", str(home))
    clear_context()
    reset_diagnostics()
    api._logger = None
    yield home
    clear_context()
    reset_diagnostics()
    api._logger = None


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    return tmp_path / "config"


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    return tmp_path / "logs"


@pytest.fixture
def context(config_dir: Path, log_dir: Path) -> LoggerContext:
    """A context writing to temp folders, with the console sink disabled."""
    ctx = LoggerContext(caller_name="Update-Users", config_dir=str(config_dir))
    ctx.store.apply(default_directory=str(log_dir), console_enabled=False)
    return ctx


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
