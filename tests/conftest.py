"""Shared test fixtures for opscatalog.

Provides reusable fixtures for loading the admin API fixture document,
creating isolated config environments, managing output state, and running
CLI commands. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from opscatalog.models import ApiDocument
from opscatalog.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"

FIXED_NOW = datetime(2026, 10, 19, 8, 30, 15, 123000, tzinfo=timezone.utc)
FIXED_TIMESTAMP = "2026-10-19T08:30:15.123Z"


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed generation time."""
    return FIXED_NOW


@pytest.fixture
def fixed_timestamp() -> str:
    """The ISO-8601 rendering of :func:`fixed_now`."""
    return FIXED_TIMESTAMP


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and log handlers after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file"). Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()
    logger = logging.getLogger("opscatalog")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def admin_spec_path() -> Path:
    """Path to the admin API fixture document."""
    return FIXTURES_DIR / "admin_openapi.json"


@pytest.fixture
def admin_raw(admin_spec_path: Path) -> dict[str, Any]:
    """Raw admin API document as a plain dict."""
    return json.loads(admin_spec_path.read_text(encoding="utf-8"))


@pytest.fixture
def admin_document(admin_spec_path: Path) -> ApiDocument:
    """Loaded admin API document."""
    from opscatalog.parser import load_document

    return load_document(str(admin_spec_path))


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_DATA_HOME into tmp_path, clears all OPSCATALOG_* environment
    variables, copies the admin fixture to ``docs/admin-openapi.json`` (the
    default input location) and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in [
        "OPSCATALOG_INPUT",
        "OPSCATALOG_OUTPUT",
        "OPSCATALOG_STRIP_PREFIX",
        "OPSCATALOG_DEFAULT_TAG",
        "OPSCATALOG_MAX_DEPTH",
    ]:
        monkeypatch.delenv(var, raising=False)

    docs = tmp_path / "docs"
    docs.mkdir()
    shutil.copy(FIXTURES_DIR / "admin_openapi.json", docs / "admin-openapi.json")

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
