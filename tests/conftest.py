"""Shared pytest fixtures for datemath tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep DATEMATH_* variables from the developer's shell out of tests."""
    for name in (
        "DATEMATH_CONFIG",
        "DATEMATH_TODAY",
        "DATEMATH_JSON_OUTPUT",
        "DATEMATH_QUIET",
        "DATEMATH_VERBOSE",
        "DATEMATH_LOG_JSON",
        "DATEMATH_PARSE__STRICT",
        "DATEMATH_OUTPUT__SHOW_EXPRESSION",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory so no datemath.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on CLI test classes.
    """
    monkeypatch.chdir(tmp_path)
