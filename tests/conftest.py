"""Shared pytest fixtures for roverctl tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from roverctl.domain.grid import Grid
from roverctl.infrastructure.store import MissionStore
from roverctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def grid() -> Grid:
    """Default 10x10 grid with a single obstacle at (5,5)."""
    return Grid.create(10, 10, [(5, 5)])


@pytest.fixture
def store(grid: Grid) -> MissionStore:
    """Empty mission store over the ``grid`` fixture."""
    return MissionStore(grid)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty directory with no roverctl config in sight.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on CLI test
    classes so a stray roverctl.toml or ROVERCTL_* variable cannot leak
    into the settings.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ROVERCTL_CONFIG", raising=False)
    for name in ("GRID__WIDTH", "GRID__HEIGHT", "GRID__OBSTACLES", "JSON_OUTPUT", "QUIET"):
        monkeypatch.delenv(f"ROVERCTL_{name}", raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``--verbose`` turns telemetry on for the whole context; undo it."""
    yield
    disable_telemetry()
    _current_span.set(None)
