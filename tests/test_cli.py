"""Tests for the root roverctl CLI."""

import json

import pytest
from click.testing import CliRunner

from roverctl import __version__
from roverctl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "roverctl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_cwd")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


def test_json_flag_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "--version"])
    assert result.exit_code == 0


def test_quiet_flag_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-q", "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/roverctl-test.toml", "--version"])
    assert result.exit_code == 0


# --- Grid flags ---


@pytest.mark.usefixtures("_isolated_cwd")
def test_bad_obstacle(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--obstacle", "five", "grid"])
    assert result.exit_code == 2
    assert "Expected X,Y" in result.output


@pytest.mark.usefixtures("_isolated_cwd")
def test_non_positive_width(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--width", "0", "grid"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


@pytest.mark.usefixtures("_isolated_cwd")
def test_verbose_adds_telemetry(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-v", "run", "-"], input="deploy r1 0 0 NORTH\n")
    assert result.exit_code == 0, result.output
    assert "ScriptService.run" in result.output


@pytest.mark.usefixtures("_isolated_cwd")
def test_env_obstacle(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROVERCTL_GRID__OBSTACLES", "5,5")
    result = cli_runner.invoke(cli, ["--json", "grid"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["data"]["obstacles"] == [[5, 5]]


@pytest.mark.usefixtures("_isolated_cwd")
def test_malformed_env_obstacle(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROVERCTL_GRID__OBSTACLES", "nope")
    result = cli_runner.invoke(cli, ["grid"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
