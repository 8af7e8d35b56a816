"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from roverctl.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--examples"], ["roverctl grid", "roverctl serve"]),
    (["run", "--examples"], ["roverctl run mission.txt", "--partial"]),
    (["shell", "--examples"], ["roverctl shell"]),
    (["grid", "--examples"], ["--obstacle 3,3"]),
    (["serve", "--examples"], ["roverctl serve", "streamable-http"]),
]


@pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
def test_examples_flag(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_examples_not_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["run", "--help"])
    assert "--examples" in result.output
    assert "roverctl run mission.json --partial" not in result.output
