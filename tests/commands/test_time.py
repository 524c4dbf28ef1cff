"""Tests for the time command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from datemath.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestTime:
    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (["3pm"], "15:00:00"),
            (["1330"], "13:30:00"),
            (["12am"], "00:00:00"),
            (["12:00:30", "pm"], "12:00:30"),
            (["9:30"], "09:30:00"),
        ],
    )
    def test_accepted(self, cli_runner: CliRunner, args: list[str], expected: str) -> None:
        result = cli_runner.invoke(cli, ["time", *args])
        assert result.exit_code == 0
        assert result.stdout.strip() == expected

    def test_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["time", "13pm"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "time", "7:05am"])
        payload = json.loads(result.stdout)
        assert payload["op"] == "parse_time"
        assert payload["data"]["hour"] == 7
        assert payload["data"]["minute"] == 5

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["time", "--examples"])
        assert result.exit_code == 0
        assert "datemath time 3pm" in result.output
