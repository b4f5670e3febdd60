"""Tests for the ``artifactns check`` CLI command."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from artifactns.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


class TestCheckCommand:
    """Exit codes and rendered verdicts."""

    def test_all_satisfied(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "~>5.3.1", "5.3.1", "5.3.9"])
        assert result.exit_code == 0
        assert "SATISFIED" in result.output
        assert "REJECTED" not in result.output

    def test_some_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">1.2 <1.3 !(>=1.2.5 & <=1.2.6)", "1.2.4", "1.2.5"])
        assert result.exit_code == 1
        assert "SATISFIED" in result.output
        assert "REJECTED" in result.output

    def test_invalid_requirement(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">>1", "1.0"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Invalid requirement string" in result.output

    def test_invalid_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">1", "1.0-SNAPSHOT"])
        assert result.exit_code == 1
        assert "Invalid version" in result.output

    def test_versions_required(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">1"])
        assert result.exit_code == 2
