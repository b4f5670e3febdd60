"""Tests for the ``artifactns resolve`` and ``artifactns show`` CLI commands."""

from __future__ import annotations

import pathlib

import pytest
from click.testing import CliRunner

from artifactns.cli.main import cli

PROFILE = """\
development:
  artifacts:
    ~:
      junit: junit:junit:jar:4.12
      lib: "org.example:lib:jar:>=1.9 <1.10"
    one:oldie:
      junit: junit:junit:jar:3.8
"""


@pytest.fixture
def runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def profile(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "profiles.yaml"
    path.write_text(PROFILE)
    return path


@pytest.fixture
def settings_file(tmp_path: pathlib.Path, local_repo: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "settings.yaml"
    path.write_text(
        f"repositories:\n  local: {local_repo}\n  remote: []\nsearch:\n  scraper: false\n"
    )
    return path


class TestResolveCommand:
    """Artifacts of a namespace, searching for unselected requirements."""

    def test_root(self, runner: CliRunner, profile: pathlib.Path, settings_file: pathlib.Path) -> None:
        result = runner.invoke(
            cli, ["resolve", str(profile), "--env", "development", "--settings", str(settings_file)]
        )
        assert result.exit_code == 0, result.output
        assert "junit:junit:jar:4.12" in result.output
        assert "org.example:lib:jar:1.9" in result.output

    def test_child_with_parents(self, runner: CliRunner, profile: pathlib.Path) -> None:
        result = runner.invoke(
            cli, ["resolve", str(profile), "--env", "development", "-n", "one:oldie", "--parents"]
        )
        assert result.exit_code == 0, result.output
        assert "junit:junit:jar:3.8" in result.output
        assert "junit:junit:jar:4.12" not in result.output

    def test_empty_namespace(self, runner: CliRunner, profile: pathlib.Path) -> None:
        result = runner.invoke(cli, ["resolve", str(profile), "--env", "development", "-n", "other"])
        assert result.exit_code == 0
        assert "uses no artifacts" in result.output

    def test_unknown_environment(self, runner: CliRunner, profile: pathlib.Path) -> None:
        result = runner.invoke(cli, ["resolve", str(profile), "--env", "staging"])
        assert result.exit_code == 1
        assert "no environment 'staging'" in result.output

    def test_unresolvable_requirement(
        self, runner: CliRunner, tmp_path: pathlib.Path, settings_file: pathlib.Path
    ) -> None:
        path = tmp_path / "needs.yaml"
        path.write_text('artifacts:\n  ~:\n    lib: "org.example:lib:jar:>5"\n')
        result = runner.invoke(cli, ["resolve", str(path), "--settings", str(settings_file)])
        assert result.exit_code == 1
        assert "Could not find" in result.output


class TestShowCommand:
    """Declared requirements and selections."""

    def test_show_root(self, runner: CliRunner, profile: pathlib.Path) -> None:
        result = runner.invoke(cli, ["show", str(profile), "--env", "development"])
        assert result.exit_code == 0, result.output
        assert "Namespace root" in result.output
        assert ">=1.9" in result.output
        assert "4.12" in result.output

    def test_show_empty(self, runner: CliRunner, profile: pathlib.Path) -> None:
        result = runner.invoke(cli, ["show", str(profile), "--env", "development", "-n", "nothing"])
        assert result.exit_code == 0
        assert "declares nothing" in result.output

    def test_missing_profile(self, runner: CliRunner, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(cli, ["show", str(tmp_path / "absent.yaml")])
        assert result.exit_code == 2
