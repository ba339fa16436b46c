"""Tests for the cronmatch command line."""

from __future__ import annotations

import datetime
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cronmatch.calendar import FixedClock
from cronmatch.cli import EXIT_ERROR, EXIT_NO_MATCH, create_app
from cronmatch.settings import CONFIG_PATH_ENV

runner = CliRunner()

# Wednesday 2024-06-12 10:30
WEDNESDAY = datetime.datetime(2024, 6, 12, 10, 30)


@pytest.fixture
def app():
    return create_app(clock=FixedClock(WEDNESDAY))


class TestCheck:
    def test_match_uses_clock(self, app):
        result = runner.invoke(app, ["check", "*/15 9-17 * * 1-5"])
        assert result.exit_code == 0
        assert "match" in result.stdout

    def test_no_match(self, app):
        result = runner.invoke(app, ["check", "0 0 * * 0"])
        assert result.exit_code == EXIT_NO_MATCH
        assert "no match" in result.stdout

    def test_at_option(self, app):
        result = runner.invoke(app, ["check", "0 0 * * 0", "--at", "2026-03-01T00:00"])
        assert result.exit_code == 0

    def test_bad_at_option(self, app):
        result = runner.invoke(app, ["check", "* * * * *", "--at", "yesterday"])
        assert result.exit_code == EXIT_ERROR

    def test_malformed_expression(self, app):
        result = runner.invoke(app, ["check", "* * *"])
        assert result.exit_code == EXIT_ERROR

    def test_overlong_number_is_no_match(self, app):
        result = runner.invoke(app, ["check", "9" * 5000 + " * * * *"])
        assert result.exit_code == EXIT_NO_MATCH
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_strict_rejects_unmatchable_field(self, app):
        result = runner.invoke(app, ["check", "--strict", "* * * * MON"])
        assert result.exit_code == EXIT_ERROR

    def test_lenient_reports_no_match(self, app):
        result = runner.invoke(app, ["check", "* * * * MON"])
        assert result.exit_code == EXIT_NO_MATCH

    def test_bad_log_level(self, app):
        result = runner.invoke(app, ["--log-level", "loud", "check", "* * * * *"])
        assert result.exit_code == EXIT_ERROR


class TestExpand:
    def test_lists_each_field(self, app):
        result = runner.invoke(app, ["expand", "3-59/15 9 1,15 * 0 2024"])
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0].split() == ["minute", "3,18,33,48"]
        assert lines[1].split() == ["hour", "9"]
        assert lines[2].split() == ["day_of_month", "1,15"]
        assert lines[4].split() == ["day_of_week", "0"]
        assert lines[5].split() == ["year", "2024"]

    def test_empty_field(self, app):
        result = runner.invoke(app, ["expand", "99 * * * *"])
        assert result.exit_code == 0
        assert "(none)" in result.stdout.splitlines()[0]

    def test_malformed(self, app):
        result = runner.invoke(app, ["expand", "*"])
        assert result.exit_code == EXIT_ERROR


class TestDue:
    def _write(self, tmp_path: Path) -> Path:
        path = tmp_path / "cronmatch.toml"
        path.write_text(
            "[logging]\n"
            'level = "error"\n\n'
            "[[schedules]]\n"
            'id = "business"\n'
            'schedule = "*/15 9-17 * * 1-5"\n\n'
            "[[schedules]]\n"
            'id = "sunday"\n'
            'schedule = "0 0 * * 0"\n',
            encoding="utf-8",
        )
        return path

    def test_lists_due_ids(self, app, tmp_path: Path):
        path = self._write(tmp_path)
        result = runner.invoke(app, ["due", "--config", str(path)])
        assert result.exit_code == 0
        assert result.stdout.split() == ["business"]

    def test_at_option(self, app, tmp_path: Path):
        path = self._write(tmp_path)
        result = runner.invoke(
            app, ["due", "--config", str(path), "--at", "2026-03-01T00:00"]
        )
        assert result.exit_code == 0
        assert result.stdout.split() == ["sunday"]

    def test_config_from_env(self, app, tmp_path: Path, monkeypatch):
        path = self._write(tmp_path)
        monkeypatch.setenv(CONFIG_PATH_ENV, str(path))
        result = runner.invoke(app, ["due"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["business"]

    def test_config_log_level_applies_by_default(self, app, tmp_path: Path):
        path = self._write(tmp_path)
        result = runner.invoke(app, ["due", "--config", str(path)])
        assert result.exit_code == 0
        assert "cli.due.checked" not in result.output

    def test_cli_log_level_wins_over_config(self, app, tmp_path: Path):
        path = self._write(tmp_path)
        result = runner.invoke(
            app, ["--log-level", "debug", "due", "--config", str(path)]
        )
        assert result.exit_code == 0
        assert "cli.due.checked" in result.output

    def test_missing_config(self, app, tmp_path: Path):
        result = runner.invoke(app, ["due", "--config", str(tmp_path / "nope.toml")])
        assert result.exit_code == EXIT_ERROR
