from __future__ import annotations

import json
from pathlib import Path

from fitdesk.__main__ import app


def test_exercises_list_json_filters_category(runner, cli_env: Path) -> None:
    result = runner.invoke(app, ["--json", "exercises", "list", "--category", "core"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert len(payload) == 6
    assert {item["category"] for item in payload} == {"core"}


def test_exercises_list_plain(runner, cli_env: Path) -> None:
    result = runner.invoke(app, ["--plain", "exercises", "list"])
    assert result.exit_code == 0
    assert "plank\tPlank\tcore\ttime\t45" in result.stdout
    assert "total\t24" in result.stdout


def test_exercises_show(runner, cli_env: Path) -> None:
    result = runner.invoke(app, ["--plain", "exercises", "show", "burpees"])
    assert result.exit_code == 0
    assert "# 🔥 Burpees" in result.stdout
    assert "## Tips" in result.stdout


def test_exercises_show_unknown(runner, cli_env: Path) -> None:
    result = runner.invoke(app, ["exercises", "show", "handstand"])
    assert result.exit_code == 1
    assert "No exercise with id" in result.stdout


def test_stats_json_empty_history(runner, cli_env: Path) -> None:
    result = runner.invoke(app, ["--json", "stats"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["counts"]["total"] == 0
    assert payload["streak"]["days"] == 0
    assert payload["recent"] == []


def test_stats_demo_then_report(runner, cli_env: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["stats", "demo"])
    assert result.exit_code == 0
    assert "Loaded 50 demo records" in result.stdout

    output = tmp_path / "reports" / "report.json"
    result = runner.invoke(app, ["--json", "stats", "--output", str(output)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["counts"]["total"] == 50
    assert len(payload["recent"]) == 5
    assert json.loads(output.read_text())["counts"]["total"] == 50


def test_stats_plain_output(runner, cli_env: Path) -> None:
    result = runner.invoke(app, ["--plain", "stats"])
    assert result.exit_code == 0
    assert "total\t0" in result.stdout
    assert "streak\t0" in result.stdout


def test_stats_markdown_output(runner, cli_env: Path) -> None:
    result = runner.invoke(app, ["stats"])
    assert result.exit_code == 0
    assert "FitDesk statistics" in result.stdout


def test_stats_clear_requires_confirmation(runner, cli_env: Path) -> None:
    runner.invoke(app, ["stats", "demo"])

    result = runner.invoke(app, ["stats", "clear"], input="n\n")
    assert result.exit_code == 0
    assert "History kept" in result.stdout
    assert json.loads(runner.invoke(app, ["--json", "stats"]).stdout)["counts"]["total"] == 50

    result = runner.invoke(app, ["stats", "clear", "--yes"])
    assert result.exit_code == 0
    assert "Exercise history cleared" in result.stdout
    assert json.loads(runner.invoke(app, ["--json", "stats"]).stdout)["counts"]["total"] == 0


def test_reminder_defaults(runner, cli_env: Path) -> None:
    result = runner.invoke(app, ["--json", "reminder", "status"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["enabled"] is False
    assert payload["intervalMinutes"] == 45
    assert payload["nextReminder"] is None


def test_reminder_set_and_status(runner, cli_env: Path) -> None:
    result = runner.invoke(app, ["reminder", "set", "--enable", "--interval", "30"])
    assert result.exit_code == 0
    assert "Reminders on, every 30 min" in result.stdout

    payload = json.loads(runner.invoke(app, ["--json", "reminder", "status"]).stdout)
    assert payload["enabled"] is True
    assert payload["intervalMinutes"] == 30


def test_reminder_set_rejects_interval(runner, cli_env: Path) -> None:
    result = runner.invoke(app, ["reminder", "set", "--interval", "7"])
    assert result.exit_code == 2


def test_reminder_check_fires_once_per_interval(runner, cli_env: Path) -> None:
    runner.invoke(app, ["reminder", "set", "--enable"])

    result = runner.invoke(app, ["reminder", "check"])
    assert result.exit_code == 0
    assert "Time for an exercise break!" in result.stdout

    result = runner.invoke(app, ["--json", "reminder", "check"])
    payload = json.loads(result.stdout)
    assert payload["fired"] is False
    assert payload["lastReminder"]
