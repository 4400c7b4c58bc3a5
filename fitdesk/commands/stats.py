"""Statistics and history commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from fitdesk.commands.common import get_state, print_json_payload, print_markdown
from fitdesk.core.stats import build_statistics
from fitdesk.exporters.markdown import statistics_to_markdown

app = typer.Typer(help="Exercise statistics and history", invoke_without_command=True)


def _write_report(path: Path, report: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report, indent=2, ensure_ascii=False) + "\n")


@app.callback()
def stats_callback(
    ctx: typer.Context,
    output_file: Optional[Path] = typer.Option(None, "--output", help="Also write statistics JSON to a file"),
) -> None:
    """Show streak, period totals and recent exercises."""
    if ctx.invoked_subcommand is not None:
        return

    state = get_state(ctx)
    history = state.history_store().load()
    report = build_statistics(history)

    if output_file:
        _write_report(output_file, report)

    if state.json_output:
        print_json_payload(state, report)
        return

    if state.plain_output:
        counts = report["counts"]
        for key in ("today", "this_week", "this_month", "total"):
            typer.echo(f"{key}\t{counts[key]}")
        typer.echo(f"streak\t{report['streak']['days']}")
        typer.echo(f"week_duration\t{report['this_week']['total_duration']}")
        typer.echo(f"week_reps\t{report['this_week']['total_reps']}")
        for category, count in report["this_week"]["by_category"].items():
            typer.echo(f"week_{category}\t{count}")
        return

    print_markdown(state, statistics_to_markdown(history))
    if output_file:
        state.console.print(f"Exported to: {output_file}")


@app.command("clear")
def clear_command(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete the whole exercise history."""
    state = get_state(ctx)
    store = state.history_store()

    if not yes and not typer.confirm(
        "Are you sure you want to delete the whole exercise history?",
        default=False,
        err=True,
    ):
        if state.json_output:
            print_json_payload(state, {"status": "cancelled", "cleared": False})
        else:
            state.console.print("History kept")
        return

    store.clear()
    if state.json_output:
        print_json_payload(state, {"status": "success", "cleared": True})
        return
    state.console.print("Exercise history cleared")


@app.command("demo")
def demo_command(ctx: typer.Context) -> None:
    """Replace the history with sample data."""
    state = get_state(ctx)
    records = state.history_store().load_demo_data()

    if state.json_output:
        print_json_payload(state, {"status": "success", "records": len(records)})
        return
    state.console.print(f"Loaded {len(records)} demo records")
