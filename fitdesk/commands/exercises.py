"""Exercise catalog commands."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

import typer
from rich.table import Table

from fitdesk.commands.common import category_option, get_state, print_json_payload, print_markdown
from fitdesk.core.catalog import EXERCISES, ExerciseNotFoundError, exercises_by_category, get_exercise
from fitdesk.core.constants import CATEGORY_ICONS, CATEGORY_LABELS
from fitdesk.exporters.markdown import amount_text, exercise_to_markdown

app = typer.Typer(help="Browse the exercise catalog")


@app.command("list")
def list_command(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(
        None,
        help="Filter by category: upper|core|lower|cardio|full-body",
        callback=category_option,
    ),
) -> None:
    """List catalog exercises, optionally filtered by category."""
    state = get_state(ctx)
    exercises = exercises_by_category(category) if category else list(EXERCISES)

    if state.json_output:
        print_json_payload(state, [asdict(exercise) for exercise in exercises])
        return

    if state.plain_output:
        typer.echo("id\tname\tcategory\ttype\tamount")
        for exercise in exercises:
            typer.echo(
                "\t".join(
                    [exercise.id, exercise.name, exercise.category, exercise.type, str(exercise.amount)]
                )
            )
        typer.echo(f"total\t{len(exercises)}")
        return

    title = CATEGORY_LABELS[category] if category else "All exercises"
    table = Table(title=f"{title} ({len(exercises)})")
    table.add_column("Id")
    table.add_column("Exercise")
    table.add_column("Category")
    table.add_column("Target")
    for exercise in exercises:
        table.add_row(
            exercise.id,
            exercise.name,
            f"{CATEGORY_ICONS[exercise.category]} {CATEGORY_LABELS[exercise.category]}",
            amount_text(exercise),
        )
    state.console.print(table)


@app.command("show")
def show_command(
    ctx: typer.Context,
    exercise_id: str = typer.Argument(..., help="Exercise id, e.g. pushups"),
) -> None:
    """Show description and tips for one exercise."""
    state = get_state(ctx)
    try:
        exercise = get_exercise(exercise_id)
    except ExerciseNotFoundError as exc:
        if state.json_output:
            print_json_payload(state, {"status": "error", "message": str(exc)})
        else:
            typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1)

    if state.json_output:
        print_json_payload(state, asdict(exercise))
        return

    print_markdown(state, exercise_to_markdown(exercise))
