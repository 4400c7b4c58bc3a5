"""Entry point for fitdesk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from fitdesk import __version__
from fitdesk.commands import exercises as exercise_commands
from fitdesk.commands import reminder as reminder_commands
from fitdesk.commands import stats as stats_commands
from fitdesk.commands.workout import workout_command
from fitdesk.core.config import ConfigError, default_config_path, load_config, resolve_storage_path
from fitdesk.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Desk exercise breaks: timed sessions, history and streaks",
    invoke_without_command=True,
)


def configure_logging(verbose: bool, plain_output: bool) -> None:
    """Send library logs to stderr through rich; DEBUG only with --verbose."""
    handler = RichHandler(
        console=Console(stderr=True, no_color=plain_output),
        show_time=False,
        show_path=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Output plain text (no rich formatting/tables)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    configure_logging(verbose, plain_output)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(
        quiet=quiet,
        no_color=plain_output,
        log_time=False,
        log_path=False,
    )
    ctx.obj = CLIState(
        json_output=(json_output and not plain_output),
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=cfg_path,
        config=cfg,
        console=console,
        storage_path=resolve_storage_path(cfg),
    )
    logging.getLogger(__name__).debug("Using storage %s", ctx.obj.storage_path)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


app.command("workout")(workout_command)
app.add_typer(exercise_commands.app, name="exercises")
app.add_typer(stats_commands.app, name="stats")
app.add_typer(reminder_commands.app, name="reminder")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
