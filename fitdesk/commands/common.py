"""Shared command helpers."""

from __future__ import annotations

import json
from typing import Any, Optional

import typer
from rich.markdown import Markdown

from fitdesk.core.catalog import parse_category
from fitdesk.core.state import CLIState


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))
        return
    state.console.print_json(data=payload)


def print_markdown(state: CLIState, text: str) -> None:
    """Render markdown with rich, or echo it verbatim in plain mode."""
    if state.plain_output:
        typer.echo(text)
        return
    state.console.print(Markdown(text))


def category_option(value: Optional[str]) -> Optional[str]:
    """Typer callback normalizing --category values."""
    if value is None:
        return value
    try:
        return parse_category(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
