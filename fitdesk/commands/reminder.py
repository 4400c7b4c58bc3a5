"""Exercise reminder commands."""

from __future__ import annotations

from typing import Any, Dict, Optional

import typer

from fitdesk.commands.common import get_state, print_json_payload
from fitdesk.core.models import ReminderSettings
from fitdesk.core.reminder import ALLOWED_INTERVALS, is_reminder_due, next_reminder_at, validate_interval
from fitdesk.utils.date_ranges import local_now

app = typer.Typer(help="Periodic exercise reminders")


def _settings_payload(settings: ReminderSettings) -> Dict[str, Any]:
    payload = settings.to_dict()
    due_at = next_reminder_at(settings)
    payload["nextReminder"] = due_at.isoformat(timespec="seconds") if due_at else None
    payload["due"] = is_reminder_due(settings)
    return payload


def _interval_option(value: Optional[int]) -> Optional[int]:
    if value is None:
        return value
    try:
        return validate_interval(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("status")
def status_command(ctx: typer.Context) -> None:
    """Show reminder settings and when the next one fires."""
    state = get_state(ctx)
    settings = state.history_store().load_reminder_settings()
    payload = _settings_payload(settings)

    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo(f"enabled\t{str(settings.enabled).lower()}")
        typer.echo(f"interval_minutes\t{settings.interval_minutes}")
        typer.echo(f"last_reminder\t{payload.get('lastReminder') or '-'}")
        typer.echo(f"next_reminder\t{payload['nextReminder'] or '-'}")
        return

    if not settings.enabled:
        state.console.print(f"Reminders are off (interval {settings.interval_minutes} min)")
        return
    state.console.print(f"Reminders every {settings.interval_minutes} min")
    state.console.print(f"Next reminder: {payload['nextReminder']}")


@app.command("set")
def set_command(
    ctx: typer.Context,
    enable: Optional[bool] = typer.Option(None, "--enable/--disable", help="Turn reminders on or off"),
    interval: Optional[int] = typer.Option(
        None,
        help=f"Minutes between reminders: {'|'.join(str(v) for v in ALLOWED_INTERVALS)}",
        callback=_interval_option,
    ),
) -> None:
    """Update reminder settings."""
    state = get_state(ctx)
    store = state.history_store()
    settings = store.load_reminder_settings()

    if enable is not None:
        settings.enabled = enable
    if interval is not None:
        settings.interval_minutes = interval
    store.save_reminder_settings(settings)

    if state.json_output:
        print_json_payload(state, _settings_payload(settings))
        return

    status = "on" if settings.enabled else "off"
    state.console.print(f"Reminders {status}, every {settings.interval_minutes} min")


@app.command("check")
def check_command(ctx: typer.Context) -> None:
    """Fire a reminder if one is due (suitable for cron/launchd)."""
    state = get_state(ctx)
    store = state.history_store()
    settings = store.load_reminder_settings()
    now = local_now()

    fired = is_reminder_due(settings, now)
    if fired:
        settings = store.update_last_reminder(now)

    if state.json_output:
        payload = _settings_payload(settings)
        payload["fired"] = fired
        print_json_payload(state, payload)
        return

    if fired:
        state.console.print("Time for an exercise break! Run `fitdesk workout` to start one.")
        return
    if state.verbose:
        state.console.print("No reminder due")
