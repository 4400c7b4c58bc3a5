"""Workout session command."""

from __future__ import annotations

import random
import time
from contextlib import nullcontext
from typing import List, Optional

import typer

from fitdesk.commands.common import category_option, get_state, print_json_payload, print_markdown
from fitdesk.core.catalog import get_exercise, pick_random, pick_random_by_category
from fitdesk.core.config import ConfigError, preparation_seconds
from fitdesk.core.constants import MOTIVATIONAL_MESSAGES
from fitdesk.core.models import CompletedExercise, Exercise
from fitdesk.core.session import ExerciseSession, Phase, run_session
from fitdesk.core.sound import make_cue_player
from fitdesk.core.state import CLIState
from fitdesk.exporters.markdown import (
    exercise_to_markdown,
    phase_status,
    session_summary_markdown,
    session_to_markdown,
    status_line,
)

START_CHOICES = {"s": "start", "n": "another", "q": "quit"}
DONE_CHOICES = {"": "done", "n": "another", "q": "quit"}


def _ask_start() -> str:
    answer = typer.prompt(
        "[s]tart, [n]ext exercise or [q]uit",
        default="s",
        show_default=False,
        err=True,
    )
    choice = START_CHOICES.get(answer.strip().lower()[:1])
    if choice is None:
        typer.echo(f"Unknown choice '{answer}', starting the exercise", err=True)
        return "start"
    return choice


def _ask_done(session: ExerciseSession) -> str:
    answer = typer.prompt(
        f"Do {session.exercise.amount} reps, then press Enter ([n]ext exercise, [q]uit)",
        default="",
        show_default=False,
        err=True,
    )
    return DONE_CHOICES.get(answer.strip().lower()[:1], "done")


def run_interactive_session(state: CLIState, session: ExerciseSession) -> str:
    """Run one session in the terminal.

    Returns ``completed``, ``another`` (skip to a new exercise) or ``quit``.
    Prompts go to stderr so ``--json`` output stays parseable.
    """
    if not state.json_output:
        print_markdown(state, exercise_to_markdown(session.exercise, include_gif=False))

    try:
        if session.phase is Phase.READY:
            choice = _ask_start()
            if choice != "start":
                session.cancel()
                return choice
            session.start()

        show_live = not state.json_output and not state.plain_output
        status_ctx = state.console.status(status_line(session)) if show_live else nullcontext()
        with status_ctx as status:

            def on_tick(current: ExerciseSession) -> None:
                if status is not None:
                    status.update(status_line(current))
                elif state.plain_output and not state.json_output:
                    typer.echo(status_line(current))

            run_session(session, sleep=time.sleep, on_tick=on_tick)

        if session.awaiting_completion_signal:
            if not state.json_output:
                print_markdown(state, phase_status(session))
            choice = _ask_done(session)
            if choice != "done":
                session.cancel()
                return choice
            session.complete()
    except (KeyboardInterrupt, typer.Abort):
        session.cancel()
        if not state.json_output:
            print_markdown(state, phase_status(session))
        return "quit"

    if not state.json_output:
        print_markdown(state, session_to_markdown(session))
    return "completed"


def workout_command(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(
        None,
        help="Pick exercises from one category: upper|core|lower|cardio|full-body",
        callback=category_option,
    ),
    exercise_id: Optional[str] = typer.Option(None, "--exercise", help="Start a specific exercise by id"),
    auto_start: bool = typer.Option(False, "--auto-start", help="Skip the start prompt"),
    once: bool = typer.Option(False, "--once", help="Finish after one exercise"),
) -> None:
    """Start a workout: random exercises, timed, recorded to history."""
    state = get_state(ctx)
    store = state.history_store()

    try:
        prep = preparation_seconds(state.config)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    def pick() -> Exercise:
        if exercise_id:
            return get_exercise(exercise_id)
        if category:
            return pick_random_by_category(category)
        return pick_random()

    try:
        exercise = pick()
    except LookupError as exc:
        message = str(exc)
        if state.json_output:
            print_json_payload(state, {"status": "error", "message": message})
        else:
            typer.echo(f"Error: {message}")
        raise typer.Exit(code=1)

    records: List[CompletedExercise] = []
    cue_player = make_cue_player(state.config)

    while True:
        session = ExerciseSession(
            exercise,
            recorder=store.append,
            on_complete=records.append,
            cue_player=cue_player,
            preparation_seconds=prep,
            auto_start=auto_start,
        )
        outcome = run_interactive_session(state, session)

        if outcome == "quit":
            break
        if outcome == "another":
            exercise = pick()
            continue
        if once or exercise_id:
            break
        if state.json_output or not typer.confirm(
            f"{len(records)} done this session. Continue with another exercise?",
            default=True,
            err=True,
        ):
            break
        exercise = pick()

    if state.json_output:
        print_json_payload(
            state,
            {
                "status": "finished",
                "completed": len(records),
                "records": [record.to_dict() for record in records],
            },
        )
        return

    if records:
        print_markdown(state, session_summary_markdown(len(records), random.choice(MOTIVATIONAL_MESSAGES)))
