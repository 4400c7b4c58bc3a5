"""Markdown rendering for sessions, exercises and statistics."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from fitdesk.core.constants import CATEGORIES, CATEGORY_ICONS, CATEGORY_LABELS, DEFAULT_ICON
from fitdesk.core.models import CompletedExercise, Exercise
from fitdesk.core.session import ExerciseSession, Phase
from fitdesk.core.stats import (
    category_counts,
    exercises_this_month,
    exercises_this_week,
    exercises_today,
    streak,
    streak_message,
    total_duration,
    total_reps,
)
from fitdesk.utils.date_ranges import local_now
from fitdesk.utils.formatting import format_duration, format_time, pluralize, progress_bar


def amount_text(exercise: Exercise) -> str:
    if exercise.type == "reps":
        return f"{exercise.amount} reps"
    return format_time(exercise.amount)


def exercise_to_markdown(exercise: Exercise, include_gif: bool = True) -> str:
    """Describe a catalog exercise: header, target, description, tips."""
    icon = CATEGORY_ICONS.get(exercise.category, DEFAULT_ICON)
    label = CATEGORY_LABELS.get(exercise.category, exercise.category)
    tips = "\n".join(f"- {tip}" for tip in exercise.tips)
    gif = f"\n![{exercise.name}]({exercise.gif})\n" if include_gif and exercise.gif else ""

    return (
        f"# {icon} {exercise.name}\n\n"
        f"**Category:** {label}\n\n"
        f"**Target:** **{amount_text(exercise)}**\n"
        f"{gif}\n"
        f"---\n\n"
        f"## Description\n\n"
        f"{exercise.description}\n\n"
        f"---\n\n"
        f"## Tips\n\n"
        f"{tips}\n"
    )


def status_line(session: ExerciseSession) -> str:
    """One-line countdown text for live status updates."""
    if session.phase is Phase.PREPARING:
        return f"Get ready! Starting in {session.prep_remaining}s"
    if session.phase is Phase.EXERCISING and session.exercise.is_timed:
        pct = session.progress
        return f"Time left {format_time(session.time_left)}  {progress_bar(pct)} {pct}%"
    if session.phase is Phase.EXERCISING:
        return f"Go for it! Complete {session.exercise.amount} reps"
    return f"Session {session.phase.value}"


def phase_status(session: ExerciseSession) -> str:
    """Status block for the current session phase."""
    exercise = session.exercise

    if session.phase is Phase.READY:
        return "*Press s to start when you are ready*"

    if session.phase is Phase.PREPARING:
        remaining = session.prep_remaining
        return (
            f"# Get ready!\n\n"
            f"## {remaining}\n\n"
            f"*The exercise starts in {pluralize(remaining, 'second')}...*"
        )

    if session.phase is Phase.EXERCISING:
        if exercise.is_timed:
            pct = session.progress
            return (
                f"# Time left\n\n"
                f"## {format_time(session.time_left)}\n\n"
                f"`{progress_bar(pct)}` {pct}%"
            )
        return (
            f"# Go for it!\n\n"
            f"Complete **{exercise.amount} reps**\n\n"
            "*Press Enter when you finish*"
        )

    if session.phase is Phase.COMPLETED:
        return "# Completed!\n\nGreat job! You finished the exercise."

    return "*Session cancelled, nothing recorded*"


def session_to_markdown(session: ExerciseSession) -> str:
    exercise = session.exercise
    icon = CATEGORY_ICONS.get(exercise.category, DEFAULT_ICON)
    label = CATEGORY_LABELS.get(exercise.category, exercise.category)

    return (
        f"# {icon} {exercise.name}\n\n"
        f"**Category:** {label}\n\n"
        f"**Target:** **{amount_text(exercise)}**\n\n"
        f"---\n\n"
        f"{phase_status(session)}\n"
    )


def session_summary_markdown(exercises_completed: int, message: str) -> str:
    return (
        f"# Session complete!\n\n"
        f"## Summary\n\n"
        f"- **Exercises done:** {exercises_completed}\n\n"
        f"---\n\n"
        f"*{message}*\n\n"
        f"See you at the next break!\n"
    )


def _recent_rows(history: Sequence[CompletedExercise], limit: int) -> List[str]:
    rows: List[str] = []
    for record in history[:limit]:
        stamp = record.completed_at.astimezone()
        when = stamp.strftime("%a %d %b %H:%M")
        amount = format_duration(record.duration) if record.duration is not None else f"{record.reps} reps"
        icon = CATEGORY_ICONS.get(record.category, DEFAULT_ICON)
        rows.append(f"| {icon} {record.exercise_name} | {amount} | {when} |")
    return rows


def statistics_to_markdown(
    history: Sequence[CompletedExercise],
    now: Optional[datetime] = None,
    recent_limit: int = 5,
) -> str:
    """Full statistics report: period counts, streak, weekly breakdown, recent."""
    current = local_now(now)
    today = exercises_today(history, current)
    week = exercises_this_week(history, current)
    month = exercises_this_month(history, current)
    days = streak(history, today=current.date())

    weekly = category_counts(week)
    breakdown = "\n".join(
        f"- {CATEGORY_ICONS[cat]} {CATEGORY_LABELS[cat]}: **{pluralize(weekly[cat], 'exercise')}**"
        for cat in CATEGORIES
        if weekly.get(cat)
    )

    if week:
        week_section = (
            f"**Total time:** {format_duration(total_duration(week))}\n\n"
            f"**Total reps:** {total_reps(week)}\n\n"
            f"### By category\n\n"
            f"{breakdown or '*No exercises this week*'}"
        )
    else:
        week_section = "*You haven't exercised this week. Time to start!*"

    if history:
        recent_section = (
            "| Exercise | Amount | Date |\n"
            "|----------|--------|------|\n" + "\n".join(_recent_rows(history, recent_limit))
        )
    else:
        recent_section = "*No exercises in the history*"

    return (
        f"# FitDesk statistics\n\n"
        f"## Summary\n\n"
        f"| Period | Exercises |\n"
        f"|--------|-----------|\n"
        f"| Today | **{len(today)}** |\n"
        f"| This week | **{len(week)}** |\n"
        f"| This month | **{len(month)}** |\n"
        f"| All time | **{len(history)}** |\n\n"
        f"---\n\n"
        f"## Current streak\n\n"
        f"# {pluralize(days, 'day')} 🔥\n\n"
        f"*{streak_message(days)}*\n\n"
        f"---\n\n"
        f"## This week\n\n"
        f"{week_section}\n\n"
        f"---\n\n"
        f"## Recent exercises\n\n"
        f"{recent_section}\n"
    )
