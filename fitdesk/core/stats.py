"""Statistics over the completed-exercise history."""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from fitdesk.core.constants import CATEGORIES, STREAK_LOOKBACK_DAYS
from fitdesk.core.models import CompletedExercise
from fitdesk.utils.date_ranges import (
    local_date,
    local_now,
    start_of_day,
    start_of_month,
    start_of_week,
)


def _since(history: Iterable[CompletedExercise], boundary: datetime) -> List[CompletedExercise]:
    return [record for record in history if record.completed_at >= boundary]


def exercises_today(
    history: Iterable[CompletedExercise], now: Optional[datetime] = None
) -> List[CompletedExercise]:
    return _since(history, start_of_day(now))


def exercises_this_week(
    history: Iterable[CompletedExercise], now: Optional[datetime] = None
) -> List[CompletedExercise]:
    """Records since local midnight of the most recent Sunday."""
    return _since(history, start_of_week(now))


def exercises_this_month(
    history: Iterable[CompletedExercise], now: Optional[datetime] = None
) -> List[CompletedExercise]:
    return _since(history, start_of_month(now))


def exercises_by_day(history: Iterable[CompletedExercise]) -> Dict[date, List[CompletedExercise]]:
    """Group records by local calendar date, preserving input order."""
    by_day: Dict[date, List[CompletedExercise]] = defaultdict(list)
    for record in history:
        by_day[local_date(record.completed_at)].append(record)
    return dict(by_day)


def category_counts(subset: Iterable[CompletedExercise]) -> Dict[str, int]:
    return dict(Counter(record.category for record in subset))


def total_duration(subset: Iterable[CompletedExercise]) -> int:
    return sum(record.duration or 0 for record in subset)


def total_reps(subset: Iterable[CompletedExercise]) -> int:
    return sum(record.reps or 0 for record in subset)


def streak(history: Sequence[CompletedExercise], today: Optional[date] = None) -> int:
    """Count consecutive local days with at least one completed exercise.

    The scan starts today, or yesterday when today has nothing yet, and looks
    back at most STREAK_LOOKBACK_DAYS days.
    """
    if not history:
        return 0

    days = set(exercises_by_day(history))
    cursor = today or local_now().date()
    if cursor not in days:
        cursor -= timedelta(days=1)

    count = 0
    for _ in range(STREAK_LOOKBACK_DAYS):
        if cursor not in days:
            break
        count += 1
        cursor -= timedelta(days=1)
    return count


def streak_message(days: int) -> str:
    """Motivational line for the current streak length."""
    if days == 0:
        return "Start your exercise streak today!"
    if days == 1:
        return "Good start! Keep the pace tomorrow."
    if days < 7:
        return f"{days} days in a row! You're on the right track."
    if days < 30:
        return f"{days} days! You're unstoppable!"
    return f"{days} days! You're a fitness legend!"


def build_statistics(
    history: Sequence[CompletedExercise],
    now: Optional[datetime] = None,
    recent_limit: int = 5,
) -> Dict[str, Any]:
    """Aggregate history into a JSON-ready statistics payload."""
    current = local_now(now)
    today = exercises_today(history, current)
    week = exercises_this_week(history, current)
    month = exercises_this_month(history, current)
    current_streak = streak(history, today=current.date())
    weekly_categories = category_counts(week)

    return {
        "generated_at": current.isoformat(timespec="seconds"),
        "counts": {
            "today": len(today),
            "this_week": len(week),
            "this_month": len(month),
            "total": len(history),
        },
        "streak": {
            "days": current_streak,
            "message": streak_message(current_streak),
        },
        "this_week": {
            "total_duration": total_duration(week),
            "total_reps": total_reps(week),
            "by_category": {
                category: weekly_categories[category]
                for category in CATEGORIES
                if weekly_categories.get(category)
            },
        },
        "recent": [record.to_dict() for record in history[:recent_limit]],
    }
