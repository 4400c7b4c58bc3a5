"""Local calendar boundaries for history filters."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional


def local_now(now: Optional[datetime] = None) -> datetime:
    """Return an aware datetime in the local timezone."""
    if now is None:
        return datetime.now().astimezone()
    return now.astimezone()


def local_date(value: datetime) -> date:
    """Calendar date of an instant in the local timezone."""
    return value.astimezone().date()


def local_midnight(day: date) -> datetime:
    """Aware local midnight for a calendar date (DST-correct offset)."""
    return datetime.combine(day, time.min).astimezone()


def start_of_day(now: Optional[datetime] = None) -> datetime:
    """Local midnight of the current day."""
    return local_midnight(local_now(now).date())


def start_of_week(now: Optional[datetime] = None) -> datetime:
    """Local midnight of the most recent Sunday (today if it is Sunday)."""
    today = local_now(now).date()
    days_since_sunday = (today.weekday() + 1) % 7
    return local_midnight(today - timedelta(days=days_since_sunday))


def start_of_month(now: Optional[datetime] = None) -> datetime:
    """Local midnight on the first of the current month."""
    return local_midnight(local_now(now).date().replace(day=1))
