"""Exercise reminder scheduling."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from fitdesk.core.constants import REMINDER_INTERVALS
from fitdesk.core.models import ReminderSettings
from fitdesk.utils.date_ranges import local_now

ALLOWED_INTERVALS = REMINDER_INTERVALS


def validate_interval(minutes: int) -> int:
    if minutes not in ALLOWED_INTERVALS:
        allowed = ", ".join(str(value) for value in ALLOWED_INTERVALS)
        raise ValueError(f"Reminder interval must be one of: {allowed} (got {minutes})")
    return minutes


def next_reminder_at(settings: ReminderSettings, now: Optional[datetime] = None) -> Optional[datetime]:
    """When the next reminder fires; None while reminders are disabled."""
    if not settings.enabled:
        return None
    if settings.last_reminder is None:
        return local_now(now)
    return settings.last_reminder + timedelta(minutes=settings.interval_minutes)


def is_reminder_due(settings: ReminderSettings, now: Optional[datetime] = None) -> bool:
    due_at = next_reminder_at(settings, now)
    if due_at is None:
        return False
    return local_now(now) >= due_at
