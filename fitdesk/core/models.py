"""Lightweight data models used across commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from fitdesk.core.constants import (
    CATEGORIES,
    DEFAULT_REMINDER_INTERVAL,
    EXERCISE_TYPES,
    REMINDER_INTERVALS,
)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Accepts the trailing ``Z`` written by JavaScript's ``toISOString``.
    Naive values are interpreted in local time.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def format_timestamp(value: datetime) -> str:
    """Serialize datetime as UTC ISO-8601 with millisecond precision."""
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


@dataclass(frozen=True)
class Exercise:
    """Catalog entry for a single bodyweight exercise."""

    id: str
    name: str
    category: str
    type: str
    amount: int
    description: str
    tips: Tuple[str, ...] = ()
    gif: Optional[str] = None

    def __post_init__(self) -> None:
        if self.category not in CATEGORIES:
            raise ValueError(f"Unknown category '{self.category}' for exercise {self.id}")
        if self.type not in EXERCISE_TYPES:
            raise ValueError(f"Unknown exercise type '{self.type}' for exercise {self.id}")
        if self.amount <= 0:
            raise ValueError(f"Exercise {self.id} needs a positive amount")

    @property
    def is_timed(self) -> bool:
        return self.type == "time"


@dataclass(frozen=True)
class CompletedExercise:
    """History record written when a session completes."""

    exercise_id: str
    exercise_name: str
    category: str
    completed_at: datetime
    duration: Optional[int] = None
    reps: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.duration is None) == (self.reps is None):
            raise ValueError("Exactly one of duration or reps must be set")

    @classmethod
    def from_exercise(cls, exercise: Exercise, completed_at: datetime) -> "CompletedExercise":
        if exercise.is_timed:
            return cls(
                exercise_id=exercise.id,
                exercise_name=exercise.name,
                category=exercise.category,
                completed_at=completed_at,
                duration=exercise.amount,
            )
        return cls(
            exercise_id=exercise.id,
            exercise_name=exercise.name,
            category=exercise.category,
            completed_at=completed_at,
            reps=exercise.amount,
        )

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "CompletedExercise":
        """Build a record from its persisted JSON shape, raising ValueError if malformed."""
        if not isinstance(payload, dict):
            raise ValueError("History record must be an object")
        try:
            exercise_id = payload["exerciseId"]
            exercise_name = payload["exerciseName"]
            category = payload["category"]
            completed_at = parse_timestamp(payload["completedAt"])
        except KeyError as exc:
            raise ValueError(f"History record is missing {exc.args[0]}") from exc

        duration = payload.get("duration")
        reps = payload.get("reps")
        for value in (duration, reps):
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise ValueError(f"Invalid amount in history record: {value!r}")

        return cls(
            exercise_id=str(exercise_id),
            exercise_name=str(exercise_name),
            category=str(category),
            completed_at=completed_at,
            duration=duration,
            reps=reps,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "exerciseId": self.exercise_id,
            "exerciseName": self.exercise_name,
            "category": self.category,
            "completedAt": format_timestamp(self.completed_at),
        }
        if self.duration is not None:
            payload["duration"] = self.duration
        else:
            payload["reps"] = self.reps
        return payload


@dataclass
class ReminderSettings:
    """Reminder preferences persisted next to the history."""

    enabled: bool = False
    interval_minutes: int = DEFAULT_REMINDER_INTERVAL
    last_reminder: Optional[datetime] = field(default=None)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ReminderSettings":
        if not isinstance(payload, dict):
            raise ValueError("Reminder settings must be an object")

        interval = payload.get("intervalMinutes", DEFAULT_REMINDER_INTERVAL)
        if interval not in REMINDER_INTERVALS:
            interval = DEFAULT_REMINDER_INTERVAL

        last_raw = payload.get("lastReminder")
        last_reminder = parse_timestamp(last_raw) if last_raw else None

        return cls(
            enabled=bool(payload.get("enabled", False)),
            interval_minutes=int(interval),
            last_reminder=last_reminder,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "enabled": self.enabled,
            "intervalMinutes": self.interval_minutes,
        }
        if self.last_reminder is not None:
            payload["lastReminder"] = format_timestamp(self.last_reminder)
        return payload
