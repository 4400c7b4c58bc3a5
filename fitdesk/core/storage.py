"""Local key-value persistence and the exercise history store."""

from __future__ import annotations

import json
import logging
import random
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from fitdesk.core.constants import HISTORY_KEY, MAX_HISTORY, REMINDER_SETTINGS_KEY
from fitdesk.core.models import CompletedExercise, ReminderSettings

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """String key-value primitive the history store writes through."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStore:
    """In-process key-value store."""

    def __init__(self, items: Optional[Dict[str, str]] = None) -> None:
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStore:
    """Key-value store backed by a single JSON object file.

    An unreadable or malformed file reads as empty; the next write replaces it.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: root is not an object", self.path)
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2) + "\n")

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class HistoryStore:
    """Completed-exercise history and reminder settings over a key-value store."""

    def __init__(self, kv: KeyValueStore, max_history: int = MAX_HISTORY) -> None:
        self.kv = kv
        self.max_history = max_history

    def load(self) -> List[CompletedExercise]:
        """Return history newest-first; empty when absent or malformed."""
        raw = self.kv.get_item(HISTORY_KEY)
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            logger.warning("Discarding malformed exercise history: %s", exc)
            return []
        if not isinstance(payload, list):
            logger.warning("Discarding exercise history: expected a list")
            return []

        history: List[CompletedExercise] = []
        for item in payload:
            try:
                history.append(CompletedExercise.from_dict(item))
            except (TypeError, ValueError) as exc:
                logger.debug("Skipping malformed history record %r: %s", item, exc)
        return history

    def _save(self, history: List[CompletedExercise]) -> None:
        self.kv.set_item(HISTORY_KEY, json.dumps([record.to_dict() for record in history]))

    def append(self, record: CompletedExercise) -> List[CompletedExercise]:
        """Prepend a record and keep only the most recent entries."""
        history = self.load()
        history.insert(0, record)
        trimmed = history[: self.max_history]
        self._save(trimmed)
        logger.debug("Recorded %s (%d records stored)", record.exercise_id, len(trimmed))
        return trimmed

    def clear(self) -> None:
        self.kv.remove_item(HISTORY_KEY)

    def load_reminder_settings(self) -> ReminderSettings:
        raw = self.kv.get_item(REMINDER_SETTINGS_KEY)
        if not raw:
            return ReminderSettings()
        try:
            return ReminderSettings.from_dict(json.loads(raw))
        except (TypeError, ValueError) as exc:
            logger.warning("Using default reminder settings: %s", exc)
            return ReminderSettings()

    def save_reminder_settings(self, settings: ReminderSettings) -> None:
        self.kv.set_item(REMINDER_SETTINGS_KEY, json.dumps(settings.to_dict()))

    def update_last_reminder(self, now: Optional[datetime] = None) -> ReminderSettings:
        settings = self.load_reminder_settings()
        settings.last_reminder = now or datetime.now().astimezone()
        self.save_reminder_settings(settings)
        return settings

    def load_demo_data(
        self,
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None,
    ) -> List[CompletedExercise]:
        """Replace history with 50 sample records for demos and screenshots."""
        current = now or datetime.now().astimezone()
        chooser = rng or random.Random()
        templates = [
            ("pushups", "Push-ups", "upper", None, 15),
            ("squats", "Squats", "lower", None, 20),
            ("plank", "Plank", "core", 45, None),
            ("jumping-jacks", "Jumping Jacks", "cardio", 45, None),
            ("burpees", "Burpees", "full-body", None, 8),
            ("lunges", "Lunges", "lower", None, 12),
            ("crunches", "Crunches", "core", None, 20),
            ("tricep-dips", "Tricep Dips", "upper", None, 12),
            ("high-knees", "High Knees", "cardio", 30, None),
            ("mountain-climbers", "Mountain Climbers", "core", 30, None),
        ]
        records: List[CompletedExercise] = []

        def add(days_ago: int, hours_ago: int, index: int) -> None:
            exercise_id, name, category, duration, reps = templates[index % len(templates)]
            stamp = current - timedelta(days=days_ago, hours=hours_ago)
            stamp = stamp.replace(minute=chooser.randrange(60), second=0, microsecond=0)
            records.append(
                CompletedExercise(
                    exercise_id=exercise_id,
                    exercise_name=name,
                    category=category,
                    completed_at=stamp,
                    duration=duration,
                    reps=reps,
                )
            )

        for hours_ago, index in ((1, 0), (2, 1), (4, 2), (6, 3), (8, 4)):
            add(0, hours_ago, index)
        for days_ago, hours_ago, index in (
            (1, 2, 5),
            (1, 5, 6),
            (2, 3, 7),
            (2, 6, 8),
            (3, 2, 9),
            (4, 4, 0),
            (5, 3, 1),
        ):
            add(days_ago, hours_ago, index)
        for i in range(20):
            add(7 + i // 3, i % 8 + 1, i)
        for i in range(18):
            add(35 + i // 2, i % 6 + 1, i)

        records.sort(key=lambda record: record.completed_at, reverse=True)
        self._save(records)
        return records
