"""Static constants and mappings for fitdesk."""

from __future__ import annotations

CATEGORIES = ("upper", "core", "lower", "cardio", "full-body")
EXERCISE_TYPES = ("reps", "time")

CATEGORY_LABELS = {
    "upper": "Upper Body",
    "core": "Core",
    "lower": "Lower Body",
    "cardio": "Cardio",
    "full-body": "Full Body",
}

CATEGORY_ICONS = {
    "upper": "💪",
    "core": "🎯",
    "lower": "🦵",
    "cardio": "❤️",
    "full-body": "🔥",
}

DEFAULT_ICON = "🏃"

HISTORY_KEY = "exercise_history"
REMINDER_SETTINGS_KEY = "reminder_settings"

MAX_HISTORY = 500
STREAK_LOOKBACK_DAYS = 365
PREPARATION_TIME = 10

REMINDER_INTERVALS = (30, 45, 60, 90, 120)
DEFAULT_REMINDER_INTERVAL = 45

# macOS system sounds
SOUND_START = "/System/Library/Sounds/Blow.aiff"
SOUND_COMPLETE = "/System/Library/Sounds/Glass.aiff"

MOTIVATIONAL_MESSAGES = (
    "Every move counts!",
    "Your body thanks you!",
    "Consistency is key!",
    "Small steps, big results!",
    "Keep it up!",
)
