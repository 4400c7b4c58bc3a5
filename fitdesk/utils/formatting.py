"""Formatting helpers used by exports and console output."""

from __future__ import annotations


def format_time(seconds: int) -> str:
    """Countdown style: M:SS above a minute, otherwise Ns."""
    mins, secs = divmod(max(int(seconds), 0), 60)
    if mins > 0:
        return f"{mins}:{secs:02d}"
    return f"{secs}s"


def format_duration(seconds: int) -> str:
    """Total time style: Mm Ss above a minute, otherwise Ns."""
    mins, secs = divmod(max(int(seconds), 0), 60)
    if mins > 0:
        return f"{mins}m {secs}s"
    return f"{secs}s"


def progress_bar(percent: int, width: int = 20) -> str:
    pct = min(max(int(percent), 0), 100)
    filled = pct * width // 100
    return "█" * filled + "░" * (width - filled)


def pluralize(count: int, singular: str, plural: str = "") -> str:
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"
