from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest
from typer.testing import CliRunner

from fitdesk.core.models import CompletedExercise
from fitdesk.core.storage import HistoryStore, MemoryStore


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def memory_store() -> HistoryStore:
    return HistoryStore(MemoryStore())


@pytest.fixture()
def make_record() -> Callable[..., CompletedExercise]:
    def _make(
        completed_at: datetime,
        exercise_id: str = "pushups",
        category: str = "upper",
        duration: Optional[int] = None,
        reps: Optional[int] = None,
    ) -> CompletedExercise:
        if duration is None and reps is None:
            reps = 15
        return CompletedExercise(
            exercise_id=exercise_id,
            exercise_name=exercise_id.replace("-", " ").title(),
            category=category,
            completed_at=completed_at,
            duration=duration,
            reps=reps,
        )

    return _make


@pytest.fixture()
def sample_record_payload() -> Dict[str, Any]:
    return {
        "exerciseId": "plank",
        "exerciseName": "Plank",
        "category": "core",
        "completedAt": "2026-02-14T10:30:00.000Z",
        "duration": 45,
    }


@pytest.fixture()
def cli_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point config and storage at tmp_path with sounds disabled; returns storage path."""
    config_path = tmp_path / "config.toml"
    config_path.write_text("[sound]\nenabled = false\n")
    storage_path = tmp_path / "storage.json"
    monkeypatch.setenv("FITDESK_CONFIG_FILE", str(config_path))
    monkeypatch.setenv("FITDESK_STORAGE", str(storage_path))
    monkeypatch.setenv("FITDESK_DATA_DIR", str(tmp_path / "data"))
    return storage_path
