from __future__ import annotations

from datetime import datetime
from typing import List

import pytest

from fitdesk.core.catalog import get_exercise
from fitdesk.core.models import CompletedExercise, Exercise
from fitdesk.core.session import ExerciseSession, Phase, SessionError, run_session

FIXED_NOW = datetime(2026, 2, 14, 9, 30).astimezone()


def _timed(amount: int = 3) -> Exercise:
    return Exercise(
        id="hold",
        name="Hold",
        category="core",
        type="time",
        amount=amount,
        description="Hold still",
    )


def _session(exercise: Exercise, records: List[CompletedExercise], **kwargs) -> ExerciseSession:
    return ExerciseSession(exercise, recorder=records.append, clock=lambda: FIXED_NOW, **kwargs)


def test_timed_session_full_lifecycle_records_once() -> None:
    records: List[CompletedExercise] = []
    cues: List[str] = []
    session = _session(_timed(3), records, cue_player=cues.append)
    assert session.phase is Phase.READY

    session.start()
    assert session.phase is Phase.PREPARING
    assert session.prep_remaining == 10

    for _ in range(9):
        session.tick()
    assert session.phase is Phase.PREPARING
    assert session.prep_remaining == 1

    session.tick()
    assert session.phase is Phase.EXERCISING
    assert session.time_left == 3
    assert cues == ["start"]

    session.tick()
    session.tick()
    assert session.phase is Phase.EXERCISING
    assert session.time_left == 1

    session.tick()
    assert session.phase is Phase.COMPLETED
    assert cues == ["start", "complete"]
    assert len(records) == 1
    assert records[0].duration == 3
    assert records[0].reps is None
    assert records[0].completed_at == FIXED_NOW

    assert session.tick() is False
    assert len(records) == 1


def test_auto_start_begins_in_preparing() -> None:
    session = _session(_timed(), [], auto_start=True)
    assert session.phase is Phase.PREPARING
    with pytest.raises(SessionError):
        session.start()


def test_zero_preparation_goes_straight_to_exercising() -> None:
    session = _session(_timed(5), [], preparation_seconds=0)
    session.start()
    assert session.phase is Phase.EXERCISING
    assert session.time_left == 5


def test_stale_preparing_tick_is_ignored_after_phase_change() -> None:
    session = _session(_timed(3), [], auto_start=True)
    prep_token = session.token
    for _ in range(10):
        session.tick()
    assert session.phase is Phase.EXERCISING

    assert session.tick(prep_token) is False
    assert session.time_left == 3

    assert session.tick(session.token) is True
    assert session.time_left == 2


def test_rep_session_completes_on_signal_only() -> None:
    records: List[CompletedExercise] = []
    completions: List[CompletedExercise] = []
    session = _session(get_exercise("pushups"), records, on_complete=completions.append, auto_start=True)
    for _ in range(10):
        session.tick()
    assert session.awaiting_completion_signal

    for _ in range(30):
        assert session.tick() is False
    assert session.phase is Phase.EXERCISING

    record = session.complete()
    assert session.phase is Phase.COMPLETED
    assert record.reps == 15
    assert record.duration is None

    assert session.complete() is record
    assert records == [record]
    assert completions == [record]


def test_complete_before_exercising_raises_and_records_nothing() -> None:
    records: List[CompletedExercise] = []
    session = _session(get_exercise("squats"), records)
    with pytest.raises(SessionError):
        session.complete()
    session.start()
    with pytest.raises(SessionError):
        session.complete()
    assert records == []


def test_complete_on_timed_exercise_raises() -> None:
    session = _session(_timed(), [], preparation_seconds=0, auto_start=True)
    with pytest.raises(SessionError, match="countdown"):
        session.complete()


def test_cancel_during_preparing_writes_nothing() -> None:
    records: List[CompletedExercise] = []
    session = _session(_timed(1), records, auto_start=True)
    token = session.token
    session.tick()

    assert session.cancel() is True
    assert session.phase is Phase.CANCELLED
    assert session.tick(token) is False
    assert session.tick() is False
    with pytest.raises(SessionError):
        session.complete()
    assert records == []


def test_cancel_after_completion_is_noop() -> None:
    session = _session(_timed(1), [], preparation_seconds=0, auto_start=True)
    session.tick()
    assert session.phase is Phase.COMPLETED
    assert session.cancel() is False
    assert session.phase is Phase.COMPLETED


def test_failing_cue_player_does_not_break_session() -> None:
    def broken(cue: str) -> None:
        raise OSError("no audio device")

    records: List[CompletedExercise] = []
    session = _session(_timed(1), records, cue_player=broken, preparation_seconds=1, auto_start=True)
    session.tick()
    session.tick()
    assert session.phase is Phase.COMPLETED
    assert len(records) == 1


def test_progress_for_timed_exercise() -> None:
    session = _session(_timed(4), [], preparation_seconds=0, auto_start=True)
    assert session.progress == 0
    session.tick()
    assert session.progress == 25
    session.tick()
    session.tick()
    session.tick()
    assert session.progress == 100


def test_run_session_drives_timed_exercise_to_completion() -> None:
    records: List[CompletedExercise] = []
    sleeps: List[float] = []
    ticks: List[Phase] = []
    session = _session(_timed(3), records, auto_start=True)

    phase = run_session(session, sleep=sleeps.append, on_tick=lambda s: ticks.append(s.phase))

    assert phase is Phase.COMPLETED
    assert len(sleeps) == 13
    assert ticks[-1] is Phase.COMPLETED
    assert len(records) == 1


def test_run_session_stops_when_reps_wait_for_signal() -> None:
    sleeps: List[float] = []
    session = _session(get_exercise("burpees"), [], auto_start=True)
    phase = run_session(session, sleep=sleeps.append)
    assert phase is Phase.EXERCISING
    assert len(sleeps) == 10


def test_run_session_returns_cancelled_when_abandoned() -> None:
    records: List[CompletedExercise] = []
    session = _session(_timed(3), records, auto_start=True)

    def on_tick(current: ExerciseSession) -> None:
        if current.prep_remaining == 5:
            current.cancel()

    assert run_session(session, sleep=lambda _: None, on_tick=on_tick) is Phase.CANCELLED
    assert records == []
