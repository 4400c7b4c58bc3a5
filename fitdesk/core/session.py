"""Exercise session timer.

A session walks one exercise through ``ready -> preparing -> exercising ->
completed``. Time only advances through :meth:`ExerciseSession.tick`, so the
state machine itself never sleeps; :func:`run_session` is the 1 Hz driver used
by the CLI.

Every phase change issues a new :class:`TickToken`. A driver captures the
token before scheduling a tick and passes it back, and a tick carrying an
outdated token is dropped. This keeps a late preparation tick from touching
the exercise countdown.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from fitdesk.core.constants import PREPARATION_TIME
from fitdesk.core.models import CompletedExercise, Exercise

logger = logging.getLogger(__name__)

Recorder = Callable[[CompletedExercise], object]
CompletionCallback = Callable[[CompletedExercise], None]


class SessionError(RuntimeError):
    """Raised for a transition the current phase does not allow."""


class Phase(str, Enum):
    READY = "ready"
    PREPARING = "preparing"
    EXERCISING = "exercising"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_PHASES = frozenset({Phase.COMPLETED, Phase.CANCELLED})


@dataclass(frozen=True)
class TickToken:
    """Identifies the phase a scheduled tick was issued for."""

    generation: int


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ExerciseSession:
    """State machine for a single exercise."""

    def __init__(
        self,
        exercise: Exercise,
        recorder: Recorder,
        on_complete: Optional[CompletionCallback] = None,
        cue_player: Optional[Callable[[str], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        preparation_seconds: int = PREPARATION_TIME,
        auto_start: bool = False,
    ) -> None:
        self.exercise = exercise
        self.recorder = recorder
        self.on_complete = on_complete
        self.cue_player = cue_player
        self.clock = clock or _local_now
        self.preparation_seconds = preparation_seconds

        self.phase = Phase.READY
        self.prep_remaining = preparation_seconds
        self.time_left = exercise.amount
        self.record: Optional[CompletedExercise] = None
        self._generation = 0

        if auto_start:
            self.start()

    @property
    def token(self) -> TickToken:
        return TickToken(self._generation)

    @property
    def is_finished(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def awaiting_completion_signal(self) -> bool:
        """True while a rep-based exercise waits for the user to finish."""
        return self.phase is Phase.EXERCISING and not self.exercise.is_timed

    @property
    def is_counting(self) -> bool:
        """True while ticks still change state."""
        if self.phase is Phase.PREPARING:
            return True
        return self.phase is Phase.EXERCISING and self.exercise.is_timed

    @property
    def progress(self) -> int:
        """Percent of a timed exercise already done."""
        if self.phase is Phase.COMPLETED:
            return 100
        if self.phase is not Phase.EXERCISING or not self.exercise.is_timed:
            return 0
        done = self.exercise.amount - self.time_left
        return round(done / self.exercise.amount * 100)

    def _enter(self, phase: Phase) -> None:
        logger.debug("Session %s: %s -> %s", self.exercise.id, self.phase.value, phase.value)
        self.phase = phase
        self._generation += 1

    def _cue(self, cue: str) -> None:
        if self.cue_player is None:
            return
        try:
            self.cue_player(cue)
        except Exception as exc:  # cue failures are logged only
            logger.debug("Cue %r failed: %s", cue, exc)

    def start(self) -> None:
        """Begin the preparation countdown."""
        if self.phase is not Phase.READY:
            raise SessionError(f"Cannot start a session that is {self.phase.value}")
        self.prep_remaining = self.preparation_seconds
        self._enter(Phase.PREPARING)
        if self.prep_remaining <= 0:
            self._begin_exercise()

    def tick(self, token: Optional[TickToken] = None) -> bool:
        """Advance one second. Returns False when the tick had no effect."""
        if token is not None and token != self.token:
            logger.debug("Dropping stale tick for %s", self.exercise.id)
            return False

        if self.phase is Phase.PREPARING:
            self.prep_remaining -= 1
            if self.prep_remaining <= 0:
                self.prep_remaining = 0
                self._begin_exercise()
            return True

        if self.phase is Phase.EXERCISING and self.exercise.is_timed:
            self.time_left -= 1
            if self.time_left <= 0:
                self.time_left = 0
                self._finish()
            return True

        return False

    def complete(self) -> CompletedExercise:
        """Explicit completion signal for a rep-based exercise.

        Repeated signals after completion return the existing record.
        """
        if self.phase is Phase.COMPLETED and self.record is not None:
            return self.record
        if self.phase is Phase.CANCELLED:
            raise SessionError("Session was cancelled")
        if self.phase is not Phase.EXERCISING:
            raise SessionError(f"Cannot complete a session that is {self.phase.value}")
        if self.exercise.is_timed:
            raise SessionError("Timed exercises complete when the countdown reaches zero")
        return self._finish()

    def cancel(self) -> bool:
        """Abandon the session. Nothing is recorded."""
        if self.is_finished:
            return False
        self._enter(Phase.CANCELLED)
        return True

    def _begin_exercise(self) -> None:
        self._cue("start")
        self.time_left = self.exercise.amount
        self._enter(Phase.EXERCISING)

    def _finish(self) -> CompletedExercise:
        if self.record is not None:
            return self.record

        self._cue("complete")
        record = CompletedExercise.from_exercise(self.exercise, self.clock())
        self.record = record
        self._enter(Phase.COMPLETED)
        self.recorder(record)
        if self.on_complete is not None:
            self.on_complete(record)
        return record


def run_session(
    session: ExerciseSession,
    sleep: Callable[[float], None] = time.sleep,
    on_tick: Optional[Callable[[ExerciseSession], None]] = None,
    interval: float = 1.0,
) -> Phase:
    """Drive a session clock until it stops counting.

    Returns the phase reached: ``completed`` for timed exercises,
    ``exercising`` when a rep-based exercise waits for its completion signal,
    or ``cancelled`` if the session was abandoned from a callback.
    """
    while session.is_counting:
        token = session.token
        sleep(interval)
        session.tick(token)
        if on_tick is not None:
            on_tick(session)
    return session.phase
