"""Focus cycle engine: countdown, mode transitions and cycle counting.

The engine never performs side effects itself. Sound cues and persistence
requests are emitted as ``EngineEvent`` objects to an optional listener,
which keeps every operation synchronous and testable without a clock.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Literal

from focusflow_cli.models.planner import SoundKind, TimerMode, TimerSettings
from focusflow_cli.utils.logger import get_logger

SESSIONS_BEFORE_LONG_BREAK = 4
TICK_WARNING_SECONDS = 5

EventKind = Literal["play_sound", "persist"]


@dataclass(frozen=True)
class EngineEvent:
    """A side-effect request emitted by the engine."""

    kind: EventKind
    sound: SoundKind | None = None


@dataclass
class TimerState:
    """Current state of the countdown."""

    mode: TimerMode = "focus"
    remaining_seconds: int = 0
    is_running: bool = False
    cycle_count: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


class FocusCycleEngine:
    """Drives a single focus/short/long countdown.

    ``tick()`` is expected to be called once per second by an external
    scheduler while the timer runs. Every public operation takes the same
    lock, so ticks and user actions may arrive from different threads.
    """

    def __init__(
        self,
        settings: TimerSettings | None = None,
        listener: Callable[[EngineEvent], None] | None = None,
        cycle_count: int = 0,
    ):
        self._settings = settings or TimerSettings()
        self._listener = listener
        self._lock = threading.RLock()
        self._state = TimerState(
            mode="focus",
            remaining_seconds=self._settings.focus_seconds,
            cycle_count=_clamp(cycle_count, 0, SESSIONS_BEFORE_LONG_BREAK),
        )
        self._active_task_id: str | None = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    @property
    def mode(self) -> TimerMode:
        return self._state.mode

    @property
    def remaining_seconds(self) -> int:
        return self._state.remaining_seconds

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def cycle_count(self) -> int:
        return self._state.cycle_count

    @property
    def active_task_id(self) -> str | None:
        return self._active_task_id

    @property
    def duration(self) -> int:
        """Full duration in seconds of the current mode."""
        return self._settings.duration_for(self._state.mode)

    def snapshot_state(self) -> TimerState:
        """Return a copy of the current timer state."""
        with self._lock:
            return TimerState(**asdict(self._state))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the countdown. Does nothing once the countdown hit zero."""
        with self._lock:
            if self._state.remaining_seconds == 0:
                return
            self._state.is_running = True

    def pause(self) -> None:
        with self._lock:
            self._state.is_running = False

    def toggle(self) -> None:
        with self._lock:
            if self._state.is_running:
                self._state.is_running = False
            else:
                self.start()

    def tick(self) -> None:
        """Advance the countdown by one second."""
        with self._lock:
            state = self._state
            if not state.is_running or state.remaining_seconds == 0:
                # Stray scheduler callback
                return

            state.remaining_seconds -= 1
            remaining = state.remaining_seconds
            if remaining > 0:
                if self._settings.sound_enabled and remaining <= TICK_WARNING_SECONDS:
                    self._emit(EngineEvent("play_sound", "tick"))
                return

            state.is_running = False
            self._emit(EngineEvent("play_sound", self._settings.sound_type))
            self._complete_session()
            self._emit(EngineEvent("persist"))

    def reset(self) -> None:
        """Stop and refill the countdown for the current mode."""
        with self._lock:
            self._state.is_running = False
            self._state.remaining_seconds = self.duration

    def switch_mode(self, mode: TimerMode) -> None:
        """Manually switch mode. Never counts or resets sessions."""
        with self._lock:
            self._state.is_running = False
            self._state.mode = mode
            self._state.remaining_seconds = self._settings.duration_for(mode)

    def reset_cycle(self) -> None:
        with self._lock:
            self._state.cycle_count = 0
            self._emit(EngineEvent("persist"))

    def attach_task(self, task_id: str) -> None:
        """Focus on a task.

        Attaching the task that is already linked toggles the countdown
        instead of restarting it.
        """
        with self._lock:
            if self._active_task_id == task_id:
                self.toggle()
                return
            self._active_task_id = task_id
            self._state.mode = "focus"
            self._state.remaining_seconds = self._settings.focus_seconds
            self._state.is_running = True

    def detach_task(self, task_id: str) -> None:
        """Drop the link to a task, pausing the countdown if it was linked."""
        with self._lock:
            if self._active_task_id != task_id:
                return
            self._active_task_id = None
            self.pause()

    def apply_settings(self, settings: TimerSettings) -> None:
        """Replace settings.

        A paused countdown that has not started yet picks up the new
        duration. A partly run one keeps its remaining time, cut down to the
        new duration if that is shorter.
        """
        with self._lock:
            untouched = self._state.remaining_seconds == self.duration
            self._settings = settings
            if untouched and not self._state.is_running:
                self._state.remaining_seconds = self.duration
            else:
                self._state.remaining_seconds = min(
                    self._state.remaining_seconds, self.duration
                )

    def restore(
        self,
        *,
        mode: TimerMode = "focus",
        remaining_seconds: int | None = None,
        cycle_count: int = 0,
        active_task_id: str | None = None,
    ) -> None:
        """Restore persisted state. The countdown is always restored paused."""
        with self._lock:
            duration = self._settings.duration_for(mode)
            if remaining_seconds is None:
                remaining_seconds = duration
            self._state = TimerState(
                mode=mode,
                remaining_seconds=_clamp(remaining_seconds, 0, duration),
                is_running=False,
                cycle_count=_clamp(cycle_count, 0, SESSIONS_BEFORE_LONG_BREAK),
            )
            self._active_task_id = active_task_id

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _complete_session(self) -> None:
        state = self._state
        previous = state.mode
        if state.mode == "focus":
            state.cycle_count += 1
            if state.cycle_count >= SESSIONS_BEFORE_LONG_BREAK:
                state.mode = "long"
                state.remaining_seconds = self._settings.long_break_seconds
            else:
                state.mode = "short"
                state.remaining_seconds = self._settings.short_break_seconds
        elif state.mode == "short":
            state.mode = "focus"
            state.remaining_seconds = self._settings.focus_seconds
        elif state.mode == "long":
            state.cycle_count = 0
            state.mode = "focus"
            state.remaining_seconds = self._settings.focus_seconds

        get_logger().debug(
            "timer session complete: %s -> %s (cycle %d)",
            previous,
            state.mode,
            state.cycle_count,
        )

    def _emit(self, event: EngineEvent) -> None:
        if self._listener is not None:
            self._listener(event)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
