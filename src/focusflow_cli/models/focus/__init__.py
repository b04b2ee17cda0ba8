"""Focus timer domain."""

from .engine import (
    SESSIONS_BEFORE_LONG_BREAK,
    EngineEvent,
    FocusCycleEngine,
    TimerState,
)

__all__ = [
    "SESSIONS_BEFORE_LONG_BREAK",
    "EngineEvent",
    "FocusCycleEngine",
    "TimerState",
]
