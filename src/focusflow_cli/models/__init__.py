"""FocusFlow domain models.

Pydantic models for everything that is persisted, plus the configuration
models for storage contexts.
"""

from .config_models import APIConfig, AppConfig, Context, OutputConfig
from .planner import (
    DAYS,
    MAX_TASKS_PER_DAY,
    SNAPSHOT_VERSION,
    Chunk,
    Note,
    Snapshot,
    Task,
    TimerSettings,
    TimerSnapshot,
)

__all__ = [
    # Planner models
    "DAYS",
    "MAX_TASKS_PER_DAY",
    "SNAPSHOT_VERSION",
    "Chunk",
    "Note",
    "Snapshot",
    "Task",
    "TimerSettings",
    "TimerSnapshot",
    # Config models
    "APIConfig",
    "AppConfig",
    "Context",
    "OutputConfig",
]
