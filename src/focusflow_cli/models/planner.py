"""Planner data models.

These Pydantic models describe everything that is persisted for a user:
the weekly tasks (with their chunks), the external brain notes, the timer
settings and the versioned snapshot that bundles them together.

The wire format uses camelCase keys so snapshots stay compatible with the
browser version of FocusFlow.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]
MAX_TASKS_PER_DAY = 3
SNAPSHOT_VERSION = 1

TaskStatus = Literal["todo", "wip", "done"]
TimerMode = Literal["focus", "short", "long"]
CompletionSound = Literal["chime", "retro", "bell"]
SoundKind = Literal["tick", "chime", "retro", "bell"]


def new_id() -> str:
    """Generate a new item id."""
    return str(uuid.uuid4())


class CamelModel(BaseModel):
    """Base model serialising to camelCase while accepting snake_case input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class Chunk(CamelModel):
    """A smaller unit of work inside a task."""

    id: str = Field(default_factory=new_id)
    text: str = ""
    done: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        # Browser snapshots store chunk ids as millisecond timestamps
        return str(v)


class Task(CamelModel):
    """A task scheduled on one day of the week."""

    id: str = Field(default_factory=new_id)
    day_index: int = Field(ge=0, le=6)
    content: str = ""
    status: TaskStatus = "todo"
    chunks: list[Chunk] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)

    @property
    def day_name(self) -> str:
        return DAYS[self.day_index]

    @property
    def chunk_progress(self) -> tuple[int, int]:
        """Return (done, total) chunk counts."""
        return sum(1 for c in self.chunks if c.done), len(self.chunks)


class Note(CamelModel):
    """An external brain entry."""

    id: str = Field(default_factory=new_id)
    text: str
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)


class TimerSettings(CamelModel):
    """User-adjustable timer settings.

    Durations are stored in minutes. Zero or negative durations are rejected
    here so the focus engine never sees them.
    """

    focus_time: int = Field(default=25, gt=0)
    short_break: int = Field(default=5, gt=0)
    long_break: int = Field(default=20, gt=0)
    sound_enabled: bool = True
    sound_type: CompletionSound = Field(default="chime")
    dark_mode: bool = False

    @property
    def focus_seconds(self) -> int:
        return self.focus_time * 60

    @property
    def short_break_seconds(self) -> int:
        return self.short_break * 60

    @property
    def long_break_seconds(self) -> int:
        return self.long_break * 60

    def duration_for(self, mode: TimerMode) -> int:
        """Full duration in seconds of a timer mode."""
        if mode == "focus":
            return self.focus_seconds
        elif mode == "short":
            return self.short_break_seconds
        return self.long_break_seconds


class TimerSnapshot(CamelModel):
    """Paused countdown kept between CLI invocations."""

    mode: TimerMode = "focus"
    remaining_seconds: int = Field(default=0, ge=0)
    active_task_id: str | None = None


class Snapshot(CamelModel):
    """Everything persisted for one user."""

    version: int = SNAPSHOT_VERSION
    settings: TimerSettings = Field(default_factory=TimerSettings)
    tasks: list[Task] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    cycle_count: int = Field(default=0, ge=0)
    timer: TimerSnapshot | None = None
