"""Task store - the weekly planner.

Tasks are kept in one ordered list; each day shows its tasks in list order.
The store enforces the three-tasks-per-day limit on add and move.
"""

from __future__ import annotations

from focusflow_cli.models.errors import (
    AmbiguousIdError,
    ChunkNotFoundError,
    DayFullError,
    InvalidDayError,
    TaskNotFoundError,
)
from focusflow_cli.models.planner import (
    DAYS,
    MAX_TASKS_PER_DAY,
    Chunk,
    Task,
    TaskStatus,
)


def resolve_prefix(prefix: str, ids: list[str], not_found: type[Exception]) -> str:
    """Resolve a full id from an exact id or a unique prefix."""
    if not prefix.strip():
        raise ValueError("ID must not be empty")
    if prefix in ids:
        return prefix
    matches = [item_id for item_id in ids if item_id.startswith(prefix)]
    if not matches:
        raise not_found(prefix)
    if len(matches) > 1:
        raise AmbiguousIdError(prefix, matches)
    return matches[0]


class TaskStore:
    """Mapping of day to ordered tasks."""

    def __init__(self, tasks: list[Task] | None = None):
        self._tasks: list[Task] = list(tasks or [])

    def all(self) -> list[Task]:
        return list(self._tasks)

    def for_day(self, day_index: int) -> list[Task]:
        _check_day(day_index)
        return [t for t in self._tasks if t.day_index == day_index]

    def resolve(self, task_id: str) -> str:
        return resolve_prefix(task_id, [t.id for t in self._tasks], TaskNotFoundError)

    def get(self, task_id: str) -> Task:
        full_id = self.resolve(task_id)
        return next(t for t in self._tasks if t.id == full_id)

    def add(self, day_index: int, content: str = "") -> Task:
        """Add a task at the end of a day.

        Raises:
            InvalidDayError: If day_index is outside 0..6
            DayFullError: If the day already holds MAX_TASKS_PER_DAY tasks
        """
        self._check_capacity(day_index)
        task = Task(day_index=day_index, content=content)
        self._tasks.append(task)
        return task

    def update(
        self,
        task_id: str,
        *,
        content: str | None = None,
        status: TaskStatus | None = None,
    ) -> Task:
        task = self.get(task_id)
        if content is not None:
            task.content = content
        if status is not None:
            task.status = status
        return task

    def toggle_done(self, task_id: str) -> Task:
        task = self.get(task_id)
        task.status = "todo" if task.status == "done" else "done"
        return task

    def delete(self, task_id: str) -> Task:
        task = self.get(task_id)
        self._tasks.remove(task)
        return task

    def move(self, task_id: str, day_index: int, position: int | None = None) -> Task:
        """Move a task to a day, optionally at a position within that day.

        Reordering inside the same day never hits the capacity limit.
        """
        if position is not None and position < 0:
            raise ValueError(f"Position must be 0 or more, got {position}")
        task = self.get(task_id)
        if task.day_index != day_index:
            self._check_capacity(day_index)
        else:
            _check_day(day_index)

        self._tasks.remove(task)
        task.day_index = day_index

        day_tasks = [t for t in self._tasks if t.day_index == day_index]
        if position is None or position >= len(day_tasks):
            if day_tasks:
                insert_at = self._tasks.index(day_tasks[-1]) + 1
            else:
                insert_at = len(self._tasks)
        else:
            insert_at = self._tasks.index(day_tasks[position])
        self._tasks.insert(insert_at, task)
        return task

    # Chunks

    def _get_chunk(self, task: Task, chunk_id: str) -> Chunk:
        full_id = resolve_prefix(chunk_id, [c.id for c in task.chunks], ChunkNotFoundError)
        return next(c for c in task.chunks if c.id == full_id)

    def add_chunk(self, task_id: str, text: str = "") -> Chunk:
        task = self.get(task_id)
        chunk = Chunk(text=text)
        task.chunks = [*task.chunks, chunk]
        return chunk

    def update_chunk(
        self,
        task_id: str,
        chunk_id: str,
        *,
        text: str | None = None,
        done: bool | None = None,
    ) -> Chunk:
        chunk = self._get_chunk(self.get(task_id), chunk_id)
        if text is not None:
            chunk.text = text
        if done is not None:
            chunk.done = done
        return chunk

    def toggle_chunk(self, task_id: str, chunk_id: str) -> Chunk:
        chunk = self._get_chunk(self.get(task_id), chunk_id)
        chunk.done = not chunk.done
        return chunk

    def delete_chunk(self, task_id: str, chunk_id: str) -> Chunk:
        task = self.get(task_id)
        chunk = self._get_chunk(task, chunk_id)
        task.chunks = [c for c in task.chunks if c.id != chunk.id]
        return chunk

    def _check_capacity(self, day_index: int) -> None:
        if len(self.for_day(day_index)) >= MAX_TASKS_PER_DAY:
            raise DayFullError(DAYS[day_index], MAX_TASKS_PER_DAY)


def _check_day(day_index: int) -> None:
    if not 0 <= day_index < len(DAYS):
        raise InvalidDayError(day_index)


def parse_day(value: str) -> int:
    """Parse a day given as an index (0-6) or a day name prefix."""
    value = value.strip()
    if value.isdigit():
        day_index = int(value)
        _check_day(day_index)
        return day_index

    matches = [i for i, day in enumerate(DAYS) if day.lower().startswith(value.lower())]
    if len(matches) != 1 or not value:
        raise ValueError(f"Unknown day '{value}'")
    return matches[0]
