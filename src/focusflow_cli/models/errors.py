"""Domain exceptions for FocusFlow."""


class FocusFlowError(Exception):
    """Base class for all FocusFlow domain errors."""


class InvalidDayError(FocusFlowError):
    """Raised when a day index falls outside Monday..Sunday."""

    def __init__(self, day_index: int):
        super().__init__(f"Invalid day index {day_index} (expected 0-6)")
        self.day_index = day_index


class DayFullError(FocusFlowError):
    """Raised when a day already holds the maximum number of tasks."""

    def __init__(self, day_name: str, limit: int):
        super().__init__(f"{day_name} already has {limit} tasks")
        self.day_name = day_name
        self.limit = limit


class NotFoundError(FocusFlowError):
    """Raised when a task, chunk or note does not exist."""


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: str):
        super().__init__(f"Task '{task_id}' not found")
        self.task_id = task_id


class ChunkNotFoundError(NotFoundError):
    def __init__(self, chunk_id: str):
        super().__init__(f"Chunk '{chunk_id}' not found")
        self.chunk_id = chunk_id


class NoteNotFoundError(NotFoundError):
    def __init__(self, note_id: str):
        super().__init__(f"Note '{note_id}' not found")
        self.note_id = note_id


class AmbiguousIdError(FocusFlowError):
    """Raised when an id prefix matches more than one item."""

    def __init__(self, prefix: str, matches: list[str]):
        super().__init__(
            f"'{prefix}' matches {len(matches)} items: {', '.join(m[:8] for m in matches)}"
        )
        self.prefix = prefix
        self.matches = matches


class SnapshotVersionError(FocusFlowError):
    """Raised when a stored snapshot was written by a newer schema."""


class GatewayError(FocusFlowError):
    """Raised by persistence gateways when storage is unreachable or broken."""


class CorruptSnapshotError(GatewayError):
    """Raised when stored data cannot be read back as a snapshot."""
