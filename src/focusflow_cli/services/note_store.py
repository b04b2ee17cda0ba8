"""Note store - the external brain scratchpad."""

from __future__ import annotations

from datetime import UTC, datetime

from focusflow_cli.models.errors import NoteNotFoundError
from focusflow_cli.models.planner import Note
from focusflow_cli.services.task_store import resolve_prefix


class NoteStore:
    """Newest-first list of freeform notes."""

    def __init__(self, notes: list[Note] | None = None):
        self._notes: list[Note] = list(notes or [])

    def all(self) -> list[Note]:
        return list(self._notes)

    def add(self, text: str) -> Note:
        """Capture a thought. Blank text is rejected."""
        if not text or not text.strip():
            raise ValueError("Note text cannot be empty")
        note = Note(text=text.strip(), created_at=datetime.now(UTC))
        self._notes.insert(0, note)
        return note

    def delete(self, note_id: str) -> Note:
        full_id = resolve_prefix(note_id, [n.id for n in self._notes], NoteNotFoundError)
        note = next(n for n in self._notes if n.id == full_id)
        self._notes.remove(note)
        return note

    def clear(self) -> int:
        """Remove every note, returning how many were removed."""
        count = len(self._notes)
        self._notes.clear()
        return count
