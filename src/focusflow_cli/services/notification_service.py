"""Notification sinks for timer sound cues."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import Console

from focusflow_cli.models.planner import SoundKind
from focusflow_cli.utils.logger import get_logger
from focusflow_cli.utils.ui.console import get_console

# Number of terminal bells per cue
BELL_PATTERNS: dict[str, int] = {
    "tick": 1,
    "chime": 2,
    "retro": 3,
    "bell": 1,
}


class NotificationSink(ABC):
    """Receives fire-and-forget sound requests."""

    @abstractmethod
    def play(self, kind: SoundKind) -> None:
        """Play a sound cue."""


class NullNotificationSink(NotificationSink):
    """Sink that ignores every request (quiet mode)."""

    def play(self, kind: SoundKind) -> None:
        return None


class TerminalNotificationSink(NotificationSink):
    """Rings the terminal bell with a pattern per sound kind."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    def play(self, kind: SoundKind) -> None:
        try:
            for _ in range(BELL_PATTERNS.get(kind, 1)):
                self.console.bell()
        except OSError as e:
            get_logger().warning("sound cue '%s' failed: %s", kind, e)
