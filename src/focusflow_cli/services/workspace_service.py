"""Workspace service - one owned planner instance.

The workspace wires together the task store, the note store, the focus
engine, a persistence gateway and a notification sink. Every mutation of
tasks, notes, settings or timer state is followed by a save of the full
snapshot. Save failures are logged and swallowed so the in-memory state
keeps working.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from focusflow_cli.models.errors import GatewayError
from focusflow_cli.models.focus.engine import EngineEvent, FocusCycleEngine
from focusflow_cli.models.planner import (
    Chunk,
    Note,
    Snapshot,
    Task,
    TaskStatus,
    TimerMode,
    TimerSettings,
    TimerSnapshot,
)
from focusflow_cli.repositories import PersistenceGateway
from focusflow_cli.services.note_store import NoteStore
from focusflow_cli.services.notification_service import (
    NotificationSink,
    NullNotificationSink,
)
from focusflow_cli.services.task_store import TaskStore
from focusflow_cli.utils.logger import get_logger


class WorkspaceService:
    """Planner state plus the focus engine, persisted through a gateway."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        sink: NotificationSink | None = None,
    ):
        """Initialize the workspace.

        Args:
            gateway: Where snapshots are loaded from and saved to
            sink: Receives sound cues; silent when omitted
        """
        self.gateway = gateway
        self.sink = sink or NullNotificationSink()
        self.tasks = TaskStore()
        self.notes = NoteStore()
        self.engine = FocusCycleEngine(listener=self._on_engine_event)
        self.last_save_error: str | None = None
        self.last_load_error: str | None = None
        self.sessions_completed = 0
        self._persist_requested = False
        self._logger = get_logger()

    # ------------------------------------------------------------------
    # Persistence boundary
    # ------------------------------------------------------------------

    async def open(self) -> WorkspaceService:
        """Load the stored snapshot, or start from defaults."""
        try:
            snapshot = await self.gateway.load()
        except GatewayError as e:
            self._logger.error("workspace load failed (%s): %s", self.gateway.storage_type, e)
            self.last_load_error = str(e)
            snapshot = None

        self.restore(snapshot or Snapshot())
        return self

    def restore(self, snapshot: Snapshot) -> None:
        self.tasks = TaskStore(snapshot.tasks)
        self.notes = NoteStore(snapshot.notes)
        self.engine.apply_settings(snapshot.settings)

        timer = snapshot.timer or TimerSnapshot(
            remaining_seconds=snapshot.settings.focus_seconds
        )
        active_task_id = timer.active_task_id
        if active_task_id and active_task_id not in {t.id for t in snapshot.tasks}:
            active_task_id = None
        self.engine.restore(
            mode=timer.mode,
            remaining_seconds=timer.remaining_seconds,
            cycle_count=snapshot.cycle_count,
            active_task_id=active_task_id,
        )

    def snapshot(self) -> Snapshot:
        """Build the snapshot of the current in-memory state."""
        state = self.engine.snapshot_state()
        return Snapshot(
            settings=self.engine.settings,
            tasks=self.tasks.all(),
            notes=self.notes.all(),
            cycle_count=state.cycle_count,
            timer=TimerSnapshot(
                mode=state.mode,
                remaining_seconds=state.remaining_seconds,
                active_task_id=self.engine.active_task_id,
            ),
        )

    async def save(self) -> bool:
        """Persist the snapshot. Returns False when the write failed."""
        self._persist_requested = False
        try:
            await self.gateway.save(self.snapshot())
        except GatewayError as e:
            self._logger.error("workspace save failed (%s): %s", self.gateway.storage_type, e)
            self.last_save_error = str(e)
            return False
        self.last_save_error = None
        return True

    async def flush(self) -> None:
        """Save if the engine requested persistence since the last save."""
        if self._persist_requested:
            await self.save()

    async def close(self) -> None:
        close = getattr(self.gateway, "close", None)
        if close is not None:
            await close()

    def _on_engine_event(self, event: EngineEvent) -> None:
        if event.kind == "persist":
            self._persist_requested = True
        elif event.kind == "play_sound" and self.engine.settings.sound_enabled:
            self.sink.play(event.sound)

    async def _mutate(self, operation: Callable[[], Any]) -> Any:
        result = operation()
        await self.save()
        return result

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def add_task(self, day_index: int, content: str = "") -> Task:
        return await self._mutate(lambda: self.tasks.add(day_index, content))

    async def update_task(
        self,
        task_id: str,
        *,
        content: str | None = None,
        status: TaskStatus | None = None,
    ) -> Task:
        return await self._mutate(
            lambda: self.tasks.update(task_id, content=content, status=status)
        )

    async def toggle_done(self, task_id: str) -> Task:
        return await self._mutate(lambda: self.tasks.toggle_done(task_id))

    async def delete_task(self, task_id: str) -> Task:
        def _delete() -> Task:
            task = self.tasks.delete(task_id)
            self.engine.detach_task(task.id)
            return task

        return await self._mutate(_delete)

    async def move_task(
        self, task_id: str, day_index: int, position: int | None = None
    ) -> Task:
        return await self._mutate(lambda: self.tasks.move(task_id, day_index, position))

    async def add_chunk(self, task_id: str, text: str = "") -> Chunk:
        return await self._mutate(lambda: self.tasks.add_chunk(task_id, text))

    async def update_chunk(self, task_id: str, chunk_id: str, text: str) -> Chunk:
        return await self._mutate(
            lambda: self.tasks.update_chunk(task_id, chunk_id, text=text)
        )

    async def toggle_chunk(self, task_id: str, chunk_id: str) -> Chunk:
        return await self._mutate(lambda: self.tasks.toggle_chunk(task_id, chunk_id))

    async def delete_chunk(self, task_id: str, chunk_id: str) -> Chunk:
        return await self._mutate(lambda: self.tasks.delete_chunk(task_id, chunk_id))

    def active_task(self) -> Task | None:
        task_id = self.engine.active_task_id
        if task_id is None:
            return None
        return next((t for t in self.tasks.all() if t.id == task_id), None)

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    async def add_note(self, text: str) -> Note:
        return await self._mutate(lambda: self.notes.add(text))

    async def delete_note(self, note_id: str) -> Note:
        return await self._mutate(lambda: self.notes.delete(note_id))

    async def clear_notes(self) -> int:
        return await self._mutate(self.notes.clear)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    async def update_settings(self, **changes: Any) -> TimerSettings:
        """Apply setting changes.

        Raises:
            pydantic.ValidationError: If a value is out of range
        """
        values = self.engine.settings.model_dump()
        values.update({k: v for k, v in changes.items() if v is not None})
        settings = TimerSettings.model_validate(values)
        await self._mutate(lambda: self.engine.apply_settings(settings))
        return settings

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    async def start(self) -> None:
        await self._mutate(self.engine.start)

    async def pause(self) -> None:
        await self._mutate(self.engine.pause)

    async def toggle(self) -> None:
        await self._mutate(self.engine.toggle)

    async def reset(self) -> None:
        await self._mutate(self.engine.reset)

    async def switch_mode(self, mode: TimerMode) -> None:
        await self._mutate(lambda: self.engine.switch_mode(mode))

    async def reset_cycle(self) -> None:
        await self._mutate(self.engine.reset_cycle)

    async def attach_task(self, task_id: str) -> Task:
        """Focus on a task; a newly linked task is marked in progress."""

        def _attach() -> Task:
            task = self.tasks.get(task_id)
            relinking = self.engine.active_task_id != task.id
            self.engine.attach_task(task.id)
            if relinking:
                task.status = "wip"
            return task

        return await self._mutate(_attach)

    async def detach_task(self, task_id: str) -> None:
        await self._mutate(lambda: self.engine.detach_task(self.tasks.resolve(task_id)))

    async def tick(self) -> bool:
        """Advance the countdown one second.

        Returns:
            True if this tick completed a session
        """
        was_running = self.engine.is_running
        self.engine.tick()
        completed = was_running and not self.engine.is_running
        if completed:
            self.sessions_completed += 1
        await self.flush()
        return completed

    async def run_countdown(
        self,
        on_tick: Callable[[WorkspaceService], None] | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> str:
        """Drive the countdown once per second until it stops.

        Interrupting the countdown (Ctrl+C or task cancellation) pauses the
        engine and persists the remaining time before re-raising.

        Returns:
            "completed" when a session finished, "paused" otherwise
        """
        try:
            while self.engine.is_running:
                await sleep(1)
                completed = await self.tick()
                if on_tick is not None:
                    on_tick(self)
                if completed:
                    return "completed"
        except (asyncio.CancelledError, KeyboardInterrupt):
            self.engine.pause()
            await self.save()
            raise
        return "paused"


async def open_workspace(sink: NotificationSink | None = None) -> WorkspaceService:
    """Open the workspace for the active storage context."""
    from focusflow_cli.services.config_service import get_storage_strategy_context

    gateway = get_storage_strategy_context().gateway
    return await WorkspaceService(gateway, sink).open()
