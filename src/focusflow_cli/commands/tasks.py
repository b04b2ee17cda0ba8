"""Weekly planner task commands."""

import typer

from focusflow_cli.models.planner import DAYS
from focusflow_cli.services.task_store import parse_day
from focusflow_cli.utils.ui.formatters import (
    format_info,
    format_output,
    format_success,
    format_tasks_pretty,
)

from .decorators import command_wrapper
from .timer import run_live_timer
from .utils import workspace_session

app = typer.Typer(help="Weekly planner tasks (max 3 per day)")

VALID_STATUSES = ("todo", "wip", "done")


@app.command("add")
@command_wrapper
async def add_task(
    day: str = typer.Argument(..., help="Day index (0-6) or name (mon, tue, ...)"),
    content: str = typer.Argument("", help="What needs doing"),
) -> None:
    """Add a task to a day."""
    day_index = parse_day(day)
    async with workspace_session() as ws:
        task = await ws.add_task(day_index, content)
    format_success(f"Added to {DAYS[day_index]}: {content or '(untitled)'} #{task.id[:8]}")


@app.command("list")
@command_wrapper
async def list_tasks(
    day: str | None = typer.Option(None, "--day", "-d", help="Only show one day"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format (pretty/json/yaml)"),
) -> None:
    """List planned tasks by day."""
    async with workspace_session() as ws:
        if day is not None:
            tasks = ws.tasks.for_day(parse_day(day))
        else:
            tasks = ws.tasks.all()
        active_task_id = ws.engine.active_task_id

    data = [t.to_dict() for t in tasks]
    if not format_output(data, output):
        format_tasks_pretty(data, active_task_id)


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    content: str = typer.Argument(..., help="New content"),
) -> None:
    """Change a task's content."""
    async with workspace_session() as ws:
        task = await ws.update_task(task_id, content=content)
    format_success(f"Updated #{task.id[:8]}")


@app.command("status")
@command_wrapper
async def set_status(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    status: str = typer.Argument(..., help="todo, wip or done"),
) -> None:
    """Set a task's status."""
    if status not in VALID_STATUSES:
        raise ValueError(f"Invalid status '{status}'. Must be: {', '.join(VALID_STATUSES)}")
    async with workspace_session() as ws:
        task = await ws.update_task(task_id, status=status)
    format_success(f"#{task.id[:8]} is now {task.status}")


@app.command("done")
@command_wrapper
async def toggle_done(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
) -> None:
    """Toggle a task between done and todo."""
    async with workspace_session() as ws:
        task = await ws.toggle_done(task_id)
    if task.status == "done":
        format_success(f"Completed: {task.content or '(untitled)'}")
    else:
        format_info(f"Reopened: {task.content or '(untitled)'}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task. Focusing on it stops the timer."""
    async with workspace_session() as ws:
        task = ws.tasks.get(task_id)
        if not yes and not typer.confirm(f"Delete '{task.content or '(untitled)'}'?"):
            format_info("Cancelled")
            return
        was_active = ws.engine.active_task_id == task.id
        await ws.delete_task(task.id)
    format_success(f"Deleted #{task.id[:8]}")
    if was_active:
        format_info("Timer paused and unlinked from the deleted task")


@app.command("move")
@command_wrapper
async def move_task(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    day: str = typer.Argument(..., help="Target day index (0-6) or name"),
    position: int | None = typer.Option(
        None, "--position", "-p", min=0, help="Position within the day (0 = first)"
    ),
) -> None:
    """Move a task to another day or reorder it within its day."""
    day_index = parse_day(day)
    async with workspace_session() as ws:
        task = await ws.move_task(task_id, day_index, position)
    format_success(f"Moved #{task.id[:8]} to {DAYS[day_index]}")


@app.command("focus")
@command_wrapper
async def focus_task(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    run: bool = typer.Option(True, "--run/--no-run", help="Show the live countdown"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No sound cues"),
) -> None:
    """Start a focus session on a task (again to pause/resume)."""
    async with workspace_session(quiet=quiet) as ws:
        task = await ws.attach_task(task_id)
        if not ws.engine.is_running:
            format_info(f"Paused focus on: {task.content or '(untitled)'}")
            return
        if not run:
            format_info(
                f"Linked to: {task.content or '(untitled)'}. Run 'focusflow timer start' to count down."
            )
            return
        format_info(f"Focusing on: {task.content or '(untitled)'}")
        await run_live_timer(ws)
