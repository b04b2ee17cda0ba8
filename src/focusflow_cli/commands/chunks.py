"""Task chunk commands - break a task into smaller steps."""

import typer

from focusflow_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper
from .utils import workspace_session

app = typer.Typer(help="Split tasks into chunks")


@app.command("add")
@command_wrapper
async def add_chunk(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    text: str = typer.Argument("", help="Chunk text"),
) -> None:
    """Add a chunk to a task."""
    async with workspace_session() as ws:
        chunk = await ws.add_chunk(task_id, text)
    format_success(f"Added chunk #{chunk.id[:8]}")


@app.command("edit")
@command_wrapper
async def edit_chunk(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    chunk_id: str = typer.Argument(..., help="Chunk ID or prefix"),
    text: str = typer.Argument(..., help="New chunk text"),
) -> None:
    """Change a chunk's text."""
    async with workspace_session() as ws:
        chunk = await ws.update_chunk(task_id, chunk_id, text)
    format_success(f"Updated chunk #{chunk.id[:8]}")


@app.command("toggle")
@command_wrapper
async def toggle_chunk(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    chunk_id: str = typer.Argument(..., help="Chunk ID or prefix"),
) -> None:
    """Tick a chunk off (or back on)."""
    async with workspace_session() as ws:
        chunk = await ws.toggle_chunk(task_id, chunk_id)
    if chunk.done:
        format_success(f"Done: {chunk.text or '(empty)'}")
    else:
        format_info(f"Reopened: {chunk.text or '(empty)'}")


@app.command("delete")
@command_wrapper
async def delete_chunk(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    chunk_id: str = typer.Argument(..., help="Chunk ID or prefix"),
) -> None:
    """Remove a chunk from a task."""
    async with workspace_session() as ws:
        chunk = await ws.delete_chunk(task_id, chunk_id)
    format_success(f"Deleted chunk #{chunk.id[:8]}")
