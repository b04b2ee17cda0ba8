"""External brain commands - park distracting thoughts."""

import typer

from focusflow_cli.utils.ui.formatters import (
    format_info,
    format_notes_pretty,
    format_output,
    format_success,
)

from .decorators import command_wrapper
from .utils import workspace_session

app = typer.Typer(help="External brain scratchpad")


@app.command("add")
@command_wrapper
async def add_note(
    text: str = typer.Argument(..., help="The thought to park"),
) -> None:
    """Capture a thought without leaving your focus session."""
    async with workspace_session() as ws:
        note = await ws.add_note(text)
    format_success(f"Parked #{note.id[:8]}")


@app.command("list")
@command_wrapper
async def list_notes(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format (pretty/json/yaml)"),
) -> None:
    """List notes, newest first."""
    async with workspace_session() as ws:
        data = [n.to_dict() for n in ws.notes.all()]
    if not format_output(data, output):
        format_notes_pretty(data)


@app.command("delete")
@command_wrapper
async def delete_note(
    note_id: str = typer.Argument(..., help="Note ID or prefix"),
) -> None:
    """Delete a note."""
    async with workspace_session() as ws:
        note = await ws.delete_note(note_id)
    format_success(f"Deleted #{note.id[:8]}")


@app.command("clear")
@command_wrapper
async def clear_notes(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete every note."""
    if not yes and not typer.confirm("Clear the external brain?"):
        format_info("Cancelled")
        return
    async with workspace_session() as ws:
        count = await ws.clear_notes()
    format_success(f"Cleared {count} note(s)")
