"""Main entry point for FocusFlow CLI."""

import typer

from focusflow_cli import __version__
from focusflow_cli.commands import chunks, context, notes, settings, tasks, timer
from focusflow_cli.commands.decorators import command_wrapper
from focusflow_cli.commands.utils import workspace_session
from focusflow_cli.utils.logger import get_log_path
from focusflow_cli.utils.ui.console import get_console
from focusflow_cli.utils.ui.formatters import (
    format_notes_pretty,
    format_output,
    format_timer_status,
    format_week_board,
)

app = typer.Typer(
    name="focusflow",
    help="Weekly planner, focus timer and external brain",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks.app, name="tasks", help="Weekly planner tasks (max 3 per day)")
app.add_typer(chunks.app, name="chunks", help="Split tasks into chunks")
app.add_typer(notes.app, name="notes", help="External brain scratchpad")
app.add_typer(timer.app, name="timer", help="Pomodoro focus timer")
app.add_typer(settings.app, name="settings", help="Timer and display settings")
app.add_typer(context.app, name="context", help="Storage contexts (local or cloud)")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]FocusFlow CLI[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"Log file: [dim]{get_log_path()}[/dim]")


@app.command()
@command_wrapper
async def week(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format (pretty/json/yaml)"),
    show_notes: bool = typer.Option(True, "--notes/--no-notes", help="Show the external brain"),
) -> None:
    """Show the week board, timer and notes."""
    async with workspace_session() as ws:
        snapshot = ws.snapshot()
        timer_data = ws.engine.snapshot_state().to_dict()
        task = ws.active_task()

    data = snapshot.to_dict()
    if format_output(data, output):
        return

    format_week_board(data["tasks"], ws.engine.active_task_id)
    console.print()
    format_timer_status(timer_data, task.to_dict() if task else None)
    if show_notes:
        console.print()
        format_notes_pretty(data["notes"])


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
