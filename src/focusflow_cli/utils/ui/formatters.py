"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from focusflow_cli.models.planner import DAYS, MAX_TASKS_PER_DAY

from .console import get_console

console = get_console()

STATUS_ICONS = {
    "todo": "○",
    "wip": "◐",
    "done": "●",
}

STATUS_COLORS = {
    "todo": "white",
    "wip": "cyan",
    "done": "dim green",
}

MODE_LABELS = {
    "focus": "Focus",
    "short": "Short Break",
    "long": "Long Break",
}

MODE_COLORS = {
    "focus": "red",
    "short": "green",
    "long": "blue",
}


def format_output(data: Any, output_format: str = "pretty") -> bool:
    """Print machine-readable formats.

    Returns True when the data was printed, False when the caller should
    render its own pretty view.
    """
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
        return True
    if output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
        return True
    return False


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def format_time(seconds: int) -> str:
    """Format seconds as MM:SS."""
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins:02d}:{secs:02d}"


def short_id(item_id: str, length: int = 8) -> str:
    return item_id[:length]


def get_progress_bar(percentage: float, width: int = 10) -> str:
    """Get a progress bar representation."""
    filled = int(width * percentage / 100)
    empty = width - filled
    return "▓" * filled + "░" * empty


def get_cycle_dots(cycle_count: int, mode: str, sessions: int = 4) -> str:
    """Get progress dots showing position in the four-session cycle."""
    dots = []
    for i in range(1, sessions + 1):
        if i <= cycle_count:
            dots.append("●")
        elif i == cycle_count + 1 and mode == "focus":
            dots.append("◉")
        else:
            dots.append("○")
    return " ".join(dots)


def format_task_line(task: dict, active_task_id: str | None = None) -> Text:
    """Format a single task as one line of text."""
    status = task.get("status", "todo")
    line = Text()
    line.append(f"{STATUS_ICONS[status]} ", style=STATUS_COLORS[status])
    content = task.get("content") or "(untitled)"
    style = "strike dim" if status == "done" else "bold" if status == "wip" else ""
    line.append(content, style=style)
    line.append(f"  #{short_id(task['id'])}", style="dim")

    chunks = task.get("chunks") or []
    if chunks:
        done = sum(1 for c in chunks if c.get("done"))
        line.append(f"  [{done}/{len(chunks)}]", style="cyan")
    if active_task_id and task["id"] == active_task_id:
        line.append("  ⏱ focusing", style="bold red")
    return line


def format_week_board(tasks: list[dict], active_task_id: str | None = None) -> None:
    """Render the weekly board, one column per day."""
    table = Table(show_header=True, header_style="bold cyan", expand=True)
    for day_index, day in enumerate(DAYS):
        count = sum(1 for t in tasks if t["dayIndex"] == day_index)
        table.add_column(f"{day[:3]} {count}/{MAX_TASKS_PER_DAY}", ratio=1)

    cells = []
    for day_index in range(len(DAYS)):
        cell = Text()
        day_tasks = [t for t in tasks if t["dayIndex"] == day_index]
        for i, task in enumerate(day_tasks):
            if i:
                cell.append("\n")
            cell.append_text(format_task_line(task, active_task_id))
        cells.append(cell)
    table.add_row(*cells)
    console.print(table)


def format_tasks_pretty(
    tasks: list[dict], active_task_id: str | None = None, show_chunks: bool = True
) -> None:
    """Format tasks grouped by day."""
    if not tasks:
        console.print("[yellow]No tasks planned[/yellow]")
        return

    for day_index, day in enumerate(DAYS):
        day_tasks = [t for t in tasks if t["dayIndex"] == day_index]
        if not day_tasks:
            continue
        console.print(
            f"[bold cyan]{day}[/bold cyan] [dim]({len(day_tasks)}/{MAX_TASKS_PER_DAY})[/dim]"
        )
        for task in day_tasks:
            line = Text("  ")
            line.append_text(format_task_line(task, active_task_id))
            console.print(line)
            if show_chunks:
                for chunk in task.get("chunks") or []:
                    mark = "✓" if chunk.get("done") else "·"
                    style = "dim strike" if chunk.get("done") else ""
                    console.print(
                        Text(f"      {mark} ").append(chunk.get("text") or "(empty)", style=style)
                        .append(f"  #{short_id(chunk['id'])}", style="dim")
                    )
        console.print()


def format_notes_pretty(notes: list[dict]) -> None:
    """Format the external brain notes, newest first."""
    if not notes:
        console.print("[yellow]External brain is empty[/yellow]")
        return

    header = Text()
    header.append("🧠 External Brain ", style="bold magenta")
    header.append(f"({len(notes)})", style="dim")
    console.print(header)
    for note in notes:
        line = Text("  • ")
        line.append(note["text"])
        line.append(f"  #{short_id(note['id'])}", style="dim")
        console.print(line)


def format_timer_status(timer: dict, task: dict | None = None) -> None:
    """Format the timer state."""
    mode = timer["mode"]
    color = MODE_COLORS[mode]
    state = "running" if timer["is_running"] else "paused"

    console.print(
        f"[bold {color}]{MODE_LABELS[mode]}[/bold {color}]  "
        f"[bold]{format_time(timer['remaining_seconds'])}[/bold]  [dim]{state}[/dim]"
    )
    console.print(
        f"Cycle: {get_cycle_dots(timer['cycle_count'], mode)}  "
        f"[dim]({timer['cycle_count']}/4 sessions)[/dim]"
    )
    if task is not None:
        console.print(f"Task: {task.get('content') or '(untitled)'} [dim]#{short_id(task['id'])}[/dim]")


def format_settings(settings: dict) -> None:
    """Format timer settings as a key/value table."""
    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Focus", f"{settings['focusTime']} min")
    table.add_row("Short break", f"{settings['shortBreak']} min")
    table.add_row("Long break", f"{settings['longBreak']} min")
    table.add_row("Sound", "on" if settings["soundEnabled"] else "off")
    table.add_row("Sound type", settings["soundType"])
    table.add_row("Theme", "dark" if settings["darkMode"] else "light")
    console.print(table)
