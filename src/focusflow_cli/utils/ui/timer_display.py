"""Live countdown screen shown while a focus session or break runs."""

from __future__ import annotations

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from focusflow_cli.models.focus import FocusCycleEngine
from focusflow_cli.services.workspace_service import WorkspaceService

from .console import get_console
from .formatters import MODE_LABELS, format_time, get_cycle_dots, get_progress_bar

# Palette per theme, keyed by TimerSettings.dark_mode
THEMES = {
    False: {"focus": "red", "short": "green", "long": "blue", "text": "black", "dim": "grey50"},
    True: {
        "focus": "bright_red",
        "short": "bright_green",
        "long": "bright_blue",
        "text": "white",
        "dim": "grey62",
    },
}

MODE_ICONS = {
    "focus": "🍅",
    "short": "☕",
    "long": "🌴",
}

PROGRESS_WIDTH = 40


def countdown_color(engine: FocusCycleEngine, theme: dict) -> str:
    """Mode color, turning yellow in the last minute and red in the last seconds."""
    if engine.remaining_seconds <= 5:
        return "red"
    if engine.remaining_seconds < 60:
        return "yellow"
    return theme[engine.mode]


def elapsed_percent(engine: FocusCycleEngine) -> int:
    if engine.duration <= 0:
        return 0
    return min(100, (engine.duration - engine.remaining_seconds) * 100 // engine.duration)


class TimerDisplay:
    """Renders the countdown with rich Live and drives it once per second."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    def render(self, workspace: WorkspaceService) -> RenderableType:
        engine = workspace.engine
        theme = THEMES[engine.settings.dark_mode]
        accent = theme[engine.mode] if engine.is_running else "yellow"

        lines: list[RenderableType] = []
        task = workspace.active_task()
        if task is not None and engine.mode == "focus":
            label = Text((task.content or "(untitled)")[:50], style=f"bold {theme['text']}")
            label.append(f"  #{task.id[:8]}", style=theme["dim"])
            lines += [label, Text()]

        lines.append(
            Text(format_time(engine.remaining_seconds), style=f"bold {countdown_color(engine, theme)}")
        )
        percent = elapsed_percent(engine)
        lines.append(
            Text(f"{get_progress_bar(percent, PROGRESS_WIDTH)}  {percent}%", style=theme["dim"])
        )
        lines += [
            Text(),
            Text(f"Cycle {get_cycle_dots(engine.cycle_count, engine.mode)}", style=theme["dim"]),
        ]

        if engine.is_running:
            title = f"{MODE_ICONS[engine.mode]}  {MODE_LABELS[engine.mode]}"
        else:
            title = f"⏸  {MODE_LABELS[engine.mode]} (paused)"

        body = Group(*(Align.center(line) for line in lines))
        return Panel(
            Align.center(body, vertical="middle"),
            title=Text(title, style=f"bold {accent}"),
            subtitle=Text("Ctrl+C to pause", style=theme["dim"]),
            border_style=accent,
            expand=True,
        )

    async def run(self, workspace: WorkspaceService) -> str:
        """Count down until the session completes or is paused."""
        with Live(
            self.render(workspace),
            console=self.console,
            refresh_per_second=4,
            screen=True,
        ) as live:
            return await workspace.run_countdown(
                on_tick=lambda ws: live.update(self.render(ws))
            )


def show_completion_message(workspace: WorkspaceService, console: Console | None = None):
    """Announce the finished session and what comes next."""
    engine = workspace.engine
    (console or get_console()).print(
        Panel(
            f"[bold green]🎉 Session complete![/bold green]\n\n"
            f"Up next: {MODE_LABELS[engine.mode]} ({format_time(engine.remaining_seconds)})\n"
            f"Cycle: {get_cycle_dots(engine.cycle_count, engine.mode)}\n\n"
            "Run 'focusflow timer start' when you are ready.",
            border_style="green",
            padding=(1, 2),
        )
    )


def show_paused_message(workspace: WorkspaceService, console: Console | None = None):
    engine = workspace.engine
    (console or get_console()).print(
        Panel(
            f"[yellow]Timer paused[/yellow]\n\n"
            f"Mode: {MODE_LABELS[engine.mode]}\n"
            f"Remaining: {format_time(engine.remaining_seconds)}\n\n"
            "Run 'focusflow timer start' to resume.",
            border_style="yellow",
            padding=(1, 2),
        )
    )
