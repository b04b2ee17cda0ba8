"""Pomodoro focus timer commands."""

import asyncio

import typer

from focusflow_cli.services.workspace_service import WorkspaceService
from focusflow_cli.utils.ui.console import get_console
from focusflow_cli.utils.ui.formatters import (
    MODE_LABELS,
    format_info,
    format_output,
    format_success,
    format_timer_status,
    format_time,
)
from focusflow_cli.utils.ui.timer_display import (
    TimerDisplay,
    show_completion_message,
    show_paused_message,
)

from .decorators import command_wrapper
from .utils import workspace_session

app = typer.Typer(help="Pomodoro focus timer")
console = get_console()

VALID_MODES = ("focus", "short", "long")


async def run_live_timer(ws: WorkspaceService) -> str:
    """Show the live countdown until it completes or the user pauses it."""
    try:
        result = await TimerDisplay(console).run(ws)
    except asyncio.CancelledError:
        show_paused_message(ws, console)
        raise
    if result == "completed":
        show_completion_message(ws, console)
    else:
        show_paused_message(ws, console)
    return result


def _timer_data(ws: WorkspaceService) -> dict:
    data = ws.engine.snapshot_state().to_dict()
    data["active_task_id"] = ws.engine.active_task_id
    return data


@app.command("status")
@command_wrapper
async def status(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format (pretty/json/yaml)"),
) -> None:
    """Show the timer state."""
    async with workspace_session() as ws:
        data = _timer_data(ws)
        task = ws.active_task()
    if not format_output(data, output):
        format_timer_status(data, task.to_dict() if task else None)


@app.command("start")
@command_wrapper
async def start(
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No sound cues"),
) -> None:
    """Start or resume the countdown."""
    async with workspace_session(quiet=quiet) as ws:
        await ws.start()
        if not ws.engine.is_running:
            format_info("Nothing left to count down. Run 'focusflow timer reset' first.")
            return
        format_info(
            f"{MODE_LABELS[ws.engine.mode]} started ({format_time(ws.engine.remaining_seconds)})"
        )
        await run_live_timer(ws)


@app.command("pause")
@command_wrapper
async def pause() -> None:
    """Pause the countdown."""
    async with workspace_session() as ws:
        await ws.pause()
        remaining = format_time(ws.engine.remaining_seconds)
    format_info(f"Paused with {remaining} left")


@app.command("reset")
@command_wrapper
async def reset() -> None:
    """Refill the countdown for the current mode."""
    async with workspace_session() as ws:
        await ws.reset()
        mode = ws.engine.mode
        remaining = format_time(ws.engine.remaining_seconds)
    format_success(f"{MODE_LABELS[mode]} reset to {remaining}")


@app.command("mode")
@command_wrapper
async def switch_mode(
    mode: str = typer.Argument(..., help="focus, short or long"),
) -> None:
    """Switch timer mode without counting a session."""
    if mode not in VALID_MODES:
        raise ValueError(f"Invalid mode '{mode}'. Must be: {', '.join(VALID_MODES)}")
    async with workspace_session() as ws:
        await ws.switch_mode(mode)
        remaining = format_time(ws.engine.remaining_seconds)
    format_success(f"Switched to {MODE_LABELS[mode]} ({remaining})")


@app.command("reset-cycle")
@command_wrapper
async def reset_cycle() -> None:
    """Start a fresh four-session cycle."""
    async with workspace_session() as ws:
        await ws.reset_cycle()
    format_success("Cycle counter reset")
