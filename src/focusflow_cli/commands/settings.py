"""Timer settings commands."""

import typer

from focusflow_cli.utils.ui.formatters import format_output, format_settings, format_success

from .decorators import command_wrapper
from .utils import workspace_session

app = typer.Typer(help="Timer and display settings")

VALID_SOUND_TYPES = ("chime", "retro", "bell")


@app.command("show")
@command_wrapper
async def show(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format (pretty/json/yaml)"),
) -> None:
    """Show current settings."""
    async with workspace_session() as ws:
        data = ws.engine.settings.to_dict()
    if not format_output(data, output):
        format_settings(data)


@app.command("set")
@command_wrapper
async def set_settings(
    focus: int | None = typer.Option(None, "--focus", help="Focus minutes"),
    short: int | None = typer.Option(None, "--short", help="Short break minutes"),
    long: int | None = typer.Option(None, "--long", help="Long break minutes"),
    sound: bool | None = typer.Option(None, "--sound/--no-sound", help="Sound cues"),
    sound_type: str | None = typer.Option(None, "--sound-type", help="chime, retro or bell"),
    dark: bool | None = typer.Option(None, "--dark/--light", help="Timer display theme"),
) -> None:
    """Change settings. An idle timer picks up new durations immediately."""
    if sound_type is not None and sound_type not in VALID_SOUND_TYPES:
        raise ValueError(
            f"Invalid sound type '{sound_type}'. Must be: {', '.join(VALID_SOUND_TYPES)}"
        )
    async with workspace_session() as ws:
        settings = await ws.update_settings(
            focus_time=focus,
            short_break=short,
            long_break=long,
            sound_enabled=sound,
            sound_type=sound_type,
            dark_mode=dark,
        )
    format_success("Settings saved")
    format_settings(settings.to_dict())
