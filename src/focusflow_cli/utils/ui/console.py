"""Shared Rich console for FocusFlow CLI output."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=1)
def get_console() -> Console:
    """The console every command prints through."""
    return Console(highlight=False)


def configure_console(color: bool = True) -> Console:
    """Apply the ``output.color`` setting to the shared console."""
    console = get_console()
    console.no_color = not color
    return console
