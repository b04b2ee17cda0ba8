"""Shared helpers for command modules."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from focusflow_cli.services.config_service import get_config_service
from focusflow_cli.services.notification_service import (
    NotificationSink,
    NullNotificationSink,
    TerminalNotificationSink,
)
from focusflow_cli.services.workspace_service import WorkspaceService, open_workspace
from focusflow_cli.utils.ui.console import configure_console
from focusflow_cli.utils.ui.formatters import format_warning


def get_notification_sink(quiet: bool = False) -> NotificationSink:
    """Terminal bells unless quiet mode is requested or configured."""
    output = get_config_service().config.output
    if quiet or output.quiet_sounds:
        return NullNotificationSink()
    return TerminalNotificationSink(configure_console(color=output.color))


@asynccontextmanager
async def workspace_session(quiet: bool = True) -> AsyncIterator[WorkspaceService]:
    """Open the workspace for one command and report persistence problems."""
    configure_console(color=get_config_service().config.output.color)
    workspace = await open_workspace(get_notification_sink(quiet))
    if workspace.last_load_error:
        format_warning(f"Could not load saved data: {workspace.last_load_error}")
    try:
        yield workspace
    finally:
        if workspace.last_save_error:
            format_warning(
                f"Changes kept in memory only, save failed: {workspace.last_save_error}"
            )
        await workspace.close()
