"""Storage context commands (local vault or cloud)."""

import typer
from rich.table import Table

from focusflow_cli.services.config_service import get_config_service
from focusflow_cli.utils.ui.console import get_console
from focusflow_cli.utils.ui.formatters import format_info, format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer(help="Storage contexts (local or cloud)")
console = get_console()


@app.command("list")
@command_wrapper
def list_contexts() -> None:
    """List storage contexts."""
    config_service = get_config_service()
    current = config_service.config.current_context_name

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Source")
    table.add_column("User")
    for ctx in config_service.list_contexts():
        table.add_row(
            "*" if ctx.name == current else "",
            ctx.name,
            ctx.type,
            ctx.source,
            ctx.user_id or "-",
        )
    console.print(table)


@app.command("use")
@command_wrapper
def use_context(name: str = typer.Argument(..., help="Context name")) -> None:
    """Switch the active storage context."""
    context = get_config_service().use_context(name)
    format_success(f"Now using '{context.name}' ({context.type})")


@app.command("login")
@command_wrapper
def login(
    user: str = typer.Option(..., "--user", help="Cloud user identity"),
    token: str = typer.Option(..., "--token", help="Access token"),
    context_name: str = typer.Option("cloud", "--context", help="Remote context name"),
) -> None:
    """Store the cloud identity and token for a remote context."""
    config_service = get_config_service()
    context = config_service.config.get_context(context_name)
    if context.type != "remote":
        raise ValueError(f"Context '{context_name}' is not a remote context")
    config_service.set_user_identity(user, context_name)
    config_service.save_credentials(token, context_name)
    format_success(f"Credentials saved for '{context_name}'")


@app.command("logout")
@command_wrapper
def logout(
    context_name: str = typer.Option("cloud", "--context", help="Remote context name"),
) -> None:
    """Forget the cloud identity and token."""
    config_service = get_config_service()
    config_service.set_user_identity(None, context_name)
    config_service.clear_credentials(context_name)
    format_success(f"Logged out of '{context_name}'")


@app.command("status")
@command_wrapper
def status() -> None:
    """Show where data is being saved."""
    config_service = get_config_service()
    context = config_service.get_current_context()
    strategy_context = config_service.storage_strategy_context

    console.print(f"Context: [bold]{context.name}[/bold] ({context.type})")
    console.print(f"Storage: [cyan]{strategy_context.connectivity}[/cyan]")
    if strategy_context.fallback_reason:
        format_warning(f"Cloud unavailable: {strategy_context.fallback_reason}")
        format_info("Run 'focusflow context login --user ID --token TOKEN' to enable cloud sync")
