"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from focusflow_cli.models.errors import (
    AmbiguousIdError,
    DayFullError,
    FocusFlowError,
    GatewayError,
    InvalidDayError,
    NotFoundError,
)
from focusflow_cli.utils import exit_codes
from focusflow_cli.utils.logger import get_logger
from focusflow_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def to_app_error(error: Exception) -> AppError:
    """Translate a domain error into an AppError with a semantic exit code."""
    if isinstance(error, AppError):
        return error
    if isinstance(error, NotFoundError):
        return AppError(str(error), exit_codes.ERROR_NOT_FOUND)
    if isinstance(error, (DayFullError, InvalidDayError, AmbiguousIdError)):
        return AppError(str(error), exit_codes.ERROR_INVALID_ARGS)
    if isinstance(error, ValidationError):
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in error.errors()
        )
        return AppError(f"Invalid value - {problems}", exit_codes.ERROR_INVALID_ARGS)
    if isinstance(error, ValueError):
        return AppError(str(error), exit_codes.ERROR_INVALID_ARGS)
    if isinstance(error, GatewayError):
        return AppError(str(error), exit_codes.ERROR_STORAGE)
    return AppError(str(error))


def command_wrapper(_func: Callable | None = None):
    """Run a (possibly async) command, logging it and mapping errors to exit codes."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)

            def elapsed() -> float:
                return time.monotonic() - start

            try:
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)
            except typer.Exit:
                raise
            except KeyboardInterrupt as e:
                logger.info("command interrupted: %s (%.3fs)", cmd, elapsed())
                raise typer.Exit(code=exit_codes.SUCCESS) from e
            except (AppError, FocusFlowError, ValidationError, ValueError) as e:
                app_error = to_app_error(e)
                logger.error(
                    "command failed: %s (%.3fs) [%s] %s",
                    cmd,
                    elapsed(),
                    exit_codes.get_exit_code_name(app_error.exit_code),
                    app_error,
                )
                format_error(str(app_error))
                raise typer.Exit(code=app_error.exit_code) from e
            except Exception as e:
                logger.error(
                    "command crashed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed(),
                    e,
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {e}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

            logger.info("command completed: %s (%.3fs)", cmd, elapsed())
            return result

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
