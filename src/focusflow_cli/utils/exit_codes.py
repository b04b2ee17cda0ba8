"""
Exit codes for FocusFlow CLI.

Scripts wrapping the CLI can tell a full day (2) from a missing task (5)
or an unreachable vault (4).
"""

SUCCESS = 0

# Anything not covered below
ERROR_GENERAL = 1

# Bad day, full day, ambiguous id, out-of-range setting
ERROR_INVALID_ARGS = 2

# Local vault or cloud store could not be read or written
ERROR_STORAGE = 4

# Task, chunk, note or context not found
ERROR_NOT_FOUND = 5

_NAMES = {
    SUCCESS: "SUCCESS",
    ERROR_GENERAL: "ERROR_GENERAL",
    ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
    ERROR_STORAGE: "ERROR_STORAGE",
    ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
}


def get_exit_code_name(code: int) -> str:
    """Name of an exit code, for logs and messages."""
    return _NAMES.get(code, f"UNKNOWN({code})")
