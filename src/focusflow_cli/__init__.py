"""FocusFlow CLI - weekly planner, focus timer and external brain."""

__version__ = "0.1.0"
