"""SQLite local vault adapter."""

from .gateway import SqliteGateway

__all__ = ["SqliteGateway"]
