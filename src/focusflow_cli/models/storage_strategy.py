"""
Strategy Pattern: where the workspace snapshot is stored

``ConfigService`` picks one strategy at startup from the active context.
Everything downstream talks to ``StorageStrategyContext.gateway`` and never
asks which backend is behind it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from focusflow_cli.models.config_models import Context
from focusflow_cli.repositories import PersistenceGateway


class StorageStrategy(ABC):
    """A storage backend that can hand out a persistence gateway."""

    @abstractmethod
    def get_gateway(self) -> PersistenceGateway:
        """The gateway snapshots are loaded from and saved to."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Short backend name ("local" or "remote")."""


class LocalStorageStrategy(StorageStrategy):
    """SQLite vault on this machine.

    Used for local contexts, and as the stand-in when a cloud context is
    missing its user identity or token.
    """

    def __init__(self, db_path: str):
        # Deferred: the sqlite adapter imports the repositories package
        from focusflow_cli.adapters.sqlite.gateway import SqliteGateway

        self.db_path = db_path
        self._gateway = SqliteGateway(db_path=db_path)

    def get_gateway(self) -> PersistenceGateway:
        return self._gateway

    @property
    def storage_type(self) -> str:
        return "local"


class RemoteStorageStrategy(StorageStrategy):
    """Cloud document store keyed by the context's user identity."""

    def __init__(self, context: Context):
        from focusflow_cli.adapters.rest_api import RestApiGateway

        self.context = context
        self._gateway = RestApiGateway(context)

    def get_gateway(self) -> PersistenceGateway:
        return self._gateway

    @property
    def storage_type(self) -> str:
        return "remote"


class StorageStrategyContext:
    """Holds the chosen strategy and why, if cloud storage was skipped.

    Usage:
        ctx = StorageStrategyContext(LocalStorageStrategy(db_path))
        snapshot = await ctx.gateway.load()
    """

    def __init__(self, strategy: StorageStrategy, fallback_reason: str | None = None):
        self._strategy = strategy
        self.fallback_reason = fallback_reason

    @property
    def gateway(self) -> PersistenceGateway:
        return self._strategy.get_gateway()

    @property
    def storage_type(self) -> str:
        return self._strategy.storage_type

    @property
    def connectivity(self) -> str:
        """Indicator shown by ``context status``."""
        if self.fallback_reason:
            return "local (cloud unavailable)"
        return "cloud" if self.storage_type == "remote" else "local"

    @property
    def strategy(self) -> StorageStrategy:
        return self._strategy
