"""Persistence gateway abstraction.

The planner persists one snapshot per user. Gateways hide where that
snapshot lives, so the workspace and the focus engine never branch on the
storage backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import ValidationError

from focusflow_cli.models.errors import CorruptSnapshotError, SnapshotVersionError
from focusflow_cli.models.planner import SNAPSHOT_VERSION, Snapshot


class PersistenceGateway(ABC):
    """Abstract base class for snapshot storage."""

    @abstractmethod
    async def load(self) -> Snapshot | None:
        """Load the stored snapshot.

        Returns:
            The snapshot, or None when nothing has been stored yet

        Raises:
            GatewayError: If the storage cannot be read
            SnapshotVersionError: If the snapshot was written by a newer schema
        """
        raise NotImplementedError("PersistenceGateway.load() must be implemented by adapter")

    @abstractmethod
    async def save(self, snapshot: Snapshot) -> None:
        """Store the full snapshot, replacing any previous one.

        Raises:
            GatewayError: If the storage cannot be written
        """
        raise NotImplementedError("PersistenceGateway.save() must be implemented by adapter")

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/status display)."""


def parse_snapshot(data) -> Snapshot:
    """Validate raw snapshot data, rejecting versions we cannot read.

    Raises:
        CorruptSnapshotError: If the data is not a well-formed snapshot
        SnapshotVersionError: If the snapshot was written by a newer schema
    """
    if not isinstance(data, dict):
        raise CorruptSnapshotError(f"Stored snapshot is a {type(data).__name__}, not an object")
    version = data.get("version", 1)
    if not isinstance(version, int) or isinstance(version, bool):
        raise CorruptSnapshotError(f"Stored snapshot has an invalid version: {version!r}")
    if version > SNAPSHOT_VERSION:
        raise SnapshotVersionError(
            f"Snapshot version {version} is newer than supported version {SNAPSHOT_VERSION}"
        )
    try:
        return Snapshot.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(part) for part in first["loc"])
        raise CorruptSnapshotError(
            f"Stored snapshot is invalid ({e.error_count()} problem(s)), {where}: {first['msg']}"
        ) from e
