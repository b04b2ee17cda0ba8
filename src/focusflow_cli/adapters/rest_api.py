"""REST API gateway - snapshot storage in the cloud document store.

Each user owns one workspace document. Writes replace the whole document;
concurrent writers are not reconciled, the last write wins.
"""

from __future__ import annotations

import httpx

from focusflow_cli.models.config_models import Context
from focusflow_cli.models.errors import CorruptSnapshotError, GatewayError
from focusflow_cli.models.planner import Snapshot
from focusflow_cli.repositories import PersistenceGateway, parse_snapshot
from focusflow_cli.services.api.client import APIClient


class RestApiGateway(PersistenceGateway):
    """Cloud snapshot storage keyed by user identity."""

    def __init__(self, context: Context, client: APIClient | None = None):
        """Initialize REST API gateway.

        Args:
            context: Remote context holding the API URL and user identity
            client: Optional pre-built API client
        """
        if not context.user_id:
            raise GatewayError(f"Context '{context.name}' has no user identity")
        self.context = context
        self._client = client

    @property
    def client(self) -> APIClient:
        """Get or create the API client."""
        if self._client is None:
            self._client = APIClient(self.context)
        return self._client

    @property
    def storage_type(self) -> str:
        return "remote"

    @property
    def document_path(self) -> str:
        return f"/v1/users/{self.context.user_id}/workspace"

    async def load(self) -> Snapshot | None:
        try:
            response = await self.client.get(self.document_path)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise GatewayError(
                f"Cloud load failed with status {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise GatewayError(f"Cloud unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise CorruptSnapshotError("Cloud returned a body that is not JSON") from e
        # Some deployments wrap the document in {"data": {...}}
        if isinstance(data, dict) and "data" in data and isinstance(data["data"], dict):
            data = data["data"]
        if not data:
            return None
        return parse_snapshot(data)

    async def save(self, snapshot: Snapshot) -> None:
        try:
            await self.client.put(self.document_path, json=snapshot.to_dict())
        except httpx.HTTPStatusError as e:
            raise GatewayError(
                f"Cloud save failed with status {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise GatewayError(f"Cloud unreachable: {e}") from e

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
