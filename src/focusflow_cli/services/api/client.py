"""HTTP client for the FocusFlow cloud document store."""

import asyncio
from typing import Any

import httpx

from focusflow_cli.models.config_models import Context
from focusflow_cli.services.config_service import get_config_service
from focusflow_cli.utils.logger import get_logger


def _is_retryable(error: Exception) -> bool:
    """Network failures and 5xx responses are worth another attempt."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return isinstance(error, httpx.RequestError)


class APIClient:
    """Async client bound to one remote context.

    The bearer token is read from the context's stored credentials before
    every request, so a ``context login`` takes effect without rebuilding
    the client.
    """

    def __init__(
        self,
        context: Context | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config_service = get_config_service()
        self.context = context or self.config_service.get_current_context()
        self.base_url = self.context.source.rstrip("/")
        self.timeout = self.config_service.config.api.timeout
        self.retries = self.config_service.config.api.retry
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _auth_headers(self) -> dict[str, str]:
        credentials = self.config_service.load_context_credentials(self.context.name) or {}
        token = credentials.get("token")
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        self._client.headers.update(self._auth_headers())
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        retry: int | None = None,
    ) -> httpx.Response:
        """Send a request, retrying server and network errors.

        Waits 1, 2, 4... seconds between attempts. Client errors (4xx) are
        raised on the first attempt.

        Raises:
            httpx.HTTPStatusError: On a 4xx, or a 5xx after the last retry
            httpx.RequestError: If the server stays unreachable
        """
        retries = self.retries if retry is None else retry
        url = path if path.startswith("/") else f"/{path}"
        client = self._http()

        attempt = 0
        while True:
            try:
                response = await client.request(method, url, json=json, params=params)
                response.raise_for_status()
                return response
            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                if not _is_retryable(e) or attempt >= retries:
                    raise
                get_logger().warning(
                    "%s %s failed (attempt %d/%d): %s",
                    method,
                    url,
                    attempt + 1,
                    retries + 1,
                    e,
                )
                await asyncio.sleep(2**attempt)
                attempt += 1

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> httpx.Response:
        return await self.request("GET", path, params=params)

    async def put(self, path: str, *, json: dict[str, Any] | None = None) -> httpx.Response:
        return await self.request("PUT", path, json=json)
