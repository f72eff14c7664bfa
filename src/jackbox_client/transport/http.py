"""
HTTP client for the ecast room lookup and the socket.io bootstrap call.
"""

from typing import Any, Optional

import httpx

from jackbox_client.errors import MalformedError, NotFoundError, TransientError

DEFAULT_ROOM_BASE = "ecast.jackboxgames.com"
DEFAULT_WS_BASE = "ecast.jackboxgames.com:38203"


class HttpClient:
    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            headers={"User-Agent": "jackbox-client/0.1.0"},
            timeout=timeout,
            transport=transport,
        )

    async def _get(self, url: str, params: Optional[dict[str, str]] = None) -> httpx.Response:
        try:
            resp = await self._client.get(url, params=params)
        except httpx.TransportError as e:
            raise TransientError(f"GET {url} failed: {e}") from e
        if resp.status_code == 404:
            raise NotFoundError(f"HTTP 404: {url}")
        if resp.status_code >= 400:
            raise TransientError(f"HTTP {resp.status_code}: {resp.text[:200]}", code="http_error")
        return resp

    async def get(self, url: str, params: Optional[dict[str, str]] = None) -> Any:
        resp = await self._get(url, params)
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedError(f"Invalid JSON from {url}: {e}") from e

    async def get_text(self, url: str) -> str:
        resp = await self._get(url)
        return resp.text

    async def close(self) -> None:
        await self._client.aclose()
