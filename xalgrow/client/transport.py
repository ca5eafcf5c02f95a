# FILE: xalgrow/client/transport.py
# HTTP access to the Xalgrow backend. Non-2xx responses are returned as-is;
# only network failures and undecodable bodies raise.

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from xalgrow.client.errors import TransportError
from xalgrow.client import settings

logger = logging.getLogger("xalgrow.client")


class ApiClient:
    """Thin async wrapper around ``httpx.AsyncClient``.

    Usage:
        async with ApiClient("http://localhost:5000", token="...") as api:
            res = await api.request("POST", "/api/ai/generate", {"prompt": "..."})
    """

    def __init__(
            self,
            base_url: Optional[str] = None,
            token: Optional[str] = None,
            timeout: Optional[float] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.token = token if token is not None else settings.API_TOKEN
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS

        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        # The cookie jar lives on the client, so session cookies set by the
        # backend are sent back on later calls.
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=transport,
        )

    async def request(self, method: str, path: str, body: Any = None) -> httpx.Response:
        kwargs: Dict[str, Any] = {}
        if body is not None:
            kwargs["json"] = body

        try:
            res = await self._http.request(method.upper(), path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method.upper(), path, e)
            raise TransportError(f"Request to {path} failed: {e}") from e

        logger.debug("%s %s -> %s", method.upper(), path, res.status_code)
        return res

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


def read_json(res: httpx.Response) -> Any:
    try:
        return res.json()
    except ValueError as e:
        raise TransportError("Invalid JSON in response", status_code=res.status_code) from e


def error_message(res: httpx.Response, fallback: str) -> str:
    """Message from a ``{"message": ...}`` error body, or ``fallback``."""
    try:
        data = res.json()
    except ValueError:
        return fallback
    if isinstance(data, dict):
        msg = data.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg
    return fallback


# Lazy initialization - only create client when needed
_api_client: Optional[ApiClient] = None


def get_api_client() -> ApiClient:
    global _api_client
    if _api_client is None:
        _api_client = ApiClient()
    return _api_client


async def close_api_client() -> None:
    global _api_client
    if _api_client is not None:
        await _api_client.close()
        _api_client = None
