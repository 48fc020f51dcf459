"""HTTP transport for the admin API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = 3


class ApiError(Exception):
    """Raised when the admin API answers with a non-success status."""

    def __init__(self, message: str, status_code: int, text: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.text = text


class HttpGateway:
    """Issues authenticated requests against the admin API.

    Routes are relative to ``base_url`` (usually ending in ``/api/``). Each
    request opens its own client, so an instance carries no connection state
    and can be shared freely between concurrent callers.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str = "",
        api_version: int = DEFAULT_API_VERSION,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.access_token = access_token
        self._api_version = api_version
        self.timeout = timeout

    @property
    def api_version(self) -> int:
        return self._api_version

    def basic_headers(self, additional: dict[str, str] | None = None) -> dict[str, str]:
        """Build the default JSON and auth headers, with ``additional`` on top."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if additional:
            headers.update(additional)
        return headers

    async def get(
        self,
        route: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self._request("GET", route, params=params, headers=headers)

    async def post(
        self,
        route: str,
        json: Any,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self._request(
            "POST", route, json=json, params=params, headers=headers
        )

    async def patch(
        self,
        route: str,
        json: Any,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self._request(
            "PATCH", route, json=json, params=params, headers=headers
        )

    async def delete(
        self,
        route: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self._request(
            "DELETE", route, json=json, params=params, headers=headers
        )

    async def _request(
        self,
        method: str,
        route: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        logger.debug("%s %s", method, route)
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout
        ) as client:
            response = await client.request(
                method,
                route,
                json=json,
                params=params or None,
                headers=headers if headers is not None else self.basic_headers(),
            )
        if not response.is_success:
            raise ApiError(
                f"{method} {route} failed: {response.status_code} {response.text}",
                status_code=response.status_code,
                text=response.text,
            )
        return response
