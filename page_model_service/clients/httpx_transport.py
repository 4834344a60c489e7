"""httpx-backed transport for the page model delivery API."""

from __future__ import annotations

from typing import Any

import httpx

from page_model_service.logging_utils import create_service_logger
from page_model_service.protocols import FORM_URLENCODED

logger = create_service_logger("page_model.transport")


class HttpxTransport:
    """HTTP transport sharing one ``httpx.AsyncClient`` across requests."""

    def __init__(self, http_client: httpx.AsyncClient, cookie_header: str | None = None) -> None:
        """Initialize with shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
            cookie_header: Raw ``Cookie`` header of the incoming request,
                forwarded when a call is made with credentials
        """
        self._client = http_client
        self._cookie_header = cookie_header

    def _headers(self, with_credentials: bool) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if with_credentials and self._cookie_header:
            headers["Cookie"] = self._cookie_header
        return headers

    async def get(self, url: str, *, with_credentials: bool = True) -> Any:
        """GET ``url`` and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: On non-2xx responses
            httpx.TransportError: On connection failures and timeouts
            ValueError: When the body is not valid JSON
        """
        logger.debug("GET page model", url=url)

        response = await self._client.get(url, headers=self._headers(with_credentials))
        response.raise_for_status()
        return response.json()

    async def post(
        self,
        url: str,
        body: str,
        *,
        with_credentials: bool = True,
        content_type: str = FORM_URLENCODED,
    ) -> Any:
        """POST a pre-encoded ``body`` to ``url`` and return the decoded JSON body."""
        headers = self._headers(with_credentials)
        headers["Content-Type"] = content_type

        logger.debug("POST component update", url=url, body_length=len(body))

        response = await self._client.post(url, content=body, headers=headers)
        response.raise_for_status()
        return response.json()
