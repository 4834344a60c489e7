"""Protocol definitions for Page Model Service.

Defines the collaborator interfaces the page model gateway is composed from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from page_model_service.dto.page_model_v1 import ApiUrlsV1

FORM_URLENCODED = "application/x-www-form-urlencoded"


class ApiUrlResolverProtocol(Protocol):
    """Supplies the delivery API endpoint configuration."""

    def get_api_urls(self) -> ApiUrlsV1:
        """Return live and preview endpoint configuration."""
        ...


class RequestContextProtocol(Protocol):
    """Read access to the state of the request being rendered."""

    def is_preview_request(self) -> bool:
        """Whether unpublished (preview) content is requested."""
        ...

    def get_debugging(self) -> bool:
        """Whether verbose page model logging is enabled."""
        ...

    def get_path(self) -> str:
        """Page path relative to the channel, without preview prefix."""
        ...

    def get_query(self) -> str:
        """Raw query string to forward to the delivery API."""
        ...

    def get_transfer_state(self) -> bool:
        """Whether the server-to-client hand-off is enabled."""
        ...


class HttpTransportProtocol(Protocol):
    """Async HTTP transport returning decoded JSON bodies.

    Implementations raise ``httpx.HTTPError`` on transport or status failures
    and ``ValueError`` on undecodable bodies.
    """

    async def get(self, url: str, *, with_credentials: bool = True) -> Any:
        """Issue a GET request and return the decoded JSON body."""
        ...

    async def post(
        self,
        url: str,
        body: str,
        *,
        with_credentials: bool = True,
        content_type: str = FORM_URLENCODED,
    ) -> Any:
        """Issue a POST request with a pre-encoded body and return the decoded JSON body."""
        ...


class TransferCacheProtocol(Protocol):
    """Key/value store handing values from the server pass to the client pass."""

    def has_key(self, key: str) -> bool: ...

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...


class ChannelManagerApiProtocol(Protocol):
    """In-context editing tooling attached to preview renders."""

    def sync(self) -> None:
        """Re-scan the rendered page for editable regions."""
        ...
