"""Dependency Injection providers for Page Model Service.

Provides Dishka DI container setup with APP-scoped infrastructure
and REQUEST-scoped page model collaborators.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from dishka import Provider, Scope, from_context, provide
from fastapi import Request

from page_model_service.clients.httpx_transport import HttpxTransport
from page_model_service.config import PageModelSettings, settings
from page_model_service.gateway import PageModelGateway
from page_model_service.implementations.api_urls_resolver import ApiUrlsResolverImpl
from page_model_service.implementations.request_context import RequestContextImpl
from page_model_service.implementations.transfer_state import InMemoryTransferState
from page_model_service.protocols import (
    ApiUrlResolverProtocol,
    HttpTransportProtocol,
    RequestContextProtocol,
)


class PageModelProvider(Provider):
    """Infrastructure provider for Page Model Service.

    Provides APP-scoped dependencies: config, HTTP client, endpoint resolver.
    """

    scope = Scope.APP

    @provide
    def get_config(self) -> PageModelSettings:
        """Provide settings singleton."""
        return settings

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: PageModelSettings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client with connection pooling."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.HTTP_CLIENT_TIMEOUT_SECONDS,
                connect=config.HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS,
            )
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def provide_api_urls_resolver(self, config: PageModelSettings) -> ApiUrlResolverProtocol:
        """Provide endpoint resolver singleton."""
        return ApiUrlsResolverImpl(config)


class PageRenderProvider(Provider):
    """Request-scoped provider: one gateway per rendered page.

    Each request gets its own request context, transfer state and gateway so
    that page models never leak between renders.
    """

    request = from_context(provides=Request, scope=Scope.REQUEST)

    @provide(scope=Scope.REQUEST)
    def provide_request_context(
        self,
        request: Request,
        api_urls: ApiUrlResolverProtocol,
        config: PageModelSettings,
    ) -> RequestContextProtocol:
        """Provide the context parsed from the incoming request."""
        return RequestContextImpl.from_request(request, api_urls.get_api_urls(), config)

    @provide(scope=Scope.REQUEST)
    def provide_transfer_state(self) -> InMemoryTransferState:
        """Provide an empty hand-off store for this render."""
        return InMemoryTransferState()

    @provide(scope=Scope.REQUEST)
    def provide_transport(
        self, http_client: httpx.AsyncClient, request: Request
    ) -> HttpTransportProtocol:
        """Provide a transport forwarding the caller's cookies."""
        return HttpxTransport(http_client, cookie_header=request.headers.get("cookie"))

    @provide(scope=Scope.REQUEST)
    def provide_gateway(
        self,
        api_urls: ApiUrlResolverProtocol,
        request_context: RequestContextProtocol,
        transport: HttpTransportProtocol,
        transfer_state: InMemoryTransferState,
        config: PageModelSettings,
    ) -> PageModelGateway:
        """Provide the page model gateway for this render."""
        return PageModelGateway(
            api_urls,
            request_context,
            transport,
            config.RENDER_MODE,
            transfer_cache=transfer_state,
        )
