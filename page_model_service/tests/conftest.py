"""Shared fixtures for Page Model Service tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import httpx
import pytest

from page_model_service.clients.httpx_transport import HttpxTransport
from page_model_service.config import PageModelSettings, RenderMode
from page_model_service.gateway import PageModelGateway
from page_model_service.implementations.api_urls_resolver import ApiUrlsResolverImpl
from page_model_service.implementations.request_context import RequestContextImpl
from page_model_service.implementations.transfer_state import InMemoryTransferState
from page_model_service.tests.sample_page_models import CMS_BASE_URL


@pytest.fixture
def test_settings() -> PageModelSettings:
    return PageModelSettings(
        SERVICE_NAME="page_model_service_test",
        CMS_BASE_URL=CMS_BASE_URL,
        DEBUGGING=False,
        TRANSFER_STATE=True,
        RENDER_MODE=RenderMode.SERVER,
    )


@pytest.fixture
def api_urls(test_settings: PageModelSettings) -> ApiUrlsResolverImpl:
    return ApiUrlsResolverImpl(test_settings)


@pytest.fixture
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Real httpx client for respx mocking."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def make_gateway(
    api_urls: ApiUrlsResolverImpl, http_client: httpx.AsyncClient
) -> Callable[..., PageModelGateway]:
    """Factory building gateways over a real transport with a chosen context."""

    def _make(
        *,
        path: str = "/news",
        query: str = "",
        preview: bool = False,
        debugging: bool = False,
        transfer_state_enabled: bool = False,
        transfer_state: InMemoryTransferState | None = None,
        render_mode: RenderMode = RenderMode.SERVER,
    ) -> PageModelGateway:
        context = RequestContextImpl(
            path,
            query,
            preview=preview,
            debugging=debugging,
            transfer_state=transfer_state_enabled,
        )
        return PageModelGateway(
            api_urls,
            context,
            HttpxTransport(http_client, cookie_header="JSESSIONID=abc123"),
            render_mode,
            transfer_cache=transfer_state,
        )

    return _make
