"""Page model gateway.

Owns the current page model, mediates every read and write of it against the
delivery API and broadcasts each new value to subscribers.

Failure contract: fetch and update never raise for transport failures. They
log the failure and return ``Result.err(PageModelError)``; callers must check
``is_ok`` before using the model.

Concurrency: overlapping fetch/update calls on one instance are not
serialised. Whichever response arrives last becomes the current model.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from page_model_service.broadcast import ReplayChannel
from page_model_service.config import RenderMode
from page_model_service.dto.page_model_v1 import PageModel
from page_model_service.error_handling import PageModelError, error_from_exception
from page_model_service.implementations.transfer_state import PAGE_MODEL_KEY
from page_model_service.logging_utils import create_service_logger
from page_model_service.page_model_utils import (
    build_api_url,
    get_content_via_reference,
    log_update_component,
    to_url_encoded_form_data,
    update_page_metadata,
)
from page_model_service.page_model_utils import update_component as merge_component_update
from page_model_service.protocols import (
    FORM_URLENCODED,
    ApiUrlResolverProtocol,
    ChannelManagerApiProtocol,
    HttpTransportProtocol,
    RequestContextProtocol,
    TransferCacheProtocol,
)
from page_model_service.result import Result

logger = create_service_logger("page_model.gateway")

# Everything a transport may raise for a failed call or an unusable body
_TRANSPORT_ERRORS = (httpx.HTTPError, ValueError)


class PageModelGateway:
    """Fetches, caches, hands off and patches the page model of one render."""

    def __init__(
        self,
        api_urls: ApiUrlResolverProtocol,
        request_context: RequestContextProtocol,
        transport: HttpTransportProtocol,
        render_mode: RenderMode,
        transfer_cache: TransferCacheProtocol | None = None,
    ) -> None:
        self._api_urls = api_urls
        self._request_context = request_context
        self._transport = transport
        self._render_mode = render_mode
        self._transfer_cache = transfer_cache
        self._channel_manager_api: ChannelManagerApiProtocol | None = None
        self._page_model: PageModel | None = None
        self._page_model_subject: ReplayChannel[PageModel | None] = ReplayChannel(None)

    @property
    def render_mode(self) -> RenderMode:
        return self._render_mode

    async def fetch_page_model(self) -> Result[PageModel, PageModelError]:
        """Load the page model for the current request.

        A model left in the transfer cache by the server pass is consumed
        without a network call; otherwise it is fetched from the delivery API
        and, on the server, stored for the client pass.
        """
        transfer_cache = self._active_transfer_cache()

        if transfer_cache is not None and transfer_cache.has_key(PAGE_MODEL_KEY):
            cached = transfer_cache.get(PAGE_MODEL_KEY, None)
            transfer_cache.remove(PAGE_MODEL_KEY)
            try:
                page_model = PageModel.model_validate(cached)
            except ValueError as e:
                return self._handle_error("fetch_page_model", e)

            logger.debug("Page model taken from transfer state")
            self._page_model = page_model
            self._process_page_model()
            return Result.ok(page_model)

        url = self._build_api_url()
        try:
            response = await self._transport.get(url, with_credentials=True)
            page_model = PageModel.model_validate(response)
        except _TRANSPORT_ERRORS as e:
            return self._handle_error("fetch_page_model", e)

        if transfer_cache is not None and self._render_mode is RenderMode.SERVER:
            transfer_cache.set(PAGE_MODEL_KEY, response)

        self._page_model = page_model
        self._process_page_model()
        return Result.ok(page_model)

    async def update_component(
        self, component_id: str, properties: Mapping[str, Any]
    ) -> Result[PageModel, PageModelError]:
        """Post new properties for one component and merge the re-rendered component.

        Raises:
            ValueError: If ``component_id`` is empty
        """
        if not component_id:
            raise ValueError("component_id must be a non-empty identifier")

        debugging = self._request_context.get_debugging()
        log_update_component(component_id, properties, debugging)

        body = to_url_encoded_form_data(properties)
        url = self._build_api_url(component_id)

        try:
            response = await self._transport.post(
                url, body, with_credentials=True, content_type=FORM_URLENCODED
            )
            preview = self._request_context.is_preview_request()
            page_model = merge_component_update(
                response,
                component_id,
                self._page_model,
                self._channel_manager_api,
                preview,
                debugging,
            )
        except _TRANSPORT_ERRORS as e:
            return self._handle_error("update_component", e)

        self._page_model = page_model
        self._page_model_subject.publish(page_model)
        return Result.ok(page_model)

    def get_page_model(self) -> PageModel | None:
        return self._page_model

    def get_page_model_subject(self) -> ReplayChannel[PageModel | None]:
        return self._page_model_subject

    def set_channel_manager_api(
        self, channel_manager_api: ChannelManagerApiProtocol | None
    ) -> None:
        self._channel_manager_api = channel_manager_api

    def get_content_via_reference(self, content_ref: str) -> Any | None:
        return get_content_via_reference(content_ref, self._page_model)

    def _active_transfer_cache(self) -> TransferCacheProtocol | None:
        if not self._request_context.get_transfer_state():
            return None
        return self._transfer_cache

    def _process_page_model(self) -> None:
        page_model = self._page_model
        if page_model is None:
            return
        self._page_model_subject.publish(page_model)
        update_page_metadata(
            page_model.page,
            self._channel_manager_api,
            self._request_context.is_preview_request(),
            self._request_context.get_debugging(),
        )

    def _build_api_url(self, component_id: str | None = None) -> str:
        return build_api_url(
            self._api_urls.get_api_urls(),
            self._request_context.is_preview_request(),
            self._request_context.get_path(),
            self._request_context.get_query(),
            component_id,
        )

    def _handle_error(self, operation: str, error: Exception) -> Result[PageModel, PageModelError]:
        """Log a failed operation and turn it into an error result."""
        page_model_error = error_from_exception(operation, error)
        logger.error(
            f"{operation} failed: {page_model_error.message}",
            operation=operation,
            error_code=page_model_error.error_code.value,
            status_code=page_model_error.status_code,
            error=repr(error),
        )
        return Result.err(page_model_error)
