"""Delivery API endpoint configuration built from service settings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from page_model_service.config import PageModelSettings
from page_model_service.dto.page_model_v1 import ApiUrlConfigV1, ApiUrlsV1


def default_api_urls(config: PageModelSettings) -> ApiUrlsV1:
    live = ApiUrlConfigV1(
        base_url=config.CMS_BASE_URL,
        context_path=config.CMS_CONTEXT_PATH,
        channel_path=config.CMS_CHANNEL_PATH,
        preview_prefix=config.CMS_PREVIEW_PREFIX,
        api_path=config.CMS_API_PATH,
        component_rendering_url_suffix=config.CMS_COMPONENT_RENDERING_URL_SUFFIX,
    )
    preview_base_url = config.CMS_PREVIEW_BASE_URL or config.CMS_BASE_URL
    preview = live.model_copy(update={"base_url": preview_base_url})
    return ApiUrlsV1(live=live, preview=preview)


class ApiUrlsResolverImpl:
    """Resolves live/preview endpoints, allowing per-mode overrides."""

    def __init__(self, config: PageModelSettings) -> None:
        self._api_urls = default_api_urls(config)

    def get_api_urls(self) -> ApiUrlsV1:
        return self._api_urls

    def set_api_urls(self, overrides: Mapping[str, Mapping[str, Any]]) -> ApiUrlsV1:
        """Merge ``{"live": {...}, "preview": {...}}`` overrides over the current URLs.

        Unknown modes are ignored; fields left out keep their current value.
        """
        live = self._api_urls.live
        preview = self._api_urls.preview
        if "live" in overrides:
            live = ApiUrlConfigV1.model_validate({**live.model_dump(), **overrides["live"]})
        if "preview" in overrides:
            preview = ApiUrlConfigV1.model_validate(
                {**preview.model_dump(), **overrides["preview"]}
            )
        self._api_urls = ApiUrlsV1(live=live, preview=preview)
        return self._api_urls
