"""Request context for the page being rendered."""

from __future__ import annotations

from starlette.requests import Request

from page_model_service.config import PageModelSettings
from page_model_service.dto.page_model_v1 import ApiUrlsV1


def parse_request_path(path: str, api_urls: ApiUrlsV1) -> tuple[str, bool]:
    """Split an incoming page path into (channel-relative path, preview flag).

    A leading context path is dropped, then the preview prefix (which marks a
    preview request), then the channel path.
    """
    segments = [segment for segment in path.split("/") if segment]
    live = api_urls.live
    preview_config = api_urls.preview

    if segments and segments[0] == live.context_path.strip("/"):
        segments = segments[1:]

    preview = False
    if preview_config.preview_prefix and segments and segments[0] == preview_config.preview_prefix:
        preview = True
        segments = segments[1:]

    channel_path = (preview_config if preview else live).channel_path.strip("/")
    if channel_path:
        channel_segments = channel_path.split("/")
        if segments[: len(channel_segments)] == channel_segments:
            segments = segments[len(channel_segments) :]

    return "/" + "/".join(segments), preview


class RequestContextImpl:
    """Plain holder of the request state the gateway reads at call time."""

    def __init__(
        self,
        path: str = "/",
        query: str = "",
        *,
        preview: bool = False,
        debugging: bool = False,
        transfer_state: bool = False,
    ) -> None:
        self._path = path
        self._query = query
        self._preview = preview
        self._debugging = debugging
        self._transfer_state = transfer_state

    @classmethod
    def from_request(
        cls, request: Request, api_urls: ApiUrlsV1, config: PageModelSettings
    ) -> RequestContextImpl:
        """Build the context from an incoming request.

        Routes mount the page path as the ``page_path`` path parameter; other
        routes fall back to the full URL path.
        """
        raw_path = request.path_params.get("page_path", request.url.path)
        path, preview = parse_request_path(raw_path, api_urls)
        return cls(
            path,
            request.url.query,
            preview=preview,
            debugging=config.DEBUGGING,
            transfer_state=config.TRANSFER_STATE,
        )

    def is_preview_request(self) -> bool:
        return self._preview

    def get_debugging(self) -> bool:
        return self._debugging

    def set_debugging(self, debugging: bool) -> None:
        self._debugging = debugging

    def get_path(self) -> str:
        return self._path

    def get_query(self) -> str:
        return self._query

    def get_transfer_state(self) -> bool:
        return self._transfer_state
