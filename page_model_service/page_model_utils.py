"""Page model helpers: URL building, form encoding and model mutation.

These are the pure(ish) functions the gateway delegates to. None of them
perform I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from page_model_service.dto.page_model_v1 import ApiUrlsV1, PageModel
from page_model_service.logging_utils import create_service_logger
from page_model_service.protocols import ChannelManagerApiProtocol

logger = create_service_logger("page_model.utils")

# Characters left unescaped by JavaScript's encodeURIComponent, on top of
# the alphanumerics and "_.-~" that quote() never escapes.
_URI_COMPONENT_SAFE = "!*'()"

CONTENT_REF_PREFIX = "/content/"


def build_api_url(
    api_urls: ApiUrlsV1,
    preview: bool,
    url_path: str,
    query: str,
    component_id: str | None = None,
) -> str:
    """Build the delivery API URL for a page, or for one of its components.

    Layout: ``base_url/context_path/[preview_prefix]/channel_path/api_path/url_path``
    with empty segments skipped. A component id switches the request to
    component rendering; the query string is appended last.
    """
    config = api_urls.preview if preview else api_urls.live

    segments = [
        config.context_path,
        config.preview_prefix if preview else "",
        config.channel_path,
        config.api_path,
        url_path,
    ]
    url = config.base_url.rstrip("/")
    for segment in segments:
        segment = segment.strip("/")
        if segment:
            url += f"/{segment}"

    if component_id:
        url += f"{config.component_rendering_url_suffix}{component_id}"

    query = query.lstrip("?")
    if query:
        url += ("&" if "?" in url else "?") + query

    return url


def _encode_form_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def to_url_encoded_form_data(properties: Mapping[str, Any]) -> str:
    """Encode component properties as ``application/x-www-form-urlencoded``.

    Spaces become ``%20`` rather than ``+``, matching what browsers send for
    component property updates.
    """
    return "&".join(
        f"{quote(str(key), safe=_URI_COMPONENT_SAFE)}={_encode_form_value(value)}"
        for key, value in properties.items()
    )


def _replace_component(
    node: dict[str, Any], component_id: str, replacement: dict[str, Any]
) -> bool:
    children = node.get("components") or []
    for index, child in enumerate(children):
        if not isinstance(child, dict):
            continue
        if child.get("id") == component_id:
            children[index] = replacement
            return True
        if _replace_component(child, component_id, replacement):
            return True
    return False


def update_component(
    response: Mapping[str, Any],
    component_id: str,
    page_model: PageModel | None,
    channel_manager_api: ChannelManagerApiProtocol | None,
    preview: bool,
    debugging: bool,
) -> PageModel:
    """Merge a component rendering response into the page model in place.

    The component with ``component_id`` is swapped for ``response["page"]``
    and ``response["content"]`` is merged into the model's content. Without
    a current model the response itself becomes the model.
    """
    if not isinstance(response, Mapping):
        raise ValueError(
            f"Component rendering response must be an object, got {type(response).__name__}"
        )

    if page_model is None:
        return PageModel.model_validate(response)

    component = response.get("page")
    if isinstance(component, dict):
        if page_model.page.get("id") == component_id:
            page_model.page = component
        elif not _replace_component(page_model.page, component_id, component):
            logger.warning("Component not found in page model", component_id=component_id)

    content = response.get("content")
    if isinstance(content, Mapping):
        page_model.content.update(content)

    if debugging:
        logger.debug(
            "Merged component update into page model",
            component_id=component_id,
            content_items=len(content) if isinstance(content, Mapping) else 0,
        )

    if isinstance(component, dict):
        update_page_metadata(component, channel_manager_api, preview, debugging)

    return page_model


def _comment_spans(meta: Mapping[str, Any], span_key: str) -> list[str]:
    comments = []
    spans = meta.get(span_key)
    if not isinstance(spans, list):
        return []
    for span in spans:
        if isinstance(span, Mapping) and span.get("type") == "comment" and span.get("data"):
            comments.append(span["data"])
    return comments


def update_page_metadata(
    page_node: dict[str, Any] | None,
    channel_manager_api: ChannelManagerApiProtocol | None,
    preview: bool,
    debugging: bool,
) -> None:
    """Prepare a page (or component) node for in-context editing.

    Only acts on preview renders with channel-manager tooling attached: the
    node's begin/end comment spans are collected into ``_meta.bodyComments``
    and the tooling is asked to re-sync.
    """
    if page_node is None or not preview or channel_manager_api is None:
        return

    meta = page_node.get("_meta")
    if not isinstance(meta, dict):
        meta = page_node["_meta"] = {}
    body_comments = _comment_spans(meta, "beginNodeSpan") + _comment_spans(meta, "endNodeSpan")
    meta["bodyComments"] = body_comments

    if debugging:
        logger.debug(
            "Updated page metadata for channel manager",
            node_id=page_node.get("id"),
            comment_count=len(body_comments),
        )

    channel_manager_api.sync()


def get_content_via_reference(content_ref: str | None, page_model: PageModel | None) -> Any | None:
    """Resolve a ``/content/<id>`` reference against the model's content map."""
    if not content_ref or page_model is None:
        return None
    if not content_ref.startswith(CONTENT_REF_PREFIX):
        return None

    content_id = content_ref[len(CONTENT_REF_PREFIX) :].split("/", 1)[0]
    if not content_id:
        return None
    return page_model.content.get(content_id)


def log_update_component(component_id: str, properties: Mapping[str, Any], debugging: bool) -> None:
    if debugging:
        logger.info(
            "Updating component",
            component_id=component_id,
            properties=dict(properties),
        )
