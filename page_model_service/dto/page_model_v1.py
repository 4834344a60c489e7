"""Page model v1 DTOs.

The page model itself is backend-defined; only the fields this service reads
are declared, everything else is carried through untouched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PageModel(BaseModel):
    """Page model document as returned by the delivery API.

    ``page`` is the root of the component tree; every node may carry an
    ``id``, nested ``components`` and a ``_meta`` mapping. ``content`` maps
    content ids to documents referenced from components.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    page: dict[str, Any]
    content: dict[str, Any] = Field(default_factory=dict)
    meta: dict[str, Any] = Field(default_factory=dict, alias="_meta")
    links: dict[str, Any] = Field(default_factory=dict, alias="_links")

    def to_document(self) -> dict[str, Any]:
        """Serialise back to the backend's wire shape."""
        return self.model_dump(by_alias=True, mode="json")


class ApiUrlConfigV1(BaseModel):
    """Endpoint layout of one delivery API (live or preview)."""

    base_url: str
    context_path: str = "site"
    channel_path: str = ""
    preview_prefix: str = "_cmsinternal"
    api_path: str = "resourceapi"
    component_rendering_url_suffix: str = "?_hn:type=component-rendering&_hn:ref="


class ApiUrlsV1(BaseModel):
    """Live and preview endpoint configuration."""

    live: ApiUrlConfigV1
    preview: ApiUrlConfigV1


class PageModelResponseV1(BaseModel):
    """Server render pass response: the model plus the serialised hand-off state."""

    page_model: dict[str, Any]
    transfer_state: dict[str, Any] = Field(default_factory=dict)
