"""Unit tests for page model helpers."""

from __future__ import annotations

from typing import Any

import pytest

from page_model_service.dto.page_model_v1 import ApiUrlConfigV1, ApiUrlsV1, PageModel
from page_model_service.page_model_utils import (
    build_api_url,
    get_content_via_reference,
    to_url_encoded_form_data,
    update_component,
    update_page_metadata,
)
from page_model_service.tests.sample_page_models import make_page_model


@pytest.fixture
def api_urls() -> ApiUrlsV1:
    return ApiUrlsV1(
        live=ApiUrlConfigV1(base_url="https://www.example.com/"),
        preview=ApiUrlConfigV1(base_url="https://cms.example.com", channel_path="intranet"),
    )


class TestBuildApiUrl:
    def test_live_page_url(self, api_urls: ApiUrlsV1) -> None:
        url = build_api_url(api_urls, False, "/news/2019", "")

        assert url == "https://www.example.com/site/resourceapi/news/2019"

    def test_root_page_url(self, api_urls: ApiUrlsV1) -> None:
        assert build_api_url(api_urls, False, "/", "") == "https://www.example.com/site/resourceapi"

    def test_preview_url_uses_preview_config(self, api_urls: ApiUrlsV1) -> None:
        url = build_api_url(api_urls, True, "news", "")

        assert url == "https://cms.example.com/site/_cmsinternal/intranet/resourceapi/news"

    def test_query_is_appended(self, api_urls: ApiUrlsV1) -> None:
        url = build_api_url(api_urls, False, "/news", "?page=2&sort=date")

        assert url == "https://www.example.com/site/resourceapi/news?page=2&sort=date"

    def test_component_url(self, api_urls: ApiUrlsV1) -> None:
        url = build_api_url(api_urls, False, "/news", "", "r1_r1_r2")

        assert url == (
            "https://www.example.com/site/resourceapi/news"
            "?_hn:type=component-rendering&_hn:ref=r1_r1_r2"
        )

    def test_component_url_with_query(self, api_urls: ApiUrlsV1) -> None:
        url = build_api_url(api_urls, False, "/news", "page=2", "r1")

        assert url.endswith("&_hn:ref=r1&page=2")


class TestToUrlEncodedFormData:
    def test_spaces_encode_as_percent_20(self) -> None:
        assert to_url_encoded_form_data({"title": "Hello World"}) == "title=Hello%20World"

    def test_multiple_properties_keep_order(self) -> None:
        body = to_url_encoded_form_data({"title": "A&B", "count": 3, "visible": True})

        assert body == "title=A%26B&count=3&visible=true"

    def test_reserved_and_unicode_characters(self) -> None:
        body = to_url_encoded_form_data({"q": "a=b/c?", "name": "Ångström (x)"})

        assert body == "q=a%3Db%2Fc%3F&name=%C3%85ngstr%C3%B6m%20(x)"

    def test_none_encodes_as_empty(self) -> None:
        assert to_url_encoded_form_data({"title": None}) == "title="

    def test_empty_mapping(self) -> None:
        assert to_url_encoded_form_data({}) == ""


class TestUpdateComponent:
    def test_replaces_nested_component_and_merges_content(self) -> None:
        page_model = PageModel.model_validate(make_page_model())
        response = {
            "page": {"id": "comp-2", "type": "CONTAINER_ITEM_COMPONENT", "label": "New text"},
            "content": {"u-text": {"id": "u-text"}},
        }

        merged = update_component(response, "comp-2", page_model, None, False, True)

        assert merged is page_model
        container = merged.page["components"][0]
        assert container["components"][1] == response["page"]
        assert container["components"][0]["id"] == "comp-1"
        assert set(merged.content) == {"u-banner", "u-text"}

    def test_replaces_root_page(self) -> None:
        page_model = PageModel.model_validate(make_page_model())
        response = {"page": {"id": "r1", "type": "COMPONENT", "components": []}}

        merged = update_component(response, "r1", page_model, None, False, False)

        assert merged.page == response["page"]

    def test_unknown_component_keeps_tree(self) -> None:
        document = make_page_model()
        page_model = PageModel.model_validate(document)

        merged = update_component({"page": {"id": "nope"}}, "nope", page_model, None, False, False)

        assert merged.page == document["page"]

    def test_non_object_response_raises_value_error(self) -> None:
        page_model = PageModel.model_validate(make_page_model())

        response: Any = ["page"]

        with pytest.raises(ValueError):
            update_component(response, "comp-1", page_model, None, False, False)

    def test_without_current_model_response_becomes_model(self) -> None:
        response = {"page": {"id": "comp-1"}, "content": {}}

        merged = update_component(response, "comp-1", None, None, False, False)

        assert merged.page == {"id": "comp-1"}


class TestUpdatePageMetadata:
    class _ChannelManager:
        def __init__(self) -> None:
            self.synced = False

        def sync(self) -> None:
            self.synced = True

    def test_preview_collects_comments_and_syncs(self) -> None:
        page = make_page_model()["page"]
        channel_manager = self._ChannelManager()

        update_page_metadata(page, channel_manager, True, False)

        assert channel_manager.synced
        assert page["_meta"]["bodyComments"] == ["<!-- page begin -->", "<!-- page end -->"]

    def test_preview_without_meta_creates_it(self) -> None:
        page = {"id": "r1"}

        update_page_metadata(page, self._ChannelManager(), True, False)

        assert page["_meta"] == {"bodyComments": []}

    def test_preview_with_null_meta_replaces_it(self) -> None:
        page = {"id": "r1", "_meta": None}
        channel_manager = self._ChannelManager()

        update_page_metadata(page, channel_manager, True, False)

        assert channel_manager.synced
        assert page["_meta"] == {"bodyComments": []}

    def test_live_is_noop(self) -> None:
        page = make_page_model()["page"]
        channel_manager = self._ChannelManager()

        update_page_metadata(page, channel_manager, False, True)

        assert not channel_manager.synced
        assert "bodyComments" not in page["_meta"]

    def test_none_page_is_noop(self) -> None:
        update_page_metadata(None, self._ChannelManager(), True, True)


class TestGetContentViaReference:
    def test_resolves_reference(self) -> None:
        page_model = PageModel.model_validate(make_page_model("Title"))

        assert get_content_via_reference("/content/u-banner", page_model) == {
            "id": "u-banner",
            "title": "Title",
        }

    @pytest.mark.parametrize("ref", ["/content/unknown", "u-banner", "/content/", "", None])
    def test_unresolvable_reference_returns_none(self, ref: str | None) -> None:
        page_model = PageModel.model_validate(make_page_model())

        assert get_content_via_reference(ref, page_model) is None

    def test_without_model_returns_none(self) -> None:
        assert get_content_via_reference("/content/u-banner", None) is None
