"""Unit tests for transport error classification."""

from __future__ import annotations

import json

import httpx
import pytest

from page_model_service.error_handling import ErrorCode, error_from_exception

REQUEST = httpx.Request("GET", "http://cms.test/site/resourceapi")


@pytest.mark.parametrize(
    ("error", "expected_code"),
    [
        (httpx.ConnectTimeout("slow", request=REQUEST), ErrorCode.TIMEOUT),
        (httpx.ConnectError("refused", request=REQUEST), ErrorCode.CONNECTION_ERROR),
        (httpx.TooManyRedirects("redirect loop", request=REQUEST), ErrorCode.CONNECTION_ERROR),
        (httpx.DecodingError("bad gzip", request=REQUEST), ErrorCode.INVALID_RESPONSE),
        (json.JSONDecodeError("Expecting value", "<html>", 0), ErrorCode.INVALID_RESPONSE),
        (RuntimeError("boom"), ErrorCode.UNKNOWN_ERROR),
    ],
)
def test_error_codes(error: Exception, expected_code: ErrorCode) -> None:
    page_model_error = error_from_exception("fetch_page_model", error)

    assert page_model_error.error_code == expected_code
    assert page_model_error.operation == "fetch_page_model"
    assert page_model_error.status_code is None


def test_status_error_carries_status_code() -> None:
    response = httpx.Response(502, request=REQUEST)
    error = httpx.HTTPStatusError("Bad gateway", request=REQUEST, response=response)

    page_model_error = error_from_exception("update_component", error)

    assert page_model_error.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR
    assert page_model_error.status_code == 502
    assert page_model_error.message == "Bad gateway"


def test_empty_message_falls_back_to_type_name() -> None:
    page_model_error = error_from_exception("fetch_page_model", ValueError())

    assert page_model_error.message == "ValueError"
