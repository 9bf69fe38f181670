"""Tests for RequestPipeline: request building, classification and error toasts."""

from __future__ import annotations

import asyncio
import math

import httpx
import pytest

from core.domain.models import (
    Failure,
    FailureKind,
    HttpMethod,
    RequestDescriptor,
    Severity,
    Success,
)
from core.services.context import ClientContext
from core.services.request_pipeline import GENERIC_FAILURE_MESSAGE, encode_body, json_safe

from conftest import FakeApi, RecordingPresenter


@pytest.mark.asyncio
async def test_success_returns_parsed_body(context: ClientContext, api: FakeApi, presenter: RecordingPresenter) -> None:
    api.on("GET", "/train/G1", body={"trainId": "G1"})

    result = await context.pipeline.execute(RequestDescriptor(endpoint="/train/G1"))

    assert isinstance(result, Success)
    assert result.payload == {"trainId": "G1"}
    assert presenter.shown() == []


@pytest.mark.asyncio
async def test_post_body_is_json_with_content_type(context: ClientContext, api: FakeApi) -> None:
    api.on("POST", "/ticket/buy")

    await context.pipeline.execute(
        RequestDescriptor(endpoint="/ticket/buy", method=HttpMethod.POST, body={"trainId": "G101", "date": "2024-01-01"})
    )

    request = api.last
    assert request.url.path == "/api/ticket/buy"
    assert request.headers["content-type"] == "application/json"
    assert api.last_json() == {"trainId": "G101", "date": "2024-01-01"}


@pytest.mark.asyncio
async def test_get_query_is_appended(context: ClientContext, api: FakeApi) -> None:
    api.on("GET", "/route/display", body={"routes": []})

    await context.pipeline.execute(
        RequestDescriptor(endpoint="/route/display", query={"startStation": "A", "endStation": "B"})
    )

    assert dict(api.last.url.params) == {"startStation": "A", "endStation": "B"}
    assert "content-type" not in api.last.headers


@pytest.mark.asyncio
async def test_session_token_sent_as_bearer(logged_in: ClientContext, api: FakeApi) -> None:
    api.on("GET", "/ticket/orders", body={"orders": []})

    await logged_in.pipeline.execute(RequestDescriptor(endpoint="/ticket/orders"))

    assert api.last.headers["authorization"] == "Bearer tok-1"


@pytest.mark.asyncio
async def test_no_authorization_header_without_session(context: ClientContext, api: FakeApi) -> None:
    api.on("GET", "/ticket/orders", body={"orders": []})

    await context.pipeline.execute(RequestDescriptor(endpoint="/ticket/orders"))

    assert "authorization" not in api.last.headers


@pytest.mark.asyncio
async def test_server_failure_uses_message_field(
    context: ClientContext, api: FakeApi, presenter: RecordingPresenter
) -> None:
    api.on("POST", "/ticket/buy", status=409, body={"message": "sold out"})

    result = await context.pipeline.execute(RequestDescriptor(endpoint="/ticket/buy", method=HttpMethod.POST, body={}))

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.SERVER
    assert result.message == "sold out"
    assert result.status_code == 409
    errors = presenter.shown(Severity.ERROR)
    assert len(errors) == 1 and errors[0].text == "sold out"


@pytest.mark.asyncio
async def test_server_failure_without_message_is_generic(context: ClientContext, api: FakeApi) -> None:
    api.on("GET", "/user/1", status=500, body={"success": False})

    result = await context.pipeline.execute(RequestDescriptor(endpoint="/user/1"))

    assert isinstance(result, Failure)
    assert result.message == GENERIC_FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_unparseable_body_is_parse_failure(
    context: ClientContext, api: FakeApi, presenter: RecordingPresenter
) -> None:
    api.on("GET", "/train/G1", raw=b"<html>oops</html>")

    result = await context.pipeline.execute(RequestDescriptor(endpoint="/train/G1"))

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.PARSE
    assert len(presenter.shown(Severity.ERROR)) == 1


@pytest.mark.asyncio
async def test_transport_error_is_network_failure(
    context: ClientContext, api: FakeApi, presenter: RecordingPresenter
) -> None:
    api.fail("GET", "/ticket/orders", httpx.ConnectError("connection refused"))

    result = await context.pipeline.execute(RequestDescriptor(endpoint="/ticket/orders"))

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.NETWORK
    assert "connection refused" in result.message
    errors = presenter.shown(Severity.ERROR)
    assert len(errors) == 1 and "connection refused" in errors[0].text


@pytest.mark.asyncio
async def test_failure_is_notified_before_caller_sees_it(context: ClientContext, api: FakeApi) -> None:
    api.on("GET", "/user/9", status=404, body={"message": "no such user"})

    result = await context.pipeline.execute(RequestDescriptor(endpoint="/user/9"))

    current = context.state.notifications.current
    assert current is not None
    assert current.severity is Severity.ERROR
    assert current.text == result.message


@pytest.mark.asyncio
async def test_concurrent_calls_run_independently(context: ClientContext, api: FakeApi) -> None:
    api.on("GET", "/ticket/orders", body={"orders": []})
    descriptor = RequestDescriptor(endpoint="/ticket/orders")

    results = await asyncio.gather(context.pipeline.execute(descriptor), context.pipeline.execute(descriptor))

    assert all(isinstance(r, Success) for r in results)
    assert len(api.requests) == 2


def test_json_safe_replaces_nan_with_null() -> None:
    assert json_safe({"a": math.nan, "b": [1, math.inf], "c": "x"}) == {"a": None, "b": [1, None], "c": "x"}
    assert encode_body({"seatNum": math.nan}) == b'{"seatNum": null}'
