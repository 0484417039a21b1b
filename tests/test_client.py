import json

import httpx
import pytest

from restful_booker.client import ApiConnectionError, ApiContext, ApiError, ApiResponseError, api_context

BASE = "http://booker.test"


def make_context(handler, **kwargs):
    return ApiContext(BASE, transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_requests_use_base_url_and_json_headers():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"token": "abc"})

    async with make_context(handler) as api:
        response = await api.post("/auth", {"username": "admin", "password": "password123"})

    assert response.status == 200
    assert response.status_text == "OK"
    assert response.json() == {"token": "abc"}
    request = seen[0]
    assert str(request.url) == "http://booker.test/auth"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"username": "admin", "password": "password123"}


@pytest.mark.asyncio
async def test_delete_sends_extra_headers():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201, text="Created")

    async with make_context(handler) as api:
        response = await api.delete("/booking/7", headers={"Cookie": "token=abc123"})

    assert response.status == 201
    assert response.status_text == "Created"
    assert seen[0].method == "DELETE"
    assert seen[0].headers["Cookie"] == "token=abc123"
    assert seen[0].headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_transport_failure_raises_connection_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_context(handler) as api:
        with pytest.raises(ApiConnectionError, match="GET http://booker.test/booking"):
            await api.get("/booking")


@pytest.mark.asyncio
async def test_malformed_json_raises_response_error():
    async with make_context(lambda request: httpx.Response(200, text="<html>oops</html>")) as api:
        response = await api.get("/booking")

    with pytest.raises(ApiResponseError, match="not JSON"):
        response.json()


@pytest.mark.asyncio
async def test_context_disposed_when_scenario_fails():
    captured = []

    with pytest.raises(AssertionError):
        async with api_context(BASE, transport=httpx.MockTransport(lambda r: httpx.Response(200))) as api:
            captured.append(api)
            raise AssertionError("scenario failed")

    assert captured[0].disposed


@pytest.mark.asyncio
async def test_dispose_is_idempotent_and_blocks_further_requests():
    api = make_context(lambda request: httpx.Response(200, json=[]))
    await api.dispose()
    await api.dispose()

    assert api.disposed
    with pytest.raises(ApiError, match="disposed"):
        await api.get("/booking")
