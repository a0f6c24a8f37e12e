"""
Tests for the transport backends and the unified response wrapper.

The httpx transport is exercised end to end with httpx.MockTransport, so the
bytes put on the wire (form body, JSON body, headers) are checked for real.
The requests transport runs against a session with a stub adapter mounted,
and the aiohttp transport against a local aiohttp server.
"""

import asyncio
import json

import httpx
import pytest
import requests
from aiohttp import test_utils
from aiohttp import web
from requests.adapters import BaseAdapter

from investec_card_sdk.auth import AuthManager
from investec_card_sdk.config import InvestecCardSettings
from investec_card_sdk.exceptions import TransportError
from investec_card_sdk.http_client import CardHttpClient
from investec_card_sdk.transport import get_transport
from investec_card_sdk.transport.aiohttp import AiohttpTransport
from investec_card_sdk.transport.base import BufferedResponse
from investec_card_sdk.transport.base import UnifiedResponse
from investec_card_sdk.transport.httpx import HttpxTransport
from investec_card_sdk.transport.requests import RequestsTransport


def httpx_transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_httpx_transport_returns_unified_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"cards": []}})

    transport = httpx_transport(handler)
    response = await transport.request("GET", "https://api.test/za/v1/cards")

    assert response.status_code == 200
    assert response.reason == "OK"
    assert await response.json() == {"data": {"cards": []}}
    await transport.close()


@pytest.mark.asyncio
async def test_httpx_transport_maps_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    transport = httpx_transport(handler)

    with pytest.raises(TransportError) as exc_info:
        await transport.request("GET", "https://api.test/za/v1/cards", timeout=30.0)
    assert exc_info.value.is_timeout
    assert "30.0s" in str(exc_info.value)


@pytest.mark.asyncio
async def test_httpx_transport_maps_connection_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = httpx_transport(handler)

    with pytest.raises(TransportError) as exc_info:
        await transport.request("GET", "https://api.test/za/v1/cards")
    assert not exc_info.value.is_timeout


@pytest.mark.asyncio
async def test_token_request_on_the_wire():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.content.decode()
        seen["headers"] = request.headers
        return httpx.Response(
            200,
            json={
                "access_token": "wire-token",
                "token_type": "Bearer",
                "expires_in": 1799,
                "scope": "accounts cards",
            },
        )

    settings = InvestecCardSettings(
        client_id="id", client_secret="secret", api_key="key", host="https://api.test"
    )
    auth = AuthManager(settings, httpx_transport(handler))

    assert await auth.get_token() == "wire-token"
    assert seen["url"] == "https://api.test/identity/v2/oauth2/token"
    assert seen["body"] == "grant_type=client_credentials"
    assert seen["headers"]["authorization"] == "Basic aWQ6c2VjcmV0"
    assert seen["headers"]["x-api-key"] == "key"
    assert seen["headers"]["content-type"] == "application/x-www-form-urlencoded"


@pytest.mark.asyncio
async def test_resource_request_on_the_wire():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        seen["headers"] = request.headers
        return httpx.Response(200, json={"data": {"result": {"Enabled": True}}})

    http = CardHttpClient("https://api.test", httpx_transport(handler))

    result = await http.authenticated_post(
        "/za/v1/cards/42/toggle-programmable-feature", "abc", {"Enabled": True}
    )

    assert result == {"data": {"result": {"Enabled": True}}}
    assert seen["method"] == "POST"
    assert seen["body"] == {"Enabled": True}
    assert seen["headers"]["authorization"] == "Bearer abc"
    assert seen["headers"]["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_httpx_transport_follows_redirects():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/za/v1/cards":
            return httpx.Response(302, headers={"Location": "https://api.test/final"})
        return httpx.Response(200, json={"data": {"cards": []}})

    http = CardHttpClient("https://api.test", httpx_transport(handler))

    assert await http.authenticated_get("/za/v1/cards", "abc") == {"data": {"cards": []}}


def test_default_httpx_client_follows_redirects():
    assert HttpxTransport()._client.follow_redirects is True

@pytest.mark.asyncio
async def test_buffered_response_parses_json_after_read():
    response = UnifiedResponse(
        BufferedResponse(status_code=404, reason="Not Found", text='{"error": "x"}')
    )

    assert response.status_code == 404
    assert response.reason == "Not Found"
    assert await response.json() == {"error": "x"}


def test_get_transport_by_name():
    assert isinstance(get_transport("httpx"), HttpxTransport)
    assert isinstance(get_transport("aiohttp"), AiohttpTransport)
    assert isinstance(get_transport("REQUESTS"), RequestsTransport)


def test_get_transport_unknown_name():
    with pytest.raises(ValueError, match="Unknown transport"):
        get_transport("urllib")


class StubAdapter(BaseAdapter):
    """Answers every request with a JSON body, or raises the given exception."""

    def __init__(self, outcome):
        super().__init__()
        self.outcome = outcome
        self.timeouts = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.timeouts.append(timeout)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        response = requests.Response()
        response.status_code = 200
        response.reason = "OK"
        response._content = json.dumps(self.outcome).encode()
        response.headers["Content-Type"] = "application/json"
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


def requests_transport(outcome) -> tuple[RequestsTransport, StubAdapter]:
    adapter = StubAdapter(outcome)
    session = requests.Session()
    session.mount("https://", adapter)
    return RequestsTransport(timeout=30.0, session=session), adapter


@pytest.mark.asyncio
async def test_requests_transport_returns_unified_response():
    transport, adapter = requests_transport({"data": {"cards": []}})

    response = await transport.request("GET", "https://api.test/za/v1/cards")

    assert response.status_code == 200
    assert response.reason == "OK"
    assert await response.json() == {"data": {"cards": []}}
    assert adapter.timeouts == [30.0]
    await transport.close()


@pytest.mark.asyncio
async def test_requests_transport_maps_timeout():
    transport, _ = requests_transport(requests.exceptions.ReadTimeout("slow"))

    with pytest.raises(TransportError) as exc_info:
        await transport.request("GET", "https://api.test/za/v1/cards", timeout=5.0)
    assert exc_info.value.is_timeout
    assert "5.0s" in str(exc_info.value)


@pytest.mark.asyncio
async def test_requests_transport_maps_connection_errors():
    transport, _ = requests_transport(requests.exceptions.ConnectionError("refused"))

    with pytest.raises(TransportError) as exc_info:
        await transport.request("GET", "https://api.test/za/v1/cards")
    assert not exc_info.value.is_timeout
    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


async def serve(handler) -> test_utils.TestServer:
    app = web.Application()
    app.router.add_route("*", "/za/v1/cards", handler)
    server = test_utils.TestServer(app)
    await server.start_server()
    return server


@pytest.mark.asyncio
async def test_aiohttp_transport_reads_body_before_release():
    async def handler(request: web.Request) -> web.Response:
        return web.json_response({"data": {"cards": [{"CardKey": 1}]}})

    server = await serve(handler)
    transport = AiohttpTransport()
    try:
        response = await transport.request("GET", str(server.make_url("/za/v1/cards")))
    finally:
        await transport.close()
        await server.close()

    assert response.status_code == 200
    assert response.reason == "OK"
    assert await response.json() == {"data": {"cards": [{"CardKey": 1}]}}


@pytest.mark.asyncio
async def test_aiohttp_transport_maps_timeout():
    release = asyncio.Event()

    async def handler(request: web.Request) -> web.Response:
        await release.wait()
        return web.json_response({})

    server = await serve(handler)
    transport = AiohttpTransport(timeout=0.05)
    try:
        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", str(server.make_url("/za/v1/cards")))
        assert exc_info.value.is_timeout
    finally:
        release.set()
        await transport.close()
        await server.close()


@pytest.mark.asyncio
async def test_aiohttp_transport_maps_connection_errors():
    async def handler(request: web.Request) -> web.Response:
        return web.json_response({})

    server = await serve(handler)
    url = str(server.make_url("/za/v1/cards"))
    await server.close()

    transport = AiohttpTransport()
    try:
        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", url)
        assert not exc_info.value.is_timeout
    finally:
        await transport.close()
