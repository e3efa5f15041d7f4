"""Tests for the aiohttp transport adapter."""

import asyncio
from unittest.mock import AsyncMock

import aiohttp
import pytest
from aiohttp import ClientResponse

from src.adapters.driven.http.client import HttpClient
from src.core.request_builder import build_request
from src.ports.http import TransportError
from src.ports.settings import SettingsPort

__all__ = []


def make_request(debug_tag: str | None = None):
    """Build a request to send in tests."""
    settings = SettingsPort(
        server_endpoint="http://test",
        debug_view_endpoint="http://debug",
        connect_timeout_ms=2_000,
        read_timeout_ms=5_000,
        user_agent="Glean/test (Python)",
        sdk_version="9.9.9",
        debug_tag=debug_tag,
    )
    return build_request("/submit/app/metrics/1/abc", '{"ping":1}', settings)


@pytest.mark.asyncio
async def test_http_client_context_manager() -> None:
    """HTTP client should initialize and close session."""
    client = HttpClient()
    assert client.session is None

    async with client as c:
        assert c.session is not None
        assert c is client

    assert client.session.closed


@pytest.mark.asyncio
async def test_http_client_session_never_keeps_cookies() -> None:
    """The session cookie jar should neither store nor send cookies."""
    async with HttpClient() as client:
        assert isinstance(client.session.cookie_jar, aiohttp.DummyCookieJar)


@pytest.mark.asyncio
async def test_send_raises_if_session_not_initialized() -> None:
    """send() should raise if used outside the context manager."""
    client = HttpClient()

    with pytest.raises(RuntimeError, match="Session not initialized"):
        await client.send(make_request())


@pytest.mark.asyncio
async def test_send_posts_request_as_built() -> None:
    """send() should POST body, headers and timeouts without following redirects."""
    client = HttpClient()
    client.session = AsyncMock()

    mock_response = AsyncMock(spec=ClientResponse)
    mock_response.status = 200
    client.session.request = AsyncMock(return_value=mock_response)

    req = make_request(debug_tag="tag")
    resp = await client.send(req)

    assert resp is mock_response
    args, kwargs = client.session.request.call_args
    assert args == ("POST", "http://debug/submit/app/metrics/1/abc")
    assert kwargs["data"] == b'{"ping":1}'
    assert kwargs["headers"] is req.headers
    assert kwargs["allow_redirects"] is False
    assert kwargs["timeout"].sock_connect == 2.0
    assert kwargs["timeout"].sock_read == 5.0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [
        aiohttp.ClientConnectionError("Connection refused"),
        aiohttp.ClientOSError(111, "Connection refused"),
        aiohttp.ServerTimeoutError("read timeout"),
        asyncio.TimeoutError(),
    ],
)
async def test_send_maps_network_errors_to_transport_error(exc: BaseException) -> None:
    """Network faults should surface as TransportError."""
    client = HttpClient()
    client.session = AsyncMock()
    client.session.request = AsyncMock(side_effect=exc)

    with pytest.raises(TransportError) as info:
        await client.send(make_request())

    assert info.value.__cause__ is exc


@pytest.mark.asyncio
async def test_send_lets_unexpected_errors_through() -> None:
    """Errors unrelated to the network should not be disguised."""
    client = HttpClient()
    client.session = AsyncMock()
    client.session.request = AsyncMock(side_effect=ValueError("bad header"))

    with pytest.raises(ValueError, match="bad header"):
        await client.send(make_request())
