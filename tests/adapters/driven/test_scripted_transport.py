"""Tests for the scripted transport double."""

import pytest

from src.adapters.driven.http.scripted import ScriptedTransport
from src.core.request_builder import build_request
from src.ports.http import TransportError
from src.ports.settings import SettingsPort

__all__ = []

SETTINGS = SettingsPort(
    server_endpoint="http://test",
    debug_view_endpoint="http://debug",
    connect_timeout_ms=1_000,
    read_timeout_ms=1_000,
    user_agent="Glean/test (Python)",
    sdk_version="9.9.9",
)


@pytest.mark.asyncio
async def test_scripted_transport_replays_steps_in_order() -> None:
    """Steps should be consumed in order, raising scripted faults."""
    transport = ScriptedTransport([500, TransportError("refused"), 200])
    req = build_request("/p", "{}", SETTINGS)

    first = await transport.send(req)
    with pytest.raises(TransportError, match="refused"):
        await transport.send(req)
    third = await transport.send(req)

    assert (first.status, third.status) == (500, 200)
    assert len(transport.requests) == 3
    assert transport.responses == [first, third]


@pytest.mark.asyncio
async def test_scripted_transport_exhausted() -> None:
    """An exhausted script should behave like an unreachable server."""
    transport = ScriptedTransport([])

    with pytest.raises(TransportError, match="exhausted"):
        await transport.send(build_request("/p", "{}", SETTINGS))


@pytest.mark.asyncio
async def test_scripted_response_tracks_release() -> None:
    """Leaving the response context should mark it released."""
    transport = ScriptedTransport([204])
    response = await transport.send(build_request("/p", "{}", SETTINGS))

    assert response.released is False
    async with response:
        pass
    assert response.released is True
