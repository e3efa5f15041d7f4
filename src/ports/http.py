"""HTTP port definitions (request DTO and transport interface)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import TracebackType
from typing import ClassVar, Protocol

from multidict import CIMultiDictProxy

__all__ = [
    "CookiePolicy",
    "OutboundRequest",
    "TransportError",
    "TransportPort",
    "TransportResponse",
]


class CookiePolicy(Enum):
    """Whether cookies may travel with a request."""

    INCLUDE = "include"
    OMIT = "omit"


class TransportError(Exception):
    """Connection, timeout or other I/O fault raised by a transport."""


@dataclass(slots=True, frozen=True)
class OutboundRequest:
    """Ping upload request, built once and handed to a transport.

    Attributes:
        url: Fully-qualified destination URL (endpoint + path).
        headers: Read-only, case-insensitive headers; a key may carry several values.
        body: Raw payload bytes.
        connect_timeout_ms: Connection timeout in milliseconds.
        read_timeout_ms: Read timeout in milliseconds.
        method: HTTP method, always POST.
        cookie_policy: Cookie handling, always OMIT.
    """

    url: str
    headers: CIMultiDictProxy[str]
    body: bytes
    connect_timeout_ms: int
    read_timeout_ms: int
    method: ClassVar[str] = "POST"
    cookie_policy: ClassVar[CookiePolicy] = CookiePolicy.OMIT


class TransportResponse(Protocol):
    """Response handle returned by a transport.

    Used as an async context manager; leaving the context releases the
    underlying connection.
    """

    @property
    def status(self) -> int:
        """HTTP status code."""
        ...

    async def __aenter__(self) -> TransportResponse: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None: ...


class TransportPort(Protocol):
    """Interface for sending one upload request over the wire.

    Implementations must not follow redirects and must not attach or
    store cookies.
    """

    async def send(self, request: OutboundRequest, /) -> TransportResponse:
        """Send the request and return the response handle.

        Args:
            request: The request to send.

        Returns:
            Response handle; the caller owns releasing it.

        Raises:
            TransportError: If no response could be obtained.
        """
        ...
