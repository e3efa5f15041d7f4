"""HTTP client adapter: production transport for ping uploads."""

import asyncio
import logging
from types import TracebackType

import aiohttp
from aiohttp import ClientResponse, ClientTimeout

from src.ports.http import OutboundRequest, TransportError

__all__ = ["HttpClient", "TRANSPORT_ERRORS"]

logger = logging.getLogger(__name__)

# Exceptions meaning no usable response was obtained
TRANSPORT_ERRORS = (
    aiohttp.ClientError,  # Connection refused, DNS failed, OS-level and payload errors
    asyncio.TimeoutError,  # Connect or read timeout
)


class HttpClient:
    """aiohttp-based transport for ping uploads.

    Features:
    - One request per send(), no retry.
    - No cookies: the session uses a DummyCookieJar that neither stores nor sends any.
    - Redirects are not followed.
    - Connect/read timeouts taken from each request.
    - Context manager for proper resource cleanup.
    """

    def __init__(self) -> None:
        """Initialize HTTP client (session starts on context entry)."""
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession(cookie_jar=aiohttp.DummyCookieJar())
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    async def send(self, request: OutboundRequest) -> ClientResponse:
        """Send one upload request.

        The returned response must be released by the caller, typically with
        ``async with response:``.

        Args:
            request: Request built by the request builder.

        Returns:
            HTTP response.

        Raises:
            RuntimeError: If session not initialized.
            TransportError: On network, DNS or timeout errors.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        client_timeout = ClientTimeout(
            sock_connect=request.connect_timeout_ms / 1_000,
            sock_read=request.read_timeout_ms / 1_000,
        )
        try:
            return await self.session.request(
                request.method,
                request.url,
                data=request.body,
                headers=request.headers,
                timeout=client_timeout,
                allow_redirects=False,
            )
        except TRANSPORT_ERRORS as e:
            logger.debug(f"Transport failure for {request.url}: {e!r}")
            raise TransportError(str(e) or type(e).__name__) from e
