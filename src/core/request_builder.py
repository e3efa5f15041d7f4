"""Construction of ping upload requests."""

from datetime import datetime, timezone
from email.utils import format_datetime

from multidict import CIMultiDict, CIMultiDictProxy

from src.ports.http import OutboundRequest
from src.ports.settings import SettingsPort

__all__ = ["build_request", "http_date"]

CONTENT_TYPE = "application/json; charset=utf-8"
CLIENT_TYPE = "Glean"


def http_date(moment: datetime | None = None) -> str:
    """Format a moment as an RFC 7231 HTTP-date.

    Args:
        moment: Aware datetime to format; defaults to now.

    Returns:
        Date such as "Sun, 06 Nov 1994 08:49:37 GMT".
    """
    moment = moment or datetime.now(timezone.utc)
    return format_datetime(moment.astimezone(timezone.utc), usegmt=True)


def build_request(
    path: str,
    payload: bytes | str,
    settings: SettingsPort,
    *,
    now: datetime | None = None,
) -> OutboundRequest:
    """Build the outbound request for one ping.

    Pure function: no I/O, never fails. The X-Client-Type and
    X-Client-Version headers let the legacy pipeline recognise these pings.

    Args:
        path: URL path appended to the chosen endpoint (starts with "/").
        payload: Serialized ping; text is UTF-8 encoded, bytes pass through.
        settings: Upload settings.
        now: Build instant used for the Date header; defaults to now.

    Returns:
        Immutable request ready for a transport.
    """
    headers: CIMultiDict[str] = CIMultiDict()
    headers["Content-Type"] = CONTENT_TYPE
    headers["User-Agent"] = settings.user_agent
    headers["Date"] = http_date(now)
    headers["X-Client-Type"] = CLIENT_TYPE
    headers["X-Client-Version"] = settings.sdk_version

    endpoint = settings.server_endpoint

    # Tagged pings only surface on the debug view endpoint
    if settings.debug_tag:
        headers.add("X-Debug-ID", settings.debug_tag)
        endpoint = settings.debug_view_endpoint

    body = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)

    return OutboundRequest(
        url=endpoint + path,
        headers=CIMultiDictProxy(headers),
        body=body,
        connect_timeout_ms=settings.connect_timeout_ms,
        read_timeout_ms=settings.read_timeout_ms,
    )
