"""Settings port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["SettingsPort"]


@dataclass(slots=True, frozen=True)
class SettingsPort:
    """Upload settings for a single ping submission.

    Decouples core from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        server_endpoint: Base URL of the ingestion server.
        debug_view_endpoint: Base URL used instead of server_endpoint for tagged pings.
        connect_timeout_ms: Connection timeout in milliseconds.
        read_timeout_ms: Read timeout in milliseconds.
        user_agent: Value of the User-Agent header.
        sdk_version: Value of the X-Client-Version header.
        debug_tag: Optional debug view tag; enables X-Debug-ID and the debug endpoint.
        log_pings: When True, ping bodies are pretty-printed to the debug log.
    """

    server_endpoint: str
    debug_view_endpoint: str
    connect_timeout_ms: int
    read_timeout_ms: int
    user_agent: str
    sdk_version: str
    debug_tag: str | None = None
    log_pings: bool = False
