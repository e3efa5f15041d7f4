"""Configuration loading from environment variables."""

import logging
import os
import re

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

from src.ports.settings import SettingsPort
from src.version import __version__

__all__ = [
    "DEFAULT_DEBUGVIEW_ENDPOINT",
    "DEFAULT_TELEMETRY_ENDPOINT",
    "Settings",
    "load_settings",
]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)

DEFAULT_TELEMETRY_ENDPOINT = "https://incoming.telemetry.mozilla.org"
DEFAULT_DEBUGVIEW_ENDPOINT = "https://stage.ingestion.nonprod.dataops.mozgcp.net"
DEFAULT_CONNECT_TIMEOUT_MS = 10_000
DEFAULT_READ_TIMEOUT_MS = 30_000
DEFAULT_USER_AGENT = f"Glean/{__version__} (Python)"

DEBUG_TAG_PATTERN = re.compile(r"^[a-zA-Z0-9-]{1,20}$")


def _validate_endpoint(v: str, name: str) -> str:
    """Check that v is an http(s) URL and drop any trailing slash.

    Raises:
        ValueError: If URL is invalid or not http(s).
    """
    try:
        url = _http_url_adapter.validate_python(v)
        if url.scheme not in ("http", "https"):
            raise ValueError("Only http:// and https:// endpoints allowed")
    except Exception as e:
        raise ValueError(f"Invalid {name}: {e}") from e
    return v.rstrip("/")


class Settings(BaseModel):
    """Runtime configuration for ping uploads.

    Attributes:
        server_endpoint: Ingestion server base URL.
        debug_view_endpoint: Base URL that receives tagged pings.
        connect_timeout_ms: Connection timeout in milliseconds (must be positive).
        read_timeout_ms: Read timeout in milliseconds (must be positive).
        user_agent: User-Agent header value.
        sdk_version: X-Client-Version header value.
        debug_tag: Optional debug view tag.
        log_pings: Pretty-print pings to the debug log before sending.
    """

    server_endpoint: str = Field(
        default=DEFAULT_TELEMETRY_ENDPOINT, description="Ingestion server base URL."
    )
    debug_view_endpoint: str = Field(
        default=DEFAULT_DEBUGVIEW_ENDPOINT,
        description="Base URL used instead of server_endpoint when a debug tag is set.",
    )
    connect_timeout_ms: int = Field(default=DEFAULT_CONNECT_TIMEOUT_MS, gt=0)
    read_timeout_ms: int = Field(default=DEFAULT_READ_TIMEOUT_MS, gt=0)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    sdk_version: str = Field(default=__version__)
    debug_tag: str | None = Field(
        default=None,
        description=(
            "Optional tag for the debug view. "
            "If set, pings are sent to the debug view endpoint with an X-Debug-ID header."
        ),
    )
    log_pings: bool = Field(default=False)

    @field_validator("server_endpoint")
    @classmethod
    def validate_server_endpoint(cls, v: str) -> str:
        """Validate that the server endpoint is a valid HTTP(S) URL.

        Args:
            v: Endpoint URL to validate.

        Returns:
            The URL without trailing slash.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        return _validate_endpoint(v, "server endpoint")

    @field_validator("debug_view_endpoint")
    @classmethod
    def validate_debug_view_endpoint(cls, v: str) -> str:
        """Validate that the debug view endpoint is a valid HTTP(S) URL.

        Args:
            v: Endpoint URL to validate.

        Returns:
            The URL without trailing slash.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        return _validate_endpoint(v, "debug view endpoint")

    @field_validator("debug_tag")
    @classmethod
    def validate_debug_tag(cls, v: str | None) -> str | None:
        """Validate the debug tag (if provided).

        Empty strings count as no tag.

        Raises:
            ValueError: If the tag is not 1-20 alphanumeric or dash characters.
        """
        if not v:
            return None
        if not DEBUG_TAG_PATTERN.match(v):
            raise ValueError(
                f"Invalid debug tag {v!r}: expected 1-20 characters from [a-zA-Z0-9-]"
            )
        return v

    def to_port(self) -> SettingsPort:
        """Freeze these settings into the port consumed by the core."""
        return SettingsPort(
            server_endpoint=self.server_endpoint,
            debug_view_endpoint=self.debug_view_endpoint,
            connect_timeout_ms=self.connect_timeout_ms,
            read_timeout_ms=self.read_timeout_ms,
            user_agent=self.user_agent,
            sdk_version=self.sdk_version,
            debug_tag=self.debug_tag,
            log_pings=self.log_pings,
        )


def _timeout_from_env(name: str, default: int) -> int:
    """Read a positive millisecond timeout from the environment.

    Raises:
        RuntimeError: If the variable is set but not a positive integer.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
        if value <= 0:
            raise ValueError("Must be positive")
    except ValueError as e:
        raise RuntimeError(f"{name} must be a positive integer (got: {raw})") from e
    return value


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    All variables are optional:
    - GLEAN_SERVER_ENDPOINT: Ingestion server base URL.
    - GLEAN_DEBUGVIEW_ENDPOINT: Base URL for tagged pings.
    - GLEAN_CONNECT_TIMEOUT_MS / GLEAN_READ_TIMEOUT_MS: Positive integers.
    - GLEAN_USER_AGENT: User-Agent header value.
    - GLEAN_DEBUG_TAG: Debug view tag.
    - GLEAN_LOG_PINGS: Truthy string ("1", "true", "yes", "on") to log pings.

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If a timeout is not a positive integer.
        ValueError: If configuration is invalid.
    """
    settings = Settings(
        server_endpoint=os.getenv("GLEAN_SERVER_ENDPOINT", DEFAULT_TELEMETRY_ENDPOINT),
        debug_view_endpoint=os.getenv("GLEAN_DEBUGVIEW_ENDPOINT", DEFAULT_DEBUGVIEW_ENDPOINT),
        connect_timeout_ms=_timeout_from_env(
            "GLEAN_CONNECT_TIMEOUT_MS", DEFAULT_CONNECT_TIMEOUT_MS
        ),
        read_timeout_ms=_timeout_from_env("GLEAN_READ_TIMEOUT_MS", DEFAULT_READ_TIMEOUT_MS),
        user_agent=os.getenv("GLEAN_USER_AGENT", DEFAULT_USER_AGENT),
        debug_tag=os.getenv("GLEAN_DEBUG_TAG"),
        log_pings=os.getenv("GLEAN_LOG_PINGS", "false").strip().lower()
        in ("1", "true", "yes", "on"),
    )

    logger.info(
        f"Uploader configured: endpoint={settings.server_endpoint}, "
        f"debug_tag={settings.debug_tag or '<none>'}, "
        f"timeouts={settings.connect_timeout_ms}/{settings.read_timeout_ms} ms, "
        f"log_pings={settings.log_pings}"
    )

    return settings
