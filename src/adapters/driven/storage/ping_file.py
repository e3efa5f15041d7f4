"""Reader for pings stored on disk by the ping store."""

from dataclasses import dataclass
from pathlib import Path

__all__ = ["StoredPing", "read_ping_file"]


@dataclass(slots=True, frozen=True)
class StoredPing:
    """A ping as persisted by the ping store.

    Attributes:
        url_path: Path to submit the ping to, e.g. "/submit/app/metrics/1/<doc id>".
        body: Serialized JSON payload.
    """

    url_path: str
    body: str


def read_ping_file(file_path: str | Path) -> StoredPing:
    """Read a stored ping: first line is the URL path, the rest is the body.

    Args:
        file_path: Location of the ping file.

    Returns:
        Parsed stored ping.

    Raises:
        ValueError: If the file is missing, empty, or has no valid URL path.
    """
    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ValueError(f"Ping file not found: {file_path}") from e

    url_path, _, body = content.partition("\n")
    url_path = url_path.strip()

    if not url_path:
        raise ValueError(f"Ping file is empty: {file_path}")
    if not url_path.startswith("/"):
        raise ValueError(f"Ping file does not start with a URL path: {file_path}")

    return StoredPing(url_path=url_path, body=body)
