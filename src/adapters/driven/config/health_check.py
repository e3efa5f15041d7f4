"""Preflight check: can the stored ping be uploaded with this configuration?"""

import logging
import os

from src.adapters.driven.config.settings import Settings, load_settings
from src.adapters.driven.logging.logging_config import configure_logs
from src.adapters.driven.storage.ping_file import StoredPing, read_ping_file

__all__ = ["check_ping_file", "main"]

logger = logging.getLogger(__name__)


def check_ping_file(settings: Settings, file_path: str) -> StoredPing:
    """Read the stored ping and log where it would be submitted.

    Args:
        settings: Validated uploader settings.
        file_path: Location of the stored ping.

    Returns:
        The stored ping.

    Raises:
        ValueError: If the ping file is missing or malformed.
    """
    ping = read_ping_file(file_path)
    endpoint = settings.debug_view_endpoint if settings.debug_tag else settings.server_endpoint
    logger.info(f"Ping {file_path} would be submitted to {endpoint}{ping.url_path}")
    return ping


def main() -> int:
    """Validate configuration and, when PING_FILE_PATH is set, the stored ping.

    Nothing is sent over the network.

    Returns:
        0 if the upload could be attempted, 1 otherwise.
    """
    configure_logs()

    try:
        settings = load_settings()
        file_path = os.getenv("PING_FILE_PATH")
        if file_path:
            check_ping_file(settings, file_path)
        else:
            logger.info("PING_FILE_PATH not set, only configuration was checked")
    except (RuntimeError, ValueError) as exc:
        logger.error(f"Uploader preflight FAILED: {exc}")
        return 1

    logger.info("Uploader preflight OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
