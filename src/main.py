"""Application entrypoint: upload one stored ping."""

import asyncio
import logging
import os

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.http.client import HttpClient
from src.adapters.driven.logging.logging_config import configure_logs, enable_ping_logging
from src.adapters.driven.storage.ping_file import read_ping_file
from src.core.uploader import PingUploader
from src.ports.upload import UploadOutcome

__all__ = ["main", "EXIT_CODES"]

logger = logging.getLogger(__name__)

EX_TEMPFAIL = 75

EXIT_CODES = {
    UploadOutcome.DELIVERED: 0,
    UploadOutcome.REJECTED_BY_SERVER: 1,
    UploadOutcome.TRANSIENT_FAILURE: EX_TEMPFAIL,
}


async def main() -> int:
    """Upload the ping stored at PING_FILE_PATH once.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Read the stored ping.
    4. Upload it with the aiohttp transport.

    The ping file is never modified; the ping store decides what to do
    with it based on the exit code.

    Returns:
        0 if delivered, 1 if rejected or misconfigured, 75 if a retry may succeed.
    """
    configure_logs()
    logger.info("Starting ping upload...")

    try:
        settings = load_settings()
        ping = read_ping_file(os.environ["PING_FILE_PATH"])
    except KeyError as exc:
        logger.error(f"Missing required environment variable: {exc.args[0]}")
        return 1
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check GLEAN_SERVER_ENDPOINT, GLEAN_DEBUGVIEW_ENDPOINT, "
            "GLEAN_*_TIMEOUT_MS, GLEAN_DEBUG_TAG and PING_FILE_PATH.",
            exc,
        )
        return 1

    if settings.log_pings:
        enable_ping_logging()

    async with HttpClient() as http:
        uploader = PingUploader(http)
        outcome = await uploader.upload(ping.url_path, ping.body, settings.to_port())

    logger.info(f"Ping upload finished: {outcome.value}")
    return EXIT_CODES[outcome]


if __name__ == "__main__":
    try:
        raise SystemExit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C).")
        raise SystemExit(EX_TEMPFAIL)
