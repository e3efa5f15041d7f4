"""Console logging setup for the uploader."""

import logging

__all__ = ["APP_LOGGER", "configure_logs", "enable_ping_logging"]

APP_LOGGER = "src"


def configure_logs() -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level.
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (src) at INFO level; see enable_ping_logging().
    - Structured format with timestamp, level, module, and line number.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
    date_format = "%d/%m/%y %H:%M:%S"

    formatter = logging.Formatter(log_format, date_format)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)

    # Suppress verbose framework loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(logging.INFO)


def enable_ping_logging() -> None:
    """Lower application loggers to DEBUG.

    Ping dumps, destination URLs and success notices are all logged at DEBUG,
    so they only reach the console once this has been called.
    """
    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG)
