"""Send-once ping uploader."""

import asyncio
import json
import logging

from src.core.request_builder import build_request
from src.ports.http import OutboundRequest, TransportError, TransportPort
from src.ports.metrics import MetricsPort, UploadAttemptDto
from src.ports.settings import SettingsPort
from src.ports.upload import UploadOutcome

__all__ = ["PingUploader", "classify_status"]

logger = logging.getLogger(__name__)


def classify_status(status: int) -> UploadOutcome:
    """Map an HTTP status code to an upload outcome.

    Known client errors (404 unknown namespace, 405 wrong method, 411 missing
    content-length, 413 body too large, 414 path too long) will not go away
    on retry, so every 4xx is terminal.

    Args:
        status: HTTP status code returned by the server.

    Returns:
        DELIVERED for 2xx, REJECTED_BY_SERVER for 4xx, TRANSIENT_FAILURE otherwise.
    """
    if 200 <= status < 300:
        return UploadOutcome.DELIVERED
    if 400 <= status < 500:
        return UploadOutcome.REJECTED_BY_SERVER
    return UploadOutcome.TRANSIENT_FAILURE


class PingUploader:
    """Uploads a ping exactly once and reports what the caller should do next.

    The uploader never stores, queues or resends pings. Each call to upload()
    performs one round trip and resolves to one UploadOutcome; transport
    faults are reported as TRANSIENT_FAILURE instead of being raised.
    """

    def __init__(
        self,
        transport: TransportPort,
        *,
        metrics: MetricsPort | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the uploader.

        Args:
            transport: Transport used to send requests.
            metrics: Optional metrics collector to track attempts.
            log: Diagnostic log sink; defaults to this module's logger.
        """
        self.transport = transport
        self.metrics = metrics
        self.log = log or logger

    def log_ping(self, path: str, payload: bytes | str, settings: SettingsPort) -> None:
        """Pretty-print the ping to the debug log when ping logging is enabled.

        Args:
            path: URL path the ping is sent to.
            payload: Serialized ping.
            settings: Upload settings.
        """
        if not settings.log_pings or not self.log.isEnabledFor(logging.DEBUG):
            return
        try:
            indented = json.dumps(json.loads(payload), indent=2)
        except (ValueError, RecursionError) as e:
            # Deeply nested payloads exhaust the decoder's recursion limit
            self.log.debug(f"Exception parsing ping as JSON: {e}")
            return
        self.log.debug(f"Glean ping to URL: {path}\n{indented}")

    async def upload(
        self, path: str, payload: bytes | str, settings: SettingsPort
    ) -> UploadOutcome:
        """Upload one ping.

        Args:
            path: URL path appended to the server endpoint.
            payload: Serialized ping.
            settings: Upload settings.

        Returns:
            Classified outcome of the single attempt.
        """
        self.log_ping(path, payload, settings)

        request = build_request(path, payload, settings)

        loop = asyncio.get_running_loop()
        started = loop.time()
        status_code: int | None = None

        try:
            outcome, status_code = await self._perform_upload(request)
        except TransportError as e:
            self.log.warning(f"Transport error while uploading ping to {request.url}: {e}")
            outcome = UploadOutcome.TRANSIENT_FAILURE

        if self.metrics:
            self.metrics.update(
                UploadAttemptDto(
                    started_at_sec=started,
                    finished_at_sec=loop.time(),
                    outcome=outcome,
                    status_code=status_code,
                )
            )
            self.log.info(f"Upload metrics: {self.metrics}")

        return outcome

    async def _perform_upload(self, request: OutboundRequest) -> tuple[UploadOutcome, int]:
        """Send the request and classify the response.

        Args:
            request: Request to send.

        Returns:
            Outcome and the HTTP status it was derived from.

        Raises:
            TransportError: If the transport could not obtain a response.
        """
        self.log.debug(f"Submitting ping to: {request.url}")

        async with await self.transport.send(request) as response:
            status = response.status
            outcome = classify_status(status)

            if outcome is UploadOutcome.DELIVERED:
                # Only 200 is expected, but any 2xx counts as accepted.
                self.log.debug(f"Ping successfully sent ({status})")
            elif outcome is UploadOutcome.REJECTED_BY_SERVER:
                self.log.error(f"Server returned client error code {status} for {request.url}")
            else:
                self.log.warning(f"Server returned response code {status} for {request.url}")

        return outcome, status
