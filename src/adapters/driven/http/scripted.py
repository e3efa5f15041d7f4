"""Deterministic transport that replays scripted responses and faults."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from types import TracebackType

from src.ports.http import OutboundRequest, TransportError

__all__ = ["ScriptedResponse", "ScriptedTransport"]


class ScriptedResponse:
    """Response handle carrying a fixed status and recording its release."""

    def __init__(self, status: int) -> None:
        self.status = status
        self.released = False

    async def __aenter__(self) -> ScriptedResponse:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.released = True


class ScriptedTransport:
    """Transport double for tests and offline runs.

    Each send() consumes the next scripted step: an int becomes a response
    with that status, an exception instance is raised. Every request sent
    and every response handed out is recorded.

    Example:
        transport = ScriptedTransport([500, TransportError("refused"), 200])
    """

    def __init__(self, script: Iterable[int | BaseException]) -> None:
        """Initialize with the steps to replay.

        Args:
            script: Status codes and exceptions, consumed in order.
        """
        self._script: deque[int | BaseException] = deque(script)
        self.requests: list[OutboundRequest] = []
        self.responses: list[ScriptedResponse] = []

    async def send(self, request: OutboundRequest) -> ScriptedResponse:
        """Record the request and replay the next step.

        Raises:
            TransportError: If the script is exhausted or scripts a fault.
        """
        self.requests.append(request)
        if not self._script:
            raise TransportError("Scripted transport exhausted")

        step = self._script.popleft()
        if isinstance(step, BaseException):
            raise step

        response = ScriptedResponse(step)
        self.responses.append(response)
        return response
