"""Metrics port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from src.ports.upload import UploadOutcome

__all__ = ["UploadAttemptDto", "MetricsPort"]


@dataclass(slots=True, frozen=True)
class UploadAttemptDto:
    """Immutable snapshot of a single upload attempt.

    Attributes:
        started_at_sec: Monotonic time when the request was handed to the transport.
        finished_at_sec: Monotonic time when the outcome was known.
        outcome: Classified result of the attempt.
        status_code: HTTP status code when a response arrived; None otherwise.
    """

    started_at_sec: float
    finished_at_sec: float
    outcome: UploadOutcome
    status_code: int | None = None


class MetricsPort(Protocol):
    """Interface for recording upload attempt metrics.

    Implementations must be async-safe and non-blocking.
    Core calls update() after each attempt; presentation layers call
    __str__() to render summaries.
    """

    def update(self, attempt: UploadAttemptDto, /) -> None:
        """Record a finished upload attempt.

        Args:
            attempt: The attempt to record.
        """
        ...

    def __str__(self) -> str:
        """Return concise textual summary for humans.

        Returns:
            Formatted metrics string.
        """
        ...
