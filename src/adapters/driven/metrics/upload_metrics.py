"""In-memory sliding-window metrics for ping uploads."""

from __future__ import annotations

import statistics
from collections import deque
from dataclasses import dataclass

from src.ports.metrics import MetricsPort, UploadAttemptDto
from src.ports.upload import UploadOutcome

__all__ = ["Metrics"]


@dataclass(slots=True, frozen=True)
class _Sample:
    """Internal record for one upload attempt."""

    latency_ms: float
    outcome: UploadOutcome
    status_code: int


class Metrics(MetricsPort):
    """Fast, lock-free metrics for async context.

    Tracks:
    - Average latency (hand-off to transport until outcome).
    - Share of each outcome (delivered, rejected, transient).
    - Last status code (0 when the transport failed).
    - Total attempts seen.

    Not thread-safe; create one instance per event loop.
    """

    def __init__(self, *, window_size: int = 100) -> None:
        """Initialize metrics collector.

        Args:
            window_size: Number of recent attempts to keep for statistics.
        """
        self._window: deque[_Sample] = deque(maxlen=window_size)
        self._total_seen: int = 0

    def update(self, attempt: UploadAttemptDto) -> None:
        """Record a finished upload attempt.

        Args:
            attempt: Upload attempt with timing and outcome.
        """
        latency_ms = (attempt.finished_at_sec - attempt.started_at_sec) * 1_000.0
        self._window.append(
            _Sample(
                latency_ms=latency_ms,
                outcome=attempt.outcome,
                status_code=attempt.status_code or 0,
            )
        )
        self._total_seen += 1

    def share(self, outcome: UploadOutcome) -> float:
        """Return the percentage of windowed attempts with the given outcome."""
        if not self._window:
            return 0.0
        hits = sum(1 for s in self._window if s.outcome is outcome)
        return (hits / len(self._window)) * 100

    def __str__(self) -> str:
        """Return human-readable one-line summary for logging.

        Returns:
            Formatted metrics string.
        """
        if not self._window:
            return "Metrics: waiting for data …"

        n_window = len(self._window)
        avg_latency = statistics.fmean(s.latency_ms for s in self._window)
        last = self._window[-1]

        return (
            f"latency={avg_latency:5.1f} ms | "
            f"status={last.status_code:3d} | "
            f"delivered={self.share(UploadOutcome.DELIVERED):5.1f}% | "
            f"rejected={self.share(UploadOutcome.REJECTED_BY_SERVER):5.1f}% | "
            f"transient={self.share(UploadOutcome.TRANSIENT_FAILURE):5.1f}% | "
            f"win={n_window}/{self._window.maxlen} | "
            f"total={self._total_seen}"
        )
