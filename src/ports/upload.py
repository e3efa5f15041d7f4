"""Upload outcome definition."""

from enum import Enum

__all__ = ["UploadOutcome"]


class UploadOutcome(Enum):
    """Result of a single ping upload attempt.

    DELIVERED and REJECTED_BY_SERVER both tell the caller to drop the ping,
    the first because the server accepted it and the second because the
    request itself is malformed and resending it cannot help.
    TRANSIENT_FAILURE is the only outcome that asks for a later retry.
    """

    DELIVERED = "delivered"
    REJECTED_BY_SERVER = "rejected_by_server"
    TRANSIENT_FAILURE = "transient_failure"

    @property
    def should_retry(self) -> bool:
        """Whether the caller should keep the ping and try again later."""
        return self is UploadOutcome.TRANSIENT_FAILURE
