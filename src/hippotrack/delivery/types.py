"""Delivery result type."""

from dataclasses import dataclass

from hippotrack.errors import TrackError
from hippotrack.types import DeliveryStatus


@dataclass
class DeliveryResult:
    """Outcome of one delivery attempt. Failures are reported, never raised."""

    status: DeliveryStatus
    status_code: int | None = None
    size_bytes: int | None = None
    duration_ms: int = 0
    error: TrackError | None = None

    @property
    def ok(self) -> bool:
        return self.status is DeliveryStatus.SENT
