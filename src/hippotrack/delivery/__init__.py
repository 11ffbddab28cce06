"""hippotrack delivery - ships telemetry records to the collector."""

from .client import DEFAULT_TIMEOUT_MS, DeliveryAdapter
from .types import DeliveryResult

__all__ = [
    "DeliveryAdapter",
    "DeliveryResult",
    "DEFAULT_TIMEOUT_MS",
]
