"""hippotrack metrics - OpenTelemetry instruments.

Metrics:
- hippotrack_events_total: updates normalized, by event_type
- hippotrack_deliveries_total: delivery attempts, by status
- hippotrack_payload_size_bytes: serialized record size
- hippotrack_delivery_duration_seconds: collector round-trip time

Instruments come from the global meter provider unless a meter is passed
in, so they stay no-ops until the host process installs an SDK provider.
"""

from dataclasses import dataclass

from opentelemetry import metrics
from opentelemetry.metrics import Counter, Histogram

METRIC_PREFIX = "hippotrack"


@dataclass
class MetricLabels:
    """Standard metric attribute names."""

    EVENT_TYPE = "event_type"
    STATUS = "status"
    ERROR_CODE = "error_code"


class TrackerMetrics:
    """Counters and histograms for the tracker."""

    def __init__(self, meter: metrics.Meter | None = None):
        """Initialize metrics.

        Args:
            meter: OpenTelemetry Meter (defaults to the global "hippotrack" meter)
        """
        self._meter = meter or metrics.get_meter(METRIC_PREFIX)

        self.events_total: Counter = self._meter.create_counter(
            name=f"{METRIC_PREFIX}_events_total",
            description="Total number of updates normalized",
            unit="1",
        )
        self.deliveries_total: Counter = self._meter.create_counter(
            name=f"{METRIC_PREFIX}_deliveries_total",
            description="Total number of delivery attempts",
            unit="1",
        )
        self.payload_size: Histogram = self._meter.create_histogram(
            name=f"{METRIC_PREFIX}_payload_size_bytes",
            description="Size of serialized telemetry records",
            unit="By",
        )
        self.delivery_duration: Histogram = self._meter.create_histogram(
            name=f"{METRIC_PREFIX}_delivery_duration_seconds",
            description="Collector round-trip duration",
            unit="s",
        )

    def record_event(self, event_type: str) -> None:
        """Count a normalized update."""
        self.events_total.add(1, {MetricLabels.EVENT_TYPE: event_type})

    def record_delivery(
        self,
        status: str,
        duration_seconds: float,
        size_bytes: int | None = None,
        error_code: str | None = None,
    ) -> None:
        """Record the outcome of a delivery attempt.

        Args:
            status: DeliveryStatus value
            duration_seconds: Time spent on the attempt
            size_bytes: Serialized size, when serialization succeeded
            error_code: TrackError code on failure
        """
        attributes = {MetricLabels.STATUS: status}
        if error_code:
            attributes[MetricLabels.ERROR_CODE] = error_code
        self.deliveries_total.add(1, attributes)
        self.delivery_duration.record(duration_seconds, {MetricLabels.STATUS: status})
        if size_bytes is not None:
            self.payload_size.record(size_bytes)
