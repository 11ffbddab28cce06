"""Tests for tracker metrics instruments."""

import pytest
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from hippotrack.telemetry.metrics import METRIC_PREFIX, MetricLabels, TrackerMetrics


@pytest.fixture
def reader() -> InMemoryMetricReader:
    return InMemoryMetricReader()


@pytest.fixture
def metrics(reader: InMemoryMetricReader) -> TrackerMetrics:
    provider = MeterProvider(metric_readers=[reader])
    return TrackerMetrics(meter=provider.get_meter("test"))


def collect(reader: InMemoryMetricReader) -> dict[str, list]:
    """Map metric name to its data points."""
    points: dict[str, list] = {}
    data = reader.get_metrics_data()
    for resource_metrics in data.resource_metrics:
        for scope_metrics in resource_metrics.scope_metrics:
            for metric in scope_metrics.metrics:
                points[metric.name] = list(metric.data.data_points)
    return points


class TestTrackerMetrics:
    """Tests for TrackerMetrics."""

    def test_instrument_names(self, metrics: TrackerMetrics, reader: InMemoryMetricReader):
        metrics.record_event("text_message")
        metrics.record_delivery("sent", 0.01, 120)

        names = set(collect(reader))
        assert names == {
            f"{METRIC_PREFIX}_events_total",
            f"{METRIC_PREFIX}_deliveries_total",
            f"{METRIC_PREFIX}_payload_size_bytes",
            f"{METRIC_PREFIX}_delivery_duration_seconds",
        }

    def test_events_by_type(self, metrics: TrackerMetrics, reader: InMemoryMetricReader):
        metrics.record_event("text_message")
        metrics.record_event("text_message")
        metrics.record_event("callback_query")

        points = collect(reader)[f"{METRIC_PREFIX}_events_total"]
        by_type = {p.attributes[MetricLabels.EVENT_TYPE]: p.value for p in points}
        assert by_type == {"text_message": 2, "callback_query": 1}

    def test_failed_delivery_has_error_code(
        self, metrics: TrackerMetrics, reader: InMemoryMetricReader
    ):
        metrics.record_delivery("timeout", 3.0, 80, error_code="DELIVERY_TIMEOUT")

        point = collect(reader)[f"{METRIC_PREFIX}_deliveries_total"][0]
        assert point.attributes[MetricLabels.STATUS] == "timeout"
        assert point.attributes[MetricLabels.ERROR_CODE] == "DELIVERY_TIMEOUT"

    def test_size_skipped_without_body(
        self, metrics: TrackerMetrics, reader: InMemoryMetricReader
    ):
        metrics.record_delivery("serialize_failed", 0.0, None, error_code="SERIALIZE_FAILED")

        assert f"{METRIC_PREFIX}_payload_size_bytes" not in collect(reader)

    def test_global_meter_is_noop_safe(self):
        metrics = TrackerMetrics()
        metrics.record_event("unknown")
        metrics.record_delivery("sent", 0.1, 10)
