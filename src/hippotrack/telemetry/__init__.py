"""hippotrack telemetry - structured logging and metrics for the tracker itself."""

from .logging import StructuredLogFormatter, TrackLogger, get_logger, reset_loggers
from .metrics import METRIC_PREFIX, MetricLabels, TrackerMetrics

__all__ = [
    # Logging
    "TrackLogger",
    "StructuredLogFormatter",
    "get_logger",
    "reset_loggers",
    # Metrics
    "TrackerMetrics",
    "MetricLabels",
    "METRIC_PREFIX",
]
