"""Tests for structured logging with trace context."""

import json
import logging
import sys

from opentelemetry.sdk.trace import TracerProvider

from hippotrack.telemetry.logging import (
    StructuredLogFormatter,
    TrackLogger,
    get_logger,
    reset_loggers,
)


def make_record(msg: str = "Test message", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="hippotrack.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredLogFormatter:
    """Tests for StructuredLogFormatter."""

    def test_formats_as_json(self):
        data = json.loads(StructuredLogFormatter().format(make_record()))
        assert data["message"] == "Test message"
        assert data["level"] == "INFO"
        assert data["component"] == "hippotrack.test"
        assert "timestamp" in data

    def test_includes_extra_fields(self):
        record = make_record(event_type="text_message", size_bytes=42)
        data = json.loads(StructuredLogFormatter().format(record))
        assert data["event_type"] == "text_message"
        assert data["size_bytes"] == 42

    def test_reserved_attributes_not_duplicated(self):
        data = json.loads(StructuredLogFormatter().format(make_record()))
        assert "lineno" not in data
        assert "pathname" not in data

    def test_unserializable_extra_uses_str(self):
        data = json.loads(StructuredLogFormatter().format(make_record(thing=object())))
        assert data["thing"].startswith("<object object")

    def test_no_trace_context_without_span(self):
        data = json.loads(StructuredLogFormatter().format(make_record()))
        assert "trace_id" not in data

    def test_trace_context_inside_span(self):
        tracer = TracerProvider().get_tracer("test")
        with tracer.start_as_current_span("hippotrack.deliver") as span:
            data = json.loads(StructuredLogFormatter().format(make_record()))
            ctx = span.get_span_context()

        assert data["trace_id"] == format(ctx.trace_id, "032x")
        assert data["span_id"] == format(ctx.span_id, "016x")

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        data = json.loads(StructuredLogFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestTrackLogger:
    """Tests for TrackLogger."""

    def test_name_is_namespaced(self):
        assert TrackLogger("engine").name == "hippotrack.engine"

    def test_kwargs_become_record_fields(self, caplog):
        logger = TrackLogger("delivery")
        with caplog.at_level(logging.INFO, logger="hippotrack"):
            logger.info("Record delivered", event_type="photo_message", status_code=200)

        record = caplog.records[-1]
        assert record.getMessage() == "Record delivered"
        assert record.event_type == "photo_message"
        assert record.status_code == 200

    def test_levels(self, caplog):
        logger = TrackLogger("levels", level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger="hippotrack"):
            logger.debug("d")
            logger.warning("w")
            logger.error("e")

        assert [r.levelname for r in caplog.records[-3:]] == ["DEBUG", "WARNING", "ERROR"]

    def test_exception_records_traceback(self, caplog):
        logger = TrackLogger("errors")
        with caplog.at_level(logging.ERROR, logger="hippotrack"):
            try:
                raise RuntimeError("compose failed")
            except RuntimeError:
                logger.exception("Failed", event_type="unknown")

        record = caplog.records[-1]
        assert record.exc_info is not None
        assert record.event_type == "unknown"

    def test_single_handler_per_logger(self):
        TrackLogger("dup")
        TrackLogger("dup")
        assert len(logging.getLogger("hippotrack.dup").handlers) == 1


class TestGetLogger:
    """Tests for the logger cache."""

    def test_cached(self):
        assert get_logger("cache") is get_logger("cache")

    def test_reset(self):
        first = get_logger("cache")
        reset_loggers()
        assert get_logger("cache") is not first
