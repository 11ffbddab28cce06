"""Delivery adapter - POSTs telemetry records to the collector.

One attempt per record, bounded by ``timeout_ms``. Timeouts, transport
errors, non-2xx answers and unencodable records are logged and returned as
a DeliveryResult; nothing is retried or queued.
"""

import asyncio
import json
import time
from types import TracebackType
from typing import Any

import httpx
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from hippotrack.errors import ErrorFactory, TrackError, get_error_factory
from hippotrack.telemetry.logging import TrackLogger, get_logger
from hippotrack.telemetry.metrics import TrackerMetrics
from hippotrack.types import DeliveryStatus

from .types import DeliveryResult

DEFAULT_TIMEOUT_MS = 3000

tracer = trace.get_tracer(__name__)


class DeliveryAdapter:
    """Async HTTP client for the telemetry collector."""

    def __init__(
        self,
        endpoint: str,
        token: str,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        log: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
        metrics: TrackerMetrics | None = None,
        logger: TrackLogger | None = None,
        error_factory: ErrorFactory | None = None,
    ) -> None:
        """Initialize adapter.

        Args:
            endpoint: Collector URL
            token: Bearer token sent in the Authorization header
            timeout_ms: Upper bound for one attempt
            log: Log every outgoing record and its serialized size
            transport: Optional httpx transport (used when no client is given)
            client: Optional shared client; not closed by this adapter
            metrics: Metrics instruments
            logger: Structured logger
            error_factory: Maps exceptions to TrackErrors
        """
        self._endpoint = endpoint
        self._token = token
        self._timeout_ms = timeout_ms
        self._log = log
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_ms / 1000),
            transport=transport,
        )
        self._metrics = metrics or TrackerMetrics()
        self._logger = logger or get_logger("delivery")
        self._errors = error_factory or get_error_factory()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._token}",
        }

    async def deliver(self, record: dict[str, Any], event_type: str | None = None) -> DeliveryResult:
        """Serialize and send one record.

        Args:
            record: Pruned telemetry record
            event_type: Event type, for logs and errors

        Returns:
            DeliveryResult describing the attempt
        """
        started = time.monotonic()

        try:
            body = json.dumps(record, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError, RecursionError) as e:
            error = self._errors.from_exception(e, event_type=event_type)
            return self._failed(DeliveryStatus.SERIALIZE_FAILED, error, started)

        size_bytes = len(body)
        if self._log:
            self._logger.info(
                "Sending telemetry record",
                payload=record,
                size_bytes=size_bytes,
                event_type=event_type,
            )

        with tracer.start_as_current_span("hippotrack.deliver") as span:
            span.set_attribute("hippotrack.event_type", event_type or "")
            span.set_attribute("hippotrack.size_bytes", size_bytes)
            try:
                response = await asyncio.wait_for(
                    self._client.post(self._endpoint, content=body, headers=self._headers()),
                    timeout=self._timeout_ms / 1000,
                )
                response.raise_for_status()
            except (httpx.HTTPError, TimeoutError) as e:
                error = self._errors.from_exception(
                    e, event_type=event_type, timeout_ms=self._timeout_ms
                )
                return self._send_failed(span, e, error, started, size_bytes)
            except Exception as e:
                # Failures raised below httpx (bad port, TLS setup) are delivery failures too
                error = self._errors.create(
                    "DELIVERY_FAILED",
                    error_type=type(e).__name__,
                    detail=str(e) or None,
                    event_type=event_type,
                )
                return self._send_failed(span, e, error, started, size_bytes)

            span.set_status(Status(StatusCode.OK))

        duration = time.monotonic() - started
        self._metrics.record_delivery(DeliveryStatus.SENT.value, duration, size_bytes)
        self._logger.debug(
            "Telemetry record delivered",
            event_type=event_type,
            status_code=response.status_code,
            size_bytes=size_bytes,
        )
        return DeliveryResult(
            status=DeliveryStatus.SENT,
            status_code=response.status_code,
            size_bytes=size_bytes,
            duration_ms=int(duration * 1000),
        )

    def _send_failed(
        self,
        span: trace.Span,
        exc: Exception,
        error: TrackError,
        started: float,
        size_bytes: int,
    ) -> DeliveryResult:
        span.set_status(Status(StatusCode.ERROR, error.message))
        status = (
            DeliveryStatus.TIMEOUT if error.code == "DELIVERY_TIMEOUT" else DeliveryStatus.FAILED
        )
        status_code = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
        return self._failed(status, error, started, size_bytes, status_code)

    def _failed(
        self,
        status: DeliveryStatus,
        error: TrackError,
        started: float,
        size_bytes: int | None = None,
        status_code: int | None = None,
    ) -> DeliveryResult:
        duration = time.monotonic() - started
        self._metrics.record_delivery(status.value, duration, size_bytes, error.code)
        self._logger.error(
            "Failed to send event",
            error_code=error.code,
            error_message=error.message,
            error_detail=error.detail,
            event_type=error.event_type,
        )
        return DeliveryResult(
            status=status,
            status_code=status_code,
            size_bytes=size_bytes,
            duration_ms=int(duration * 1000),
            error=error,
        )

    async def aclose(self) -> None:
        """Close the underlying client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "DeliveryAdapter":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
