"""Error matchers for converting exceptions to TrackErrors."""

import asyncio
from typing import Any

import httpx

from .errors import ErrorMatcher, MatchResult


class TimeoutErrorMatcher(ErrorMatcher):
    """Matches transport and asyncio timeouts."""

    def matches(self, error: Exception) -> bool:
        """Check if error is a timeout error."""
        return isinstance(error, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError))

    def extract(self, error: Exception) -> MatchResult:
        """Extract timeout error info."""
        return MatchResult(
            code="DELIVERY_TIMEOUT",
            context={"timeout_ms": "unknown", "error_type": type(error).__name__},
        )


class HTTPStatusErrorMatcher(ErrorMatcher):
    """Matches non-2xx collector responses."""

    def matches(self, error: Exception) -> bool:
        """Check if error carries an HTTP status."""
        return isinstance(error, httpx.HTTPStatusError)

    def extract(self, error: Exception) -> MatchResult:
        """Extract status code."""
        assert isinstance(error, httpx.HTTPStatusError)
        status_code = error.response.status_code
        return MatchResult(
            code="DELIVERY_HTTP_STATUS",
            context={"status_code": status_code, "error_type": type(error).__name__},
            retryable=status_code >= 500,
        )


class TransportErrorMatcher(ErrorMatcher):
    """Matches any other httpx failure (connect, protocol, ...)."""

    def matches(self, error: Exception) -> bool:
        """Check if error is an httpx error."""
        return isinstance(error, httpx.HTTPError)

    def extract(self, error: Exception) -> MatchResult:
        """Extract transport error info."""
        return MatchResult(
            code="DELIVERY_FAILED",
            context={"error_type": type(error).__name__, "detail": str(error) or None},
        )


class SerializationErrorMatcher(ErrorMatcher):
    """Matches JSON encoding failures."""

    def matches(self, error: Exception) -> bool:
        """Check if error came from json.dumps."""
        return isinstance(error, (TypeError, ValueError, RecursionError))

    def extract(self, error: Exception) -> MatchResult:
        """Extract serialization error info."""
        return MatchResult(
            code="SERIALIZE_FAILED",
            context={"error_type": type(error).__name__, "detail": str(error)},
        )


class GenericErrorMatcher(ErrorMatcher):
    """Fallback matcher for any exception."""

    def matches(self, error: Exception) -> bool:
        """Always matches."""
        return True

    def extract(self, error: Exception) -> MatchResult:
        """Extract generic error info."""
        context: dict[str, Any] = {
            "detail": str(error),
            "error_type": type(error).__name__,
        }
        return MatchResult(code="INTERNAL_ERROR", context=context)


class ErrorMatcherChain:
    """Ordered chain of matchers. First match wins."""

    def __init__(self) -> None:
        """Initialize matcher chain with built-in matchers."""
        self.matchers: list[ErrorMatcher] = []
        self._load_builtin_matchers()

    def match(self, error: Exception) -> MatchResult:
        """Find first matching matcher and extract result.

        Args:
            error: Exception to match

        Returns:
            MatchResult from first matching matcher
        """
        for matcher in self.matchers:
            if matcher.matches(error):
                return matcher.extract(error)

        # Should never reach here due to GenericErrorMatcher
        return MatchResult(code="INTERNAL_ERROR", context={"detail": str(error)})

    def _load_builtin_matchers(self) -> None:
        """Load built-in matchers in priority order."""
        # Order matters - httpx.TimeoutException is also an httpx.HTTPError
        self.matchers = [
            TimeoutErrorMatcher(),
            HTTPStatusErrorMatcher(),
            TransportErrorMatcher(),
            SerializationErrorMatcher(),
            GenericErrorMatcher(),  # Fallback - must be last
        ]
