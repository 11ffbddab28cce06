"""Error factory for creating TrackErrors from any exception type."""

from typing import Any

from .errors import TrackError
from .matchers import ErrorMatcherChain
from .registry import ErrorRegistry


class ErrorFactory:
    """Creates TrackErrors from any exception type."""

    def __init__(
        self,
        registry: ErrorRegistry | None = None,
        matcher_chain: ErrorMatcherChain | None = None,
    ):
        """Initialize error factory.

        Args:
            registry: Error registry (defaults to new ErrorRegistry())
            matcher_chain: Matcher chain (defaults to new ErrorMatcherChain())
        """
        self.registry = registry or ErrorRegistry()
        self.matcher_chain = matcher_chain or ErrorMatcherChain()

    def from_exception(
        self,
        error: Exception,
        event_type: str | None = None,
        **context: Any,
    ) -> TrackError:
        """Convert any exception to TrackError.

        Args:
            error: Exception to convert
            event_type: Optional event type of the update being tracked
            **context: Extra template variables (e.g. timeout_ms)

        Returns:
            TrackError instance
        """
        if isinstance(error, TrackError):
            return error.with_context(event_type=event_type)

        match_result = self.matcher_chain.match(error)

        merged = {**match_result.context, **context}
        if event_type:
            merged["event_type"] = event_type

        track_error = self.registry.create(code=match_result.code, context=merged)

        if match_result.retryable is not None:
            track_error.retryable = match_result.retryable

        return track_error

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> TrackError:
        """Create TrackError directly from code.

        Args:
            code: Error code
            context: Context variables for template interpolation
            **kwargs: Additional context variables

        Returns:
            TrackError instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        return self.registry.create(code=code, context=merged_context)


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton."""
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> TrackError:
    """Convenience function to create error.

    Args:
        code: Error code
        **context: Context variables for template interpolation

    Returns:
        TrackError instance
    """
    return get_error_factory().create(code, context)
