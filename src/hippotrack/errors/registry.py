"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, TrackError


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: TrackError | None = None,
    ) -> TrackError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional cause error

        Returns:
            TrackError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        detail = context.get("detail") or self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        if message is None:
            message = f"Error {code}"

        return TrackError(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            retryable=template.default_retryable,
            event_type=context.get("event_type"),
            cause=cause,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except KeyError:
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # CONFIG Errors
        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIG,
            message_template="Invalid tracker configuration",
            suggestion_template="Check the tracker options and environment variables",
        )

        # SANITIZATION Errors
        self._templates["SANITIZE_FAILED"] = ErrorTemplate(
            code="SANITIZE_FAILED",
            category=ErrorCategory.SANITIZATION,
            message_template="Failed to sanitize update snapshot",
            detail_template="The update had an unexpected shape: {error_type}",
            suggestion_template="The raw_update field is omitted for this event",
        )

        self._templates["SANITIZE_DEPTH_EXCEEDED"] = ErrorTemplate(
            code="SANITIZE_DEPTH_EXCEEDED",
            category=ErrorCategory.SANITIZATION,
            message_template="Update nesting exceeds {max_depth} levels",
            detail_template="Cyclic or pathologically deep structures are not supported",
            suggestion_template="Raise max_depth if the update is legitimately deep",
        )

        # SERIALIZATION Errors
        self._templates["SERIALIZE_FAILED"] = ErrorTemplate(
            code="SERIALIZE_FAILED",
            category=ErrorCategory.SERIALIZATION,
            message_template="Failed to encode telemetry record",
            detail_template="{error_type} while encoding record as JSON",
        )

        # DELIVERY Errors
        self._templates["DELIVERY_TIMEOUT"] = ErrorTemplate(
            code="DELIVERY_TIMEOUT",
            category=ErrorCategory.DELIVERY,
            message_template="Delivery timed out after {timeout_ms}ms",
            detail_template="The collector did not answer within the configured timeout",
            suggestion_template="Increase timeout_ms or check the collector endpoint",
            default_retryable=True,
        )

        self._templates["DELIVERY_HTTP_STATUS"] = ErrorTemplate(
            code="DELIVERY_HTTP_STATUS",
            category=ErrorCategory.DELIVERY,
            message_template="Collector answered with HTTP {status_code}",
            suggestion_template="Check the endpoint URL and bearer token",
        )

        self._templates["DELIVERY_FAILED"] = ErrorTemplate(
            code="DELIVERY_FAILED",
            category=ErrorCategory.DELIVERY,
            message_template="Failed to deliver telemetry record",
            detail_template="{error_type} while contacting the collector",
            default_retryable=True,
        )

        # SYSTEM Errors
        self._templates["INTERNAL_ERROR"] = ErrorTemplate(
            code="INTERNAL_ERROR",
            category=ErrorCategory.SYSTEM,
            message_template="Internal error",
            detail_template="{error_type}",
        )
