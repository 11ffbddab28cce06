"""Recursive sanitizer for raw update snapshots."""

from collections.abc import Callable, Mapping
from typing import Any

from hippotrack.config.models import Policy
from hippotrack.errors import create_error
from hippotrack.types import ABSENT, FieldKind

from .redactor import redact

FieldClassifier = Callable[[str], FieldKind]


def policy_field_classifier(policy: Policy) -> FieldClassifier:
    """Classify field names using the policy's media and sensitive sets."""
    media = policy.media_fields
    sensitive = policy.sensitive_fields

    def classify_field(name: str) -> FieldKind:
        if name in media:
            return FieldKind.MEDIA
        if name in sensitive:
            return FieldKind.SENSITIVE
        return FieldKind.GENERIC

    return classify_field


class Sanitizer:
    """Walks an update, bounding every leaf and stripping media payloads.

    The traversal only knows about field kinds; which names are media or
    sensitive comes from ``classify_field``.
    """

    def __init__(self, policy: Policy, classify_field: FieldClassifier | None = None) -> None:
        """Initialize sanitizer.

        Args:
            policy: Engine policy (length bound, depth limit, marker)
            classify_field: Field-name classifier (defaults to the policy sets)
        """
        self._policy = policy
        self._classify_field = classify_field or policy_field_classifier(policy)

    def sanitize(self, node: Any, truncate: bool = True) -> Any:
        """Return a sanitized copy of ``node``.

        Args:
            node: Raw update or any nested part of it
            truncate: Bound strings to ``policy.max_text_length``

        Returns:
            Tree with the same shape; media fields reduced to identifier
            pairs, sensitive fields replaced, leaves bounded

        Raises:
            TrackError: SANITIZE_DEPTH_EXCEEDED past ``policy.max_depth``
        """
        max_length = self._policy.max_text_length if truncate else None
        return self._visit(node, max_length, 0)

    def _visit(self, node: Any, max_length: int | None, depth: int) -> Any:
        if depth > self._policy.max_depth:
            raise create_error("SANITIZE_DEPTH_EXCEEDED", max_depth=self._policy.max_depth)

        if isinstance(node, Mapping):
            result: dict[str, Any] = {}
            for key, value in node.items():
                kind = self._classify_field(str(key))
                if kind is FieldKind.GENERIC:
                    result[key] = self._visit(value, max_length, depth + 1)
                else:
                    result[key] = self._leaf(value, kind, max_length)
            return result

        if isinstance(node, (list, tuple)):
            return [self._visit(item, max_length, depth + 1) for item in node]

        return self._leaf(node, FieldKind.GENERIC, max_length)

    def _leaf(self, value: Any, kind: FieldKind, max_length: int | None) -> Any:
        safe = redact(value, kind, max_length, self._policy.truncation_marker)
        return None if safe is ABSENT else safe
