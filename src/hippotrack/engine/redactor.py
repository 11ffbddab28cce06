"""Field redactor - bounds a single field value."""

import json
from collections.abc import Mapping
from typing import Any

from hippotrack.types import ABSENT, FieldKind, is_absent

REDACTED = "[REDACTED]"

MEDIA_ID_FIELDS = ("file_id", "file_unique_id")


def truncate(text: str, max_length: int | None, marker: str = "") -> str:
    """Cut ``text`` to ``max_length`` characters, appending ``marker`` if cut.

    ``max_length=None`` disables truncation.
    """
    if max_length is None or len(text) <= max_length:
        return text
    return text[:max_length] + marker


def _media_id(value: Any, max_length: int | None, marker: str) -> Any:
    # Identifiers are scalars; anything nested is dropped
    if isinstance(value, (Mapping, list, tuple)):
        return None
    safe = redact(value, FieldKind.GENERIC, max_length, marker)
    return None if safe is ABSENT else safe


def media_ref(item: Any, max_length: int | None = None, marker: str = "") -> Any:
    """Identifier pair of a single media item, or ABSENT.

    Identifiers are bounded like any other string field.
    """
    if not isinstance(item, Mapping):
        return ABSENT
    return {name: _media_id(item.get(name), max_length, marker) for name in MEDIA_ID_FIELDS}


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def redact(
    value: Any,
    kind: FieldKind = FieldKind.GENERIC,
    max_length: int | None = None,
    marker: str = "",
) -> Any:
    """Return a bounded, safe representation of ``value``.

    Args:
        value: Raw field value
        kind: How the field is treated (media, sensitive, generic)
        max_length: Maximum string length, None for no bound
        marker: Appended to strings that were cut

    Returns:
        The safe value, or ABSENT when the field should be omitted
    """
    if is_absent(value):
        return ABSENT

    if kind is FieldKind.MEDIA:
        if isinstance(value, Mapping):
            return media_ref(value, max_length, marker)
        if isinstance(value, (list, tuple)):
            return [
                media_ref(item, max_length, marker)
                for item in value
                if isinstance(item, Mapping)
            ]
        return ABSENT

    if kind is FieldKind.SENSITIVE:
        return REDACTED

    # bool is an int subclass; both pass through
    if isinstance(value, (int, float)):
        return value

    if isinstance(value, str):
        return truncate(value, max_length, marker)

    return truncate(_compact(value), max_length, marker)
