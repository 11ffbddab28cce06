"""Explicit absence marker shared by the redactor, sanitizer and pruner."""

from typing import Any, Final


class _Absent:
    """Singleton meaning "no value, omit this field"."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()


def is_absent(value: Any) -> bool:
    """True for ``None`` and ``ABSENT``."""
    return value is None or value is ABSENT
