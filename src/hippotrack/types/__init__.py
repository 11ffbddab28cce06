"""Shared types for hippotrack.

Import from here rather than submodules:
    from hippotrack.types import EventCategory, ABSENT
"""

from .enums import (
    FINANCIAL_CATEGORIES,
    DeliveryStatus,
    EventCategory,
    FieldKind,
    Taxonomy,
)
from .validation import ValidationIssue, ValidationResult
from .values import ABSENT, is_absent

__all__ = [
    # Enums
    "EventCategory",
    "FINANCIAL_CATEGORIES",
    "Taxonomy",
    "FieldKind",
    "DeliveryStatus",
    # Absence
    "ABSENT",
    "is_absent",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
