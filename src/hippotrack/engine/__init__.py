"""hippotrack engine - classification, redaction, sanitization, pruning, composition."""

from .classifier import CLASSIFICATION_RULES, ClassificationRule, classify, label, parse_event
from .composer import PayloadComposer
from .lookup import TIMESTAMP_PATHS, first_present, get_path
from .pruner import prune, prune_record
from .redactor import REDACTED, media_ref, redact, truncate
from .sanitizer import FieldClassifier, Sanitizer, policy_field_classifier
from .types import BotIdentity, ClassifiedEvent, RawEvent, TelemetryRecord

__all__ = [
    # Types
    "BotIdentity",
    "ClassifiedEvent",
    "RawEvent",
    "TelemetryRecord",
    # Classifier
    "ClassificationRule",
    "CLASSIFICATION_RULES",
    "classify",
    "parse_event",
    "label",
    # Redactor
    "REDACTED",
    "redact",
    "truncate",
    "media_ref",
    # Sanitizer
    "Sanitizer",
    "FieldClassifier",
    "policy_field_classifier",
    # Pruner
    "prune",
    "prune_record",
    # Lookup
    "TIMESTAMP_PATHS",
    "get_path",
    "first_present",
    # Composer
    "PayloadComposer",
]
