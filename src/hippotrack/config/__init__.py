"""hippotrack configuration."""

from .loader import ConfigLoader, normalize_keys, resolve_env_vars
from .models import DEFAULT_MEDIA_FIELDS, DEFAULT_SENSITIVE_FIELDS, Policy, TrackerConfig

__all__ = [
    "TrackerConfig",
    "Policy",
    "DEFAULT_MEDIA_FIELDS",
    "DEFAULT_SENSITIVE_FIELDS",
    "ConfigLoader",
    "normalize_keys",
    "resolve_env_vars",
]
