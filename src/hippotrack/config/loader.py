"""hippotrack configuration loader."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from hippotrack.errors import create_error
from hippotrack.types import Taxonomy, ValidationIssue, ValidationResult

from .models import TrackerConfig

CONFIG_PATH_ENV = "HIPPOTRACK_CONFIG_PATH"
DEFAULT_CONFIG_FILE = "hippotrack.yaml"
ENV_PREFIX = "HIPPOTRACK_"

# Option names accepted in their camelCase spelling as well
_ALIASES = {
    "maxTextLength": "max_text_length",
    "timeoutMs": "timeout_ms",
    "includeRawUpdate": "include_raw_update",
    "mediaFields": "media_fields",
    "sensitiveFields": "sensitive_fields",
    "truncationMarker": "truncation_marker",
    "maxDepth": "max_depth",
    "exemptFinancialSnapshot": "exempt_financial_snapshot",
}

_BOOL_KEYS = ("log", "include_raw_update", "exempt_financial_snapshot")
_POSITIVE_INT_KEYS = ("max_text_length", "timeout_ms", "max_depth")
_STR_KEYS = ("endpoint", "token", "truncation_marker")
_LIST_KEYS = ("media_fields", "sensitive_fields")

_VALID_KEYS = {"taxonomy", *_STR_KEYS, *_BOOL_KEYS, *_POSITIVE_INT_KEYS, *_LIST_KEYS}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        TrackError: If required var not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)

        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        elif operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        else:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Required environment variable {var_name} not set",
            )

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    """Recursively resolve env vars in data structure."""
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


def normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase option names onto their snake_case fields."""
    return {_ALIASES.get(key, key): value for key, value in data.items()}


def _parse_bool(raw: str, name: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise create_error("CONFIG_INVALID", detail=f"{name} must be a boolean, got {raw!r}")


def _parse_int(raw: str, name: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise create_error(
            "CONFIG_INVALID", detail=f"{name} must be an integer, got {raw!r}"
        ) from e


class ConfigLoader:
    """Load and validate tracker configuration."""

    def __init__(self, logger: Any = None):
        """Initialize config loader.

        Args:
            logger: Optional TrackLogger instance
        """
        self._config: TrackerConfig | None = None
        self._config_path: Path | None = None
        self._logger = logger

    @property
    def config(self) -> TrackerConfig | None:
        """Last loaded configuration."""
        return self._config

    @property
    def config_path(self) -> Path | None:
        """File the last configuration was loaded from, if any."""
        return self._config_path

    def load(self, path: str | Path | None = None) -> TrackerConfig:
        """Load configuration from a YAML file.

        Resolution order if path not specified:
        1. HIPPOTRACK_CONFIG_PATH environment variable
        2. ./hippotrack.yaml

        Args:
            path: Optional path to config file

        Returns:
            Loaded TrackerConfig instance

        Raises:
            TrackError: If file not found or invalid
        """
        if path is None:
            path = os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_FILE

        config_path = Path(path)

        if not config_path.exists():
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration file must contain a mapping",
            )

        data = _resolve_env_vars_recursive(data)

        return self.load_from_dict(data, config_path)

    def load_from_env(self, prefix: str = ENV_PREFIX) -> TrackerConfig:
        """Load configuration from ``<prefix>*`` environment variables.

        Args:
            prefix: Variable name prefix

        Returns:
            Loaded TrackerConfig instance
        """
        data: dict[str, Any] = {}
        for key in ("endpoint", "token", "taxonomy", "truncation_marker"):
            raw = os.environ.get(f"{prefix}{key.upper()}")
            if raw is not None:
                data[key] = raw
        for key in _BOOL_KEYS:
            raw = os.environ.get(f"{prefix}{key.upper()}")
            if raw is not None:
                data[key] = _parse_bool(raw, key)
        for key in _POSITIVE_INT_KEYS:
            raw = os.environ.get(f"{prefix}{key.upper()}")
            if raw is not None:
                data[key] = _parse_int(raw, key)
        for key in _LIST_KEYS:
            raw = os.environ.get(f"{prefix}{key.upper()}")
            if raw is not None:
                data[key] = [item.strip() for item in raw.split(",") if item.strip()]

        return self.load_from_dict(data)

    def load_from_dict(self, data: dict[str, Any], config_path: Path | None = None) -> TrackerConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary (snake_case or camelCase keys)
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded TrackerConfig instance

        Raises:
            TrackError: If configuration is invalid
        """
        data = normalize_keys(data)

        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.path}: {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        if self._logger:
            for issue in validation.warnings:
                self._logger.warning("Configuration warning", path=issue.path, issue=issue.message)

        known = {key: value for key, value in data.items() if key in _VALID_KEYS}
        if "taxonomy" in known:
            known["taxonomy"] = Taxonomy(known["taxonomy"])

        config = TrackerConfig(**known)

        self._config = config
        self._config_path = config_path

        if self._logger:
            self._logger.info("Configuration loaded", endpoint=config.endpoint)

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary (camelCase keys are accepted)

        Returns:
            ValidationResult with errors and warnings
        """
        data = normalize_keys(data)
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for key in data:
            if key not in _VALID_KEYS:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        for key in ("endpoint", "token"):
            if not data.get(key):
                errors.append(ValidationIssue(path=key, message=f"{key} is required"))

        for key in _STR_KEYS:
            if key in data and not isinstance(data[key], str):
                errors.append(ValidationIssue(path=key, message=f"{key} must be a string"))

        for key in _BOOL_KEYS:
            if key in data and not isinstance(data[key], bool):
                errors.append(ValidationIssue(path=key, message=f"{key} must be a boolean"))

        for key in _POSITIVE_INT_KEYS:
            if key not in data:
                continue
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(ValidationIssue(path=key, message=f"{key} must be an integer"))
            elif value <= 0:
                errors.append(ValidationIssue(path=key, message=f"{key} must be positive"))

        for key in _LIST_KEYS:
            if key not in data:
                continue
            value = data[key]
            if not isinstance(value, list):
                errors.append(ValidationIssue(path=key, message=f"{key} must be a list"))
                continue
            for i, item in enumerate(value):
                if not isinstance(item, str):
                    errors.append(
                        ValidationIssue(path=f"{key}[{i}]", message="field names must be strings")
                    )

        if "taxonomy" in data:
            allowed = [t.value for t in Taxonomy]
            if data["taxonomy"] not in allowed:
                errors.append(
                    ValidationIssue(
                        path="taxonomy",
                        message=f"taxonomy must be one of {allowed}",
                    )
                )

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
