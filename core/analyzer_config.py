"""Analyzer configuration loading.

Settings come from an optional YAML file followed by environment overrides.
In non-strict mode unreadable or malformed input falls back to defaults with
a warning; strict mode raises ``ConfigValidationError`` instead.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_DIR_TOKENS: tuple[str, ...] = ("vendor",)
DEFAULT_SOURCE_SUFFIX = ".go"
DEFAULT_TEST_SUFFIX = "_test.go"
DEFAULT_LOG_LEVEL = "INFO"

ENV_EXCLUDE_DIRS = "GO_IFACE_EXCLUDE_DIRS"
ENV_SKIP_ERROR_FILES = "GO_IFACE_SKIP_ERROR_FILES"
ENV_LOG_LEVEL = "GO_IFACE_LOG_LEVEL"
ENV_STRICT = "STRICT_CONFIG_VALIDATION"

_KNOWN_KEYS = {
    "excluded_dir_tokens",
    "source_suffix",
    "test_suffix",
    "skip_files_with_errors",
    "log_level",
}


class ConfigValidationError(RuntimeError):
    """Raised when strict configuration validation fails."""


@dataclass(frozen=True)
class AnalyzerConfig:
    """Settings shared by the walker, the loader and the CLI.

    Attributes:
        excluded_dir_tokens: A sub-directory is skipped when its name contains
            any of these tokens.
        source_suffix: Suffix identifying Go source files.
        test_suffix: Suffix identifying Go test files, which are never scanned
            by directory walks.
        skip_files_with_errors: Treat files whose parse tree contains syntax
            errors as unparsable.
        log_level: Default log level name for the command line.
    """

    excluded_dir_tokens: tuple[str, ...] = DEFAULT_EXCLUDED_DIR_TOKENS
    source_suffix: str = DEFAULT_SOURCE_SUFFIX
    test_suffix: str = DEFAULT_TEST_SUFFIX
    skip_files_with_errors: bool = True
    log_level: str = DEFAULT_LOG_LEVEL


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag(ENV_STRICT, default=default)


def _is_level_name(value: str) -> bool:
    return bool(value) and isinstance(logging.getLevelName(value), int)


def _fail_or_warn(msg: str, strict: bool) -> None:
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; continuing with defaults", msg)


def _split_tokens(raw: Any) -> Optional[tuple[str, ...]]:
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        items = [str(item) for item in raw]
    else:
        return None
    return tuple(item.strip() for item in items if item.strip())


def load_config_file(config_path: str, strict: bool = False) -> dict[str, Any]:
    """Load the YAML config payload.

    Returns an empty dict on read/parse failures in non-strict mode.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Analyzer config file not found: {config_path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read analyzer config at {config_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        return {}

    if not isinstance(payload, dict):
        _fail_or_warn(
            f"Unexpected analyzer config payload type: {type(payload).__name__}",
            strict,
        )
        return {}

    return payload


def _apply_payload(
    config: AnalyzerConfig,
    payload: dict[str, Any],
    strict: bool,
) -> AnalyzerConfig:
    unknown = sorted(set(payload) - _KNOWN_KEYS)
    if unknown:
        _fail_or_warn(f"Unknown analyzer config keys: {', '.join(unknown)}", strict)

    changes: dict[str, Any] = {}

    if "excluded_dir_tokens" in payload:
        tokens = _split_tokens(payload["excluded_dir_tokens"])
        if tokens is None:
            _fail_or_warn("excluded_dir_tokens must be a list or a string", strict)
        else:
            changes["excluded_dir_tokens"] = tokens

    for key in ("source_suffix", "test_suffix"):
        if key in payload:
            value = str(payload[key] or "").strip()
            if not value:
                _fail_or_warn(f"{key} must be a non-empty string", strict)
            else:
                changes[key] = value

    if "skip_files_with_errors" in payload:
        value = payload["skip_files_with_errors"]
        if not isinstance(value, bool):
            _fail_or_warn("skip_files_with_errors must be a boolean", strict)
        else:
            changes["skip_files_with_errors"] = value

    if "log_level" in payload:
        value = str(payload["log_level"] or "").strip().upper()
        if not _is_level_name(value):
            _fail_or_warn(f"Unknown log_level: {payload['log_level']}", strict)
        else:
            changes["log_level"] = value

    return replace(config, **changes)


def _apply_environment(config: AnalyzerConfig) -> AnalyzerConfig:
    changes: dict[str, Any] = {}

    raw_tokens = os.getenv(ENV_EXCLUDE_DIRS)
    if raw_tokens is not None:
        changes["excluded_dir_tokens"] = _split_tokens(raw_tokens) or ()

    if os.getenv(ENV_SKIP_ERROR_FILES) is not None:
        changes["skip_files_with_errors"] = _env_flag(ENV_SKIP_ERROR_FILES)

    raw_level = os.getenv(ENV_LOG_LEVEL)
    if raw_level:
        level = raw_level.strip().upper()
        if _is_level_name(level):
            changes["log_level"] = level
        else:
            logger.warning("Ignoring unknown %s=%s", ENV_LOG_LEVEL, raw_level)

    return replace(config, **changes)


def load_analyzer_config(
    config_path: Optional[str] = None,
    strict: Optional[bool] = None,
) -> AnalyzerConfig:
    """Build the effective analyzer configuration for one invocation.

    Args:
        config_path: Optional YAML file with ``AnalyzerConfig`` fields.
        strict: Raise on invalid input instead of warning. Defaults to the
            ``STRICT_CONFIG_VALIDATION`` environment flag.

    Returns:
        The resolved configuration.

    Raises:
        ConfigValidationError: In strict mode, on any invalid input.
    """
    if strict is None:
        strict = resolve_strict_config_validation()

    config = AnalyzerConfig()
    if config_path:
        payload = load_config_file(config_path, strict=strict)
        config = _apply_payload(config, payload, strict)
    config = _apply_environment(config)

    logger.debug("Resolved analyzer config: %s", config)
    return config
