"""Core shared configuration and logging utilities."""

from core.structured_logging import (
    configure_structured_logging,
    get_phase,
    get_query_id,
    phase_scope,
    resolve_log_level,
    set_query_id,
)
from core.analyzer_config import (
    AnalyzerConfig,
    ConfigValidationError,
    load_analyzer_config,
    load_config_file,
    resolve_strict_config_validation,
)

__all__ = [
    "configure_structured_logging",
    "get_phase",
    "get_query_id",
    "phase_scope",
    "resolve_log_level",
    "set_query_id",
    "AnalyzerConfig",
    "ConfigValidationError",
    "load_analyzer_config",
    "load_config_file",
    "resolve_strict_config_validation",
]
