"""Structured logging helpers with query correlation context."""

from __future__ import annotations

import contextvars
import logging
import sys
import uuid
from contextlib import contextmanager
from typing import Iterator

_QUERY_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "query_id", default="-"
)
_PHASE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "phase", default="-"
)

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | query_id=%(query_id)s | phase=%(phase)s | "
    "%(name)s | %(message)s"
)


class _QueryContextFilter(logging.Filter):
    """Inject query correlation fields into all log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.query_id = _QUERY_ID_VAR.get("-")
        record.phase = _PHASE_VAR.get("-")
        return True


def _ensure_filter_on_root_handlers() -> None:
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        has_filter = any(isinstance(f, _QueryContextFilter) for f in handler.filters)
        if not has_filter:
            handler.addFilter(_QueryContextFilter())


def resolve_log_level(level: int | str) -> int:
    """Translate a level name such as ``"debug"`` into a logging constant."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if isinstance(value, int):
        return value
    raise ValueError(f"Unknown log level: {level}")


def configure_structured_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging on stderr with query/phase context.

    Standard output is reserved for the JSON result line, so every handler
    installed here writes to stderr.
    """
    numeric_level = resolve_log_level(level)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=numeric_level, format=LOG_FORMAT, stream=sys.stderr)
    else:
        root_logger.setLevel(numeric_level)
        formatter = logging.Formatter(LOG_FORMAT)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)
    _ensure_filter_on_root_handlers()


def set_query_id(query_id: str | None = None) -> str:
    """Set or generate the query correlation ID."""
    value = query_id or uuid.uuid4().hex[:12]
    _QUERY_ID_VAR.set(value)
    return value


def get_query_id() -> str:
    """Get current query correlation ID."""
    return _QUERY_ID_VAR.get("-")


def get_phase() -> str:
    """Get the phase currently attached to emitted logs."""
    return _PHASE_VAR.get("-")


@contextmanager
def phase_scope(phase: str) -> Iterator[None]:
    """Temporarily set phase context for emitted logs."""
    token = _PHASE_VAR.set(phase)
    try:
        yield
    finally:
        _PHASE_VAR.reset(token)
