# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with request context
# PURPOSE: Tag every log line with the request, item and caller it belongs to
# ============================================================================
"""
Structured Logging

Every log line emitted while a request is handled carries the request id,
the content item and the calling user, without passing them around.

    from core.logging import get_logger, log_context

    logger = get_logger(__name__, ComponentType.SERVICE)

    with log_context(request_id="a1b2", post_id=42, user_id=7):
        logger.info("Updating meta", extra={"fields": 2})

Output is JSON (LOG_FORMAT=json) or a single human-readable line.
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


class ComponentType(str, Enum):
    """Layer a logger belongs to."""
    API = "api"
    SERVICE = "service"
    REPOSITORY = "repository"
    AUTH = "auth"
    INFRASTRUCTURE = "infrastructure"


@dataclass(frozen=True)
class LogContext:
    """Fields attached to every record logged inside a log_context block."""
    request_id: Optional[str] = None
    post_id: Optional[int] = None
    user_id: Optional[int] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        fields = {k: v for k, v in asdict(self).items() if k != "extra" and v is not None}
        fields.update(self.extra)
        return fields


# One context per asyncio task; nested blocks replace it and restore on exit
_current: ContextVar[LogContext] = ContextVar("log_context", default=LogContext())


def get_current_context() -> LogContext:
    """Context of the innermost active log_context block."""
    return _current.get()


@contextmanager
def log_context(**fields):
    """
    Add fields to the logging context for the duration of the block.

    Known fields (request_id, post_id, user_id, operation) override the
    enclosing block's values; anything else is merged into extra.
    """
    parent = _current.get()
    known = {k: fields.pop(k) for k in ("request_id", "post_id", "user_id", "operation") if k in fields}
    ctx = replace(parent, extra={**parent.extra, **fields}, **known)

    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": _timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            entry["context"] = context

        data = getattr(record, "data", None)
        if data:
            entry["data"] = data

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry["source"] = f"{record.filename}:{record.lineno}"
        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line format for local development."""

    _CONTEXT_LABELS = (("request_id", "req"), ("post_id", "post"), ("user_id", "user"))

    def format(self, record: logging.LogRecord) -> str:
        context = get_current_context()
        tags = [
            f"{label}={getattr(context, attr)}"
            for attr, label in self._CONTEXT_LABELS
            if getattr(context, attr) is not None
        ]

        line = f"{_timestamp()[:19].replace('T', ' ')} {record.levelname:<8} {record.name}"
        if tags:
            line += f" [{' '.join(tags)}]"
        line += f": {record.getMessage()}"

        data = getattr(record, "data", None)
        if data:
            line += f" {data}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class ContextLogger(logging.LoggerAdapter):
    """
    Adapter that moves caller-supplied extra fields under record.data.

    The component of the logger is added to data so records from different
    layers can be filtered.
    """

    def process(self, msg, kwargs):
        data = dict(kwargs.pop("extra", None) or {})
        component = self.extra.get("component")
        if component is not None:
            data.setdefault("component", component.value)
        kwargs["extra"] = {"data": data}
        return msg, kwargs


def get_logger(name: str, component: Optional[ComponentType] = None) -> ContextLogger:
    """Context-aware logger for a module."""
    return ContextLogger(logging.getLogger(name), {"component": component})


def configure_logging(level: Union[str, int] = "INFO", json_output: bool = False) -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Log level name or number
        json_output: JSON lines instead of human-readable output
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    use_json = json_output or os.getenv("LOG_FORMAT", "").lower() == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if use_json else HumanFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    # Pool open/close chatter
    logging.getLogger("psycopg.pool").setLevel(max(level, logging.WARNING))


__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
]
