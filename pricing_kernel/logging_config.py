"""
Structured JSON logging for the pricing packages.

Every record is written as one JSON object per line: ``ts``, ``level``,
``logger`` and ``message`` (a snake_case event name such as
``pricing_model_computed``), then the project id bound through
``LogContext``, then the record's ``extra`` fields.  Decimals are written
as strings so amounts are logged exactly.

Usage::

    logger = get_logger("engines.allocation")
    logger.info("pricing_model_computed", extra={"total_revenue": total})

    with LogContext.bind(project_id=project.project_id):
        ...  # every record in here carries "project_id"
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from typing import Any

from pricing_kernel.exceptions import PricingKernelError

_LOGGER_PREFIX = "pricing_kernel"

_project_id: ContextVar[str | None] = ContextVar("pricing_log_project_id", default=None)


class LogContext:
    """The project id stamped on every record logged while it is set."""

    @staticmethod
    def set(*, project_id: str | None = None) -> None:
        if project_id is not None:
            _project_id.set(project_id)

    @staticmethod
    def get_all() -> dict[str, str]:
        project_id = _project_id.get()
        return {} if project_id is None else {"project_id": project_id}

    @staticmethod
    def clear() -> None:
        _project_id.set(None)

    @staticmethod
    @contextmanager
    def bind(*, project_id: str | None = None) -> Iterator[None]:
        """Set the project id for the block, restoring the previous one after."""
        if project_id is None:
            yield
            return
        token = _project_id.set(project_id)
        try:
            yield
        finally:
            _project_id.reset(token)


# Attributes every LogRecord has; anything else on a record came from ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "taskName"}


def _to_json(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    if isinstance(exc, PricingKernelError):
        fields["exc_code"] = exc.code
        for name, value in vars(exc).items():
            if not name.startswith("_"):
                fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for name, value in vars(record).items():
            if name not in _RECORD_ATTRIBUTES and name not in payload:
                payload[name] = value

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_to_json)


def get_logger(name: str) -> logging.Logger:
    """Logger ``pricing_kernel.<name>``."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach one JSON handler to the ``pricing_kernel`` logger.

    Only the first call has any effect until ``reset_logging()``.
    """
    root = logging.getLogger(_LOGGER_PREFIX)
    if root.handlers:
        return
    root.setLevel(level)
    root.propagate = False

    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)


def reset_logging() -> None:
    """Undo ``configure_logging()``. Used by the test suite."""
    root = logging.getLogger(_LOGGER_PREFIX)
    root.handlers.clear()
    root.setLevel(logging.WARNING)
    root.propagate = True
