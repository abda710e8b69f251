"""Logging setup for the Blue connector.

The node loop tags every record emitted while an item runs with the
operation name and item index, taken from contextvars so concurrent hosts
do not mix their items up. ``configure_logging`` attaches a handler to the
``blue_connector`` logger only; the host's root logger is left alone.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional

from ..config import Settings, get_settings

PACKAGE_LOGGER = "blue_connector"

_operation: ContextVar[Optional[str]] = ContextVar("operation", default=None)
_item_index: ContextVar[Optional[int]] = ContextVar("item_index", default=None)


def set_log_context(
    operation: Optional[str] = None,
    item_index: Optional[int] = None,
):
    """Tag subsequent records in this context with the item being processed."""
    if operation is not None:
        _operation.set(operation)
    if item_index is not None:
        _item_index.set(item_index)


def clear_log_context():
    _operation.set(None)
    _item_index.set(None)


def get_log_context() -> Dict[str, Any]:
    """Context fields currently set, without the empty ones."""
    context: Dict[str, Any] = {}
    operation = _operation.get()
    if operation:
        context["operation"] = operation
    item_index = _item_index.get()
    if item_index is not None:
        context["item_index"] = item_index
    return context


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(get_log_context())
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Single-line format for local runs, e.g. ``... hello [op=getRecords, item=2]``."""

    _LABELS = {"operation": "op", "item_index": "item"}

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"{record.levelname:8s} {record.name}: {record.getMessage()}"
        )
        context = get_log_context()
        if context:
            tags = ", ".join(f"{self._LABELS[key]}={value}" for key, value in context.items())
            line += f" [{tags}]"
        if record.exc_info and record.exc_info[1]:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Send connector logs to stdout using ``settings.environment`` and ``log_level``.

    ``production`` selects JSON output; any other environment the
    human-readable format. Calling it again replaces the handler.

    Returns:
        The configured ``blue_connector`` logger.
    """
    settings = settings or get_settings()

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if settings.environment == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False

    # Request lines from the HTTP stack duplicate our own debug output
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return logger
