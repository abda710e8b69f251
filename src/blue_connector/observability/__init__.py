"""Logging helpers for the Blue connector."""

from .logging import clear_log_context, configure_logging, get_log_context, set_log_context

__all__ = ["clear_log_context", "configure_logging", "get_log_context", "set_log_context"]
