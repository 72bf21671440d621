"""Utility functions for the RGW User Operator."""

from .conditions import (
    remove_condition,
    set_dependencies_not_ready_condition,
    set_ready_condition,
    set_sync_failed_condition,
    update_condition,
)
from .errors import sanitize_dict, sanitize_error_message, sanitize_exception
from .events import emit_event
from .secrets import apply_secret, get_secret_value

__all__ = [
    "update_condition",
    "remove_condition",
    "set_ready_condition",
    "set_dependencies_not_ready_condition",
    "set_sync_failed_condition",
    "sanitize_error_message",
    "sanitize_exception",
    "sanitize_dict",
    "emit_event",
    "get_secret_value",
    "apply_secret",
]
