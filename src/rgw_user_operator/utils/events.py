"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_USER_CREATED,
    EVENT_REASON_USER_DELETED,
    EVENT_REASON_USER_SYNCED,
    EVENT_REASON_VALIDATE_FAILED,
    EVENT_REASON_WAITING,
)


def emit_event(
    meta: dict[str, Any],
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        meta: Resource metadata
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        meta,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(meta: dict[str, Any]) -> None:
    """Emit reconcile started event."""
    emit_event(meta, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(meta: dict[str, Any], message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(meta, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_validate_failed(meta: dict[str, Any], message: str) -> None:
    """Emit validation failed event."""
    emit_event(meta, EVENT_REASON_VALIDATE_FAILED, message, type_="Warning")


def emit_waiting_for_dependencies(meta: dict[str, Any], message: str) -> None:
    """Emit waiting event while the cluster or gateway is not ready."""
    emit_event(meta, EVENT_REASON_WAITING, message)


def emit_user_created(meta: dict[str, Any], user_id: str) -> None:
    """Emit user created event."""
    emit_event(meta, EVENT_REASON_USER_CREATED, f"User {user_id} created")


def emit_user_synced(meta: dict[str, Any], user_id: str) -> None:
    """Emit user synced event."""
    emit_event(meta, EVENT_REASON_USER_SYNCED, f"User {user_id} synchronized")


def emit_user_deleted(meta: dict[str, Any], user_id: str) -> None:
    """Emit user deleted event."""
    emit_event(meta, EVENT_REASON_USER_DELETED, f"User {user_id} deleted")
