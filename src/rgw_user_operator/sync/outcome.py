"""Reconcile outcomes and their mapping onto resource status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..constants import (
    PHASE_FAILED,
    PHASE_PENDING,
    PHASE_READY,
    READY_RECHECK_DELAY_SECONDS,
    SECRET_NAME_PREFIX,
)
from ..errors import InvalidSpecificationError, NotReadyError
from .user import UserSyncResult


def secret_name_for(store: str, name: str) -> str:
    """Name of the credentials secret of a user, stable for its lifetime."""
    return f"{SECRET_NAME_PREFIX}-{store}-{name}"


@dataclass
class ReconcileOutcome:
    """Result of one reconcile pass."""

    phase: str
    retry_requested: bool = False
    error: Exception | None = None
    retry_delay: int | None = None
    reason: str = ""
    message: str = ""
    secret_name: str | None = None
    endpoint: str | None = None
    sync_result: UserSyncResult | None = None

    @property
    def ready(self) -> bool:
        return self.phase == PHASE_READY

    @property
    def permanent(self) -> bool:
        """True when retrying without a spec change cannot help."""
        return self.phase == PHASE_FAILED and not self.retry_requested

    def status_info(self) -> dict[str, Any]:
        """Status fields derived from the outcome."""
        info: dict[str, Any] = {"phase": self.phase}
        if self.secret_name:
            info["info"] = {"secretName": self.secret_name}
        return info


def pending(error: NotReadyError, delay: int = READY_RECHECK_DELAY_SECONDS) -> ReconcileOutcome:
    """Dependencies not ready: re-check later, no error."""
    return ReconcileOutcome(
        phase=PHASE_PENDING,
        retry_requested=True,
        error=None,
        retry_delay=delay,
        reason=error.reason,
        message=str(error),
    )


def failed(error: Exception) -> ReconcileOutcome:
    """Synchronization failed.

    Invalid specifications are not retried by backoff; every other error is.
    """
    if isinstance(error, InvalidSpecificationError):
        return ReconcileOutcome(
            phase=PHASE_FAILED,
            retry_requested=False,
            error=error,
            reason="InvalidSpecification",
            message=str(error),
        )
    return ReconcileOutcome(
        phase=PHASE_FAILED,
        retry_requested=True,
        error=error,
        reason="SyncFailed",
        message=str(error),
    )


def ready(
    store: str,
    name: str,
    sync_result: UserSyncResult | None = None,
    endpoint: str | None = None,
) -> ReconcileOutcome:
    """All steps succeeded."""
    return ReconcileOutcome(
        phase=PHASE_READY,
        retry_requested=False,
        error=None,
        reason="Ready",
        message=f"User {name} is ready",
        secret_name=secret_name_for(store, name),
        endpoint=endpoint,
        sync_result=sync_result,
    )
