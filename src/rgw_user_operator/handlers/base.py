"""Base handler class with common functionality for CRD handlers."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import kopf

from .. import metrics
from ..constants import (
    FIELD_MANAGER,
    FINALIZER,
    RETRY_BACKOFF_FACTOR,
    RETRY_MAX_DELAY_SECONDS,
    RETRY_MIN_DELAY_SECONDS,
)
from ..logging import log_resource_event
from ..utils.errors import sanitize_dict, sanitize_exception
from ..utils.events import emit_reconcile_failed, emit_reconcile_started


def backoff_delay(retry: int) -> float:
    """Delay before the next attempt after ``retry`` consecutive failures."""
    return min(RETRY_MAX_DELAY_SECONDS, RETRY_MIN_DELAY_SECONDS * RETRY_BACKOFF_FACTOR ** max(retry, 0))


class BaseHandler:
    """Base class for CRD handlers with common functionality."""

    def __init__(self, kind: str):
        """Initialize base handler.

        Args:
            kind: The Kubernetes resource kind (e.g., "CephObjectStoreUser")
        """
        self.kind = kind
        self.logger = logging.getLogger(__name__)

    def _get_resource_context(self, meta: dict[str, Any]) -> dict[str, Any]:
        """Extract common resource context from metadata."""
        return {
            "name": meta.get("name", "unknown"),
            "namespace": meta.get("namespace", "default"),
            "uid": meta.get("uid", "unknown"),
        }

    def _log(
        self,
        level: int,
        meta: dict[str, Any],
        message: str,
        event: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        ctx = self._get_resource_context(meta)
        log_resource_event(
            self.logger,
            controller=FIELD_MANAGER,
            resource_kind=self.kind,
            resource_name=ctx["name"],
            namespace=ctx["namespace"],
            uid=ctx["uid"],
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def log_info(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "info",
        reason: str = "Info",
        **kwargs: Any,
    ) -> None:
        """Log an info-level structured log message.

        Args:
            meta: Kubernetes resource metadata
            message: Log message
            event: Event type (default: "info")
            reason: Reason for the event (default: "Info")
            **kwargs: Additional fields to include in the log
        """
        self._log(logging.INFO, meta, message, event, reason, **kwargs)

    def log_warning(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "warning",
        reason: str = "Warning",
        **kwargs: Any,
    ) -> None:
        """Log a warning-level structured log message."""
        self._log(logging.WARNING, meta, message, event, reason, **kwargs)

    def log_error(
        self,
        meta: dict[str, Any],
        message: str,
        error: Exception | None = None,
        event: str = "error",
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            meta: Kubernetes resource metadata
            message: Log message
            error: Optional exception to include sanitized error details
            event: Event type (default: "error")
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        log_data = sanitize_dict(kwargs)

        if error is not None:
            log_data["error"] = sanitize_exception(error)
            log_data["error_type"] = type(error).__name__

        self._log(logging.ERROR, meta, message, event, reason, **log_data)

    def ensure_finalizer(self, meta: dict[str, Any], patch: kopf.Patch) -> None:
        """Ensure finalizer is present in metadata."""
        finalizers = list(meta.get("finalizers", []))
        if FINALIZER not in finalizers:
            finalizers.append(FINALIZER)
            patch.metadata["finalizers"] = finalizers

    def remove_finalizer(self, meta: dict[str, Any], patch: kopf.Patch) -> None:
        """Remove finalizer from metadata."""
        finalizers = list(meta.get("finalizers", []))
        if FINALIZER in finalizers:
            finalizers.remove(FINALIZER)
            patch.metadata["finalizers"] = finalizers if finalizers else None

    def reconcile_with_metrics(
        self,
        meta: dict[str, Any],
        reconcile_fn: Callable[[], None],
        retry: int = 0,
    ) -> None:
        """Execute reconciliation with metrics and error handling.

        A ``kopf.TemporaryError`` means "come back later" and is counted as
        pending rather than as a failure. A ``kopf.PermanentError`` passes
        through untouched. Any other error is counted, logged and handed back
        to kopf with an exponentially growing delay based on ``retry``.
        """
        emit_reconcile_started(meta)
        metrics.reconcile_total.labels(kind=self.kind, result="started").inc()

        start_time = time.time()
        try:
            reconcile_fn()
            metrics.reconcile_total.labels(kind=self.kind, result="success").inc()
        except kopf.TemporaryError:
            metrics.reconcile_total.labels(kind=self.kind, result="pending").inc()
            raise
        except kopf.PermanentError:
            metrics.reconcile_total.labels(kind=self.kind, result="failed").inc()
            raise
        except Exception as e:
            sanitized_error = sanitize_exception(e)
            error_type = type(e).__name__
            metrics.error_total.labels(kind=self.kind, error_type=error_type).inc()
            self.log_error(meta, "Reconciliation failed", error=e, reason="ReconciliationFailed")
            emit_reconcile_failed(meta, f"Reconciliation failed: {sanitized_error}")
            metrics.reconcile_total.labels(kind=self.kind, result="error").inc()
            raise kopf.TemporaryError(sanitized_error, delay=backoff_delay(retry)) from e
        finally:
            duration = time.time() - start_time
            metrics.reconcile_duration_seconds.labels(kind=self.kind).observe(duration)

    def update_resource_status(
        self,
        patch: kopf.Patch,
        meta: dict[str, Any],
        phase: str,
        status_data: dict[str, Any] | None = None,
    ) -> None:
        """Update resource status with common fields.

        Args:
            patch: Kopf patch object
            meta: Kubernetes resource metadata
            phase: Phase to report
            status_data: Additional status data to include
        """
        status_update = {
            "phase": phase,
            "observedGeneration": meta.get("generation", 0),
            **(status_data or {}),
        }

        metrics.resource_status_total.labels(kind=self.kind, status=phase.lower()).inc()
        patch.status.update(status_update)
