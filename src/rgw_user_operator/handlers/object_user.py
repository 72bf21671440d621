"""Handler for CephObjectStoreUser CRD."""

from __future__ import annotations

from typing import Any, Callable

import kopf
from kubernetes import client

from ..builders.admin_ops import create_admin_ops_client
from ..builders.user import create_user_spec_from_resource
from ..constants import (
    API_GROUP_VERSION,
    COND_DEPENDENCIES_NOT_READY,
    COND_SYNC_FAILED,
    KIND_OBJECT_STORE_USER,
    PHASE_DELETING,
    READY_RECHECK_DELAY_SECONDS,
    SECRET_TYPE,
)
from ..errors import InvalidSpecificationError, NotReadyError, UserNotFoundError
from ..sync.locator import GatewayLocator
from ..sync.outcome import ReconcileOutcome, failed
from ..sync.pipeline import ObjectUserReconciler
from ..sync.readiness import ReadinessGate
from ..tracing import trace_span
from ..utils.conditions import (
    remove_condition,
    set_dependencies_not_ready_condition,
    set_ready_condition,
    set_sync_failed_condition,
)
from ..utils.errors import sanitize_exception
from ..utils.events import (
    emit_user_created,
    emit_user_deleted,
    emit_user_synced,
    emit_validate_failed,
    emit_waiting_for_dependencies,
)
from ..utils.secrets import apply_secret
from .base import BaseHandler
from .shared import get_core_client, get_k8s_client

# Dependencies whose absence during deletion means there is nothing left to clean up
GONE_REASONS = {"ClusterNotFound", "ObjectStoreNotFound"}


def build_reconciler() -> ObjectUserReconciler:
    """Wire the reconciler against the live Kubernetes API."""
    custom_api = get_k8s_client()
    core_api = get_core_client()
    return ObjectUserReconciler(
        gate=ReadinessGate(custom_api),
        locator=GatewayLocator(custom_api, core_api),
        admin_ops_factory=create_admin_ops_client,
    )


class ObjectUserHandler(BaseHandler):
    """Handler for CephObjectStoreUser resources."""

    def __init__(
        self,
        reconciler_factory: Callable[[], ObjectUserReconciler] = build_reconciler,
        core_api_factory: Callable[[], client.CoreV1Api] = get_core_client,
    ):
        """Initialize object store user handler.

        Args:
            reconciler_factory: Builds the reconciler used for a pass
            core_api_factory: Builds the client used to write credentials secrets
        """
        super().__init__(KIND_OBJECT_STORE_USER)
        self.reconciler_factory = reconciler_factory
        self.core_api_factory = core_api_factory

    def reconcile(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Reconcile CephObjectStoreUser resource."""
        namespace = meta.get("namespace", "default")
        name = meta.get("name", "")

        with trace_span("reconcile_object_store_user", kind=KIND_OBJECT_STORE_USER, attributes={"user.name": name}):
            if not spec.get("store"):
                self.report(failed(InvalidSpecificationError("store is required")), spec, meta, status, patch)
                return

            try:
                desired = create_user_spec_from_resource(spec, meta)
            except InvalidSpecificationError as e:
                self.report(failed(e), spec, meta, status, patch)
                return

            outcome = self.reconciler_factory().reconcile(desired, namespace)
            self.report(outcome, spec, meta, status, patch)

    def report(
        self,
        outcome: ReconcileOutcome,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Persist the outcome of a pass and tell kopf whether to retry.

        Raises:
            kopf.TemporaryError: Dependencies not ready, re-check after a fixed delay
            kopf.PermanentError: The resource spec is invalid, wait for it to change
            Exception: The synchronizer error, retried with kopf's backoff
        """
        generation = meta.get("generation", 0)
        conditions = status.get("conditions", [])

        if outcome.ready:
            self._publish_credentials(outcome, spec, meta)
            conditions = remove_condition(conditions, COND_DEPENDENCIES_NOT_READY)
            conditions = remove_condition(conditions, COND_SYNC_FAILED)
            conditions = set_ready_condition(conditions, True, outcome.message, generation)
            self.update_resource_status(patch, meta, outcome.phase, {
                **outcome.status_info(),
                "conditions": conditions,
            })

            sync_result = outcome.sync_result
            user_id = meta.get("name", "")
            if sync_result is not None and sync_result.created:
                emit_user_created(meta, user_id)
            else:
                emit_user_synced(meta, user_id)
            self.log_info(meta, outcome.message, event="reconciled", reason="Ready",
                          secret_name=outcome.secret_name)
            return

        if outcome.error is None:
            # Dependencies not ready, expected while the cluster or gateway comes up
            conditions = set_dependencies_not_ready_condition(
                conditions, outcome.reason, outcome.message, generation
            )
            conditions = set_ready_condition(conditions, False, outcome.message, generation, reason=outcome.reason)
            self.update_resource_status(patch, meta, outcome.phase, {"conditions": conditions})
            self.log_warning(meta, outcome.message, event="waiting", reason=outcome.reason,
                             retry_delay=outcome.retry_delay)
            emit_waiting_for_dependencies(meta, outcome.message)
            raise kopf.TemporaryError(outcome.message, delay=outcome.retry_delay or READY_RECHECK_DELAY_SECONDS)

        sanitized_error = sanitize_exception(outcome.error)
        conditions = set_sync_failed_condition(conditions, sanitized_error, generation, reason=outcome.reason)
        conditions = set_ready_condition(conditions, False, sanitized_error, generation, reason=outcome.reason)
        self.update_resource_status(patch, meta, outcome.phase, {"conditions": conditions})

        if outcome.permanent:
            self.log_error(meta, sanitized_error, reason="ValidationFailed")
            emit_validate_failed(meta, sanitized_error)
            raise kopf.PermanentError(sanitized_error) from outcome.error
        raise outcome.error

    def _publish_credentials(
        self,
        outcome: ReconcileOutcome,
        spec: dict[str, Any],
        meta: dict[str, Any],
    ) -> None:
        """Write the user's S3 keys and endpoint to its credentials secret."""
        sync_result = outcome.sync_result
        if sync_result is None or not sync_result.user.keys or not outcome.secret_name:
            return

        key = sync_result.user.keys[0]
        owner = client.V1OwnerReference(
            api_version=API_GROUP_VERSION,
            kind=KIND_OBJECT_STORE_USER,
            name=meta.get("name", ""),
            uid=meta.get("uid", ""),
            block_owner_deletion=True,
            controller=True,
        )
        apply_secret(
            self.core_api_factory(),
            meta.get("namespace", "default"),
            outcome.secret_name,
            {
                "AccessKey": key.access_key,
                "SecretKey": key.secret_key,
                "Endpoint": outcome.endpoint or "",
            },
            owner_references=[owner],
            secret_type=SECRET_TYPE,
        )

    def delete(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Handle CephObjectStoreUser resource deletion.

        The remote user is removed when its cluster and store still exist.
        When either is gone there is nothing left to clean up.
        """
        namespace = meta.get("namespace", "default")
        user_id = meta.get("name", "")
        store = spec.get("store")

        self.log_info(meta, f"User {user_id} is being deleted", event="deletion", reason="Deletion")
        patch.status["phase"] = PHASE_DELETING

        if store and user_id:
            reconciler = self.reconciler_factory()
            try:
                reconciler.gate.check(namespace)
                context = reconciler.locator.locate(store, namespace)
            except NotReadyError as e:
                if e.reason not in GONE_REASONS:
                    self.log_warning(meta, f"Cannot delete user yet: {e}", event="waiting", reason=e.reason)
                    raise kopf.TemporaryError(str(e), delay=reconciler.recheck_delay) from e
                self.log_info(meta, f"Skipping remote cleanup: {e}", event="deletion", reason=e.reason)
            else:
                admin_ops = reconciler.admin_ops_factory(context)
                try:
                    admin_ops.remove_user(user_id)
                    emit_user_deleted(meta, user_id)
                except UserNotFoundError:
                    self.log_info(meta, f"User {user_id} already absent", event="deletion", reason="NotFound")

        self.remove_finalizer(meta, patch)


# Global handler instance
_handler = ObjectUserHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_OBJECT_STORE_USER)
@kopf.on.update(API_GROUP_VERSION, KIND_OBJECT_STORE_USER)
@kopf.on.resume(API_GROUP_VERSION, KIND_OBJECT_STORE_USER)
def handle_object_store_user(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    retry: int = 0,
    **kwargs: Any,
) -> None:
    """Handle CephObjectStoreUser resource reconciliation."""
    _handler.ensure_finalizer(meta, patch)
    _handler.reconcile_with_metrics(meta, lambda: _handler.reconcile(spec, meta, status, patch), retry=retry)


@kopf.on.delete(API_GROUP_VERSION, KIND_OBJECT_STORE_USER)
def handle_object_store_user_delete(
    spec: dict[str, Any],
    meta: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle CephObjectStoreUser resource deletion."""
    _handler.delete(spec, meta, patch)
