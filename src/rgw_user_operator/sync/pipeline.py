"""Reconcile pipeline for one object store user."""

from __future__ import annotations

import logging
from typing import Callable

from .. import metrics
from ..constants import DEFAULT_MAX_BUCKETS, KIND_OBJECT_STORE_USER, READY_RECHECK_DELAY_SECONDS
from ..errors import NotReadyError, ObjectUserError
from ..models import DesiredUserSpec
from ..services.rgw.base import AdminOpsAPI
from ..tracing import add_span_attribute, trace_span
from .locator import EndpointContext, GatewayLocator
from .outcome import ReconcileOutcome, failed, pending, ready
from .readiness import ReadinessGate
from .subusers import sync_subusers
from .user import UserSynchronizer

logger = logging.getLogger(__name__)

AdminOpsFactory = Callable[[EndpointContext], AdminOpsAPI]


class ObjectUserReconciler:
    """Runs readiness gate, gateway locator, user and subuser synchronizers.

    The admin-ops client is built per pass by ``admin_ops_factory`` from the
    located endpoint, so tests can substitute any ``AdminOpsAPI``.
    """

    def __init__(
        self,
        gate: ReadinessGate,
        locator: GatewayLocator,
        admin_ops_factory: AdminOpsFactory,
        default_max_buckets: int = DEFAULT_MAX_BUCKETS,
        recheck_delay: int = READY_RECHECK_DELAY_SECONDS,
    ) -> None:
        self.gate = gate
        self.locator = locator
        self.admin_ops_factory = admin_ops_factory
        self.default_max_buckets = default_max_buckets
        self.recheck_delay = recheck_delay

    def reconcile(self, desired: DesiredUserSpec, namespace: str) -> ReconcileOutcome:
        """Run one pass and report its outcome.

        Dependency problems yield a Pending outcome without an error.
        Synchronizer errors yield a Failed outcome carrying the error.
        Kubernetes API errors raised while checking dependencies propagate.
        """
        attributes = {"user.name": desired.name, "user.store": desired.store}
        with trace_span("reconcile_object_user", kind=KIND_OBJECT_STORE_USER, attributes=attributes):
            try:
                with trace_span("check_cluster_ready"):
                    self.gate.check(namespace)
                with trace_span("locate_gateway"):
                    context = self.locator.locate(desired.store, namespace)
            except NotReadyError as e:
                logger.info(f"Deferring user {desired.name}: {e}")
                metrics.dependency_not_ready_total.labels(reason=e.reason).inc()
                add_span_attribute("reconcile.phase", "Pending")
                return pending(e, self.recheck_delay)

            admin_ops = self.admin_ops_factory(context)
            try:
                with trace_span("sync_user"):
                    result = UserSynchronizer(admin_ops, self.default_max_buckets).create_or_update(desired)
                with trace_span("sync_subusers"):
                    sync_subusers(admin_ops, desired.name, desired.subusers, result.user.subusers)
            except ObjectUserError as e:
                add_span_attribute("reconcile.phase", "Failed")
                return failed(e)

            add_span_attribute("reconcile.phase", "Ready")
            return ready(desired.store, desired.name, result, endpoint=context.endpoint)
