"""Synchronization engine: readiness gate, gateway locator, user and subuser synchronizers."""

from .locator import EndpointContext, GatewayLocator
from .outcome import ReconcileOutcome, secret_name_for
from .pipeline import AdminOpsFactory, ObjectUserReconciler
from .readiness import ReadinessGate, check_cluster_ready
from .subusers import SubuserPlan, plan_subusers, sync_subusers
from .user import UserSynchronizer, UserSyncResult, desired_quota_state

__all__ = [
    "AdminOpsFactory",
    "EndpointContext",
    "GatewayLocator",
    "ObjectUserReconciler",
    "ReadinessGate",
    "ReconcileOutcome",
    "SubuserPlan",
    "UserSyncResult",
    "UserSynchronizer",
    "check_cluster_ready",
    "desired_quota_state",
    "plan_subusers",
    "secret_name_for",
    "sync_subusers",
]
