"""Readiness gate for the dependent Ceph cluster."""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import client

from ..constants import (
    ACCEPTABLE_CLUSTER_HEALTH,
    API_GROUP,
    API_VERSION,
    CLUSTER_PHASE_READY,
    PLURAL_CLUSTERS,
)
from ..errors import NotReadyError

logger = logging.getLogger(__name__)


def check_cluster_ready(
    cluster: dict[str, Any] | None,
    acceptable_health: tuple[str, ...] = ACCEPTABLE_CLUSTER_HEALTH,
) -> None:
    """Decide whether synchronization may proceed against this cluster.

    Raises:
        NotReadyError: If the cluster is absent, not in the Ready phase, or
            reports an unacceptable health
    """
    if cluster is None:
        raise NotReadyError("CephCluster not found", reason="ClusterNotFound")

    name = cluster.get("metadata", {}).get("name", "unknown")
    status = cluster.get("status") or {}
    phase = status.get("phase") or ""
    health = (status.get("ceph") or {}).get("health") or ""

    if phase != CLUSTER_PHASE_READY:
        raise NotReadyError(
            f"CephCluster {name} is not ready (phase {phase or 'unknown'})",
            reason="ClusterNotReady",
        )
    if health not in acceptable_health:
        raise NotReadyError(
            f"CephCluster {name} health is {health or 'unknown'}",
            reason="ClusterUnhealthy",
        )


class ReadinessGate:
    """Looks up the CephCluster of a namespace and checks it is usable."""

    def __init__(
        self,
        api: client.CustomObjectsApi,
        acceptable_health: tuple[str, ...] = ACCEPTABLE_CLUSTER_HEALTH,
    ) -> None:
        self.api = api
        self.acceptable_health = acceptable_health

    def get_cluster(self, namespace: str) -> dict[str, Any] | None:
        """Return the first CephCluster in the namespace, if any."""
        clusters = self.api.list_namespaced_custom_object(
            group=API_GROUP,
            version=API_VERSION,
            namespace=namespace,
            plural=PLURAL_CLUSTERS,
        )
        items = clusters.get("items") or []
        if len(items) > 1:
            logger.warning(f"Found {len(items)} CephClusters in namespace {namespace}, using the first one")
        return items[0] if items else None

    def check(self, namespace: str) -> None:
        """Raise NotReadyError unless the namespace's cluster is ready."""
        check_cluster_ready(self.get_cluster(namespace), self.acceptable_health)
