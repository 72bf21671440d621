"""Gateway locator: resolves an object store to a reachable admin-ops endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from kubernetes import client

from ..constants import (
    ADMIN_OPS_ACCESS_KEY_FIELD,
    ADMIN_OPS_SECRET_KEY_FIELD,
    ADMIN_OPS_SECRET_NAME,
    API_GROUP,
    API_VERSION,
    APP_RGW,
    LABEL_APP,
    LABEL_RGW,
    PLURAL_OBJECT_STORES,
)
from ..errors import NotReadyError
from ..utils.secrets import get_secret_value

logger = logging.getLogger(__name__)


@dataclass
class EndpointContext:
    """Where and how to reach a store's admin-ops API for one pass."""

    store: str
    namespace: str
    endpoint: str
    access_key: str
    secret_key: str

    def __repr__(self) -> str:
        return f"EndpointContext(store={self.store!r}, namespace={self.namespace!r}, endpoint={self.endpoint!r})"


def resolve_endpoint(store_obj: dict[str, Any], namespace: str) -> str:
    """Return the gateway URL of an object store.

    The endpoint published in the store status wins; otherwise the in-cluster
    service URL is derived from the gateway ports.
    """
    name = store_obj.get("metadata", {}).get("name", "")
    info = (store_obj.get("status") or {}).get("info") or {}
    if info.get("endpoint"):
        return info["endpoint"]

    gateway = (store_obj.get("spec") or {}).get("gateway") or {}
    port = gateway.get("port")
    secure_port = gateway.get("securePort")
    host = f"rook-ceph-rgw-{name}.{namespace}.svc"
    if not port and secure_port:
        return f"https://{host}:{secure_port}"
    return f"http://{host}:{port or 80}"


def gateway_selector(store: str) -> str:
    """Label selector matching the gateway pods of a store."""
    return f"{LABEL_APP}={APP_RGW},{LABEL_RGW}={store}"


class GatewayLocator:
    """Finds an object store and at least one running gateway for it."""

    def __init__(
        self,
        custom_api: client.CustomObjectsApi,
        core_api: client.CoreV1Api,
        admin_secret_name: str = ADMIN_OPS_SECRET_NAME,
    ) -> None:
        self.custom_api = custom_api
        self.core_api = core_api
        self.admin_secret_name = admin_secret_name

    def get_store(self, store: str, namespace: str) -> dict[str, Any] | None:
        """Return the CephObjectStore definition, or None when absent."""
        try:
            return self.custom_api.get_namespaced_custom_object(
                group=API_GROUP,
                version=API_VERSION,
                namespace=namespace,
                plural=PLURAL_OBJECT_STORES,
                name=store,
            )
        except client.exceptions.ApiException as e:
            if e.status == 404:
                return None
            raise

    def has_running_gateway(self, store: str, namespace: str) -> bool:
        """Check whether any gateway pod of the store is running."""
        pods = self.core_api.list_namespaced_pod(
            namespace=namespace,
            label_selector=gateway_selector(store),
            field_selector="status.phase=Running",
        )
        return bool(pods.items)

    def locate(self, store: str, namespace: str) -> EndpointContext:
        """Resolve the admin-ops endpoint context for a store.

        Raises:
            NotReadyError: If the store is absent, no gateway pod is running,
                or the admin-ops credentials have not been provisioned yet
        """
        store_obj = self.get_store(store, namespace)
        if store_obj is None:
            raise NotReadyError(
                f"CephObjectStore {store} not found in namespace {namespace}",
                reason="ObjectStoreNotFound",
            )

        if not self.has_running_gateway(store, namespace):
            raise NotReadyError(
                f"No running gateway pod for CephObjectStore {store}",
                reason="GatewayNotRunning",
            )

        try:
            access_key = get_secret_value(
                self.core_api, namespace, self.admin_secret_name, ADMIN_OPS_ACCESS_KEY_FIELD
            )
            secret_key = get_secret_value(
                self.core_api, namespace, self.admin_secret_name, ADMIN_OPS_SECRET_KEY_FIELD
            )
        except ValueError as e:
            raise NotReadyError(str(e), reason="AdminCredentialsNotFound") from e

        endpoint = resolve_endpoint(store_obj, namespace)
        logger.debug(f"Located gateway for store {store} at {endpoint}")
        return EndpointContext(
            store=store,
            namespace=namespace,
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
        )
