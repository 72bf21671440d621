"""Utilities for managing Kubernetes secrets."""

from __future__ import annotations

import base64
from typing import Any

from kubernetes import client

from ..constants import FIELD_MANAGER, LABEL_MANAGED_BY


def get_secret_value(
    api: client.CoreV1Api,
    namespace: str,
    secret_name: str,
    key: str,
) -> str:
    """Get a value from a Kubernetes secret.

    Args:
        api: Kubernetes API client
        namespace: Namespace of the secret
        secret_name: Name of the secret
        key: Key in the secret

    Returns:
        Secret value

    Raises:
        ValueError: If secret or key not found
    """
    try:
        secret = api.read_namespaced_secret(name=secret_name, namespace=namespace)
    except client.exceptions.ApiException as e:
        if e.status == 404:
            raise ValueError(f"Secret '{secret_name}' not found in namespace '{namespace}'") from e
        raise

    data = secret.data or {}
    if key not in data:
        raise ValueError(f"Key '{key}' not found in secret '{secret_name}'")

    value = data[key]
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return base64.b64decode(value).decode("utf-8")


def _encode(data: dict[str, str]) -> dict[str, str]:
    return {k: base64.b64encode(v.encode("utf-8")).decode("utf-8") for k, v in data.items()}


def create_secret(
    api: client.CoreV1Api,
    namespace: str,
    secret_name: str,
    data: dict[str, str],
    owner_references: list[dict[str, Any]] | None = None,
    secret_type: str = "Opaque",
) -> None:
    """Create a Kubernetes secret.

    Args:
        api: Kubernetes API client
        namespace: Namespace for the secret
        secret_name: Name of the secret
        data: Secret data (will be base64 encoded)
        owner_references: Owner references for the secret
        secret_type: Kubernetes secret type
    """
    secret = client.V1Secret(
        metadata=client.V1ObjectMeta(
            name=secret_name,
            namespace=namespace,
            owner_references=owner_references or [],
            labels={LABEL_MANAGED_BY: FIELD_MANAGER},
        ),
        type=secret_type,
        data=_encode(data),
    )

    api.create_namespaced_secret(
        namespace=namespace,
        body=secret,
        field_manager=FIELD_MANAGER,
    )


def update_secret(
    api: client.CoreV1Api,
    namespace: str,
    secret_name: str,
    data: dict[str, str],
) -> None:
    """Patch the data of an existing Kubernetes secret."""
    secret = client.V1Secret(
        metadata=client.V1ObjectMeta(name=secret_name, namespace=namespace),
        data=_encode(data),
    )

    api.patch_namespaced_secret(
        name=secret_name,
        namespace=namespace,
        body=secret,
        field_manager=FIELD_MANAGER,
    )


def apply_secret(
    api: client.CoreV1Api,
    namespace: str,
    secret_name: str,
    data: dict[str, str],
    owner_references: list[dict[str, Any]] | None = None,
    secret_type: str = "Opaque",
) -> None:
    """Create the secret, or patch its data when it already exists."""
    try:
        create_secret(api, namespace, secret_name, data, owner_references, secret_type)
    except client.exceptions.ApiException as e:
        if e.status != 409:
            raise
        update_secret(api, namespace, secret_name, data)
