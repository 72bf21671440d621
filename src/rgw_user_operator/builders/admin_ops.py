"""Builder for RGW admin-ops clients."""

from __future__ import annotations

import os

from ..services.rgw.client import RGWAdminClient
from ..sync.locator import EndpointContext


def create_admin_ops_client(context: EndpointContext) -> RGWAdminClient:
    """Create an admin-ops client for the located gateway.

    Args:
        context: Endpoint and admin-ops credentials for the store

    Returns:
        Configured admin-ops client
    """
    insecure_skip_verify = os.getenv("ADMIN_OPS_INSECURE_SKIP_VERIFY", "false").lower() == "true"
    return RGWAdminClient(
        endpoint=context.endpoint,
        access_key=context.access_key,
        secret_key=context.secret_key,
        insecure_skip_verify=insecure_skip_verify,
    )
