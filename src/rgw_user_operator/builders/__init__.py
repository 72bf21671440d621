"""Builders turning resources into synchronizer inputs."""

from .admin_ops import create_admin_ops_client
from .user import create_user_spec_from_resource, parse_byte_quantity

__all__ = ["create_admin_ops_client", "create_user_spec_from_resource", "parse_byte_quantity"]
