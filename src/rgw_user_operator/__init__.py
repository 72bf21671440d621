"""Kubernetes operator reconciling CephObjectStoreUser resources against the RGW admin-ops API."""

__version__ = "0.1.0"
