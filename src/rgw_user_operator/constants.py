"""Constants for the RGW User Operator."""

import os

# API Group
API_GROUP = "ceph.rook.io"
API_VERSION = "v1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

# Resource Kinds
KIND_OBJECT_STORE_USER = "CephObjectStoreUser"

# Plurals
PLURAL_OBJECT_STORES = "cephobjectstores"
PLURAL_CLUSTERS = "cephclusters"

# Labels
LABEL_APP = "app"
LABEL_RGW = "rgw"
APP_RGW = "rook-ceph-rgw"
LABEL_MANAGED_BY = f"{API_GROUP}/managed-by"

# Finalizers
FINALIZER = f"{API_GROUP}/object-user-finalizer"

# Field Manager
FIELD_MANAGER = "rgw-user-operator"

# Phases
PHASE_PENDING = "Pending"
PHASE_READY = "Ready"
PHASE_FAILED = "Failed"
PHASE_DELETING = "Deleting"

# Cluster state
CLUSTER_PHASE_READY = "Ready"
ACCEPTABLE_CLUSTER_HEALTH = tuple(
    h.strip() for h in os.getenv("ACCEPTABLE_CLUSTER_HEALTH", "HEALTH_OK,HEALTH_WARN").split(",") if h.strip()
)

# Credentials
SECRET_NAME_PREFIX = "rook-ceph-object-user"
SECRET_TYPE = "kubernetes.io/rook"
ADMIN_OPS_SECRET_NAME = os.getenv("ADMIN_OPS_SECRET_NAME", "rgw-admin-ops-user")
ADMIN_OPS_ACCESS_KEY_FIELD = "accessKey"
ADMIN_OPS_SECRET_KEY_FIELD = "secretKey"
ADMIN_OPS_REGION = os.getenv("ADMIN_OPS_REGION", "us-east-1")
ADMIN_OPS_TIMEOUT_SECONDS = float(os.getenv("ADMIN_OPS_TIMEOUT_SECONDS", "30"))

# Provider-side default applied when a user does not override max buckets
DEFAULT_MAX_BUCKETS = int(os.getenv("DEFAULT_MAX_BUCKETS", "1000"))

# Re-check interval while dependencies are not ready
READY_RECHECK_DELAY_SECONDS = int(os.getenv("READY_RECHECK_DELAY_SECONDS", "10"))

# Exponential backoff after synchronizer failures
RETRY_MIN_DELAY_SECONDS = float(os.getenv("RETRY_MIN_DELAY_SECONDS", "1"))
RETRY_MAX_DELAY_SECONDS = float(os.getenv("RETRY_MAX_DELAY_SECONDS", "300"))
RETRY_BACKOFF_FACTOR = float(os.getenv("RETRY_BACKOFF_FACTOR", "2"))

# Condition Types
COND_READY = "Ready"
COND_DEPENDENCIES_NOT_READY = "DependenciesNotReady"
COND_SYNC_FAILED = "SyncFailed"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_WAITING = "WaitingForDependencies"
EVENT_REASON_VALIDATE_FAILED = "ValidateFailed"
EVENT_REASON_USER_CREATED = "UserCreated"
EVENT_REASON_USER_SYNCED = "UserSynced"
EVENT_REASON_USER_DELETED = "UserDeleted"
