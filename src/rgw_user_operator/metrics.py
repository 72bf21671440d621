"""Prometheus metrics for the RGW User Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "rgw_user_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "rgw_user_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

error_total = Counter(
    "rgw_user_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

resource_status_total = Counter(
    "rgw_user_operator_resource_status_total",
    "Resource status transitions by phase",
    ["kind", "status"],
)

# Admin-ops API metrics
admin_ops_call_total = Counter(
    "rgw_user_operator_admin_ops_call_total",
    "Total number of RGW admin-ops API calls",
    ["operation", "result"],
)

admin_ops_call_duration_seconds = Histogram(
    "rgw_user_operator_admin_ops_call_duration_seconds",
    "Duration of RGW admin-ops API calls in seconds",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

subuser_operations_total = Counter(
    "rgw_user_operator_subuser_operations_total",
    "Total number of subuser changes applied",
    ["operation"],
)

# Dependency readiness
dependency_not_ready_total = Counter(
    "rgw_user_operator_dependency_not_ready_total",
    "Total number of passes deferred because a dependency was not ready",
    ["reason"],
)
