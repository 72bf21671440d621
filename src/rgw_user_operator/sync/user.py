"""User synchronization: identity attributes, quota and capabilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..constants import DEFAULT_MAX_BUCKETS
from ..errors import InvalidSpecificationError, UserNotFoundError
from ..models import DesiredUserSpec, UserCapabilities, UserQuotaSpec
from ..services.rgw.base import AdminOpsAPI
from ..services.rgw.models import UNLIMITED, Capability, QuotaState, RemoteUserRecord

logger = logging.getLogger(__name__)

CAPABILITY_ORDER = ("users", "buckets", "metadata", "usage", "zone")

# The gateway reports a read plus write grant as "*"
FULL_PERMISSION = "*"


def desired_quota_state(quota: UserQuotaSpec | None) -> QuotaState:
    """Translate a requested quota into the full state sent to the gateway."""
    if quota is None or (quota.max_objects is None and quota.max_size is None):
        return QuotaState(enabled=False, max_objects=UNLIMITED, max_size=UNLIMITED)
    return QuotaState(
        enabled=True,
        max_objects=quota.max_objects if quota.max_objects is not None else UNLIMITED,
        max_size=quota.max_size if quota.max_size is not None else UNLIMITED,
    )


def normalize_cap_perm(perm: str) -> str:
    """Canonical spelling of a capability permission.

    ``read, write``, ``read,write`` and ``write, read`` all collapse to ``*``
    so a declared grant compares equal to what the gateway reports back.
    """
    parts = {part.strip() for part in perm.split(",") if part.strip()}
    if FULL_PERMISSION in parts or {"read", "write"} <= parts:
        return FULL_PERMISSION
    return ",".join(sorted(parts))


def format_caps(pairs: list[tuple[str, str]]) -> str:
    """Render capabilities as ``type=perm;`` segments in canonical order."""
    def order(pair: tuple[str, str]) -> tuple[int, str]:
        cap_type = pair[0]
        if cap_type in CAPABILITY_ORDER:
            return CAPABILITY_ORDER.index(cap_type), cap_type
        return len(CAPABILITY_ORDER), cap_type

    return "".join(
        f"{cap_type}={normalize_cap_perm(perm)};" for cap_type, perm in sorted(pairs, key=order)
    )


def desired_caps(capabilities: UserCapabilities | None) -> str:
    """Capability string for the desired spec, empty when none requested."""
    if capabilities is None:
        return ""
    return format_caps(capabilities.as_pairs())


def applied_caps(caps: list[Capability]) -> str:
    """Capability string currently applied on the gateway."""
    return format_caps([(cap.type, cap.perm) for cap in caps if cap.type and cap.perm])


@dataclass
class UserSyncResult:
    """What a create-or-update pass did."""

    user: RemoteUserRecord
    created: bool = False
    updated_attributes: tuple[str, ...] = ()
    quota: QuotaState | None = None
    caps_removed: str = ""
    caps_added: str = ""


class UserSynchronizer:
    """Converges one user's attributes, quota and capability string."""

    def __init__(self, admin_ops: AdminOpsAPI, default_max_buckets: int = DEFAULT_MAX_BUCKETS) -> None:
        self.admin_ops = admin_ops
        self.default_max_buckets = default_max_buckets

    def create_or_update(self, desired: DesiredUserSpec) -> UserSyncResult:
        """Create the user or bring its attributes, quota and caps in line.

        Admin-ops failures propagate unchanged and nothing already applied
        is rolled back.

        Raises:
            InvalidSpecificationError: If the user name is empty
            AdminOpsError: If any admin-ops call fails
        """
        if not desired.name:
            raise InvalidSpecificationError("user name is required")

        result = self._ensure_user(desired)
        result.quota = self._sync_quota(desired)
        result.caps_removed, result.caps_added = self._sync_caps(desired, result.user)
        return result

    def _ensure_user(self, desired: DesiredUserSpec) -> UserSyncResult:
        uid = desired.name
        display_name = desired.effective_display_name
        max_buckets = desired.effective_max_buckets(self.default_max_buckets)

        try:
            current = self.admin_ops.get_user(uid)
        except UserNotFoundError:
            logger.info(f"User {uid} does not exist, creating it")
            user = self.admin_ops.create_user(uid, display_name, max_buckets)
            return UserSyncResult(user=user, created=True)

        changes: dict[str, object] = {}
        if current.display_name != display_name:
            changes["display_name"] = display_name
        if current.max_buckets != max_buckets:
            changes["max_buckets"] = max_buckets

        if not changes:
            return UserSyncResult(user=current)

        logger.info(f"Updating user {uid}: {', '.join(sorted(changes))}")
        updated = self.admin_ops.modify_user(uid, **changes)
        # caps and subusers are not touched by a modify
        updated.caps = current.caps
        updated.subusers = current.subusers
        return UserSyncResult(user=updated, updated_attributes=tuple(sorted(changes)))

    def _sync_quota(self, desired: DesiredUserSpec) -> QuotaState:
        quota = desired_quota_state(desired.quota)
        self.admin_ops.set_user_quota(desired.name, quota.enabled, quota.max_objects, quota.max_size)
        return quota

    def _sync_caps(self, desired: DesiredUserSpec, user: RemoteUserRecord) -> tuple[str, str]:
        """Remove the previously applied caps when they change, then add the desired ones.

        The gateway cannot edit a capability string in place, so a change is
        always a removal of the whole applied string followed by an addition.
        """
        uid = desired.name
        previous = applied_caps(user.caps)
        wanted = desired_caps(desired.capabilities)

        removed = ""
        if previous and previous != wanted:
            logger.info(f"Removing capabilities {previous} from user {uid}")
            self.admin_ops.remove_user_caps(uid, previous)
            removed = previous

        added = ""
        if wanted:
            self.admin_ops.add_user_caps(uid, wanted)
            added = wanted

        return removed, added
