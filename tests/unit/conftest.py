"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import Any

import pytest

from rgw_user_operator.errors import UserNotFoundError
from rgw_user_operator.services.rgw.models import (
    Capability,
    QuotaState,
    RemoteSubuser,
    RemoteUserRecord,
    UserKey,
)


def _parse_caps(caps: str) -> list[tuple[str, str]]:
    pairs = []
    for segment in caps.split(";"):
        if not segment.strip():
            continue
        cap_type, _, perm = segment.partition("=")
        pairs.append((cap_type.strip(), perm.strip()))
    return pairs


class FakeAdminOps:
    """In-memory gateway implementing the admin-ops operations.

    Every call is recorded in ``calls`` as ``(operation, args)``.
    """

    def __init__(self) -> None:
        self.users: dict[str, RemoteUserRecord] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail_on: dict[str, Exception] = {}

    def _record(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, args))
        if operation in self.fail_on:
            raise self.fail_on[operation]

    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]

    def add_user(self, uid: str, **kwargs: Any) -> RemoteUserRecord:
        user = RemoteUserRecord(user_id=uid, **kwargs)
        self.users[uid] = user
        return user

    def _get(self, uid: str) -> RemoteUserRecord:
        if uid not in self.users:
            raise UserNotFoundError(uid)
        return self.users[uid]

    def _snapshot(self, user: RemoteUserRecord) -> RemoteUserRecord:
        return RemoteUserRecord(
            user_id=user.user_id,
            display_name=user.display_name,
            max_buckets=user.max_buckets,
            subusers=[RemoteSubuser(s.name, s.access) for s in user.subusers],
            caps=[Capability(c.type, c.perm) for c in user.caps],
            user_quota=QuotaState(user.user_quota.enabled, user.user_quota.max_objects, user.user_quota.max_size),
            keys=list(user.keys),
        )

    def get_user(self, uid: str) -> RemoteUserRecord:
        self._record("get_user", uid)
        return self._snapshot(self._get(uid))

    def create_user(self, uid: str, display_name: str, max_buckets: int) -> RemoteUserRecord:
        self._record("create_user", uid, display_name, max_buckets)
        user = self.add_user(
            uid,
            display_name=display_name,
            max_buckets=max_buckets,
            keys=[UserKey(user=uid, access_key=f"{uid}-access", secret_key=f"{uid}-secret")],
        )
        return self._snapshot(user)

    def modify_user(
        self,
        uid: str,
        display_name: str | None = None,
        max_buckets: int | None = None,
    ) -> RemoteUserRecord:
        self._record("modify_user", uid, display_name, max_buckets)
        user = self._get(uid)
        if display_name is not None:
            user.display_name = display_name
        if max_buckets is not None:
            user.max_buckets = max_buckets
        return self._snapshot(user)

    def remove_user(self, uid: str) -> None:
        self._record("remove_user", uid)
        self._get(uid)
        del self.users[uid]

    def set_user_quota(self, uid: str, enabled: bool, max_objects: int, max_size: int) -> None:
        self._record("set_user_quota", uid, enabled, max_objects, max_size)
        self._get(uid).user_quota = QuotaState(enabled, max_objects, max_size)

    def add_user_caps(self, uid: str, caps: str) -> None:
        self._record("add_user_caps", uid, caps)
        user = self._get(uid)
        for cap_type, perm in _parse_caps(caps):
            user.caps = [c for c in user.caps if c.type != cap_type]
            user.caps.append(Capability(cap_type, perm))

    def remove_user_caps(self, uid: str, caps: str) -> None:
        self._record("remove_user_caps", uid, caps)
        user = self._get(uid)
        removed = {cap_type for cap_type, _ in _parse_caps(caps)}
        user.caps = [c for c in user.caps if c.type not in removed]

    def create_subuser(self, uid: str, name: str, access: str) -> None:
        self._record("create_subuser", uid, name, access)
        self._get(uid).subusers.append(RemoteSubuser(name, access))

    def modify_subuser(self, uid: str, name: str, access: str) -> None:
        self._record("modify_subuser", uid, name, access)
        for sub in self._get(uid).subusers:
            if sub.name == name:
                sub.access = access

    def remove_subuser(self, uid: str, name: str) -> None:
        self._record("remove_subuser", uid, name)
        user = self._get(uid)
        user.subusers = [s for s in user.subusers if s.name != name]


@pytest.fixture
def admin_ops() -> FakeAdminOps:
    """Empty in-memory gateway."""
    return FakeAdminOps()


@pytest.fixture
def ready_cluster() -> dict[str, Any]:
    """A CephCluster in the Ready phase with HEALTH_OK."""
    return {
        "metadata": {"name": "my-cluster", "namespace": "rook-ceph"},
        "status": {"phase": "Ready", "ceph": {"health": "HEALTH_OK"}},
    }


@pytest.fixture
def object_store() -> dict[str, Any]:
    """A CephObjectStore serving plain HTTP on port 80."""
    return {
        "metadata": {"name": "my-store", "namespace": "rook-ceph"},
        "spec": {"gateway": {"port": 80}},
        "status": {},
    }
