"""Models for RGW admin-ops records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNLIMITED = -1

# Access levels as accepted on the desired side and sent on the wire
ACCESS_NONE = "none"
ACCESS_READ = "read"
ACCESS_WRITE = "write"
ACCESS_READWRITE = "readwrite"
ACCESS_FULL = "full"

ACCESS_LEVELS = (ACCESS_NONE, ACCESS_READ, ACCESS_WRITE, ACCESS_READWRITE, ACCESS_FULL)

# RGW reports access levels with its own spelling
_REPORTED_ACCESS = {
    "<none>": ACCESS_NONE,
    "none": ACCESS_NONE,
    "read": ACCESS_READ,
    "write": ACCESS_WRITE,
    "read-write": ACCESS_READWRITE,
    "readwrite": ACCESS_READWRITE,
    "full-control": ACCESS_FULL,
    "full": ACCESS_FULL,
}


def normalize_access(value: str | None) -> str:
    """Map an access level reported by RGW onto the desired vocabulary."""
    if not value:
        return ACCESS_NONE
    return _REPORTED_ACCESS.get(value.strip().lower(), value.strip().lower())


@dataclass
class QuotaState:
    """Quota as stored on the gateway. -1 means unlimited."""

    enabled: bool = False
    max_objects: int = UNLIMITED
    max_size: int = UNLIMITED

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> QuotaState:
        data = data or {}
        return cls(
            enabled=bool(data.get("enabled", False)),
            max_objects=int(data.get("max_objects", UNLIMITED)),
            max_size=int(data.get("max_size", UNLIMITED)),
        )


@dataclass
class RemoteSubuser:
    """A subuser attached to a remote user."""

    name: str
    access: str


@dataclass
class Capability:
    """A single explicit capability grant, e.g. users=read."""

    type: str
    perm: str


@dataclass
class UserKey:
    """An S3 key pair."""

    user: str
    access_key: str
    secret_key: str


@dataclass
class RemoteUserRecord:
    """A user as observed through the admin-ops API."""

    user_id: str
    display_name: str = ""
    max_buckets: int | None = None
    subusers: list[RemoteSubuser] = field(default_factory=list)
    caps: list[Capability] = field(default_factory=list)
    user_quota: QuotaState = field(default_factory=QuotaState)
    keys: list[UserKey] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RemoteUserRecord:
        """Build a record from an admin-ops ``user`` JSON document.

        Subuser ids are reported as ``<uid>:<name>``; only the name part is
        kept.
        """
        user_id = data.get("user_id") or data.get("id") or ""
        prefix = f"{user_id}:"

        subusers = []
        for entry in data.get("subusers") or []:
            sub_id = entry.get("id", "")
            if sub_id.startswith(prefix):
                sub_id = sub_id[len(prefix):]
            subusers.append(RemoteSubuser(name=sub_id, access=normalize_access(entry.get("permissions"))))

        caps = [
            Capability(type=cap.get("type", ""), perm=cap.get("perm", cap.get("perms", "")))
            for cap in data.get("caps") or []
        ]

        keys = [
            UserKey(
                user=key.get("user", user_id),
                access_key=key.get("access_key", ""),
                secret_key=key.get("secret_key", ""),
            )
            for key in data.get("keys") or []
        ]

        max_buckets = data.get("max_buckets")
        return cls(
            user_id=user_id,
            display_name=data.get("display_name", ""),
            max_buckets=int(max_buckets) if max_buckets is not None else None,
            subusers=subusers,
            caps=caps,
            user_quota=QuotaState.from_dict(data.get("user_quota")),
            keys=keys,
        )
