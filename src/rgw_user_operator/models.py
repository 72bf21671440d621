"""Desired-state models for object store users."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import DEFAULT_MAX_BUCKETS


@dataclass
class UserQuotaSpec:
    """Requested user quota. Unset limits mean unlimited."""

    max_objects: int | None = None
    max_size: int | None = None


@dataclass
class UserCapabilities:
    """Explicit admin capabilities requested for a user."""

    user: str | None = None
    bucket: str | None = None
    metadata: str | None = None
    usage: str | None = None
    zone: str | None = None

    def as_pairs(self) -> list[tuple[str, str]]:
        """Return the set capabilities as (type, perm) in canonical order."""
        pairs = [
            ("users", self.user),
            ("buckets", self.bucket),
            ("metadata", self.metadata),
            ("usage", self.usage),
            ("zone", self.zone),
        ]
        return [(cap_type, perm) for cap_type, perm in pairs if perm]


@dataclass
class SubuserSpec:
    """A named subuser and its access level."""

    name: str
    access: str


@dataclass
class DesiredUserSpec:
    """Declared state of one object store user."""

    name: str
    store: str
    display_name: str = ""
    max_buckets: int | None = None
    quota: UserQuotaSpec | None = None
    capabilities: UserCapabilities | None = None
    subusers: list[SubuserSpec] = field(default_factory=list)

    @property
    def effective_display_name(self) -> str:
        return self.display_name or self.name

    def effective_max_buckets(self, default: int = DEFAULT_MAX_BUCKETS) -> int:
        return self.max_buckets if self.max_buckets is not None else default
