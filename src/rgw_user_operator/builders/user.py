"""Builder for desired user specifications."""

from __future__ import annotations

from typing import Any

from kubernetes.utils import parse_quantity

from ..errors import InvalidSpecificationError
from ..models import DesiredUserSpec, SubuserSpec, UserCapabilities, UserQuotaSpec
from ..services.rgw.models import ACCESS_LEVELS


def parse_byte_quantity(value: Any) -> int:
    """Normalize a byte quantity ("10G", "1Gi", 1024) to a raw byte count.

    Raises:
        InvalidSpecificationError: If the value is not a valid quantity
    """
    try:
        quantity = parse_quantity(value)
    except (TypeError, ValueError, ArithmeticError) as e:
        raise InvalidSpecificationError(f"invalid byte quantity {value!r}: {e}") from e
    if quantity < 0:
        raise InvalidSpecificationError(f"byte quantity {value!r} must not be negative")
    return int(quantity)


def _parse_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidSpecificationError(f"{field_name} must be an integer, got {value!r}") from e


def _build_quota(quotas: dict[str, Any]) -> UserQuotaSpec | None:
    max_objects = quotas.get("maxObjects")
    max_size = quotas.get("maxSize")
    if max_objects is None and max_size is None:
        return None
    return UserQuotaSpec(
        max_objects=_parse_int(max_objects, "quotas.maxObjects") if max_objects is not None else None,
        max_size=parse_byte_quantity(max_size) if max_size is not None else None,
    )


def _build_capabilities(caps: dict[str, Any] | None) -> UserCapabilities | None:
    if not caps:
        return None
    capabilities = UserCapabilities(
        user=caps.get("user"),
        bucket=caps.get("bucket"),
        metadata=caps.get("metadata"),
        usage=caps.get("usage"),
        zone=caps.get("zone"),
    )
    if not capabilities.as_pairs():
        return None
    return capabilities


def _build_subusers(entries: list[dict[str, Any]] | None) -> list[SubuserSpec]:
    subusers = []
    seen: set[str] = set()
    for entry in entries or []:
        name = entry.get("name")
        if not name:
            raise InvalidSpecificationError("subuser name is required")
        if name in seen:
            raise InvalidSpecificationError(f"subuser {name} is declared more than once")
        access = entry.get("access") or "none"
        if access not in ACCESS_LEVELS:
            raise InvalidSpecificationError(
                f"subuser {name} has invalid access {access!r}, expected one of {', '.join(ACCESS_LEVELS)}"
            )
        seen.add(name)
        subusers.append(SubuserSpec(name=name, access=access))
    return subusers


def create_user_spec_from_resource(spec: dict[str, Any], meta: dict[str, Any]) -> DesiredUserSpec:
    """Create a desired user specification from a CephObjectStoreUser resource.

    The user id is the resource name. An empty name is passed through
    unchanged; the synchronizer rejects it.

    Args:
        spec: CephObjectStoreUser spec
        meta: Resource metadata

    Returns:
        DesiredUserSpec for the synchronizers

    Raises:
        InvalidSpecificationError: If a field cannot be interpreted
    """
    quotas = spec.get("quotas") or {}
    max_buckets = quotas.get("maxBuckets")

    return DesiredUserSpec(
        name=meta.get("name") or "",
        store=spec.get("store") or "",
        display_name=spec.get("displayName") or "",
        max_buckets=_parse_int(max_buckets, "quotas.maxBuckets") if max_buckets is not None else None,
        quota=_build_quota(quotas),
        capabilities=_build_capabilities(spec.get("capabilities")),
        subusers=_build_subusers(spec.get("subUsers")),
    )
