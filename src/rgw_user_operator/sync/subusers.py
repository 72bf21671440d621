"""Subuser synchronization."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .. import metrics
from ..models import SubuserSpec
from ..services.rgw.base import AdminOpsAPI
from ..services.rgw.models import RemoteSubuser

logger = logging.getLogger(__name__)


@dataclass
class SubuserPlan:
    """Changes needed to converge the subusers of one user."""

    remove: list[str] = field(default_factory=list)
    create: list[SubuserSpec] = field(default_factory=list)
    modify: list[SubuserSpec] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.remove or self.create or self.modify)


def plan_subusers(desired: list[SubuserSpec], remote: list[RemoteSubuser]) -> SubuserPlan:
    """Diff desired subusers against the remote ones, by name.

    A renamed subuser shows up as a removal of the old name and a creation
    of the new one.
    """
    desired_by_name = {sub.name: sub for sub in desired}
    remote_by_name = {sub.name: sub for sub in remote}

    plan = SubuserPlan()
    plan.remove = [sub.name for sub in remote if sub.name not in desired_by_name]
    for sub in desired:
        existing = remote_by_name.get(sub.name)
        if existing is None:
            plan.create.append(sub)
        elif existing.access != sub.access:
            plan.modify.append(sub)
    return plan


def sync_subusers(
    admin_ops: AdminOpsAPI,
    uid: str,
    desired: list[SubuserSpec],
    remote: list[RemoteSubuser],
) -> SubuserPlan:
    """Converge the subusers of ``uid`` to ``desired``.

    Runs a removal pass, a creation pass and a modification pass. The first
    failing call raises and leaves the remaining changes for the next pass.

    Returns:
        The plan that was applied
    """
    plan = plan_subusers(desired, remote)
    if plan.empty:
        return plan

    for name in plan.remove:
        logger.info(f"Removing subuser {name} of user {uid}")
        admin_ops.remove_subuser(uid, name)
        metrics.subuser_operations_total.labels(operation="remove").inc()

    for sub in plan.create:
        logger.info(f"Creating subuser {sub.name} of user {uid} with access {sub.access}")
        admin_ops.create_subuser(uid, sub.name, sub.access)
        metrics.subuser_operations_total.labels(operation="create").inc()

    for sub in plan.modify:
        logger.info(f"Changing access of subuser {sub.name} of user {uid} to {sub.access}")
        admin_ops.modify_subuser(uid, sub.name, sub.access)
        metrics.subuser_operations_total.labels(operation="modify").inc()

    return plan
