"""Error taxonomy for object store user reconciliation."""

from __future__ import annotations


class ObjectUserError(Exception):
    """Base class for all reconciliation errors."""


class NotReadyError(ObjectUserError):
    """A dependency (cluster, object store, gateway pod) is not usable yet.

    This is an expected, transient condition. It is converted into a
    scheduled re-check and never reported as a failure.
    """

    def __init__(self, message: str, reason: str = "NotReady") -> None:
        super().__init__(message)
        self.reason = reason


class InvalidSpecificationError(ObjectUserError):
    """The desired specification cannot be applied as written."""


class AdminOpsError(ObjectUserError):
    """The RGW admin-ops API rejected a request or could not be reached."""

    def __init__(self, message: str, status: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code


class UserNotFoundError(AdminOpsError):
    """The requested user does not exist on the gateway."""

    def __init__(self, uid: str) -> None:
        super().__init__(f"User {uid} not found", status=404, code="NoSuchUser")
        self.uid = uid
