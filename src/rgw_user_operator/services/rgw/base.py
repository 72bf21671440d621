"""Base RGW admin-ops interface."""

from __future__ import annotations

from typing import Protocol

from .models import RemoteUserRecord


class AdminOpsAPI(Protocol):
    """Protocol defining the admin-ops operations the synchronizers use.

    Every call is a self-contained request/response. ``get_user`` raises
    ``UserNotFoundError`` when the user does not exist; every other failure
    raises ``AdminOpsError``.
    """

    def get_user(self, uid: str) -> RemoteUserRecord:
        """Fetch a user."""
        ...

    def create_user(self, uid: str, display_name: str, max_buckets: int) -> RemoteUserRecord:
        """Create a user."""
        ...

    def modify_user(
        self,
        uid: str,
        display_name: str | None = None,
        max_buckets: int | None = None,
    ) -> RemoteUserRecord:
        """Update the given user attributes, leaving the others untouched."""
        ...

    def remove_user(self, uid: str) -> None:
        """Delete a user."""
        ...

    def set_user_quota(self, uid: str, enabled: bool, max_objects: int, max_size: int) -> None:
        """Replace the user quota. -1 means unlimited."""
        ...

    def add_user_caps(self, uid: str, caps: str) -> None:
        """Add an explicit capability string such as ``users=read;``."""
        ...

    def remove_user_caps(self, uid: str, caps: str) -> None:
        """Remove a previously applied capability string."""
        ...

    def create_subuser(self, uid: str, name: str, access: str) -> None:
        """Create a subuser."""
        ...

    def modify_subuser(self, uid: str, name: str, access: str) -> None:
        """Change a subuser's access level."""
        ...

    def remove_subuser(self, uid: str, name: str) -> None:
        """Delete a subuser and its keys."""
        ...
