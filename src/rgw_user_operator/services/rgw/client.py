"""RGW admin-ops client implementation."""

from __future__ import annotations

import json
import logging
import time
from typing import Any
from urllib.parse import urlencode

from botocore.auth import S3SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from botocore.exceptions import BotoCoreError
from botocore.httpsession import URLLib3Session

from ... import metrics
from ...constants import ADMIN_OPS_REGION, ADMIN_OPS_TIMEOUT_SECONDS
from ...errors import AdminOpsError, UserNotFoundError
from .models import RemoteUserRecord

logger = logging.getLogger(__name__)

USER_PATH = "/admin/user"


class RGWAdminClient:
    """Client for the RGW admin-ops REST API.

    Requests are signed with SigV4 using the admin-ops user's S3 keys and
    sent through botocore's urllib3 session. The client keeps no state
    between calls, so one instance may be shared across threads.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        region: str = ADMIN_OPS_REGION,
        timeout: float = ADMIN_OPS_TIMEOUT_SECONDS,
        insecure_skip_verify: bool = False,
        http_session: Any | None = None,
    ) -> None:
        """Initialize RGW admin-ops client.

        Args:
            endpoint: Gateway URL, e.g. http://rook-ceph-rgw-my-store.rook-ceph.svc:80
            access_key: Admin-ops user access key
            secret_key: Admin-ops user secret key
            region: Region used for request signing
            timeout: Per-request timeout in seconds
            insecure_skip_verify: Skip TLS verification
            http_session: Optional session replacing the default URLLib3Session
        """
        if "://" not in endpoint:
            endpoint = f"http://{endpoint}"
        self.endpoint = endpoint.rstrip("/")
        self.region = region
        self.timeout = timeout
        self._credentials = Credentials(access_key, secret_key)
        self._session = http_session or URLLib3Session(
            verify=not insecure_skip_verify,
            timeout=timeout,
        )

    def _request(self, method: str, operation: str, params: dict[str, Any]) -> Any:
        """Sign and send one admin-ops request and decode the JSON reply."""
        query = {"format": "json", **{k: v for k, v in params.items() if v is not None}}
        url = f"{self.endpoint}{USER_PATH}?{urlencode(sorted(query.items()))}"

        request = AWSRequest(method=method, url=url, data=b"")
        S3SigV4Auth(self._credentials, "s3", self.region).add_auth(request)

        start_time = time.time()
        try:
            response = self._session.send(request.prepare())
        except BotoCoreError as e:
            metrics.admin_ops_call_total.labels(operation=operation, result="error").inc()
            raise AdminOpsError(f"{operation} request failed: {e}") from e
        finally:
            duration = time.time() - start_time
            metrics.admin_ops_call_duration_seconds.labels(operation=operation).observe(duration)

        body = response.content or b""
        if response.status_code >= 300:
            metrics.admin_ops_call_total.labels(operation=operation, result="error").inc()
            code = _error_code(body)
            if response.status_code == 404 and code == "NoSuchUser":
                raise UserNotFoundError(params.get("uid", ""))
            raise AdminOpsError(
                f"{operation} failed with status {response.status_code}: {code or 'unknown error'}",
                status=response.status_code,
                code=code,
            )

        metrics.admin_ops_call_total.labels(operation=operation, result="success").inc()
        if not body.strip():
            return {}
        try:
            return json.loads(body)
        except ValueError as e:
            raise AdminOpsError(f"{operation} returned a malformed response: {e}") from e

    def _user_request(self, method: str, operation: str, params: dict[str, Any]) -> RemoteUserRecord:
        data = self._request(method, operation, params)
        if not isinstance(data, dict) or not (data.get("user_id") or data.get("id")):
            raise AdminOpsError(f"{operation} returned a malformed user record")
        return RemoteUserRecord.from_dict(data)

    def get_user(self, uid: str) -> RemoteUserRecord:
        """Fetch a user."""
        return self._user_request("GET", "get_user", {"uid": uid})

    def create_user(self, uid: str, display_name: str, max_buckets: int) -> RemoteUserRecord:
        """Create a user."""
        logger.info(f"Creating RGW user {uid}")
        return self._user_request(
            "PUT",
            "create_user",
            {"uid": uid, "display-name": display_name, "max-buckets": max_buckets},
        )

    def modify_user(
        self,
        uid: str,
        display_name: str | None = None,
        max_buckets: int | None = None,
    ) -> RemoteUserRecord:
        """Update the given user attributes."""
        logger.info(f"Modifying RGW user {uid}")
        return self._user_request(
            "POST",
            "modify_user",
            {"uid": uid, "display-name": display_name, "max-buckets": max_buckets},
        )

    def remove_user(self, uid: str) -> None:
        """Delete a user."""
        logger.info(f"Removing RGW user {uid}")
        self._request("DELETE", "remove_user", {"uid": uid})

    def set_user_quota(self, uid: str, enabled: bool, max_objects: int, max_size: int) -> None:
        """Replace the user quota."""
        self._request(
            "PUT",
            "set_user_quota",
            {
                "uid": uid,
                "quota": "",
                "quota-type": "user",
                "enabled": "true" if enabled else "false",
                "max-objects": max_objects,
                "max-size": max_size,
            },
        )

    def add_user_caps(self, uid: str, caps: str) -> None:
        """Add explicit capabilities."""
        self._request("PUT", "add_user_caps", {"uid": uid, "caps": "", "user-caps": caps})

    def remove_user_caps(self, uid: str, caps: str) -> None:
        """Remove explicit capabilities."""
        self._request("DELETE", "remove_user_caps", {"uid": uid, "caps": "", "user-caps": caps})

    def create_subuser(self, uid: str, name: str, access: str) -> None:
        """Create a subuser."""
        self._request(
            "PUT",
            "create_subuser",
            {"uid": uid, "subuser": _subuser_id(uid, name), "access": access},
        )

    def modify_subuser(self, uid: str, name: str, access: str) -> None:
        """Change a subuser's access level."""
        self._request(
            "POST",
            "modify_subuser",
            {"uid": uid, "subuser": _subuser_id(uid, name), "access": access},
        )

    def remove_subuser(self, uid: str, name: str) -> None:
        """Delete a subuser together with its keys."""
        self._request(
            "DELETE",
            "remove_subuser",
            {"uid": uid, "subuser": _subuser_id(uid, name), "purge-keys": "true"},
        )


def _subuser_id(uid: str, name: str) -> str:
    return f"{uid}:{name}"


def _error_code(body: bytes) -> str | None:
    """Extract the ``Code`` field of an RGW error reply, if any."""
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if isinstance(data, dict):
        return data.get("Code")
    return None
