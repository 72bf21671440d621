"""Tests for structured logging."""

from __future__ import annotations

import json
import logging
from unittest.mock import Mock

from rgw_user_operator.logging import log_resource_event, sanitize_secrets


class TestLogResourceEvent:
    """Test cases for log_resource_event."""

    def test_writes_json_line(self):
        logger = Mock()

        log_resource_event(
            logger,
            controller="rgw-user-operator",
            resource_kind="CephObjectStoreUser",
            resource_name="my-user",
            namespace="rook-ceph",
            uid="1234",
            event="reconciled",
            reason="Ready",
            message="User my-user is ready",
            secret_name="rook-ceph-object-user-my-store-my-user",
        )

        level, payload = logger.log.call_args[0]
        data = json.loads(payload)
        assert level == logging.INFO
        assert data["resource"] == "CephObjectStoreUser"
        assert data["name"] == "my-user"
        assert data["reason"] == "Ready"
        assert data["secret_name"] == "rook-ceph-object-user-my-store-my-user"

    def test_level_and_redaction(self):
        logger = Mock()

        log_resource_event(
            logger, "c", "k", "n", "ns", "u", "error", "Error", "failed",
            level=logging.ERROR, secret_key="SK",
        )

        level, payload = logger.log.call_args[0]
        assert level == logging.ERROR
        assert json.loads(payload)["secret_key"] == "***REDACTED***"


def test_sanitize_secrets_leaves_input_untouched():
    data = {"accessKey": "AK", "endpoint": "http://gw"}

    result = sanitize_secrets(data)

    assert result == {"accessKey": "***REDACTED***", "endpoint": "http://gw"}
    assert data["accessKey"] == "AK"
