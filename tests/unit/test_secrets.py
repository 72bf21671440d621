"""Tests for Kubernetes secrets utilities."""

from __future__ import annotations

import base64
from unittest.mock import Mock

import pytest
from kubernetes import client

from rgw_user_operator.constants import FIELD_MANAGER, LABEL_MANAGED_BY
from rgw_user_operator.utils.secrets import (
    apply_secret,
    create_secret,
    get_secret_value,
    update_secret,
)


class TestGetSecretValue:
    """Test cases for get_secret_value function."""

    def test_get_secret_value_success(self):
        """Test successfully getting a secret value."""
        mock_api = Mock()
        mock_secret = Mock()
        mock_secret.data = {"accessKey": base64.b64encode(b"admin-access").decode("utf-8")}
        mock_api.read_namespaced_secret.return_value = mock_secret

        result = get_secret_value(mock_api, "rook-ceph", "rgw-admin-ops-user", "accessKey")

        assert result == "admin-access"
        mock_api.read_namespaced_secret.assert_called_once_with(name="rgw-admin-ops-user", namespace="rook-ceph")

    def test_get_secret_value_bytes(self):
        mock_api = Mock()
        mock_api.read_namespaced_secret.return_value = Mock(data={"accessKey": b"admin-access"})

        assert get_secret_value(mock_api, "rook-ceph", "s", "accessKey") == "admin-access"

    def test_get_secret_value_key_not_found(self):
        mock_api = Mock()
        mock_api.read_namespaced_secret.return_value = Mock(data={"other": "dmFsdWU="})

        with pytest.raises(ValueError, match="Key 'accessKey' not found"):
            get_secret_value(mock_api, "rook-ceph", "s", "accessKey")

    def test_get_secret_value_secret_not_found(self):
        mock_api = Mock()
        mock_api.read_namespaced_secret.side_effect = client.exceptions.ApiException(status=404)

        with pytest.raises(ValueError, match="Secret 's' not found"):
            get_secret_value(mock_api, "rook-ceph", "s", "accessKey")

    def test_get_secret_value_api_error(self):
        mock_api = Mock()
        mock_api.read_namespaced_secret.side_effect = client.exceptions.ApiException(status=500)

        with pytest.raises(client.exceptions.ApiException):
            get_secret_value(mock_api, "rook-ceph", "s", "accessKey")


class TestWriteSecrets:
    """Test cases for creating and updating secrets."""

    def test_create_secret(self):
        mock_api = Mock()

        create_secret(mock_api, "rook-ceph", "creds", {"AccessKey": "AK"}, secret_type="kubernetes.io/rook")

        kwargs = mock_api.create_namespaced_secret.call_args.kwargs
        body = kwargs["body"]
        assert kwargs["namespace"] == "rook-ceph"
        assert kwargs["field_manager"] == FIELD_MANAGER
        assert body.type == "kubernetes.io/rook"
        assert body.metadata.labels == {LABEL_MANAGED_BY: FIELD_MANAGER}
        assert base64.b64decode(body.data["AccessKey"]) == b"AK"

    def test_update_secret(self):
        mock_api = Mock()

        update_secret(mock_api, "rook-ceph", "creds", {"AccessKey": "AK2"})

        kwargs = mock_api.patch_namespaced_secret.call_args.kwargs
        assert kwargs["name"] == "creds"
        assert base64.b64decode(kwargs["body"].data["AccessKey"]) == b"AK2"

    def test_apply_secret_creates(self):
        mock_api = Mock()

        apply_secret(mock_api, "rook-ceph", "creds", {"AccessKey": "AK"})

        mock_api.create_namespaced_secret.assert_called_once()
        mock_api.patch_namespaced_secret.assert_not_called()

    def test_apply_secret_patches_existing(self):
        """Test that an existing secret is patched instead of recreated."""
        mock_api = Mock()
        mock_api.create_namespaced_secret.side_effect = client.exceptions.ApiException(status=409)

        apply_secret(mock_api, "rook-ceph", "creds", {"AccessKey": "AK"})

        mock_api.patch_namespaced_secret.assert_called_once()

    def test_apply_secret_other_error(self):
        mock_api = Mock()
        mock_api.create_namespaced_secret.side_effect = client.exceptions.ApiException(status=403)

        with pytest.raises(client.exceptions.ApiException):
            apply_secret(mock_api, "rook-ceph", "creds", {"AccessKey": "AK"})
        mock_api.patch_namespaced_secret.assert_not_called()
