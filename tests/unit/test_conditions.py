"""Unit tests for condition utilities."""

from __future__ import annotations

from rgw_user_operator.utils.conditions import (
    remove_condition,
    set_dependencies_not_ready_condition,
    set_ready_condition,
    set_sync_failed_condition,
    update_condition,
)


class TestConditions:
    """Test condition utilities."""

    def test_update_condition_new(self) -> None:
        """Test adding a new condition."""
        result = update_condition([], "TestCondition", "True", "TestReason", "Test message", observed_generation=1)

        assert len(result) == 1
        assert result[0]["type"] == "TestCondition"
        assert result[0]["status"] == "True"
        assert result[0]["reason"] == "TestReason"
        assert result[0]["message"] == "Test message"
        assert result[0]["observedGeneration"] == 1

    def test_update_condition_existing(self) -> None:
        """Test updating an existing condition."""
        conditions = [
            {
                "type": "TestCondition",
                "status": "False",
                "reason": "OldReason",
                "message": "Old message",
                "lastTransitionTime": "2023-01-01T00:00:00Z",
            }
        ]

        result = update_condition(conditions, "TestCondition", "True", "NewReason", "New message", observed_generation=2)

        assert len(result) == 1
        assert result[0]["status"] == "True"
        assert result[0]["reason"] == "NewReason"
        assert result[0]["lastTransitionTime"] != "2023-01-01T00:00:00Z"
        # input list is not modified
        assert conditions[0]["status"] == "False"

    def test_transition_time_kept_when_status_unchanged(self) -> None:
        conditions = [{"type": "Ready", "status": "False", "lastTransitionTime": "2023-01-01T00:00:00Z"}]

        result = update_condition(conditions, "Ready", "False", "NotReady", "still waiting")

        assert result[0]["lastTransitionTime"] == "2023-01-01T00:00:00Z"
        assert "observedGeneration" not in result[0]

    def test_remove_condition(self) -> None:
        conditions = [{"type": "Ready"}, {"type": "SyncFailed"}]

        assert remove_condition(conditions, "SyncFailed") == [{"type": "Ready"}]
        assert remove_condition(conditions, "Missing") == conditions

    def test_set_ready_condition(self) -> None:
        """Test setting ready condition."""
        result = set_ready_condition([], True, "User is ready", observed_generation=1)

        assert result[0]["type"] == "Ready"
        assert result[0]["status"] == "True"
        assert result[0]["reason"] == "Ready"

    def test_set_ready_condition_false(self) -> None:
        result = set_ready_condition([], False, "waiting")
        assert result[0]["status"] == "False"
        assert result[0]["reason"] == "NotReady"

        result = set_ready_condition([], False, "waiting", reason="ClusterNotFound")
        assert result[0]["reason"] == "ClusterNotFound"

    def test_set_dependencies_not_ready_condition(self) -> None:
        result = set_dependencies_not_ready_condition([], "GatewayNotRunning", "no gateway", 3)

        assert result[0]["type"] == "DependenciesNotReady"
        assert result[0]["status"] == "True"
        assert result[0]["reason"] == "GatewayNotRunning"
        assert result[0]["observedGeneration"] == 3

    def test_set_sync_failed_condition(self) -> None:
        result = set_sync_failed_condition([], "gateway unavailable", 1)

        assert result[0]["type"] == "SyncFailed"
        assert result[0]["reason"] == "SyncFailed"
        assert result[0]["message"] == "gateway unavailable"
