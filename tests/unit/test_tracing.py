"""Tests for tracing helpers."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from rgw_user_operator import tracing


class TestTraceSpan:
    """Test cases for trace_span."""

    def test_disabled_yields_none(self):
        with patch.object(tracing, "_tracer", None):
            with tracing.trace_span("work") as span:
                assert span is None

    def test_enabled_sets_kind_attribute(self):
        tracer = MagicMock()
        with patch.object(tracing, "_tracer", tracer):
            with tracing.trace_span("work", kind="CephObjectStoreUser", attributes={"user.name": "u"}):
                pass

        tracer.start_as_current_span.assert_called_once_with(
            "work", attributes={"user.name": "u", "resource.kind": "CephObjectStoreUser"}
        )

    def test_exception_recorded_and_reraised(self):
        tracer = MagicMock()
        span = tracer.start_as_current_span.return_value.__enter__.return_value
        span.is_recording.return_value = True

        with patch.object(tracing, "_tracer", tracer):
            with pytest.raises(ValueError):
                with tracing.trace_span("work"):
                    raise ValueError("boom")

        span.record_exception.assert_called_once()


class TestInitializeTracing:
    """Test cases for initialize_tracing."""

    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv("OTEL_TRACES_ENABLED", raising=False)

        with patch.object(tracing, "_tracer", None), patch.object(tracing, "TracerProvider") as mock_provider:
            tracing.initialize_tracing()
            assert tracing.get_tracer() is None

        mock_provider.assert_not_called()
