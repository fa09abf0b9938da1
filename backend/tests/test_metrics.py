"""Tests for metrics helpers."""
from __future__ import annotations

from typing import Any, Dict

import pytest

from app.observability import client as opik_client
from app.observability import metrics


class _DummyTrace:
    def __init__(self, name: str, metadata: Dict[str, Any]):
        self.name = name
        self.metadata = metadata
        self.ended = False

    def end(self) -> None:
        self.ended = True


class _DummyClient:
    def __init__(self):
        self.traces: list[_DummyTrace] = []

    def trace(self, name: str, metadata: Dict[str, Any] | None = None):
        trace = _DummyTrace(name, metadata or {})
        self.traces.append(trace)
        return trace


def test_log_metric_records_and_closes_trace(monkeypatch) -> None:
    dummy_client = _DummyClient()
    monkeypatch.setattr(opik_client, "get_opik_client", lambda: dummy_client)

    metrics.log_metric("habit_changes.generate.success", 1, metadata={"model": "m"})

    recorded = dummy_client.traces[0]
    assert recorded.name == "metric:habit_changes.generate.success"
    assert recorded.metadata == {"value": 1, "model": "m"}
    assert recorded.ended is True


def test_log_metric_is_noop_without_client(monkeypatch) -> None:
    monkeypatch.setattr(opik_client, "get_opik_client", lambda: None)

    metrics.log_metric("anything", 3)


def test_timed_logs_latency_even_when_block_raises(monkeypatch) -> None:
    dummy_client = _DummyClient()
    monkeypatch.setattr(opik_client, "get_opik_client", lambda: dummy_client)

    with pytest.raises(RuntimeError):
        with metrics.timed("project_plan.generate"):
            raise RuntimeError("boom")

    assert dummy_client.traces[0].name == "metric:project_plan.generate.latency_ms"
    assert dummy_client.traces[0].metadata["value"] >= 0
