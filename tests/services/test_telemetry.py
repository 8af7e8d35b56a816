"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time

from roverctl.infrastructure.store import MissionStore
from roverctl.services.result import ServiceResult
from roverctl.services.rover import RoverService
from roverctl.services.telemetry import (
    Span,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)

# ── Span unit tests ──────────────────────────────────────────────────


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        span = Span(name="test")
        assert span.duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "duration_ms" in d
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_with_children_and_annotations(self) -> None:
        root = Span(name="root")
        child = Span(name="child", parent=root)
        root.children.append(child)
        child.annotate("ok", True)
        child.end()
        root.end()
        d = root.to_dict()
        assert d["children"][0]["name"] == "child"
        assert d["children"][0]["annotations"] == {"ok": True}


# ── trace_span / @traced ─────────────────────────────────────────────


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_enabled_without_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("x") as span:
            assert span is None


class _Worker:
    @traced
    def work(self) -> ServiceResult:
        with trace_span("inner") as span:
            assert span is not None
            assert get_current_span() is span
        return ServiceResult(ok=True, op="work", meta={"existing": 1})


class TestTraced:
    def test_disabled_leaves_meta_alone(self, store: MissionStore) -> None:
        result = RoverService(store).list_rovers()
        assert result.meta is None

    def test_enabled_injects_span_tree(self) -> None:
        enable_telemetry()
        result = _Worker().work()
        telemetry = result.meta["telemetry"]  # type: ignore[index]
        assert telemetry["name"] == "_Worker.work"
        assert telemetry["children"][0]["name"] == "inner"
        assert result.meta["existing"] == 1  # type: ignore[index]

    def test_service_call_records_validate_span(self, store: MissionStore) -> None:
        enable_telemetry()
        result = RoverService(store).deploy("r1", 0, 0, "NORTH")
        telemetry = result.meta["telemetry"]  # type: ignore[index]
        assert telemetry["name"] == "RoverService.deploy"
        assert [c["name"] for c in telemetry["children"]] == ["validate"]

    def test_annotates_rover_and_error(self, store: MissionStore) -> None:
        enable_telemetry()
        result = RoverService(store).move("ghost", "F")
        annotations = result.meta["telemetry"]["annotations"]  # type: ignore[index]
        assert annotations == {"ok": False, "rover_id": "ghost", "error": "NOT_FOUND"}

    def test_current_span_none_when_disabled(self) -> None:
        assert get_current_span() is None
