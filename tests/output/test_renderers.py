"""Tests for the Rich renderers."""

from __future__ import annotations

from roverctl.output.renderers import MAX_MAP_SIZE, render_map, render_quiet, render_result
from roverctl.services.result import ServiceError, ServiceResult


def _grid_result(width: int = 4, height: int = 3, **extra: object) -> ServiceResult:
    data = {
        "width": width,
        "height": height,
        "obstacles": [[1, 1]],
        "rovers": [{"rover_id": "r1", "x": 0, "y": 2, "heading": "EAST"}],
        **extra,
    }
    return ServiceResult(ok=True, op="describe_grid", data=data)


class TestRenderMap:
    def test_north_at_top(self) -> None:
        text = render_map(
            3, 2, [[2, 0]], [{"rover_id": "r1", "x": 0, "y": 1, "heading": "NORTH"}]
        ).plain
        lines = text.splitlines()
        assert lines[0] == "  1 ^.."
        assert lines[1] == "  0 ..#"
        assert lines[2] == "    012"

    def test_heading_glyphs(self) -> None:
        rovers = [
            {"rover_id": "a", "x": 0, "y": 0, "heading": "EAST"},
            {"rover_id": "b", "x": 1, "y": 0, "heading": "SOUTH"},
            {"rover_id": "c", "x": 2, "y": 0, "heading": "WEST"},
        ]
        assert render_map(3, 1, [], rovers).plain.splitlines()[0] == "  0 >v<"

    def test_rover_drawn_over_obstacle(self) -> None:
        rovers = [{"rover_id": "a", "x": 0, "y": 0, "heading": "NORTH"}]
        assert "^" in render_map(1, 1, [[0, 0]], rovers).plain

    def test_shared_cell(self) -> None:
        rovers = [
            {"rover_id": "a", "x": 1, "y": 0, "heading": "NORTH"},
            {"rover_id": "b", "x": 1, "y": 0, "heading": "EAST"},
        ]
        assert render_map(3, 1, [], rovers).plain.splitlines()[0] == "  0 .*."


class TestRenderResult:
    def test_position(self) -> None:
        result = ServiceResult(
            ok=True,
            op="move",
            data={"rover_id": "r1", "x": 3, "y": 6, "heading": "NORTH", "command": "F"},
        )
        out = render_result(result)
        assert "OK" in out
        assert "move" in out
        assert "rover_id: r1" in out
        assert "command: F" in out

    def test_empty_list(self) -> None:
        result = ServiceResult(ok=True, op="list_rovers", data={"items": [], "count": 0})
        assert "No rovers deployed." in render_result(result)

    def test_list_table(self) -> None:
        items = [{"rover_id": "r1", "x": 1, "y": 2, "heading": "WEST"}]
        out = render_result(ServiceResult(ok=True, op="list_rovers", data={"items": items}))
        assert "Rover" in out
        assert "WEST" in out

    def test_grid(self) -> None:
        out = render_result(_grid_result())
        assert "size: 4x3" in out
        assert "obstacles: 1" in out
        assert "  2 >..." in out

    def test_large_grid_skips_map(self) -> None:
        out = render_result(_grid_result(width=MAX_MAP_SIZE + 1, height=5))
        assert "map omitted" in out

    def test_error(self) -> None:
        result = ServiceResult.failed("move", "OBSTACLE_BLOCKED", "Cannot occupy (5,5)")
        out = render_result(result)
        assert "ERROR" in out
        assert "[OBSTACLE_BLOCKED]" in out
        assert "Cannot occupy (5,5)" in out

    def test_error_detail_only_when_verbose(self) -> None:
        result = ServiceResult(
            ok=False,
            op="move",
            error=ServiceError(code="OUT_OF_BOUNDS", message="out", detail={"x": 10}),
        )
        assert "detail" not in render_result(result)
        assert "x: 10" in render_result(result, verbose=True)

    def test_script_summary(self) -> None:
        result = ServiceResult(
            ok=True,
            op="run_script",
            data={
                "executed": 3,
                "errors": [{"index": 1, "op": "move", "code": "NOT_FOUND", "error": "gone"}],
                "rovers": [],
            },
        )
        out = render_result(result)
        assert "executed: 3" in out
        assert "failed: 1" in out
        assert "step=1 move [NOT_FOUND]: gone" in out

    def test_telemetry_when_verbose(self) -> None:
        result = ServiceResult(
            ok=True,
            op="get",
            data={"rover_id": "r1"},
            meta={"telemetry": {"name": "RoverService.get", "duration_ms": 0.5}},
        )
        assert "RoverService.get" in render_result(result, verbose=True)
        assert "RoverService.get" not in render_result(result)

    def test_unknown_op_generic(self) -> None:
        out = render_result(ServiceResult(ok=True, op="custom", data={"answer": 42}))
        assert "answer: 42" in out


class TestRenderQuiet:
    def test_single_rover(self) -> None:
        result = ServiceResult(
            ok=True, op="get", data={"rover_id": "r1", "x": 0, "y": 1, "heading": "SOUTH"}
        )
        assert render_quiet(result) == "r1 0 1 SOUTH"

    def test_rover_list(self) -> None:
        items = [
            {"rover_id": "a", "x": 0, "y": 0, "heading": "NORTH"},
            {"rover_id": "b", "x": 1, "y": 1, "heading": "EAST"},
        ]
        result = ServiceResult(ok=True, op="list_rovers", data={"items": items})
        assert render_quiet(result) == "a 0 0 NORTH\nb 1 1 EAST"

    def test_empty_rover_list(self) -> None:
        result = ServiceResult(ok=True, op="list_rovers", data={"items": [], "count": 0})
        assert render_quiet(result) == ""

    def test_error(self) -> None:
        result = ServiceResult.failed("get", "NOT_FOUND", "Rover with id x not found")
        assert render_quiet(result) == "ERROR: get — Rover with id x not found"

    def test_other_op(self) -> None:
        result = ServiceResult(ok=True, op="replace_grid", data={"width": 3})
        assert render_quiet(result) == "OK: replace_grid"
