"""ScriptService — run a sequence of rover commands.

A script is a list of steps. Each step is either a JSON object::

    {"op": "deploy", "rover_id": "r1", "x": 3, "y": 5, "heading": "NORTH"}
    {"op": "move", "rover_id": "r1", "command": "F"}
    {"op": "rotate", "rover_id": "r1", "command": "L"}

or one line of text::

    deploy r1 3 5 NORTH
    move r1 F
    rotate r1 L
    get r1
    list
    grid

Blank lines and lines starting with ``#`` are skipped. Steps run in
order against the same store. Strict mode stops at the first failure;
partial mode records the failure and continues.
"""

from __future__ import annotations

import shlex
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field, ValidationError, model_validator

from roverctl.services.base import BaseService
from roverctl.services.grid import GridService
from roverctl.services.result import INVALID_INPUT, ServiceError, ServiceResult
from roverctl.services.rover import RoverService, rover_payload
from roverctl.services.telemetry import trace_span, traced

StepOp = Literal["deploy", "move", "rotate", "get", "list", "grid"]

_ARITY: dict[str, int] = {
    "deploy": 4,
    "move": 2,
    "rotate": 2,
    "get": 1,
    "list": 0,
    "grid": 0,
}

_USAGE: dict[str, str] = {
    "deploy": "deploy ROVER_ID X Y HEADING",
    "move": "move ROVER_ID F|B",
    "rotate": "rotate ROVER_ID L|R",
    "get": "get ROVER_ID",
    "list": "list",
    "grid": "grid",
}


class ScriptStep(BaseModel):
    """One parsed command of a script."""

    model_config = {"frozen": True, "populate_by_name": True}

    op: StepOp
    rover_id: str = Field(default="", validation_alias=AliasChoices("rover_id", "roverId", "id"))
    x: int | None = None
    y: int | None = None
    heading: str = Field(default="", validation_alias=AliasChoices("heading", "direction"))
    command: str = ""

    @model_validator(mode="after")
    def _check_required(self) -> ScriptStep:
        missing: list[str] = []
        if self.op in ("deploy", "move", "rotate", "get") and not self.rover_id:
            missing.append("rover_id")
        if self.op == "deploy":
            missing.extend(
                name
                for name, value in (("x", self.x), ("y", self.y), ("heading", self.heading))
                if value in (None, "")
            )
        if self.op in ("move", "rotate") and not self.command:
            missing.append("command")
        if missing:
            msg = f"{self.op} requires {', '.join(missing)} (usage: {_USAGE[self.op]})"
            raise ValueError(msg)
        return self


def parse_line(line: str) -> ScriptStep | None:
    """Parse one text line into a step. Returns None for blanks and comments.

    Raises ValueError on an unknown operation or wrong argument count.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    tokens = shlex.split(stripped)
    op = tokens[0].lower()
    args = tokens[1:]
    if op not in _ARITY:
        msg = f"Unknown operation: {tokens[0]!r}. Expected one of {', '.join(_ARITY)}"
        raise ValueError(msg)
    if len(args) != _ARITY[op]:
        msg = f"Usage: {_USAGE[op]}"
        raise ValueError(msg)

    if op == "deploy":
        rover_id, x, y, heading = args
        try:
            cx, cy = int(x), int(y)
        except ValueError:
            msg = f"Coordinates must be integers, got ({x}, {y})"
            raise ValueError(msg) from None
        return ScriptStep(op="deploy", rover_id=rover_id, x=cx, y=cy, heading=heading)
    if op in ("move", "rotate"):
        return ScriptStep(op=op, rover_id=args[0], command=args[1])
    if op == "get":
        return ScriptStep(op="get", rover_id=args[0])
    return ScriptStep(op=op)


def parse_item(item: Any) -> ScriptStep | None:
    """Parse a JSON script item (object or text line).

    Raises ValueError when the item cannot be understood.
    """
    if isinstance(item, str):
        return parse_line(item)
    if not isinstance(item, dict):
        msg = f"Script items must be objects or strings, got {type(item).__name__}"
        raise ValueError(msg)
    try:
        return ScriptStep.model_validate(item)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'item'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ValueError(problems) from None


class ScriptService(BaseService):
    """Executes steps through RoverService and GridService."""

    def execute(self, step: ScriptStep) -> ServiceResult:
        """Run a single step."""
        rovers = RoverService(self._store)
        if step.op == "deploy":
            assert step.x is not None and step.y is not None
            return rovers.deploy(step.rover_id, step.x, step.y, step.heading)
        if step.op == "move":
            return rovers.move(step.rover_id, step.command)
        if step.op == "rotate":
            return rovers.rotate(step.rover_id, step.command)
        if step.op == "get":
            return rovers.get(step.rover_id)
        if step.op == "list":
            return rovers.list_rovers()
        return GridService(self._store).describe()

    def execute_line(self, line: str) -> ServiceResult | None:
        """Parse and run one text line. Returns None for blanks and comments."""
        try:
            step = parse_line(line)
        except ValueError as exc:
            return ServiceResult.failed("parse", INVALID_INPUT, str(exc))
        if step is None:
            return None
        return self.execute(step)

    @traced
    def run(self, items: list[Any], *, partial: bool = False) -> ServiceResult:
        """Run every item in order. All-or-stop unless *partial* is True.

        A stopped script keeps the effects of the steps that already ran.
        """
        op = "run_script"
        results: list[dict[str, Any]] = []
        errors: list[dict[str, Any]] = []
        executed = 0

        for index, item in enumerate(items):
            with trace_span(f"step[{index}]") as span:
                try:
                    step = parse_item(item)
                except ValueError as exc:
                    result: ServiceResult | None = ServiceResult.failed(
                        "parse", INVALID_INPUT, str(exc)
                    )
                else:
                    result = self.execute(step) if step is not None else None
                if span is not None and result is not None:
                    span.annotate("op", result.op)
                    span.annotate("ok", result.ok)

            if result is None:
                continue
            executed += 1
            entry: dict[str, Any] = {"index": index, "op": result.op, "ok": result.ok}
            if result.ok:
                entry["data"] = result.data
                results.append(entry)
                continue

            error = result.error or ServiceError(code="UNKNOWN", message="Unknown error")
            entry["code"] = error.code
            entry["error"] = error.message
            errors.append(entry)
            if not partial:
                return ServiceResult(
                    ok=False,
                    op=op,
                    data=self._summary(results, errors, executed),
                    error=ServiceError(
                        code=error.code,
                        message=f"Step {index} ({result.op}) failed: {error.message}",
                        detail={"index": index},
                    ),
                )

        all_ok = not errors
        return ServiceResult(
            ok=all_ok,
            op=op,
            data=self._summary(results, errors, executed),
            error=None
            if all_ok
            else ServiceError(
                code="SCRIPT_PARTIAL",
                message=f"{len(errors)} of {executed} steps failed",
            ),
        )

    def _summary(
        self,
        results: list[dict[str, Any]],
        errors: list[dict[str, Any]],
        executed: int,
    ) -> dict[str, Any]:
        return {
            "executed": executed,
            "results": results,
            "errors": errors,
            "rovers": [rover_payload(r) for r in self._store.all()],
        }
