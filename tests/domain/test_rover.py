"""Tests for the Rover command interpreter.

Scenarios run on a 10x10 grid with one obstacle at (5,5).
"""

from __future__ import annotations

import pytest

from roverctl.domain.errors import FailureKind
from roverctl.domain.grid import Grid
from roverctl.domain.position import Coordinates, Position
from roverctl.domain.rover import Rover
from roverctl.domain.types import Heading, MovementCommand, RotationCommand

F = MovementCommand.FORWARD
B = MovementCommand.BACKWARD
L = RotationCommand.LEFT
R = RotationCommand.RIGHT


def make_rover(x: int, y: int, heading: Heading, rover_id: str = "r1") -> Rover:
    return Rover.deploy(rover_id, Position.at(x, y, heading))


class TestMove:
    def test_forward_north(self, grid: Grid) -> None:
        rover = make_rover(3, 5, Heading.NORTH)
        assert rover.move(F, grid) is None
        assert rover.position == Position.at(3, 6, Heading.NORTH)

    def test_backward_north(self, grid: Grid) -> None:
        rover = make_rover(3, 5, Heading.NORTH)
        assert rover.move(B, grid) is None
        assert rover.position == Position.at(3, 4, Heading.NORTH)

    @pytest.mark.parametrize(
        ("heading", "expected"),
        [
            (Heading.NORTH, (2, 3)),
            (Heading.EAST, (3, 2)),
            (Heading.SOUTH, (2, 1)),
            (Heading.WEST, (1, 2)),
        ],
    )
    def test_forward_every_heading(
        self, grid: Grid, heading: Heading, expected: tuple[int, int]
    ) -> None:
        rover = make_rover(2, 2, heading)
        assert rover.move(F, grid) is None
        assert rover.position.coordinates == Coordinates(x=expected[0], y=expected[1])
        assert rover.position.heading is heading

    def test_blocked_by_obstacle(self, grid: Grid) -> None:
        rover = make_rover(5, 4, Heading.NORTH)
        failure = rover.move(F, grid)
        assert failure is not None
        assert failure.kind is FailureKind.OBSTACLE_BLOCKED
        assert rover.position == Position.at(5, 4, Heading.NORTH)

    def test_out_of_bounds_at_top_edge(self, grid: Grid) -> None:
        rover = make_rover(0, 9, Heading.NORTH)
        failure = rover.move(F, grid)
        assert failure is not None
        assert failure.kind is FailureKind.OUT_OF_BOUNDS
        assert rover.position == Position.at(0, 9, Heading.NORTH)

    def test_out_of_bounds_backward_at_origin(self, grid: Grid) -> None:
        rover = make_rover(0, 0, Heading.NORTH)
        failure = rover.move(B, grid)
        assert failure is not None
        assert failure.kind is FailureKind.OUT_OF_BOUNDS
        assert rover.position == Position.at(0, 0, Heading.NORTH)

    def test_forward_then_backward_returns_home(self, grid: Grid) -> None:
        rover = make_rover(3, 3, Heading.EAST)
        start = rover.position
        assert rover.move(F, grid) is None
        assert rover.move(B, grid) is None
        assert rover.position == start

    def test_other_rovers_do_not_block(self, grid: Grid) -> None:
        a = make_rover(1, 1, Heading.NORTH, "a")
        b = make_rover(1, 2, Heading.SOUTH, "b")
        assert a.move(F, grid) is None
        assert a.position.coordinates == b.position.coordinates


class TestRotate:
    def test_left_from_north(self) -> None:
        rover = make_rover(0, 0, Heading.NORTH)
        rover.rotate(L)
        assert rover.position == Position.at(0, 0, Heading.WEST)

    def test_right_from_west(self) -> None:
        rover = make_rover(4, 4, Heading.WEST)
        rover.rotate(R)
        assert rover.position == Position.at(4, 4, Heading.NORTH)

    def test_rotation_never_changes_cell(self) -> None:
        rover = make_rover(9, 9, Heading.SOUTH)
        for command in (L, L, R, L, R, R, R):
            rover.rotate(command)
            assert rover.position.coordinates == Coordinates(x=9, y=9)


class TestApply:
    def test_dispatches_movement(self, grid: Grid) -> None:
        rover = make_rover(3, 5, Heading.NORTH)
        assert rover.apply(F, grid) is None
        assert rover.position.coordinates == Coordinates(x=3, y=6)

    def test_dispatches_rotation(self, grid: Grid) -> None:
        rover = make_rover(3, 5, Heading.NORTH)
        assert rover.apply(R, grid) is None
        assert rover.position.heading is Heading.EAST

    def test_sequence_around_obstacle(self, grid: Grid) -> None:
        rover = make_rover(5, 4, Heading.NORTH)
        assert rover.apply(F, grid) is not None
        for command in (R, F, L, F, F, L, F, L):
            assert rover.apply(command, grid) is None
        assert rover.position == Position.at(5, 6, Heading.SOUTH)
        failure = rover.apply(F, grid)
        assert failure is not None
        assert failure.kind is FailureKind.OBSTACLE_BLOCKED


def test_repr() -> None:
    rover = make_rover(1, 2, Heading.EAST, "abc")
    assert repr(rover) == "Rover(id='abc', position=(1,2) facing EAST)"
