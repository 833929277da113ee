from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Tuple


class Point(NamedTuple):
    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x:g},{self.y:g})"


# A shift is a Point read as an integer (dx, dy) offset of the right angle.
Shift = Point


class Dimension(NamedTuple):
    base: int
    height: int


@dataclass(frozen=True)
class PlacementSet:
    dimension: Dimension
    shifts: Tuple[Shift, ...]


class Direction(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def rotations(self) -> Tuple["Direction", ...]:
        """All four directions in rotation order, starting from this one."""
        return tuple(Direction((self.value + k) % 4) for k in range(4))


class Candidate(NamedTuple):
    a: Point  # right angle
    b: Point  # end of the base leg
    c: Point  # end of the height leg

    def fmt(self) -> str:
        return f"{self.a} | {self.b} | {self.c}"


@dataclass(frozen=True)
class TriangleSpec:
    area: int
    x: int
    y: int
    direction: Direction = Direction.UP

    @classmethod
    def from_row(cls, row) -> "TriangleSpec":
        if isinstance(row, TriangleSpec):
            return row
        if len(row) == 3:
            area, x, y = row
            return cls(area, x, y)
        area, x, y, direction = row
        return cls(area, x, y, Direction(direction))


@dataclass(frozen=True)
class SearchResult:
    found: bool
    assignment: Tuple[Candidate, ...] = ()
    nodes: int = 0
    reason: str = ""
    strategy: str = "backtracking"
    # Table row of each assigned triangle, parallel to ``assignment``.
    indices: Tuple[int, ...] = ()

    def lines(self):
        return [cand.fmt() for cand in self.assignment]
