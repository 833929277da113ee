"""Placement enumeration for a single anchored triangle.

A triangle of area ``A`` is a right triangle with integer legs ``base`` and
``height`` (``base * height == 2A``).  Its placement is pinned by the 1x1
anchor cell it has to cover: for every leg pairing we collect the offsets of
the right-angle vertex that keep the cell inside the legs, then rotate each
offset through the four directions and keep the triples that stay on the
board.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Sequence, Tuple

from config import CFG
from geometry import point_in_triangle
from models import Candidate, Dimension, Direction, PlacementSet, Point, Shift, TriangleSpec

log = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised for a triangle table that cannot describe a puzzle."""


# direction -> (right-angle offset from the anchor, base leg unit, height leg unit)
# The offset is a function of the (sx, sy) shift, both components <= 0.
_TRANSFORMS: Dict[Direction, Tuple] = {
    Direction.UP:    (lambda sx, sy: (sx, sy),          (1, 0),  (0, 1)),
    Direction.RIGHT: (lambda sx, sy: (sy, 1 - sx),      (0, -1), (1, 0)),
    Direction.DOWN:  (lambda sx, sy: (1 - sx, 1 - sy),  (-1, 0), (0, -1)),
    Direction.LEFT:  (lambda sx, sy: (1 - sy, sx),      (0, 1),  (-1, 0)),
}


def create_dimensions(area: int) -> List[Dimension]:
    """Integer (base, height) leg pairs for a triangle of the given area.

    The base must be at least 2 wide, otherwise the unit cell cannot fit
    under the hypotenuse.
    """
    effective = 2 * area
    dims: List[Dimension] = []
    for base in range(2, effective):
        if effective % base == 0:
            dims.append(Dimension(base, effective // base))
    return dims


def create_shifts(dimension: Dimension) -> Tuple[Shift, ...]:
    """Right-angle offsets that keep the unit square at the origin inside.

    The walk steps down (``sy``) until the square's far corner leaves the
    triangle, then steps one column left and starts over.  It ends when even
    the un-shifted row fails.
    """
    base, height = dimension
    corner = Point(1, 1)
    shifts: List[Shift] = []

    sx = 0
    while True:
        sy = 0
        while point_in_triangle(
            corner,
            Point(sx, sy),
            Point(sx, sy + height),
            Point(sx + base, sy),
        ):
            shifts.append(Shift(sx, sy))
            sy -= 1
        if sy == 0:
            break
        sx -= 1
    return tuple(shifts)


def orient(
    x: int,
    y: int,
    dimension: Dimension,
    shift: Shift,
    direction: Direction,
) -> Candidate:
    offset_fn, (ux, uy), (vx, vy) = _TRANSFORMS[direction]
    ox, oy = offset_fn(shift.x, shift.y)
    ax, ay = x + ox, y + oy
    base, height = dimension
    return Candidate(
        Point(ax, ay),
        Point(ax + ux * base, ay + uy * base),
        Point(ax + vx * height, ay + vy * height),
    )


def _in_bounds(cand: Candidate, matrix_max: int) -> bool:
    for p in cand:
        if p.x < 0 or p.x > matrix_max or p.y < 0 or p.y > matrix_max:
            return False
    return True


def make_candidates(
    x: int,
    y: int,
    combinations: Sequence[PlacementSet],
    direction: Direction,
    matrix_max: int,
) -> Tuple[Candidate, ...]:
    out: List[Candidate] = []
    for rot in direction.rotations():
        for combo in combinations:
            for shift in combo.shifts:
                cand = orient(x, y, combo.dimension, shift, rot)
                if _in_bounds(cand, matrix_max):
                    out.append(cand)
    return tuple(out)


def validate_spec(spec: TriangleSpec, matrix_max: int) -> None:
    if not isinstance(matrix_max, int) or matrix_max < 1:
        raise ConfigError(f"grid bound must be a positive integer, got {matrix_max!r}")
    if not isinstance(spec.area, int) or spec.area < 1:
        raise ConfigError(f"triangle area must be a positive integer, got {spec.area!r}")
    if not create_dimensions(spec.area):
        raise ConfigError(
            f"area {spec.area} has no integer legs with base >= 2 and height >= 1"
        )
    if not (0 <= spec.x and spec.x + 1 <= matrix_max and 0 <= spec.y and spec.y + 1 <= matrix_max):
        raise ConfigError(
            f"anchor cell ({spec.x},{spec.y}) lies outside the {matrix_max}x{matrix_max} grid"
        )


@dataclass(frozen=True)
class Triangle:
    area: int
    x: int
    y: int
    direction: Direction
    matrix_max: int
    combinations: Tuple[PlacementSet, ...]
    candidates: Tuple[Candidate, ...]
    index: int = 0  # row in the triangle table

    @classmethod
    def build(cls, spec: TriangleSpec, matrix_max: int = None, index: int = 0) -> "Triangle":
        if matrix_max is None:
            matrix_max = CFG.MATRIX_MAX
        validate_spec(spec, matrix_max)
        combos = tuple(
            PlacementSet(dim, create_shifts(dim)) for dim in create_dimensions(spec.area)
        )
        cands = make_candidates(spec.x, spec.y, combos, spec.direction, matrix_max)
        if not cands:
            log.warning(
                "triangle area=%s at (%s,%s) has no placement on a %s grid",
                spec.area, spec.x, spec.y, matrix_max,
            )
        return cls(spec.area, spec.x, spec.y, spec.direction, matrix_max, combos, cands, index)

    @property
    def anchor(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def with_candidates(self, candidates: Iterable[Candidate]) -> "Triangle":
        return replace(self, candidates=tuple(candidates))

    def describe(self) -> str:
        return "\n".join(
            f"{pset.dimension.base} {pset.dimension.height} = "
            + " ".join(f"{s.x:g} {s.y:g}" for s in pset.shifts)
            for pset in self.combinations
        )


def build_triangles(specs: Iterable = None, matrix_max: int = None) -> List[Triangle]:
    """Build every triangle of the table, in table order."""
    if specs is None:
        specs = CFG.TRIANGLES
    if matrix_max is None:
        matrix_max = CFG.MATRIX_MAX
    triangles: List[Triangle] = []
    for idx, row in enumerate(specs):
        try:
            spec = TriangleSpec.from_row(row)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"row {idx + 1}: cannot read triangle {row!r}: {e}") from e
        triangles.append(Triangle.build(spec, matrix_max, index=idx))
    return triangles


__all__ = [
    "ConfigError",
    "Triangle",
    "build_triangles",
    "create_dimensions",
    "create_shifts",
    "make_candidates",
    "orient",
    "validate_spec",
]
