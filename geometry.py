"""Point, segment and triangle predicates on the puzzle grid.

Coordinates are small integers, so every sign test below is exact. Touching
is never treated as a conflict: two segments only intersect when they cross
transversally, which lets neighbouring triangles share vertices and edges.
"""

from __future__ import annotations

from itertools import combinations
from typing import Sequence, Tuple

from models import Point

COLINEAR = 0
CLOCKWISE = 1
COUNTERCLOCKWISE = 2

Box = Tuple[float, float, float, float]  # (min_x, min_y, max_x, max_y)


def orientation(p: Point, q: Point, r: Point) -> int:
    val = (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)
    if val == 0:
        return COLINEAR
    return CLOCKWISE if val > 0 else COUNTERCLOCKWISE


def on_segment(p: Point, q: Point, r: Point) -> bool:
    """True when q falls inside the bounding box of segment pr."""
    return (
        min(p.x, r.x) <= q.x <= max(p.x, r.x)
        and min(p.y, r.y) <= q.y <= max(p.y, r.y)
    )


def segments_intersect(p1: Point, q1: Point, p2: Point, q2: Point) -> bool:
    o1 = orientation(p1, q1, p2)
    o2 = orientation(p1, q1, q2)
    o3 = orientation(p2, q2, p1)
    o4 = orientation(p2, q2, q1)

    # Any colinear triple means the segments touch or overlap along a line;
    # only a proper crossing counts.
    if COLINEAR in (o1, o2, o3, o4):
        return False
    return o1 != o2 and o3 != o4


def _sign(p1: Point, p2: Point, p3: Point) -> float:
    return (p1.x - p3.x) * (p2.y - p3.y) - (p2.x - p3.x) * (p1.y - p3.y)


def point_in_triangle(pt: Point, v1: Point, v2: Point, v3: Point) -> bool:
    """Boundary-inclusive containment test."""
    d1 = _sign(pt, v1, v2)
    d2 = _sign(pt, v2, v3)
    d3 = _sign(pt, v3, v1)

    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)


def triangle_contains(inner: Sequence[Point], p: Point, q: Point, r: Point) -> bool:
    """True when every vertex of ``inner`` lies inside triangle pqr."""
    return all(point_in_triangle(v, p, q, r) for v in inner)


def triangle_contained_in(outer: Sequence[Point], p: Point, q: Point, r: Point) -> bool:
    """True when p, q and r all lie inside the triangle ``outer``."""
    v1, v2, v3 = outer
    return (
        point_in_triangle(p, v1, v2, v3)
        and point_in_triangle(q, v1, v2, v3)
        and point_in_triangle(r, v1, v2, v3)
    )


def triangle_edges(tri: Sequence[Point]) -> Tuple[Tuple[Point, Point], ...]:
    p, q, r = tri
    return ((p, q), (p, r), (q, r))


def triangles_cross(t1: Sequence[Point], t2: Sequence[Point]) -> bool:
    for s1, e1 in triangle_edges(t1):
        for s2, e2 in triangle_edges(t2):
            if segments_intersect(s1, e1, s2, e2):
                return True
    return False


def triangles_nested(t1: Sequence[Point], t2: Sequence[Point]) -> bool:
    return triangle_contained_in(t2, *t1) or triangle_contains(t2, *t1)


def cell_corners(x: int, y: int) -> Tuple[Point, Point, Point, Point]:
    return (
        Point(x, y),
        Point(x, y + 1),
        Point(x + 1, y + 1),
        Point(x + 1, y),
    )


def cell_segments(x: int, y: int) -> Tuple[Tuple[Point, Point], ...]:
    """The four sides and both diagonals of the unit cell at (x, y)."""
    return tuple(combinations(cell_corners(x, y), 2))


def bounding_box(tri: Sequence[Point]) -> Box:
    xs = [p.x for p in tri]
    ys = [p.y for p in tri]
    return (min(xs), min(ys), max(xs), max(ys))


def boxes_overlap(b1: Box, b2: Box) -> bool:
    """Positive-area overlap; boxes that only share an edge or corner don't count."""
    return b1[0] < b2[2] and b2[0] < b1[2] and b1[1] < b2[3] and b2[1] < b1[3]


__all__ = [
    "COLINEAR",
    "CLOCKWISE",
    "COUNTERCLOCKWISE",
    "orientation",
    "on_segment",
    "segments_intersect",
    "point_in_triangle",
    "triangle_contains",
    "triangle_contained_in",
    "triangle_edges",
    "triangles_cross",
    "triangles_nested",
    "cell_corners",
    "cell_segments",
    "bounding_box",
    "boxes_overlap",
]
