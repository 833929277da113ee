# solver/backtrack.py
from typing import Callable, List, Optional, Sequence, Tuple

from geometry import Box, bounding_box, boxes_overlap, triangles_cross, triangles_nested
from models import Candidate, SearchResult
from placements import Triangle

TraceFn = Callable[[int, int], None]


def conflicts(cand: Candidate, box: Box, committed: Sequence[Tuple[Candidate, Box]]) -> bool:
    """True when ``cand`` crosses or nests with any committed placement."""
    for other, other_box in committed:
        # Boxes meeting in zero area can neither cross nor nest.
        if not boxes_overlap(box, other_box):
            continue
        if triangles_cross(cand, other):
            return True
    for other, other_box in committed:
        if not boxes_overlap(box, other_box):
            continue
        if triangles_nested(cand, other):
            return True
    return False


def search(
    triangles: Sequence[Triangle],
    *,
    node_limit: int = 0,
    trace: Optional[TraceFn] = None,
) -> SearchResult:
    """Depth-first assignment of one candidate per triangle, in the given order.

    Stops at the first complete assignment.  ``node_limit`` caps the number of
    candidates tried (0 means no cap); ``trace`` is called on entry to every
    frame with the frame index and the nodes tried so far.
    """
    options: List[List[Tuple[Candidate, Box]]] = [
        [(cand, bounding_box(cand)) for cand in tri.candidates] for tri in triangles
    ]
    total = len(options)
    committed: List[Tuple[Candidate, Box]] = []
    solution: Tuple[Candidate, ...] = ()
    nodes = 0
    capped = False

    def _search(index: int) -> bool:
        nonlocal nodes, capped, solution
        if trace is not None:
            trace(index, nodes)
        if index == total:
            solution = tuple(c for c, _ in committed)
            return True
        for cand, box in options[index]:
            if node_limit and nodes >= node_limit:
                capped = True
                return False
            nodes += 1
            if conflicts(cand, box, committed):
                continue
            committed.append((cand, box))
            try:
                if _search(index + 1):
                    return True
            finally:
                committed.pop()
        return False

    if _search(0):
        return SearchResult(True, solution, nodes, "solved", indices=tuple(t.index for t in triangles))
    if capped:
        return SearchResult(False, (), nodes, "node limit")
    return SearchResult(False, (), nodes, "exhausted")


__all__ = ["conflicts", "search"]
