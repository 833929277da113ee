# solver/pruning.py
from typing import List, Sequence, Tuple

from geometry import cell_segments, segments_intersect, triangle_edges
from models import Candidate, Point
from placements import Triangle

Segment = Tuple[Point, Point]


def crosses_cell(cand: Candidate, segments: Sequence[Segment]) -> bool:
    """True when one of the candidate's edges crosses a side or diagonal of a cell."""
    for p, q in triangle_edges(cand):
        for a, b in segments:
            if segments_intersect(p, q, a, b):
                return True
    return False


def prune_triangles(triangles: Sequence[Triangle]) -> List[Triangle]:
    """Drop every candidate that cuts through another triangle's anchor cell.

    Whatever the other triangle ends up choosing, it has to cover its own
    cell, so such a candidate can never appear in a solution.  Returns new
    triangles; the input is left untouched and the result is stable under a
    second pass.
    """
    cells = [cell_segments(t.x, t.y) for t in triangles]
    pruned: List[Triangle] = []
    for i, tri in enumerate(triangles):
        others = [segs for k, segs in enumerate(cells) if k != i]
        kept = [
            cand for cand in tri.candidates
            if not any(crosses_cell(cand, segs) for segs in others)
        ]
        pruned.append(tri.with_candidates(kept))
    return pruned


def candidate_count(triangles: Sequence[Triangle]) -> int:
    return sum(len(t.candidates) for t in triangles)


__all__ = ["crosses_cell", "prune_triangles", "candidate_count"]
