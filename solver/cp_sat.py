import time
from typing import List, Sequence, Tuple

from ortools.sat.python import cp_model as _cp

from config import CFG
from geometry import bounding_box, boxes_overlap, triangles_cross, triangles_nested
from models import SearchResult
from placements import Triangle

# ---------------- helpers ----------------

def est_pairs(triangles: Sequence[Triangle]) -> int:
    """Candidate pairs the conflict scan would have to look at."""
    sizes = [len(t.candidates) for t in triangles]
    total = sum(sizes)
    return (total * total - sum(n * n for n in sizes)) // 2


def _conflict_pairs(triangles: Sequence[Triangle]) -> List[Tuple[int, int, int, int]]:
    boxes = [[bounding_box(c) for c in t.candidates] for t in triangles]
    out: List[Tuple[int, int, int, int]] = []
    n = len(triangles)
    for i in range(n):
        for j in range(i + 1, n):
            for k, ck in enumerate(triangles[i].candidates):
                bk = boxes[i][k]
                for m, cm in enumerate(triangles[j].candidates):
                    if not boxes_overlap(bk, boxes[j][m]):
                        continue
                    if triangles_cross(ck, cm) or triangles_nested(ck, cm):
                        out.append((i, k, j, m))
    return out


def solve_cp_sat(
    triangles: Sequence[Triangle],
    *,
    max_seconds: float = None,
    max_pairs: int = None,
) -> SearchResult:
    """Exact cross-check of the backtracking search on OR-Tools CP-SAT.

    One boolean per candidate, exactly one per triangle, and a clause
    forbidding every crossing or nested pair.  The conflict scan is quadratic
    in the candidate count, so instances above ``max_pairs`` are refused
    instead of modelled.
    """
    if max_seconds is None:
        max_seconds = CFG.CP_SAT_MAX_SECONDS
    if max_pairs is None:
        max_pairs = CFG.CP_SAT_MAX_PAIRS

    pairs_needed = est_pairs(triangles)
    if max_pairs and pairs_needed > max_pairs:
        return SearchResult(
            False, (), 0,
            f"pair budget exceeded ({pairs_needed} > {max_pairs})",
            strategy="cp_sat",
        )

    for tri in triangles:
        if not tri.candidates:
            return SearchResult(False, (), 0, "infeasible", strategy="cp_sat")

    m = _cp.CpModel()
    p = [
        [m.NewBoolVar(f"p_{i}_{k}") for k in range(len(tri.candidates))]
        for i, tri in enumerate(triangles)
    ]
    for row in p:
        m.AddExactlyOne(row)

    conflicts = _conflict_pairs(triangles)
    for i, k, j, mm in conflicts:
        m.AddBoolOr([p[i][k].Not(), p[j][mm].Not()])

    solver = _cp.CpSolver()
    solver.parameters.max_time_in_seconds = float(max_seconds)
    solver.parameters.max_memory_in_mb = int(getattr(CFG, "MAX_MEMORY_MB", 2048))
    solver.parameters.num_search_workers = int(getattr(CFG, "WORKERS", 1))
    solver.parameters.stop_after_first_solution = True
    solver.parameters.log_search_progress = False

    t0 = time.time()
    res = solver.Solve(m)
    elapsed = time.time() - t0

    if res in (_cp.OPTIMAL, _cp.FEASIBLE):
        chosen = []
        for i, tri in enumerate(triangles):
            for k, var in enumerate(p[i]):
                if solver.Value(var):
                    chosen.append(tri.candidates[k])
                    break
        return SearchResult(
            True, tuple(chosen), len(conflicts), "solved",
            strategy="cp_sat", indices=tuple(t.index for t in triangles),
        )
    if res == _cp.INFEASIBLE:
        return SearchResult(False, (), len(conflicts), "infeasible", strategy="cp_sat")
    if res == _cp.MODEL_INVALID:
        return SearchResult(False, (), len(conflicts), "model invalid", strategy="cp_sat")
    return SearchResult(
        False, (), len(conflicts),
        f"stopped before solution (timebox {elapsed:.1f}s)",
        strategy="cp_sat",
    )


__all__ = ["est_pairs", "solve_cp_sat"]
