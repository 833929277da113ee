# Orchestrator: build -> prune -> search, with progress and attempt logging
from __future__ import annotations

import time
from typing import Iterable, List, Optional

from config import CFG
from models import SearchResult
from placements import Triangle, build_triangles
from progress import (
    reset, start_timer, set_status, set_phase, set_strategy, set_counts,
    set_message, set_done, trace_depth, _emit_log,
)
from solver.backtrack import search
from solver.pruning import candidate_count, prune_triangles

STRATEGIES = ("backtracking", "cp_sat")
SEARCH_ORDERS = ("given", "fewest")


def _order_triangles(triangles: List[Triangle], order: str) -> List[Triangle]:
    """Return the triangles in the order the search should assign them.

    ``given`` keeps the table order.  ``fewest`` assigns the most constrained
    triangles first; ties keep table order because ``sorted`` is stable.
    """
    if order == "fewest":
        return sorted(triangles, key=lambda t: len(t.candidates))
    return list(triangles)


def _run_strategy(
    triangles: List[Triangle],
    strategy: str,
    node_limit: int,
) -> SearchResult:
    if strategy == "cp_sat":
        # Imported lazily so the default path does not need ortools loaded.
        from solver.cp_sat import solve_cp_sat
        return solve_cp_sat(triangles)
    return search(triangles, node_limit=node_limit, trace=trace_depth)


def solve(
    specs: Optional[Iterable] = None,
    *,
    matrix_max: Optional[int] = None,
    strategy: Optional[str] = None,
    node_limit: Optional[int] = None,
    order: Optional[str] = None,
) -> SearchResult:
    """Solve one puzzle instance.

    Defaults come from :mod:`config`.  A malformed table raises
    :class:`placements.ConfigError` before any search work starts; an
    exhausted search is reported through ``SearchResult.reason``.
    """
    strategy = (strategy or CFG.STRATEGY or "backtracking").strip().lower()
    if strategy not in STRATEGIES:
        raise ValueError(f"unknown strategy {strategy!r} (expected one of {', '.join(STRATEGIES)})")
    order = (order or CFG.SEARCH_ORDER or "given").strip().lower()
    if order not in SEARCH_ORDERS:
        raise ValueError(f"unknown search order {order!r} (expected one of {', '.join(SEARCH_ORDERS)})")
    if node_limit is None:
        node_limit = CFG.NODE_LIMIT

    reset()
    start_timer()
    set_status("Solving")
    set_strategy(strategy)

    t0 = time.time()
    try:
        set_phase("build")
        triangles = build_triangles(specs, matrix_max)
        set_counts(triangles=len(triangles), candidates=candidate_count(triangles))

        set_phase("prune")
        before = candidate_count(triangles)
        triangles = prune_triangles(triangles)
        after = candidate_count(triangles)
        set_counts(candidates=after)
        _emit_log("Pruned", before=before, after=after, dropped=before - after)

        dead = [idx for idx, t in enumerate(triangles) if not t.candidates]
        if dead:
            _emit_log("Dead triangles", indices=",".join(str(i + 1) for i in dead))

        set_phase("search")
        ordered = _order_triangles(triangles, order)
        result = _run_strategy(ordered, strategy, node_limit)
    except Exception as e:
        set_status("Error")
        set_message(f"{type(e).__name__}: {e}")
        set_done(reason=f"{type(e).__name__}: {e}")
        raise

    _emit_log(
        "Search finished",
        strategy=strategy,
        found=result.found,
        reason=result.reason,
        nodes=result.nodes,
        elapsed=f"{time.time() - t0:.2f}s",
    )
    set_done(result.found, reason=result.reason)
    return result


__all__ = ["solve", "STRATEGIES", "SEARCH_ORDERS"]
