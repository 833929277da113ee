import pytest

import solver.orchestrator as orchestrator
from geometry import cell_corners, point_in_triangle
from placements import ConfigError, build_triangles
from progress import snapshot
from render import render_result
from solver.pruning import prune_triangles

SMALL = [(2, 0, 0), (2, 2, 2)]


def test_solve_small_instance_reports_progress():
    result = orchestrator.solve(SMALL, matrix_max=5)
    assert result.found
    assert result.strategy == "backtracking"
    assert len(result.assignment) == 2

    snap = snapshot()
    assert snap["done"] is True
    assert snap["ok"] is True
    assert snap["status"] == "Solved"
    assert snap["triangles"] == 2
    assert snap["max_depth"] == 2
    assert snap["strategy"] == "backtracking"


def test_solve_exhausted_instance():
    result = orchestrator.solve([(2, 0, 0), (2, 0, 0)], matrix_max=3)
    assert not result.found
    assert result.reason == "exhausted"
    assert snapshot()["status"] == "No solution"


def test_solve_uses_configured_table(monkeypatch):
    monkeypatch.setattr(orchestrator.CFG, "TRIANGLES", tuple(SMALL), raising=False)
    monkeypatch.setattr(orchestrator.CFG, "MATRIX_MAX", 5, raising=False)
    result = orchestrator.solve()
    assert result.found
    assert len(result.assignment) == 2


def test_config_error_propagates_and_marks_progress():
    with pytest.raises(ConfigError):
        orchestrator.solve([(1, 0, 0)], matrix_max=5)
    snap = snapshot()
    assert snap["status"] == "Error"
    assert snap["done"] is True
    assert "ConfigError" in snap["message"]


@pytest.mark.parametrize("kwargs", [{"strategy": "simulated"}, {"order": "random"}])
def test_unknown_knobs_are_rejected(kwargs):
    with pytest.raises(ValueError):
        orchestrator.solve(SMALL, matrix_max=5, **kwargs)


def test_fewest_order_puts_constrained_triangles_first():
    triangles = prune_triangles(build_triangles([(2, 2, 2), (2, 0, 0)], matrix_max=5))
    ordered = orchestrator._order_triangles(triangles, "fewest")
    assert [t.anchor for t in ordered] == [(0, 0), (2, 2)]
    assert [t.anchor for t in orchestrator._order_triangles(triangles, "given")] == [(2, 2), (0, 0)]


def test_fewest_order_still_solves():
    result = orchestrator.solve([(2, 2, 2), (2, 0, 0)], matrix_max=5, order="fewest")
    assert result.found
    # solved order: the corner triangle goes first
    assert result.assignment[0].a.x == 0 and result.assignment[0].a.y == 0


def test_node_limit_is_forwarded():
    result = orchestrator.solve(SMALL, matrix_max=5, node_limit=1)
    assert not result.found
    assert result.reason == "node limit"


def test_cp_sat_strategy_dispatch():
    pytest.importorskip("solver.cp_sat")
    result = orchestrator.solve(SMALL, matrix_max=5, strategy="cp_sat")
    assert result.found
    assert result.strategy == "cp_sat"


def test_reordered_search_keeps_table_labels():
    rows = [(4, 3, 3), (2, 0, 0)]
    result = orchestrator.solve(rows, matrix_max=8, order="fewest")
    assert result.found
    # the corner triangle has a single placement, so it is searched first
    assert result.indices == (1, 0)
    for row, cand in zip(result.indices, result.assignment):
        _, x, y = rows[row]
        for corner in cell_corners(x, y):
            assert point_in_triangle(corner, *cand)

    anchors = [(x, y) for _, x, y in rows]
    _, legend = render_result(result.assignment, anchors, 8, result.indices)
    assert "T2 (0,0) | (2,0) | (0,2)" in legend
    assert legend.index(">T1 ") < legend.index(">T2 ")
