"""Shared run state for the CLI and the viewer, plus the attempt log.

One solve runs at a time.  The orchestrator pushes phase and count updates,
the search pushes its frame depth through :func:`trace_depth`, and the
viewer polls :func:`snapshot`.  Milestones go to ``solver_attempts.log``
under the configured log directory.
"""

from __future__ import annotations

import logging
import sys
import threading
import time
from pathlib import Path
from typing import Any, Dict, Optional

from config import CFG

PROGRESS_LOCK = threading.Lock()

TRACE_LOGGER = logging.getLogger("solver.trace")


def _log_dir() -> Path:
    configured = (CFG.LOG_DIR or "").strip()
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parent / "logs"


def _init_logger() -> logging.Logger:
    logger = logging.getLogger("solver.attempt_log")
    if logger.handlers:
        return logger

    path = _log_dir() / "solver_attempts.log"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        # Read-only checkout: run without the attempt log.
        return logger
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


ATTEMPT_LOGGER = _init_logger()


def _fmt_seconds(seconds: Optional[float]) -> Optional[str]:
    return None if seconds is None else f"{seconds:.2f}s"


def _emit_log(event: str, **fields: Any) -> None:
    """One ``event | key=value ...`` line in the attempt log; empty fields are dropped."""
    if not ATTEMPT_LOGGER.handlers:
        return
    extras = " ".join(f"{k}={v}" for k, v in fields.items() if v is not None and v != "")
    if extras:
        ATTEMPT_LOGGER.info("%s | %s", event, extras)
    else:
        ATTEMPT_LOGGER.info("%s", event)


# Timing bookkeeping for the attempt log; not exposed to the viewer.
LOG_STATE: Dict[str, Any] = {
    "run_start": None,
    "phase": "",
    "phase_start": None,
}


def _fresh_state(run_id: int) -> Dict[str, Any]:
    return {
        "status": "Idle",          # Idle | Solving | Solved | No solution | Error
        "phase": "",               # build | prune | search
        "strategy": "",            # backtracking | cp_sat
        "triangles": 0,
        "candidates": 0,           # alive after the last phase
        "depth": 0,                # current search frame
        "max_depth": 0,
        "nodes": 0,                # candidates tried so far
        "elapsed_start": None,
        "elapsed": 0.0,
        "message": "",
        "done": False,
        "ok": None,
        "run_id": run_id,
    }


PROGRESS: Dict[str, Any] = _fresh_state(0)


def _fmt_elapsed(seconds: float) -> str:
    total = int(max(0.0, seconds))
    if total < 60:
        return f"{total}s"
    m, s = divmod(total, 60)
    if m < 60:
        return f"{m}m {s}s"
    h, m = divmod(m, 60)
    return f"{h}h {m}m"


def _switch_phase_locked(new_phase: str) -> None:
    old = LOG_STATE["phase"]
    if new_phase == old:
        return
    now = time.time()
    if old and LOG_STATE["phase_start"] is not None:
        _emit_log(
            "Phase finished",
            phase=old,
            duration=_fmt_seconds(now - LOG_STATE["phase_start"]),
            candidates=PROGRESS["candidates"],
        )
    LOG_STATE["phase"] = new_phase
    LOG_STATE["phase_start"] = now
    if new_phase:
        _emit_log("Phase started", phase=new_phase)


def _touch_elapsed_locked() -> None:
    t0 = PROGRESS["elapsed_start"]
    if t0 is not None:
        PROGRESS["elapsed"] = time.time() - t0


def reset() -> None:
    """Clear the state for a new run and bump ``run_id``."""
    with PROGRESS_LOCK:
        PROGRESS.update(_fresh_state(PROGRESS["run_id"] + 1))
        LOG_STATE.update(run_start=None, phase="", phase_start=None)
        _emit_log("Progress reset", run_id=PROGRESS["run_id"])


def start_timer() -> None:
    with PROGRESS_LOCK:
        now = time.time()
        PROGRESS["elapsed_start"] = now
        LOG_STATE["run_start"] = now


def set_status(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["status"] = str(v)


def set_phase(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["phase"] = "" if v is None else str(v)
        _switch_phase_locked(PROGRESS["phase"])


def set_strategy(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["strategy"] = "" if v is None else str(v)


def set_counts(*, triangles: Optional[int] = None, candidates: Optional[int] = None) -> None:
    with PROGRESS_LOCK:
        if triangles is not None:
            PROGRESS["triangles"] = max(0, int(triangles))
        if candidates is not None:
            PROGRESS["candidates"] = max(0, int(candidates))


def set_depth(depth: int, nodes: Optional[int] = None) -> None:
    # Called once per search frame; keep it free of logging.
    with PROGRESS_LOCK:
        PROGRESS["depth"] = depth
        PROGRESS["max_depth"] = max(PROGRESS["max_depth"], depth)
        if nodes is not None:
            PROGRESS["nodes"] = nodes


def set_message(msg: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["message"] = "" if msg is None else str(msg)


def set_done(ok: Optional[bool] = None, *, reason: Any = None) -> None:
    """Mark the run complete.

    ``ok`` picks the final status; ``reason`` is surfaced via ``message``.
    A run without a flag keeps whatever status the solver left behind.
    """
    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        if ok is not None:
            PROGRESS["ok"] = bool(ok)
            PROGRESS["status"] = "Solved" if ok else "No solution"
        if reason is not None:
            PROGRESS["message"] = str(reason)
        PROGRESS["done"] = True
        _switch_phase_locked("")

        run_start = LOG_STATE["run_start"]
        LOG_STATE["run_start"] = None
        _emit_log(
            "Run finished",
            status=PROGRESS["status"],
            ok=PROGRESS["ok"],
            duration=_fmt_seconds(None if run_start is None else time.time() - run_start),
            nodes=PROGRESS["nodes"],
            max_depth=PROGRESS["max_depth"],
            message=PROGRESS["message"],
        )


def trace_depth(depth: int, nodes: Optional[int] = None) -> None:
    """Search callback: record the frame and print the ``----12`` depth trace."""
    set_depth(depth, nodes)
    if CFG.TRACE_DEPTH:
        print("-" * depth + str(depth), file=sys.stderr)
    elif TRACE_LOGGER.isEnabledFor(logging.DEBUG):
        TRACE_LOGGER.debug("%s%d", "-" * depth, depth)


def snapshot() -> Dict[str, Any]:
    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        snap = dict(PROGRESS)
    snap.pop("elapsed_start")
    snap["elapsed_str"] = _fmt_elapsed(snap["elapsed"])
    return snap


def as_json() -> Dict[str, Any]:
    # Alias used by /progress
    return snapshot()


__all__ = [
    "reset", "start_timer", "set_status", "set_phase", "set_strategy", "set_counts",
    "set_depth", "set_message", "set_done", "trace_depth", "snapshot", "as_json",
]
