# app.py: solution viewer; the solve runs in a background thread, progress is polled
from __future__ import annotations
import os
import threading
from typing import Any, Dict

from flask import Flask, jsonify, send_from_directory, url_for

from config import CFG
from io_files import layout_page, write_coords, write_layout_view_html
from render import render_result
from solver.orchestrator import solve

from progress import as_json as progress_json, set_message

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

LAST_RESULT: Dict[str, Any] = {
    "ok": False,
    "status": "Idle",
    "reason": "",
    "nodes": 0,
    "svg": "",
    "legend": "",
}
_SOLVE_LOCK = threading.Lock()

app = Flask(__name__)


def _anchors():
    return [(row[1], row[2]) for row in CFG.TRIANGLES]


def _solve_in_background() -> None:
    # The lock is held until the outputs are on disk, so a second /solve
    # cannot reset progress or overwrite the files mid-write.
    try:
        _solve_and_publish()
    except Exception as e:
        LAST_RESULT.update({"ok": False, "status": "Error", "reason": f"{type(e).__name__}: {e}"})
        set_message(LAST_RESULT["reason"])
        app.logger.exception("solve failed")
    finally:
        _SOLVE_LOCK.release()


def _solve_and_publish() -> None:
    result = solve()
    svg, legend = render_result(result.assignment, _anchors(), CFG.MATRIX_MAX, result.indices)
    LAST_RESULT.update({
        "ok": result.found,
        "status": "Solved" if result.found else "No solution",
        "reason": result.reason,
        "nodes": result.nodes,
        "svg": svg,
        "legend": legend,
    })
    write_coords(result.assignment, BASE_DIR)
    write_layout_view_html(svg, legend, BASE_DIR)


def start_solve() -> bool:
    """Kick off a solve unless one is already running."""
    if not _SOLVE_LOCK.acquire(blocking=False):
        return False
    LAST_RESULT.update({"status": "Solving", "reason": "", "svg": "", "legend": ""})
    threading.Thread(target=_solve_in_background, daemon=True).start()
    return True


@app.route("/")
def index():
    if not LAST_RESULT["svg"]:
        svg, legend = render_result((), _anchors(), CFG.MATRIX_MAX)
    else:
        svg, legend = LAST_RESULT["svg"], LAST_RESULT["legend"]
    status = LAST_RESULT["status"]
    if LAST_RESULT["reason"]:
        status = f"{status} ({LAST_RESULT['reason']}, {LAST_RESULT['nodes']} nodes)"
    return layout_page(svg, legend, status=status)


@app.route("/solve", methods=["POST"])
def solve_route():
    started = start_solve()
    return jsonify({"started": started, "progress_url": url_for("progress")})


@app.route("/progress")
def progress():
    return jsonify(progress_json())


@app.route("/download/coords")
def download_coords():
    return send_from_directory(BASE_DIR, CFG.COORDS_OUT, as_attachment=True)


@app.route("/download/html")
def download_html():
    return send_from_directory(BASE_DIR, CFG.LAYOUT_HTML, as_attachment=True)


if __name__ == "__main__":
    app.run(debug=False)
