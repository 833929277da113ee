#!/usr/bin/env python3
"""Command-line entry point.

    python main.py          solve the configured instance and print it
    python main.py web      start the Flask viewer
"""

import os
import sys

from config import CFG
from io_files import format_solution, write_coords, write_layout_view_html
from placements import ConfigError
from render import render_result
from solver.orchestrator import solve

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def run(stdout=None) -> int:
    stdout = stdout or sys.stdout
    try:
        result = solve()
    except ConfigError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return 2

    if result.found:
        stdout.write(format_solution(result.assignment))
        stdout.flush()
    else:
        print(f"no solution ({result.reason}, {result.nodes} nodes)", file=sys.stderr)

    if CFG.WRITE_OUTPUTS:
        write_coords(result.assignment, BASE_DIR)
        anchors = [(row[1], row[2]) for row in CFG.TRIANGLES]
        svg, legend = render_result(result.assignment, anchors, CFG.MATRIX_MAX, result.indices)
        write_layout_view_html(svg, legend, BASE_DIR)
    return 0


def main():
    if len(sys.argv) > 1 and sys.argv[1] == "web":
        from app import app
        app.run(debug=False)
        return
    sys.exit(run())


if __name__ == "__main__":
    main()
