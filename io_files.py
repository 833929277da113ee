"""Helpers for formatting solver output and writing it to disk."""

from __future__ import annotations

import os
from typing import List, Sequence

from config import CFG
from models import Candidate


def format_solution(assignment: Sequence[Candidate]) -> str:
    """One ``(x1,y1) | (x2,y2) | (x3,y3)`` line per triangle, then a blank line."""

    lines: List[str] = [cand.fmt() for cand in assignment]
    return "\n".join(lines) + "\n\n"


def _resolve_output_path(base_dir: str, configured_name: str, fallback: str) -> str:
    """Return the absolute path where an output artifact should be written."""

    name = (configured_name or "").strip() or fallback
    if os.path.isabs(name):
        return name
    return os.path.join(base_dir, name)


def write_coords(assignment: Sequence[Candidate], base_dir: str) -> str:
    """Write the solved triangle coordinates to the configured text file."""

    path = _resolve_output_path(base_dir, CFG.COORDS_OUT, "coords.txt")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        if not assignment:
            f.write("No solution\n")
        else:
            f.write(format_solution(assignment))
    return path


def write_layout_view_html(svg: str, legend_html: str, base_dir: str) -> str:
    """Write the rendered SVG/legend preview to the configured HTML file."""

    path = _resolve_output_path(base_dir, CFG.LAYOUT_HTML, "layout_view.html")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as vf:
        vf.write(layout_page(svg, legend_html))
    return path


def layout_page(svg: str, legend_html: str, *, status: str = "") -> str:
    status_html = f"<p class='status'>{status}</p>" if status else ""
    return f"""<!doctype html>
<html><head><meta charset='utf-8'><title>Layout View</title>
<style>
body {{ font-family: sans-serif; margin: 2em; }}
.swatch {{ display: inline-block; width: 1em; height: 1em; margin-right: .5em; }}
ul {{ list-style: none; padding: 0; font-family: monospace; }}
</style></head>
<body class='container'>
<h1>Layout View</h1>
{status_html}
<section class='card'>{svg}</section>
<section class='card'><h3>Legend</h3><ul>{legend_html}</ul></section>
</body></html>"""


__all__ = ["format_solution", "write_coords", "write_layout_view_html", "layout_page"]
