import random
from typing import Dict, Optional, Sequence, Tuple

from models import Candidate

def _color(name: str) -> str:
    random.seed(hash(name) & 0xFFFFFFFF)
    r = random.randint(40, 200)
    g = random.randint(40, 200)
    b = random.randint(40, 200)
    return f"rgb({r},{g},{b})"

def render_result(
    assignment: Sequence[Candidate],
    anchors: Sequence[Tuple[int, int]],
    matrix_max: int,
    labels: Optional[Sequence[int]] = None,
):
    """SVG of the board with anchor cells and placed triangles.

    The y axis is flipped so (0, 0) sits at the bottom-left, the way the
    coordinates read in the printed solution.  ``labels`` holds the table
    row of each assigned triangle (``SearchResult.indices``); triangles are
    named after that row and listed in table order.  Without it the
    assignment is taken to be in table order already.
    """
    if not labels:
        labels = range(len(assignment))
    named = [(f"T{row + 1}", cand) for row, cand in sorted(zip(labels, assignment))]
    palette: Dict[str, str] = {}
    scale = 40
    size = matrix_max * scale
    svg_w = svg_h = size + 2

    def _px(x: float, y: float) -> str:
        return f"{1 + x * scale:g},{1 + (matrix_max - y) * scale:g}"

    cells = []
    for ax, ay in anchors:
        cells.append(
            f'<rect x="{1 + ax * scale}" y="{1 + (matrix_max - ay - 1) * scale}" '
            f'width="{scale}" height="{scale}" fill="#ddd" stroke="#999" stroke-width="1"/>'
        )

    polys = []
    for name, cand in named:
        palette.setdefault(name, _color(name))
        pts = " ".join(_px(p.x, p.y) for p in cand)
        cx = sum(p.x for p in cand) / 3.0
        cy = sum(p.y for p in cand) / 3.0
        polys.append(
            f'<polygon points="{pts}" fill="{palette[name]}" fill-opacity="0.6" stroke="black" stroke-width="1"/>'
            f'<text x="{1 + cx * scale - 8:g}" y="{1 + (matrix_max - cy) * scale + 4:g}" font-size="12" fill="black">{name}</text>'
        )
    grid = f'<rect x="1" y="1" width="{svg_w-2}" height="{svg_h-2}" fill="none" stroke="black" stroke-width="2"/>'
    svg = (
        f'<svg class="layout-svg" xmlns="http://www.w3.org/2000/svg" '
        f'width="{svg_w}" height="{svg_h}" '
        f'viewBox="0 0 {svg_w} {svg_h}" preserveAspectRatio="xMinYMin meet">'
        f'{grid}{"".join(cells)}{"".join(polys)}</svg>'
    )

    legend = "".join(
        f"<li><span class='swatch' style='background:{palette[name]}'></span>{name} {cand.fmt()}</li>"
        for name, cand in named
    )
    return svg, legend
