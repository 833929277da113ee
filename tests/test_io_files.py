import os
import tempfile
import unittest

from config import CFG
from io_files import format_solution, write_coords, write_layout_view_html
from models import Candidate, Point
from render import render_result


def _cand(*xy):
    pts = [Point(xy[i], xy[i + 1]) for i in range(0, 6, 2)]
    return Candidate(*pts)


class FormatSolutionTestCase(unittest.TestCase):
    def test_one_line_per_triangle_then_blank_line(self) -> None:
        text = format_solution([_cand(3, 0, 5, 0, 3, 2), _cand(7, 0, 7, 6, 13, 0)])
        self.assertEqual(text, "(3,0) | (5,0) | (3,2)\n(7,0) | (7,6) | (13,0)\n\n")


class WriteOutputsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self._orig_coords = CFG.COORDS_OUT
        self._orig_layout = CFG.LAYOUT_HTML

    def tearDown(self) -> None:
        CFG.COORDS_OUT = self._orig_coords
        CFG.LAYOUT_HTML = self._orig_layout

    def test_write_coords_uses_configured_relative_path(self) -> None:
        CFG.COORDS_OUT = "outputs/custom_coords.txt"
        path = write_coords([_cand(0, 0, 2, 0, 0, 2)], self.tmpdir.name)

        expected = os.path.join(self.tmpdir.name, "outputs", "custom_coords.txt")
        self.assertEqual(path, expected)
        self.assertTrue(os.path.exists(path))

        with open(path, "r", encoding="utf-8") as fh:
            contents = fh.read()
        self.assertEqual(contents, "(0,0) | (2,0) | (0,2)\n\n")

    def test_write_coords_marks_missing_solution(self) -> None:
        CFG.COORDS_OUT = "coords.txt"
        path = write_coords([], self.tmpdir.name)
        with open(path, "r", encoding="utf-8") as fh:
            self.assertEqual(fh.read(), "No solution\n")

    def test_write_layout_view_html_accepts_absolute_path(self) -> None:
        target = os.path.join(self.tmpdir.name, "html", "layout.html")
        CFG.LAYOUT_HTML = target

        svg, legend = render_result([_cand(0, 0, 2, 0, 0, 2)], [(0, 0)], 5)

        path = write_layout_view_html(svg, legend, self.tmpdir.name)

        self.assertEqual(path, target)
        self.assertTrue(os.path.exists(path))

        with open(path, "r", encoding="utf-8") as fh:
            contents = fh.read()
        self.assertIn(svg, contents)
        self.assertIn(legend, contents)
        self.assertIn("<polygon", contents)


if __name__ == "__main__":
    unittest.main()
