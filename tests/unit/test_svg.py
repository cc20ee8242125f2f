import sys
import unittest
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from lifecal_renderer import get_palette, render_goal, render_life, render_year, resolve_canvas, to_svg
from lifecal_renderer.models import CanvasSpec, RenderResult

SVG = "{http://www.w3.org/2000/svg}"
NOW = datetime(2025, 3, 1)


class SvgTests(unittest.TestCase):
    def setUp(self):
        self.canvas = resolve_canvas("iphone15pro")
        self.palette = get_palette(None)

    def test_root_dimensions_and_background(self):
        svg = to_svg(render_year(self.canvas, self.palette, NOW))
        root = ET.fromstring(svg)
        self.assertEqual(root.tag, f"{SVG}svg")
        self.assertEqual(root.get("width"), "1179")
        self.assertEqual(root.get("height"), "2556")
        self.assertEqual(root.get("viewBox"), "0 0 1179 2556")
        background = root.find(f"{SVG}rect")
        self.assertEqual(background.get("fill"), "#000000")

    def test_year_circle_count(self):
        root = ET.fromstring(to_svg(render_year(self.canvas, self.palette, NOW)))
        # 365 day dots plus one halo around today.
        self.assertEqual(len(root.findall(f"{SVG}circle")), 366)

    def test_goal_gradient_and_escaped_title(self):
        result = render_goal(self.canvas, self.palette, datetime(2025, 12, 31), "<Tom & Jerry>", NOW)
        svg = to_svg(result)
        self.assertIn("&lt;Tom &amp; Jerry&gt;", svg)
        root = ET.fromstring(svg)
        gradients = root.findall(f"{SVG}defs/{SVG}linearGradient")
        self.assertEqual(len(gradients), 1)
        grad_id = gradients[0].get("id")
        fills = [r.get("fill") for r in root.findall(f"{SVG}rect")]
        self.assertIn(f"url(#{grad_id})", fills)
        texts = [t.text for t in root.findall(f"{SVG}text")]
        self.assertIn("<Tom & Jerry>", texts)

    def test_life_glow_filter(self):
        result = render_life(self.canvas, self.palette, datetime(1990, 1, 1), 80, NOW)
        root = ET.fromstring(to_svg(result))
        filters = root.findall(f"{SVG}defs/{SVG}filter")
        self.assertEqual(len(filters), 1)
        filtered = [r for r in root.findall(f"{SVG}rect") if r.get("filter")]
        self.assertEqual(len(filtered), 1)
        self.assertEqual(filtered[0].get("fill"), self.palette.accent)

    def test_output_is_deterministic(self):
        a = to_svg(render_life(self.canvas, self.palette, datetime(1990, 1, 1), 80, NOW))
        b = to_svg(render_life(self.canvas, self.palette, datetime(1990, 1, 1), 80, NOW))
        self.assertEqual(a, b)

    def test_unknown_command_rejected(self):
        bogus = RenderResult(
            kind="year",
            canvas=CanvasSpec(10, 10, 0.0, 0.0),
            background="#000000",
            font_family="sans-serif",
            commands=("not a command",),
            stats={},
        )
        with self.assertRaises(TypeError):
            to_svg(bogus)


if __name__ == "__main__":
    unittest.main()
