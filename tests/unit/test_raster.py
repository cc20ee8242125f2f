import sys
import unittest
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from lifecal_renderer import (
    get_palette,
    preview_data_url,
    render_goal,
    render_life,
    render_year,
    resolve_canvas,
    to_image,
    to_png,
)
from lifecal_renderer.models import Circle, Rect

NOW = datetime(2025, 3, 1)


class RasterTests(unittest.TestCase):
    def setUp(self):
        self.canvas = resolve_canvas("iphonese", 300, 600)
        self.palette = get_palette(None)

    def test_year_pixels(self):
        result = render_year(self.canvas, self.palette, NOW)
        image = to_image(result)
        self.assertEqual(image.size, (300, 600))
        self.assertEqual(image.mode, "RGB")
        self.assertEqual(image.getpixel((0, 0)), (0, 0, 0))

        dots = [c for c in result.commands if isinstance(c, Circle) and not c.glow]
        first, last = dots[0], dots[-1]
        self.assertEqual(image.getpixel((int(first.cx), int(first.cy))), (255, 255, 255))
        # Future days are outlines, so their centre stays background.
        self.assertEqual(image.getpixel((int(last.cx), int(last.cy))), (0, 0, 0))

    def test_scaled_image(self):
        result = render_year(self.canvas, self.palette, NOW)
        self.assertEqual(to_image(result, scale=0.5).size, (150, 300))
        with self.assertRaises(ValueError):
            to_image(result, scale=0)

    def test_goal_gradient_starts_at_accent(self):
        result = render_goal(self.canvas, self.palette, datetime(2025, 12, 31), "Goal", NOW)
        fill = next(c for c in result.commands if isinstance(c, Rect) and c.gradient is not None)
        image = to_image(result)
        pixel = image.getpixel((int(fill.x + 10), int(fill.y + fill.h / 2)))
        for channel, expected in zip(pixel, (0xFF, 0x6B, 0x6B)):
            self.assertLessEqual(abs(channel - expected), 12)

    def test_life_with_glow(self):
        result = render_life(self.canvas, self.palette, datetime(2000, 1, 1), 40, NOW)
        image = to_image(result)
        self.assertEqual(image.size, (300, 600))

    def test_png_and_data_url(self):
        result = render_year(self.canvas, self.palette, NOW)
        self.assertTrue(to_png(result, scale=0.25).startswith(b"\x89PNG\r\n\x1a\n"))
        self.assertTrue(preview_data_url(result, scale=0.25).startswith("data:image/png;base64,"))


if __name__ == "__main__":
    unittest.main()
