import sys
import unittest
from datetime import datetime, timedelta
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from lifecal_renderer import get_palette, life_stats, render_life, resolve_canvas
from lifecal_renderer.life import current_week_index
from lifecal_renderer.models import Rect, Text

NOW = datetime(2025, 3, 1)


class LifeStatsTests(unittest.TestCase):
    def test_known_birth_date(self):
        stats = life_stats(datetime(1990, 1, 1), 80, NOW)
        self.assertEqual(stats["total_weeks"], 4160)
        self.assertEqual(stats["age_years"], 35)
        self.assertEqual(stats["weeks_lived"], 1834)
        self.assertEqual(stats["weeks_remaining"], 2326)
        self.assertEqual(stats["progress_percent"], "44.1")

    def test_born_today(self):
        stats = life_stats(NOW, 80, NOW)
        self.assertEqual((stats["age_years"], stats["weeks_lived"]), (0, 0))
        self.assertEqual(stats["weeks_remaining"], 4160)
        self.assertEqual(stats["progress_percent"], "0.0")

    def test_outlived_expectancy(self):
        stats = life_stats(datetime(1900, 1, 1), 80, NOW)
        self.assertEqual(stats["weeks_remaining"], 0)
        self.assertEqual(stats["progress_percent"], "100.0")

    def test_future_birth_clamps(self):
        stats = life_stats(NOW + timedelta(days=30), 80, NOW)
        self.assertLess(stats["weeks_lived"], 0)
        self.assertEqual(stats["age_years"], 0)
        self.assertEqual(stats["weeks_remaining"], 4160)
        self.assertEqual(stats["progress_percent"], "0.0")

    def test_invalid_expectancy(self):
        with self.assertRaises(ValueError):
            life_stats(NOW, 0, NOW)

    def test_weeks_lived_never_decrease(self):
        birth = datetime(1990, 1, 1)
        previous = -1
        for offset in range(0, 60):
            lived = life_stats(birth, 80, NOW + timedelta(days=offset))["weeks_lived"]
            self.assertGreaterEqual(lived, previous)
            previous = lived

    def test_current_week_index(self):
        self.assertEqual(current_week_index(10, 4160), 10)
        self.assertEqual(current_week_index(-3, 4160), 0)
        self.assertIsNone(current_week_index(4160, 4160))


class LifeRenderTests(unittest.TestCase):
    def setUp(self):
        self.canvas = resolve_canvas("iphone15pro")
        self.palette = get_palette(None)

    def _blocks(self, result):
        blocks = result.glyphs()
        self.assertTrue(all(isinstance(b, Rect) for b in blocks))
        return blocks

    def test_one_block_per_week(self):
        result = render_life(self.canvas, self.palette, datetime(1990, 1, 1), 80, NOW)
        blocks = self._blocks(result)
        self.assertEqual(len(blocks), 4160)
        self.assertEqual(sum(1 for b in blocks if b.color == self.palette.foreground), 1834)
        self.assertEqual(blocks[1834].color, self.palette.accent)
        self.assertGreater(blocks[1834].glow_blur, 0)
        self.assertEqual(sum(1 for b in blocks if b.color == self.palette.empty), 4160 - 1835)

    def test_born_today_highlights_first_week(self):
        blocks = self._blocks(render_life(self.canvas, self.palette, NOW, 80, NOW))
        self.assertEqual(blocks[0].color, self.palette.accent)
        self.assertTrue(all(b.color == self.palette.empty for b in blocks[1:]))

    def test_fully_lived_grid_has_no_accent(self):
        birth = NOW - timedelta(weeks=4160)
        result = render_life(self.canvas, self.palette, birth, 80, NOW)
        blocks = self._blocks(result)
        self.assertEqual(len(blocks), 4160)
        self.assertTrue(all(b.color == self.palette.foreground for b in blocks))
        self.assertTrue(all(b.glow_blur == 0 for b in blocks))

    def test_future_birth_labels(self):
        result = render_life(self.canvas, self.palette, NOW + timedelta(days=30), 80, NOW)
        texts = [c.text for c in result.commands if isinstance(c, Text)]
        self.assertEqual(texts, ["0 years lived", "4,160 weeks remain", "0.0% of 80 years"])

    def test_labels(self):
        result = render_life(self.canvas, self.palette, datetime(1990, 1, 1), 80, NOW)
        texts = [c.text for c in result.commands if isinstance(c, Text)]
        self.assertEqual(texts, ["35 years lived", "2,326 weeks remain", "44.1% of 80 years"])


if __name__ == "__main__":
    unittest.main()
