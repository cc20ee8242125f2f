import sys
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from lifecal_renderer.clock import (
    age_in_years,
    clamp,
    day_of_year,
    day_span,
    format_date,
    format_percent,
    is_leap_year,
    local_naive,
    parse_date,
    weeks_since,
)


class LeapYearTests(unittest.TestCase):
    def test_gregorian_rule(self):
        self.assertFalse(is_leap_year(1900))
        self.assertTrue(is_leap_year(2000))
        self.assertTrue(is_leap_year(2024))
        self.assertFalse(is_leap_year(2023))
        self.assertFalse(is_leap_year(2100))


class DayOfYearTests(unittest.TestCase):
    def test_first_and_last_day(self):
        self.assertEqual(day_of_year(datetime(2025, 1, 1)), 1)
        self.assertEqual(day_of_year(datetime(2024, 12, 31)), 366)
        self.assertEqual(day_of_year(datetime(2025, 12, 31)), 365)

    def test_time_of_day_does_not_change_ordinal(self):
        self.assertEqual(day_of_year(datetime(2025, 3, 1, 0, 0)), 60)
        self.assertEqual(day_of_year(datetime(2025, 3, 1, 23, 59)), 60)


class SpanTests(unittest.TestCase):
    def test_day_span_rounds_up(self):
        start = datetime(2025, 1, 1)
        self.assertEqual(day_span(start, start), 0)
        self.assertEqual(day_span(start, start + timedelta(hours=1)), 1)
        self.assertEqual(day_span(start, datetime(2025, 1, 11)), 10)

    def test_day_span_negative(self):
        self.assertEqual(day_span(datetime(2025, 1, 11), datetime(2025, 1, 1)), -10)

    def test_weeks_since_truncates(self):
        birth = datetime(2020, 1, 1)
        self.assertEqual(weeks_since(birth, birth), 0)
        self.assertEqual(weeks_since(birth, birth + timedelta(days=6, hours=23)), 0)
        self.assertEqual(weeks_since(birth, birth + timedelta(days=7)), 1)
        self.assertEqual(weeks_since(birth, birth + timedelta(days=13, hours=1)), 1)

    def test_age_uses_average_year(self):
        birth = datetime(1990, 1, 1)
        self.assertEqual(age_in_years(birth, datetime(2025, 3, 1)), 35)
        self.assertEqual(age_in_years(birth, birth), 0)


class FormattingTests(unittest.TestCase):
    def test_percent_one_decimal(self):
        self.assertEqual(format_percent(60 / 365), "16.4")
        self.assertEqual(format_percent(1.0), "100.0")
        self.assertEqual(format_percent(0.0), "0.0")

    def test_long_date(self):
        self.assertEqual(format_date(datetime(2025, 12, 31)), "December 31, 2025")
        self.assertEqual(format_date(datetime(2026, 7, 4)), "July 4, 2026")

    def test_custom_pattern_and_unknown_locale(self):
        self.assertEqual(format_date(datetime(2026, 7, 4), pattern="{day} {month} {year}"), "4 July 2026")
        with self.assertRaises(ValueError):
            format_date(datetime(2026, 7, 4), locale="fr-FR")

    def test_clamp(self):
        self.assertEqual(clamp(1.5, 0.0, 1.0), 1.0)
        self.assertEqual(clamp(-0.5, 0.0, 1.0), 0.0)


class ParseDateTests(unittest.TestCase):
    def test_offset_is_converted_to_local_time(self):
        parsed = parse_date("2025-03-01T12:00:00+00:00")
        self.assertIsNone(parsed.tzinfo)
        self.assertEqual(parsed, local_naive(datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)))
        self.assertEqual(local_naive(datetime(2025, 3, 1)), datetime(2025, 3, 1))

    def test_plain_date_is_local_midnight(self):
        self.assertEqual(parse_date("1990-01-01"), datetime(1990, 1, 1))

    def test_invalid_date_raises(self):
        with self.assertRaises(ValueError):
            parse_date("not-a-date")
        with self.assertRaises(ValueError):
            parse_date("  ")


if __name__ == "__main__":
    unittest.main()
