import os
import sys
import unittest
from datetime import datetime, timedelta, timezone

REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from candlechart.core.timeframes import Interval, Precision
from candlechart.ui.charts.x_axis import (
    XAxis,
    diff_datetime_string,
    ms_to_datetime,
    overwrite_chars,
    shorted_now_string,
)
from candlechart.ui.charts.y_axis import Grid, Numeric, YAxis

# 2023-12-31 07:01 .. 08:00 UTC
RANGE_START = 1704006060000
RANGE_END = 1704009600000


class NumericTests(unittest.TestCase):
    def test_format_pads_to_precision(self):
        self.assertEqual(Numeric(10, 2).format(3.1415926535), "      3.14")
        self.assertEqual(Numeric(10, 2).format(99991), "  99991.00")
        self.assertEqual(Numeric().format(0.6), "   0.600")

    def test_auto_from_range(self):
        self.assertEqual(Numeric.auto(0.0, 3.0), Numeric(8, 3))
        self.assertEqual(Numeric.auto(5.0, 5.0), Numeric(8, 3))
        self.assertEqual(Numeric.auto(0.0, 0.001), Numeric(8, 6))
        self.assertEqual(Numeric.auto(-12345.5, 100.0), Numeric(10, 3))
        self.assertEqual(Numeric.auto(0.0, 1e-20).scale, 10)

    def test_auto_with_fixed_width(self):
        self.assertEqual(Numeric.auto(100.0001, 100.0004, width=8), Numeric(8, 4))
        self.assertEqual(Numeric.auto(0.0, 0.001, width=12), Numeric(12, 6))
        self.assertEqual(Numeric.auto(-5.0, 5.0, width=8), Numeric(8, 3))


class YAxisTests(unittest.TestCase):
    def test_calc_y(self):
        axis = YAxis(Numeric(), 40, 100.0, 200.0)
        self.assertAlmostEqual(axis.calc_y(130.0), 12.0)
        self.assertAlmostEqual(axis.calc_y(100.0), 0.0)
        self.assertEqual(YAxis(Numeric(), 10, 5.0, 5.0).calc_y(5.0), 0.0)

    def test_calc_y_maps_max_to_height(self):
        for height, low, high in ((40, 100.0, 200.0), (9, 0.0, 4.2), (1, -3.5, 7.25)):
            axis = YAxis(Numeric(), height, low, high)
            self.assertAlmostEqual(axis.calc_y(high), float(height))
            self.assertAlmostEqual(axis.calc_y(low), 0.0)

    def test_min_above_max_is_rejected(self):
        with self.assertRaises(AssertionError):
            YAxis(Numeric(), 10, 2.0, 1.0)

    def test_accurate_labels_every_fourth_row(self):
        rows = YAxis(Numeric(), 5, 0.0, 3.0).render()
        self.assertEqual(
            rows,
            [
                "    3.000 ├ ",
                "          │ ",
                "          │ ",
                "          │ ",
                "    0.600 ├ ",
            ],
        )
        width = YAxis.estimated_width(Numeric(), 0.0, 3.0)
        self.assertTrue(all(len(r) == width for r in rows))

    def test_readable_labels_snap_to_step(self):
        axis = YAxis(Numeric(8, 3), 10, 0.0, 10.0, Grid.READABLE)
        self.assertEqual(axis.readable_step(), 5)
        rows = axis.render()
        labelled = {i: r.strip(" ├") for i, r in enumerate(rows) if "├" in r}
        self.assertEqual(labelled, {4: "5.000", 9: "0.000"})

    def test_readable_flat_range_labels_top_only(self):
        rows = YAxis(Numeric(), 6, 7.0, 7.0, Grid.READABLE).render()
        self.assertEqual(rows[0], "    7.000 ├ ")
        self.assertTrue(all("├" not in r for r in rows[1:]))


class LabelStringTests(unittest.TestCase):
    def test_overwrite_chars_clamps_to_row(self):
        chars = list("x" * 10)
        self.assertTrue(overwrite_chars(chars, 2, "yy", True))
        self.assertEqual("".join(chars), "xxyyxxxxxx")

        chars = list("x" * 10)
        self.assertTrue(overwrite_chars(chars, 8, "zzzzz", True))
        self.assertEqual("".join(chars), "xxxxxzzzzz")

        chars = list("x" * 10)
        self.assertTrue(overwrite_chars(chars, -2, "zzzzz", True))
        self.assertEqual("".join(chars), "zzzzzxxxxx")

    def test_overwrite_chars_refusals(self):
        chars = list("x" * 3)
        self.assertFalse(overwrite_chars(chars, 0, "zzzz", True))
        chars = list("  x  ")
        self.assertFalse(overwrite_chars(chars, 1, "ab", False))
        self.assertEqual("".join(chars), "  x  ")

    def test_diff_datetime_string(self):
        a = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
        self.assertEqual(diff_datetime_string(a, a.replace(year=2025)), "2025")
        self.assertEqual(diff_datetime_string(a, a + timedelta(days=1)), "03/02")
        self.assertEqual(diff_datetime_string(a, a + timedelta(minutes=15)), "10:15")
        self.assertEqual(diff_datetime_string(a, a + timedelta(seconds=30)), "10:00:30")
        self.assertEqual(diff_datetime_string(a, a), "")

    def test_diff_datetime_string_uses_offset(self):
        a = datetime(2024, 3, 1, 23, 0, tzinfo=timezone.utc)
        tz = timezone(timedelta(hours=2))
        self.assertEqual(diff_datetime_string(a, a + timedelta(minutes=30), tz), "01:30")

    def test_shorted_now_string(self):
        a = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
        utc = timezone.utc
        self.assertEqual(
            shorted_now_string(a, a.replace(year=2025), Precision.MINUTE, utc), "2025/03/01 10:00"
        )
        self.assertEqual(
            shorted_now_string(a, a + timedelta(days=1), Precision.SECOND, utc), "03/02 10:00:00"
        )
        self.assertEqual(
            shorted_now_string(a, a + timedelta(hours=1), Precision.DAY, utc), "03/01"
        )
        self.assertEqual(shorted_now_string(a, a, Precision.MINUTE, utc), "")

    def test_ms_to_datetime_before_epoch(self):
        self.assertEqual(ms_to_datetime(-60_000), datetime(1969, 12, 31, 23, 59, tzinfo=timezone.utc))


class XAxisTests(unittest.TestCase):
    def test_history_labels(self):
        axis = XAxis(60, RANGE_START, RANGE_END, Interval.ONE_MINUTE, False)
        self.assertEqual(
            axis.render(timezone.utc),
            [
                "──────────────┴──────────────┴──────────────┴──────────────┴",
                "            07:15          07:30          07:45        08:00",
            ],
        )

    def test_realtime_marker(self):
        axis = XAxis(30, RANGE_START, RANGE_END, Interval.ONE_MINUTE, True)
        self.assertEqual(
            axis.render(timezone.utc),
            [
                "──────────────┴──────────────┴",
                "            07:45       *08:00",
            ],
        )

    def test_timestamps_keep_newest(self):
        axis = XAxis(5, RANGE_START, RANGE_END, Interval.ONE_MINUTE, False)
        stamps = axis.timestamps()
        self.assertEqual(len(stamps), 5)
        self.assertEqual(stamps[-1], RANGE_END)

    def test_single_timestamp_compares_with_now(self):
        axis = XAxis(20, RANGE_END, RANGE_END, Interval.ONE_MINUTE, False)
        now = datetime(2023, 12, 31, 9, 0, tzinfo=timezone.utc)
        rule, labels = axis.render(timezone.utc, now=now)
        self.assertEqual(labels.strip(), "08:00")
        self.assertEqual(rule[0], "┴")

    def test_label_too_wide_is_dropped(self):
        rule, labels = XAxis(1, 0, 0, Interval.ONE_MINUTE, True).render()
        self.assertEqual(rule, "─")
        self.assertEqual(labels, " ")


if __name__ == "__main__":
    unittest.main()
