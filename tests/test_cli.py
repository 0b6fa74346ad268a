import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from datetime import timedelta

REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from candlechart.cli import load_csv_bars, main, parse_utc_offset, stress_bars
from candlechart.core.timeframes import Interval


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        rc = main(argv)
    return rc, out.getvalue(), err.getvalue()


class CliTests(unittest.TestCase):
    def test_stress_bars_frame(self):
        rc, out, err = _run(["--stress-bars", "100", "--width", "60", "--height", "12", "--no-color"])
        self.assertEqual(rc, 0)
        lines = out.splitlines()
        self.assertEqual(len(lines), 12)
        self.assertTrue(all(len(line) <= 60 for line in lines))
        self.assertIn("├", lines[0])
        self.assertIn("┴", lines[9])
        self.assertIn("*", lines[10])
        self.assertEqual(err, "")

    def test_scroll_back_reports_missing_history(self):
        rc, out, err = _run(
            ["--stress-bars", "100", "--width", "60", "--height", "12", "--no-color", "--scroll-back", "70"]
        )
        self.assertEqual(rc, 0)
        self.assertNotIn("*", out.splitlines()[10])
        self.assertIn("older candles needed", err)

    def test_csv_with_header(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "bars.csv")
            with open(path, "w", encoding="utf-8") as fh:
                fh.write("ts,open,high,low,close,volume\n")
                fh.write("120000,3.9,4.1,2.0,2.3,5\n")
                fh.write("0,0.9,3.0,0.0,2.1,1\n")
                fh.write("60000,2.1,4.2,2.1,3.9,7\n")
            candles = load_csv_bars(path)
            self.assertEqual([c.timestamp for c in candles], [0, 60_000, 120_000])
            rc, out, _ = _run(["--csv", path, "--width", "18", "--height", "8", "--no-color"])
        self.assertEqual(rc, 0)
        self.assertEqual(out.splitlines()[0], "    4.200 ├     ╽┃")

    def test_bad_inputs_exit(self):
        with self.assertRaises(SystemExit):
            _run(["--stress-bars", "10", "--interval", "2m"])
        with self.assertRaises(SystemExit):
            _run(["--stress-bars", "0"])
        with self.assertRaises(SystemExit):
            _run(["--csv", "/nonexistent/bars.csv"])
        with self.assertRaises(SystemExit):
            _run(["--stress-bars", "10", "--width", "10"])

    def test_duplicate_csv_timestamps_exit_with_message(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "dup.csv")
            with open(path, "w", encoding="utf-8") as fh:
                fh.write("0,1,2,0,1\n")
                fh.write("60000,1,2,0,1\n")
                fh.write("0,1,3,0,2\n")
            with self.assertRaises(ValueError) as ctx:
                load_csv_bars(path)
            self.assertIn(":3: duplicate timestamp 0 (first seen on line 1)", str(ctx.exception))
            with self.assertRaises(SystemExit) as exit_ctx:
                _run(["--csv", path, "--width", "18", "--height", "8"])
        self.assertIn("duplicate timestamp", str(exit_ctx.exception.code))

    def test_parse_utc_offset(self):
        self.assertEqual(parse_utc_offset("+09:00").utcoffset(None), timedelta(hours=9))
        self.assertEqual(parse_utc_offset("-0530").utcoffset(None), -timedelta(hours=5, minutes=30))
        self.assertEqual(parse_utc_offset("UTC").utcoffset(None), timedelta(0))
        with self.assertRaises(ValueError):
            parse_utc_offset("nine")

    def test_stress_bars_are_deterministic(self):
        a = stress_bars(20, Interval.FIVE_MINUTES)
        b = stress_bars(20, Interval.FIVE_MINUTES)
        self.assertEqual(a, b)
        self.assertEqual(a[1].timestamp - a[0].timestamp, 300_000)


if __name__ == "__main__":
    unittest.main()
