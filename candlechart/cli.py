from __future__ import annotations

import argparse
import csv
from datetime import timedelta, timezone
import logging
import os
import re
import sys
from typing import Dict, List, Optional

import numpy as np
from rich.console import Console

from candlechart.core.chart_state import CandlestickChartState
from candlechart.core.models import Candle, candles_from_bars, sort_candles
from candlechart.core.timeframes import Interval
from candlechart.ui.charts.buffer import Buffer, Rect
from candlechart.ui.charts.candlestick_chart import CandlestickChart
from candlechart.ui.charts.y_axis import Grid, Numeric

logger = logging.getLogger(__name__)

_OFFSET_RE = re.compile(r"^([+-])(\d{1,2}):?(\d{2})?$")


def _setup_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "WARNING"),
        format="[%(asctime)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def parse_utc_offset(val: str) -> timezone:
    """
    Parse a fixed display offset such as ``+09:00``, ``-0530``, ``+2`` or ``UTC``.
    """
    v = val.strip()
    if v.upper() in ("UTC", "Z", ""):
        return timezone.utc
    match = _OFFSET_RE.match(v)
    if match is None:
        raise ValueError(f"Invalid UTC offset: {val!r}")
    sign, hours, minutes = match.groups()
    delta = timedelta(hours=int(hours), minutes=int(minutes or 0))
    if delta >= timedelta(hours=24):
        raise ValueError(f"UTC offset out of range: {val!r}")
    return timezone(-delta if sign == "-" else delta)


def load_csv_bars(path: str) -> List[Candle]:
    rows: List[List[float]] = []
    seen: Dict[float, int] = {}
    with open(path, "r", encoding="utf-8", newline="") as handle:
        for line_no, row in enumerate(csv.reader(handle), start=1):
            if not row or not "".join(row).strip():
                continue
            try:
                rows.append([float(cell) for cell in row[:5]])
            except ValueError:
                # Header row
                if line_no == 1:
                    continue
                raise ValueError(f"{path}:{line_no}: expected numeric ts,open,high,low,close, got {row}")
            ts = rows[-1][0]
            if ts in seen:
                raise ValueError(f"{path}:{line_no}: duplicate timestamp {ts:.0f} (first seen on line {seen[ts]})")
            seen[ts] = line_no
    return sort_candles(candles_from_bars(rows))


def stress_bars(n: int, interval: Interval, end_ts: Optional[int] = None) -> List[Candle]:
    # Deterministic synthetic bars: gentle trend + bounded wiggle (no randomness).
    step = interval.millis
    last = end_ts if end_ts is not None else 1_700_000_000_000 // step * step
    ts = last - (np.arange(n - 1, -1, -1, dtype=np.int64) * step)
    base = 100.0 + (np.arange(n, dtype=np.float64) * 0.05)
    wiggle = 2.5 * np.sin(np.arange(n, dtype=np.float64) * 0.3)
    close = base + wiggle
    open_ = np.concatenate(([close[0] - 0.4], close[:-1]))
    high = np.maximum(open_, close) + 0.6
    low = np.minimum(open_, close) - 0.6
    bars = np.column_stack([ts.astype(np.float64), open_, high, low, close])
    return candles_from_bars(bars)


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Render a candlestick chart frame to the terminal.")
    source = ap.add_mutually_exclusive_group(required=True)
    source.add_argument("--csv", help="CSV of ts(ms),open,high,low,close[,volume] rows; header optional")
    source.add_argument("--stress-bars", type=int, default=0, help="Generate N synthetic bars instead of reading a file")
    ap.add_argument("--interval", default="1m", help="Candle interval, e.g. 1s, 1m, 15m, 1h, 1d, 1w (default: 1m)")
    ap.add_argument("--width", type=int, default=None, help="Chart width in columns (default: terminal width)")
    ap.add_argument("--height", type=int, default=20, help="Chart height in rows (default: 20)")
    ap.add_argument("--grid", choices=[g.value for g in Grid], default=Grid.ACCURATE.value)
    ap.add_argument("--precision", type=int, default=None, help="Label field width (default: derived from data)")
    ap.add_argument("--scale", type=int, default=None, help="Label fractional digits (default: derived from data)")
    ap.add_argument("--tz-offset", default="UTC", help="Display offset for time labels, e.g. +09:00 (default: UTC)")
    ap.add_argument("--scroll-back", type=int, default=0, help="Move the cursor N intervals back before drawing")
    ap.add_argument("--no-color", action="store_true", help="Disable ANSI colors")

    args = ap.parse_args(argv)
    _setup_logging()

    try:
        interval = Interval.from_timeframe(args.interval)
        display_timezone = parse_utc_offset(args.tz_offset)
    except ValueError as exc:
        raise SystemExit(str(exc))

    if args.csv:
        if not os.path.isfile(args.csv):
            raise SystemExit(f"CSV not found: {args.csv}")
        try:
            candles = load_csv_bars(args.csv)
        except ValueError as exc:
            raise SystemExit(str(exc))
    else:
        if args.stress_bars < 1:
            raise SystemExit("--stress-bars must be >= 1")
        candles = stress_bars(int(args.stress_bars), interval)
    if not candles:
        raise SystemExit("No candles to render.")

    numeric = None
    if args.precision is not None or args.scale is not None:
        default = Numeric()
        numeric = Numeric(
            args.precision if args.precision is not None else default.precision,
            args.scale if args.scale is not None else default.scale,
        )

    console = Console(no_color=bool(args.no_color), highlight=False)
    width = int(args.width) if args.width else console.size.width
    area = Rect(0, 0, width, int(args.height))

    chart = CandlestickChart(
        interval,
        numeric=numeric,
        grid=Grid(args.grid),
        display_timezone=display_timezone,
    )
    state = CandlestickChartState()
    buf = Buffer.empty(area)
    chart.render(candles, area, buf, state)
    if state.info is None:
        raise SystemExit(f"Area {width}x{args.height} is too small for this chart.")

    if args.scroll_back > 0:
        for _ in range(int(args.scroll_back)):
            state.move_backward()
        logger.info("Cursor moved to %s", state.cursor_timestamp)
        buf = Buffer.empty(area)
        chart.render(candles, area, buf, state)

    console.print(buf, soft_wrap=True)
    if state.needs_previous_candles():
        print(
            f"older candles needed before ts={candles[0].timestamp} to fill the window",
            file=sys.stderr,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
