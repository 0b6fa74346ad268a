from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import timezone, tzinfo
import logging
from typing import Optional, Sequence

import numpy as np
from rich.color import Color
from rich.style import Style

from candlechart.core.chart_state import CandlestickChartState, ChartInfo
from candlechart.core.models import Candle, CandleType, ensure_ascending
from candlechart.core.timeframes import Interval

from .buffer import Buffer, Rect
from .candle_glyphs import render_candle
from .x_axis import XAxis
from .y_axis import LABEL_PADDING, Grid, Numeric, YAxis

logger = logging.getLogger(__name__)

DEFAULT_BEARISH_COLOR = Color.from_rgb(234, 74, 90)
DEFAULT_BULLISH_COLOR = Color.from_rgb(52, 208, 88)
X_AXIS_ROWS = 3
CORNER = "└─"


@dataclass(frozen=True)
class ChartConfig:
    """Rendering options.

    ``numeric=None`` derives label digits from the visible value range;
    ``display_timezone`` only affects time labels, never slot alignment.
    """

    interval: Interval
    bearish_color: Color = DEFAULT_BEARISH_COLOR
    bullish_color: Color = DEFAULT_BULLISH_COLOR
    numeric: Optional[Numeric] = None
    grid: Grid = Grid.ACCURATE
    display_timezone: tzinfo = timezone.utc
    axis_style: Style = field(default_factory=Style)


class CandlestickChart:
    """Draws candles with value/time axes into a :class:`Buffer`.

    Layout inside ``area``::

        | y axis | candle columns       |
        |        | rule + tick marks    |
        |        | time labels          |
    """

    def __init__(self, interval: Interval, **options) -> None:
        self.config = ChartConfig(interval=interval, **options)

    @classmethod
    def from_config(cls, config: ChartConfig) -> CandlestickChart:
        chart = cls.__new__(cls)
        chart.config = config
        return chart

    def with_options(self, **changes) -> CandlestickChart:
        return CandlestickChart.from_config(replace(self.config, **changes))

    def _color_for(self, candle_type: CandleType) -> Color:
        if candle_type is CandleType.BULLISH:
            return self.config.bullish_color
        return self.config.bearish_color

    def render(
        self,
        candles: Sequence[Candle],
        area: Rect,
        buf: Buffer,
        state: CandlestickChartState,
    ) -> None:
        if not candles:
            return
        ensure_ascending(candles)

        cfg = self.config
        count = len(candles)
        timestamps = np.fromiter((c.timestamp for c in candles), dtype=np.int64, count=count)
        lows = np.fromiter((c.low for c in candles), dtype=np.float64, count=count)
        highs = np.fromiter((c.high for c in candles), dtype=np.float64, count=count)

        global_min = float(lows.min())
        global_max = float(highs.max())
        numeric = cfg.numeric if cfg.numeric is not None else Numeric.auto(global_min, global_max)
        y_axis_width = YAxis.estimated_width(numeric, global_min, global_max)
        if area.width <= y_axis_width or area.height <= X_AXIS_ROWS:
            logger.debug("Area %s too small for axis width %s; skipping frame", area, y_axis_width)
            return

        chart_width = area.width - y_axis_width
        interval_ms = cfg.interval.millis
        first_ts = int(timestamps[0])
        last_ts = int(timestamps[-1])

        # Placeholder slots give a full screen of aligned timestamps on both sides.
        pad = chart_width - 1
        leading = first_ts - interval_ms * np.arange(pad, 0, -1, dtype=np.int64)
        trailing = last_ts + interval_ms * np.arange(1, pad + 1, dtype=np.int64)
        slots = np.concatenate((leading, timestamps, trailing))

        bounds = ChartInfo(
            cursor_first_timestamp=int(slots[pad]),
            cursor_last_timestamp=int(slots[-1]),
            interval=cfg.interval,
            latest_timestamp=last_ts,
        )
        cursor = bounds.clamp_cursor(state.cursor_timestamp)
        window_end = last_ts if cursor is None else cursor
        window_start = window_end - interval_ms * pad
        state.set_info(replace(bounds, need_previous_candles=window_start < first_ts))

        lo = int(np.searchsorted(timestamps, window_start, side="left"))
        hi = int(np.searchsorted(timestamps, window_end, side="right"))
        if hi > lo:
            y_min, y_max = float(lows[lo:hi].min()), float(highs[lo:hi].max())
        else:
            # window sits inside a hole in the series
            y_min, y_max = global_min, global_max
        if cfg.numeric is None:
            # column width stays fixed by the whole series, digits follow the window
            numeric = Numeric.auto(y_min, y_max, width=y_axis_width - LABEL_PADDING)
        y_axis = YAxis(numeric, area.height - X_AXIS_ROWS, y_min, y_max, cfg.grid)
        for row, text in enumerate(y_axis.render()):
            buf.set_string(area.x, area.y + row, text, cfg.axis_style)

        x_axis = XAxis(chart_width, window_start, window_end, cfg.interval, state.is_live)
        axis_top = area.y + area.height - X_AXIS_ROWS
        buf.set_string(area.x + y_axis_width - len(CORNER), axis_top, CORNER, cfg.axis_style)
        for row, text in enumerate(x_axis.render(cfg.display_timezone)):
            buf.set_string(area.x + y_axis_width, axis_top + row, text, cfg.axis_style)

        columns = (timestamps[lo:hi] - window_start) // interval_ms
        for candle, column in zip(candles[lo:hi], columns):
            candle_type, glyphs = render_candle(candle, y_axis)
            style = Style(color=self._color_for(candle_type))
            x = area.x + y_axis_width + int(column)
            for row, glyph in enumerate(glyphs):
                buf.set_cell(x, area.y + row, glyph, style)
