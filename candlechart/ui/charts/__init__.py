from .buffer import Buffer, Cell, Rect
from .candle_glyphs import check_continuity, render_candle
from .candlestick_chart import CandlestickChart, ChartConfig
from .x_axis import XAxis
from .y_axis import Grid, Numeric, YAxis

__all__ = [
    "Buffer",
    "CandlestickChart",
    "Cell",
    "ChartConfig",
    "Grid",
    "Numeric",
    "Rect",
    "XAxis",
    "YAxis",
    "check_continuity",
    "render_candle",
]
