"""candlechart: candlestick charts rendered into terminal cell buffers."""

from .core import Candle, CandlestickChartState, Interval, candles_from_bars
from .ui.charts import Buffer, CandlestickChart, ChartConfig, Grid, Numeric, Rect

__all__ = [
    "Buffer",
    "Candle",
    "CandlestickChart",
    "CandlestickChartState",
    "ChartConfig",
    "Grid",
    "Interval",
    "Numeric",
    "Rect",
    "candles_from_bars",
]
__version__ = "0.1.0"
