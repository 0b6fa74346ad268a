from .chart_state import CandlestickChartState, ChartInfo
from .models import Candle, CandleType, candles_from_bars, ensure_ascending, sort_candles
from .timeframes import Interval, Precision

__all__ = [
    "Candle",
    "CandleType",
    "CandlestickChartState",
    "ChartInfo",
    "Interval",
    "Precision",
    "candles_from_bars",
    "ensure_ascending",
    "sort_candles",
]
