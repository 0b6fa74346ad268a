from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
from typing import Iterable, List, Optional, Sequence

import numpy as np


class CandleType(Enum):
    BEARISH = "bearish"
    BULLISH = "bullish"


@dataclass(frozen=True)
class Candle:
    """A single OHLC bar.

    Attributes:
        timestamp: Opening instant of the bar, ms since epoch.
        open:      Opening price.
        high:      Highest price during the bar.
        low:       Lowest price during the bar.
        close:     Closing price.
    """

    timestamp: int
    open: float
    high: float
    low: float
    close: float

    def __post_init__(self) -> None:
        prices = (self.open, self.high, self.low, self.close)
        if not all(math.isfinite(p) for p in prices):
            raise ValueError(f"prices must be finite, got open={self.open} high={self.high} low={self.low} close={self.close}")
        if self.high < self.low:
            raise ValueError(f"high ({self.high}) must be >= low ({self.low})")

    @classmethod
    def try_new(cls, timestamp: int, open: float, high: float, low: float, close: float) -> Optional[Candle]:
        if high < low or not all(math.isfinite(p) for p in (open, high, low, close)):
            return None
        return cls(int(timestamp), float(open), float(high), float(low), float(close))

    @property
    def candle_type(self) -> CandleType:
        if self.open <= self.close:
            return CandleType.BULLISH
        return CandleType.BEARISH

    def sort_key(self) -> int:
        return self.timestamp


def bars_to_numpy(bars: Iterable[Iterable[float]]) -> np.ndarray:
    arr = np.asarray(bars, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 5), dtype=np.float64)
    if arr.ndim == 1:
        arr = np.expand_dims(arr, 0)
    if arr.ndim != 2 or arr.shape[1] < 5:
        raise ValueError(f"bars must be rows of [ts, open, high, low, close, ...], got shape {arr.shape}")
    return arr[:, :5]


def candles_from_bars(bars: Iterable[Iterable[float]]) -> List[Candle]:
    """Convert ``[ts, open, high, low, close, volume]`` rows into candles.

    Volume and any further columns are ignored. A row whose high is below
    its low raises ``ValueError`` naming the row index.
    """
    arr = bars_to_numpy(bars)
    if not np.all(np.isfinite(arr)):
        bad = int(np.argmax(~np.all(np.isfinite(arr), axis=1)))
        raise ValueError(f"Non-finite value in bar row {bad}: {arr[bad].tolist()}")
    out: List[Candle] = []
    for idx, row in enumerate(arr):
        candle = Candle.try_new(int(row[0]), row[1], row[2], row[3], row[4])
        if candle is None:
            raise ValueError(f"Invalid bar row {idx}: high ({row[2]}) < low ({row[3]})")
        out.append(candle)
    return out


def sort_candles(candles: Iterable[Candle]) -> List[Candle]:
    return sorted(candles, key=Candle.sort_key)


def ensure_ascending(candles: Sequence[Candle]) -> None:
    if len(candles) < 2:
        return
    ts = np.fromiter((c.timestamp for c in candles), dtype=np.int64, count=len(candles))
    assert bool(np.all(np.diff(ts) > 0)), "candles must be strictly ascending by timestamp"
