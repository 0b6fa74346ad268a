from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .timeframes import Interval


@dataclass(frozen=True)
class ChartInfo:
    """Window bounds computed by the last render.

    ``cursor_first_timestamp``/``cursor_last_timestamp`` are the earliest and
    latest window ends a screen-width window can take; ``latest_timestamp`` is
    the newest candle actually held by the caller.
    """

    cursor_first_timestamp: int
    cursor_last_timestamp: int
    interval: Interval
    latest_timestamp: int
    need_previous_candles: bool = False

    def clamp_cursor(self, cursor: Optional[int]) -> Optional[int]:
        if cursor is None:
            return None
        clamped = min(max(cursor, self.cursor_first_timestamp), self.cursor_last_timestamp)
        if clamped == self.latest_timestamp:
            return None
        return clamped


@dataclass
class CandlestickChartState:
    """Viewport owned by the caller across frames.

    ``cursor_timestamp`` is ``None`` while pinned to the live edge, otherwise
    the timestamp the visible window ends at. Forward moves that reach the
    live edge collapse straight back to live.
    """

    info: Optional[ChartInfo] = None
    cursor_timestamp: Optional[int] = None

    @property
    def is_live(self) -> bool:
        return self.cursor_timestamp is None

    def set_info(self, info: ChartInfo) -> None:
        self.cursor_timestamp = info.clamp_cursor(self.cursor_timestamp)
        self.info = info

    def move_backward(self) -> None:
        info = self.info
        if info is None:
            return
        base = info.latest_timestamp if self.cursor_timestamp is None else self.cursor_timestamp
        cursor = max(base - info.interval.millis, info.cursor_first_timestamp)
        self.cursor_timestamp = info.clamp_cursor(cursor)

    def move_forward(self) -> None:
        info = self.info
        if info is None or self.cursor_timestamp is None:
            return
        cursor = min(self.cursor_timestamp + info.interval.millis, info.cursor_last_timestamp)
        if cursor >= info.latest_timestamp:
            self.cursor_timestamp = None
            return
        self.cursor_timestamp = info.clamp_cursor(cursor)

    def reset_cursor(self) -> None:
        self.cursor_timestamp = None

    def needs_previous_candles(self) -> bool:
        if self.info is None:
            return False
        return self.info.need_previous_candles
