from __future__ import annotations

from enum import Enum


class Precision(Enum):
    SECOND = "second"
    MINUTE = "minute"
    DAY = "day"


class Interval(Enum):
    # seconds, render gap (in intervals), label precision, timeframe code
    ONE_SECOND = (1, 30, Precision.SECOND, "1s")
    ONE_MINUTE = (60, 15, Precision.MINUTE, "1m")
    THREE_MINUTES = (180, 20, Precision.MINUTE, "3m")
    FIVE_MINUTES = (300, 12, Precision.MINUTE, "5m")
    FIFTEEN_MINUTES = (900, 8, Precision.MINUTE, "15m")
    THIRTY_MINUTES = (1_800, 8, Precision.MINUTE, "30m")
    ONE_HOUR = (3_600, 12, Precision.MINUTE, "1h")
    TWO_HOURS = (7_200, 12, Precision.MINUTE, "2h")
    FOUR_HOURS = (14_400, 18, Precision.MINUTE, "4h")
    SIX_HOURS = (21_600, 12, Precision.MINUTE, "6h")
    EIGHT_HOURS = (28_800, 9, Precision.MINUTE, "8h")
    TWELVE_HOURS = (43_200, 14, Precision.MINUTE, "12h")
    ONE_DAY = (86_400, 30, Precision.DAY, "1d")
    THREE_DAYS = (259_200, 30, Precision.DAY, "3d")
    ONE_WEEK = (604_800, 12, Precision.DAY, "1w")

    def __init__(self, seconds: int, render_gap: int, precision: Precision, timeframe: str) -> None:
        self.seconds = seconds
        self.render_gap = render_gap
        self.precision = precision
        self.timeframe = timeframe

    @property
    def millis(self) -> int:
        return self.seconds * 1000

    @property
    def label_gap_ms(self) -> int:
        return self.render_gap * self.millis

    @classmethod
    def from_seconds(cls, seconds: int) -> Interval:
        for member in cls:
            if member.seconds == seconds:
                return member
        raise ValueError(f"Unsupported interval: {seconds}s")

    @classmethod
    def from_timeframe(cls, timeframe: str) -> Interval:
        code = (timeframe or "").strip()
        for member in cls:
            if member.timeframe == code:
                return member
        known = ", ".join(m.timeframe for m in cls)
        raise ValueError(f"Unknown timeframe: {timeframe!r}. known=[{known}]")
