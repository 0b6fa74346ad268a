from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import List, Optional

from candlechart.core.timeframes import Interval, Precision

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
RULE_CHAR = "─"
TICK_CHAR = "┴"
REALTIME_MARKER = "*"


def ms_to_datetime(ts_ms: int) -> datetime:
    # timedelta arithmetic keeps pre-1970 placeholder slots portable
    return EPOCH + timedelta(milliseconds=int(ts_ms))


def shorted_now_string(prev: datetime, now: datetime, precision: Precision, time_offset: tzinfo) -> str:
    """Label for the edge tick: the most specific field that changed since ``prev``.

    Worst case is a full ``YYYY/mm/dd HH:MM:SS`` when the year rolled over.
    """
    prev = prev.astimezone(time_offset)
    now = now.astimezone(time_offset)

    if prev.strftime("%Y") != now.strftime("%Y"):
        if precision is Precision.SECOND:
            return now.strftime("%Y/%m/%d %H:%M:%S")
        if precision is Precision.MINUTE:
            return now.strftime("%Y/%m/%d %H:%M")
        return now.strftime("%Y/%m/%d")

    if prev.strftime("%m/%d") != now.strftime("%m/%d"):
        if precision is Precision.SECOND:
            return now.strftime("%m/%d %H:%M:%S")
        if precision is Precision.MINUTE:
            return now.strftime("%m/%d %H:%M")
        return now.strftime("%m/%d")

    if prev.strftime("%H:%M:%S") != now.strftime("%H:%M:%S"):
        if precision is Precision.SECOND:
            return now.strftime("%H:%M:%S")
        if precision is Precision.MINUTE:
            return now.strftime("%H:%M")
        return now.strftime("%m/%d")

    return ""


def diff_datetime_string(prev: datetime, now: datetime, time_offset: tzinfo = timezone.utc) -> str:
    prev = prev.astimezone(time_offset)
    now = now.astimezone(time_offset)
    for fmt in ("%Y", "%m/%d", "%H:%M", "%H:%M:%S"):
        rendered = now.strftime(fmt)
        if prev.strftime(fmt) != rendered:
            return rendered
    return ""


def overwrite_chars(chars: List[str], idx: int, value: str, overlap: bool) -> bool:
    """Write ``value`` into ``chars`` at ``idx``, clamped to stay inside the row.

    Returns False without touching ``chars`` when the value is wider than the
    row, or when ``overlap`` is off and the target span holds non-blank text.
    """
    if len(chars) < len(value):
        return False
    if idx < 0:
        idx = 0
    elif len(chars) < idx + len(value):
        idx = len(chars) - len(value)

    if not overlap and any(ch != " " for ch in chars[idx:idx + len(value)]):
        return False

    chars[idx:idx + len(value)] = list(value)
    return True


class XAxis:
    def __init__(self, width: int, min_ts: int, max_ts: int, interval: Interval, is_realtime: bool) -> None:
        assert min_ts <= max_ts, f"min ({min_ts}) must be <= max ({max_ts})"
        self.width = max(0, int(width))
        self.min_ts = int(min_ts)
        self.max_ts = int(max_ts)
        self.interval = interval
        self.is_realtime = is_realtime

    def timestamps(self) -> List[int]:
        full = list(range(self.min_ts, self.max_ts + 1, self.interval.millis))
        if len(full) > self.width:
            return full[len(full) - self.width:]
        return full

    def _edge_label(self, prev: datetime, last: datetime, time_offset: tzinfo) -> str:
        rendered = shorted_now_string(prev, last, self.interval.precision, time_offset)
        if self.is_realtime:
            return f"{REALTIME_MARKER}{rendered}"
        return rendered

    def render(self, time_offset: tzinfo = timezone.utc, now: Optional[datetime] = None) -> List[str]:
        """Return ``[rule_row, label_row]``, both ``width`` characters long.

        Label priority: the last tick always wins; interior ticks on a
        ``render_gap`` boundary are dropped when they would overlap.
        """
        rule = [RULE_CHAR] * self.width
        labels = [" "] * self.width

        stamps = self.timestamps()
        count = len(stamps)
        if count == 1:
            reference = now if now is not None else datetime.now(timezone.utc)
            rendered = self._edge_label(reference, ms_to_datetime(stamps[0]), time_offset)
            if overwrite_chars(labels, count - 1 - len(rendered) // 2, rendered, True):
                rule[count - 1] = TICK_CHAR
        elif count >= 2:
            dates = [ms_to_datetime(ts) for ts in stamps]
            rendered = self._edge_label(dates[-2], dates[-1], time_offset)
            if overwrite_chars(labels, count - 1 - len(rendered) // 2, rendered, True):
                rule[count - 1] = TICK_CHAR

            gap = self.interval.label_gap_ms
            for idx in range(count - 1):
                if stamps[idx + 1] % gap != 0:
                    continue
                rendered = diff_datetime_string(dates[idx], dates[idx + 1], time_offset)
                if overwrite_chars(labels, idx - len(rendered) // 2, f" {rendered} ", False):
                    rule[idx + 1] = TICK_CHAR

        return ["".join(rule), "".join(labels)]
