from __future__ import annotations

from enum import Enum
import logging
import math
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from candlechart.core.models import Candle, CandleType

from .symbols import (
    FORBIDDEN_PAIRS,
    UNICODE_BODY,
    UNICODE_DOWN,
    UNICODE_HALF_BODY_BOTTOM,
    UNICODE_HALF_BODY_TOP,
    UNICODE_HALF_WICK_BOTTOM,
    UNICODE_HALF_WICK_TOP,
    UNICODE_UP,
    UNICODE_VOID,
    UNICODE_WICK,
)
from .y_axis import YAxis

logger = logging.getLogger(__name__)


class Ink(Enum):
    FULL = "full"
    HALF = "half"
    NONE = "none"


class Gap(Enum):
    FLUSH = "flush"
    NEAR = "near"
    FAR = "far"


class GlyphRule(NamedTuple):
    outside_body: str
    inside_body: str
    # New value of the running "in body" flag, None leaves it unchanged.
    body_after: Optional[bool]


def _rule(glyph: str, body_after: Optional[bool] = None) -> GlyphRule:
    return GlyphRule(glyph, glyph, body_after)


_VOID_RULE = _rule(UNICODE_VOID)

UPPER_WICK_RULES: Dict[Tuple[Ink, Gap], GlyphRule] = {
    (Ink.FULL, Gap.FLUSH): _rule(UNICODE_BODY, True),
    (Ink.FULL, Gap.NEAR): GlyphRule(UNICODE_UP, UNICODE_BODY, True),
    (Ink.FULL, Gap.FAR): _rule(UNICODE_WICK),
    (Ink.HALF, Gap.FLUSH): _rule(UNICODE_HALF_BODY_BOTTOM),
    (Ink.HALF, Gap.NEAR): _rule(UNICODE_HALF_WICK_BOTTOM),
    (Ink.HALF, Gap.FAR): _rule(UNICODE_HALF_WICK_BOTTOM),
}

LOWER_WICK_RULES: Dict[Tuple[Ink, Gap], GlyphRule] = {
    (Ink.FULL, Gap.FLUSH): _rule(UNICODE_BODY, True),
    (Ink.FULL, Gap.NEAR): GlyphRule(UNICODE_WICK, UNICODE_DOWN, False),
    (Ink.FULL, Gap.FAR): _rule(UNICODE_WICK),
    (Ink.HALF, Gap.FLUSH): _rule(UNICODE_HALF_BODY_TOP),
    (Ink.HALF, Gap.NEAR): _rule(UNICODE_HALF_WICK_TOP),
    (Ink.HALF, Gap.FAR): _rule(UNICODE_HALF_WICK_TOP),
}


def upper_ink(high: float, y: float) -> Ink:
    covered = high - y
    if covered > 0.5:
        return Ink.FULL
    if covered >= 0.0:
        return Ink.HALF
    return Ink.NONE


def lower_ink(low: float, y: float) -> Ink:
    uncovered = low - y
    if uncovered < 0.5:
        return Ink.FULL
    if uncovered <= 1.0:
        return Ink.HALF
    return Ink.NONE


def wick_gap(diff: float) -> Gap:
    if diff < 0.25:
        return Gap.FLUSH
    if diff < 0.75:
        return Gap.NEAR
    return Gap.FAR


def _apply(rules: Dict[Tuple[Ink, Gap], GlyphRule], ink: Ink, gap: Gap, in_body: bool) -> Tuple[str, bool]:
    rule = _VOID_RULE if ink is Ink.NONE else rules[(ink, gap)]
    glyph = rule.inside_body if in_body else rule.outside_body
    if rule.body_after is not None:
        in_body = rule.body_after
    return glyph, in_body


def glyph_column(open_y: float, high_y: float, low_y: float, close_y: float, height: int) -> List[str]:
    """Glyphs for one candle already mapped to row coordinates, top row first."""
    body_top = max(open_y, close_y)
    body_bottom = min(open_y, close_y)
    upper_gap = wick_gap(high_y - body_top)
    lower_gap = wick_gap(body_bottom - low_y)

    upper_start, upper_end = math.floor(body_top), math.ceil(high_y)
    body_start = math.ceil(body_bottom)
    lower_end = math.floor(low_y)

    in_body = False
    column: List[str] = []
    for y in range(height - 1, -1, -1):
        if upper_end >= y >= upper_start:
            glyph, in_body = _apply(UPPER_WICK_RULES, upper_ink(high_y, y), upper_gap, in_body)
        elif upper_start >= y >= body_start:
            glyph, in_body = UNICODE_BODY, True
        elif body_start >= y >= lower_end:
            glyph, in_body = _apply(LOWER_WICK_RULES, lower_ink(low_y, y), lower_gap, in_body)
        else:
            glyph = UNICODE_VOID
        column.append(glyph)
    return column


def check_continuity(glyphs: Sequence[str], require_ink: bool = True) -> bool:
    if not glyphs:
        return True
    if all(g == UNICODE_VOID for g in glyphs):
        return not require_ink

    padded = list(glyphs) + [UNICODE_VOID]
    strokes = sum(
        1 for upper, lower in zip(padded, padded[1:]) if upper != UNICODE_VOID and lower == UNICODE_VOID
    )
    if strokes > 1:
        return False
    return not any((upper, lower) in FORBIDDEN_PAIRS for upper, lower in zip(padded, padded[1:]))


def render_candle(candle: Candle, y_axis: YAxis) -> Tuple[CandleType, List[str]]:
    column = glyph_column(
        y_axis.calc_y(candle.open),
        y_axis.calc_y(candle.high),
        y_axis.calc_y(candle.low),
        y_axis.calc_y(candle.close),
        y_axis.height,
    )
    if not check_continuity(column, require_ink=candle.high > candle.low):
        logger.error(
            "Broken candle column at ts=%s: %r (open=%s high=%s low=%s close=%s)",
            candle.timestamp,
            "".join(column),
            candle.open,
            candle.high,
            candle.low,
            candle.close,
        )
    return candle.candle_type, column
