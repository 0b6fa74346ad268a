UNICODE_VOID = " "
UNICODE_BODY = "┃"
UNICODE_WICK = "│"
UNICODE_UP = "╽"
UNICODE_DOWN = "╿"
UNICODE_HALF_BODY_BOTTOM = "╻"
UNICODE_HALF_WICK_BOTTOM = "╷"
UNICODE_HALF_BODY_TOP = "╹"
UNICODE_HALF_WICK_TOP = "╵"

# Glyph pairs (upper, lower) that must never be stacked directly.
FORBIDDEN_PAIRS = frozenset(
    [
        (UNICODE_BODY, UNICODE_UP),
        (UNICODE_BODY, UNICODE_HALF_BODY_BOTTOM),
        (UNICODE_BODY, UNICODE_HALF_WICK_BOTTOM),
        (UNICODE_DOWN, UNICODE_BODY),
        (UNICODE_HALF_BODY_TOP, UNICODE_BODY),
        (UNICODE_HALF_WICK_TOP, UNICODE_BODY),
        (UNICODE_WICK, UNICODE_HALF_BODY_BOTTOM),
        (UNICODE_WICK, UNICODE_HALF_WICK_BOTTOM),
        (UNICODE_HALF_BODY_TOP, UNICODE_WICK),
        (UNICODE_HALF_WICK_TOP, UNICODE_WICK),
    ]
)
