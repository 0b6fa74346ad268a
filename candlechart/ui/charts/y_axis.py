from __future__ import annotations

from enum import Enum
import math
from typing import List, Optional

DEFAULT_PRECISION = 8
DEFAULT_SCALE = 3
MAX_SCALE = 10
TICK_EVERY_ROWS = 4
READABLE_MULTIPLIERS = (1, 5, 10, 20, 50, 100)
# " " before the label, " ├ " after it
LABEL_PADDING = 4


class Grid(Enum):
    ACCURATE = "accurate"
    READABLE = "readable"


class Numeric:
    """Fixed-point formatter: ``precision`` is the field width, ``scale`` the fractional digits."""

    def __init__(self, precision: int = DEFAULT_PRECISION, scale: int = DEFAULT_SCALE) -> None:
        self.precision = int(precision)
        self.scale = int(scale)

    @classmethod
    def auto(cls, min_value: float, max_value: float, width: Optional[int] = None) -> Numeric:
        """Format able to tell apart values across ``[min_value, max_value]``.

        With ``width`` the field width is fixed and the scale is cut down to
        whatever still fits, so labels line up in an already reserved column.
        """
        span = float(max_value) - float(min_value)
        scale = DEFAULT_SCALE
        if span > 0 and math.isfinite(span):
            scale = min(MAX_SCALE, max(DEFAULT_SCALE, DEFAULT_SCALE - math.floor(math.log10(span))))
        magnitude = max(abs(float(min_value)), abs(float(max_value)))
        int_digits = len(str(int(magnitude))) if math.isfinite(magnitude) else 1
        sign = 1 if min(float(min_value), float(max_value)) < 0 else 0
        if width is not None:
            return cls(width, max(0, min(scale, width - sign - int_digits - 1)))
        precision = max(DEFAULT_PRECISION, sign + int_digits + 1 + scale)
        return cls(precision, scale)

    def format(self, value: float) -> str:
        return f"{value:>{self.precision}.{self.scale}f}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Numeric):
            return NotImplemented
        return (self.precision, self.scale) == (other.precision, other.scale)

    def __repr__(self) -> str:
        return f"Numeric(precision={self.precision}, scale={self.scale})"


class YAxis:
    def __init__(
        self,
        numeric: Numeric,
        height: int,
        min_value: float,
        max_value: float,
        grid: Grid = Grid.ACCURATE,
    ) -> None:
        assert min_value <= max_value, f"min ({min_value}) must be <= max ({max_value})"
        self.numeric = numeric
        self.height = max(0, int(height))
        self.min_value = float(min_value)
        self.max_value = float(max_value)
        self.grid = grid
        self.unit = (self.max_value - self.min_value) / self.height if self.height else 0.0

    @staticmethod
    def estimated_width(numeric: Numeric, min_value: float, max_value: float) -> int:
        return max(len(numeric.format(min_value)), len(numeric.format(max_value))) + LABEL_PADDING

    def calc_y(self, value: float) -> float:
        if self.unit == 0:
            return 0.0
        return (value - self.min_value) / self.unit

    def _label_width(self) -> int:
        return max(len(self.numeric.format(self.max_value)), len(self.numeric.format(self.min_value)))

    def readable_step(self) -> float:
        if self.unit <= 0:
            return 0.0
        base = 10 ** math.floor(math.log10(self.unit))
        raw_step = self.unit * TICK_EVERY_ROWS
        for mult in READABLE_MULTIPLIERS:
            step = base * mult
            if step >= raw_step:
                return step
        return base * READABLE_MULTIPLIERS[-1]

    def _accurate_labels(self) -> List[Optional[float]]:
        return [
            self.max_value - self.unit * i if i % TICK_EVERY_ROWS == 0 else None
            for i in range(self.height)
        ]

    def _readable_labels(self) -> List[Optional[float]]:
        step = self.readable_step()
        labels: List[Optional[float]] = []
        for i in range(self.height):
            if step <= 0:
                labels.append(self.max_value if i == 0 else None)
                continue
            high = self.max_value - self.unit * i
            low = high - self.unit
            mid = (high + low) / 2.0
            nearest = math.floor(mid / step + 0.5) * step
            labels.append(nearest if low <= nearest < high else None)
        return labels

    def render(self) -> List[str]:
        width = self._label_width()
        if self.grid is Grid.READABLE:
            labels = self._readable_labels()
        else:
            labels = self._accurate_labels()
        rows = []
        for value in labels:
            if value is None:
                rows.append(f" {' ' * width} │ ")
            else:
                rows.append(f" {self.numeric.format(value).rjust(width)} ├ ")
        return rows
