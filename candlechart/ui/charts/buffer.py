from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from rich.style import Style
from rich.text import Text


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom


@dataclass
class Cell:
    symbol: str = " "
    style: Style = field(default_factory=Style)


class Buffer:
    """Grid of styled cells addressed by absolute terminal coordinates."""

    def __init__(self, area: Rect, cells: List[Cell]) -> None:
        if len(cells) != area.area:
            raise ValueError(f"Buffer for {area} needs {area.area} cells, got {len(cells)}")
        self.area = area
        self.cells = cells

    @classmethod
    def empty(cls, area: Rect) -> Buffer:
        return cls.filled(area, " ")

    @classmethod
    def filled(cls, area: Rect, symbol: str, style: Optional[Style] = None) -> Buffer:
        base = style if style is not None else Style()
        return cls(area, [Cell(symbol, base) for _ in range(area.area)])

    def _index(self, x: int, y: int) -> int:
        if not self.area.contains(x, y):
            raise IndexError(f"({x}, {y}) is outside {self.area}")
        return (y - self.area.y) * self.area.width + (x - self.area.x)

    def get(self, x: int, y: int) -> Cell:
        return self.cells[self._index(x, y)]

    def set_cell(self, x: int, y: int, symbol: str, style: Optional[Style] = None) -> None:
        if not self.area.contains(x, y):
            return
        cell = self.cells[self._index(x, y)]
        cell.symbol = symbol
        if style is not None:
            cell.style = style

    def set_string(self, x: int, y: int, string: str, style: Optional[Style] = None) -> None:
        for offset, ch in enumerate(string):
            self.set_cell(x + offset, y, ch, style)

    def lines(self) -> List[str]:
        width = self.area.width
        return [
            "".join(cell.symbol for cell in self.cells[row * width:(row + 1) * width])
            for row in range(self.area.height)
        ]

    def to_text(self) -> Text:
        text = Text()
        width = self.area.width
        for row in range(self.area.height):
            if row:
                text.append("\n")
            for cell in self.cells[row * width:(row + 1) * width]:
                text.append(cell.symbol, style=cell.style)
        return text

    def __rich__(self) -> Text:
        return self.to_text()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        return self.area == other.area and self.cells == other.cells

    def __repr__(self) -> str:
        return f"Buffer(area={self.area}, lines={self.lines()!r})"
