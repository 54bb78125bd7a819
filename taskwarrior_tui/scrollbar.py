"""A vertical scrollbar drawn in the right-hand column of an area."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from .style import Style

FULL_BLOCK = "\u2588"
DOUBLE_VERTICAL = "\u2551"

_U16_MASK = 0xFFFF


class Cell(NamedTuple):
    """One symbol placed at a column and row of the area."""

    x: int
    y: int
    symbol: str
    style: Style


@dataclass
class Scrollbar:
    """Scroll position ``pos`` out of ``length`` items."""

    pos: int
    length: int
    pos_style: Style = field(default_factory=Style)
    pos_symbol: str = FULL_BLOCK
    area_style: Style = field(default_factory=Style)
    area_symbol: str = DOUBLE_VERTICAL

    def __post_init__(self) -> None:
        if self.pos < 0 or self.length < 0:
            raise ValueError("scrollbar position and length must not be negative")
        # Positions are terminal coordinates and wrap like 16-bit values.
        self.pos &= _U16_MASK
        self.length &= _U16_MASK

    def render(self, width: int, height: int) -> list[Cell]:
        """Cells to draw in an area of ``width`` by ``height``, top to bottom."""
        if height <= 2 or self.length == 0:
            return []
        right = max(width - 1, 0)
        if right <= 0:
            return []

        top = 3
        rows = max(height - 4, 0)
        cells = {y: Cell(right, y, self.area_symbol, self.area_style) for y in range(top, top + rows)}

        progress = min(self.pos / self.length, 1.0)
        row = top + int(rows * progress)
        cells[row] = Cell(right, row, self.pos_symbol, self.pos_style)
        return [cells[y] for y in sorted(cells)]