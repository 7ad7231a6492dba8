"""
grid.py

Board model for a single game:
 - EmptyCell / OccupiedCell / HitCell, the tagged values a cell can hold
 - Grid, the fixed N×N matrix of cells with get/set access and a text renderer

Cells are addressed by (x, y): x is the column, y is the row. Bounds are the
caller's responsibility; the placement and attack engines validate before
they touch the grid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple, Type, Union

from . import config as _cfg
from .coord_utils import format_coord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmptyCell:
    """Open water. Remembers its own coordinate so the board can display it."""

    x: int
    y: int

    @property
    def marker(self) -> str:
        return format_coord(self.x, self.y)


@dataclass(frozen=True)
class OccupiedCell:
    """A ship segment that has not been hit yet."""

    @property
    def marker(self) -> str:
        return _cfg.SHIP_MARKER


@dataclass(frozen=True)
class HitCell:
    """A ship segment that has been hit."""

    @property
    def marker(self) -> str:
        return _cfg.HIT_MARKER


Cell = Union[EmptyCell, OccupiedCell, HitCell]

OCCUPIED = OccupiedCell()
HIT = HitCell()


class Grid:
    """
    Square playing field of *size* × *size* cells.

    Every cell starts as EmptyCell(x, y). Ship placement writes OCCUPIED into
    the covered cells and a successful attack rewrites OCCUPIED to HIT. The
    size never changes after construction.
    """

    def __init__(self, size: int):
        """Initialise an empty *size*×*size* grid."""
        self.size = size
        # rows indexed by y, columns by x
        self._cells: List[List[Cell]] = [[EmptyCell(x, y) for x in range(size)] for y in range(size)]
        logger.debug("Grid() created – size=%d", size)

    def get_cell(self, x: int, y: int) -> Cell:
        return self._cells[y][x]

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        logger.debug("set_cell() – (%d,%d) %r -> %r", x, y, self._cells[y][x], cell)
        self._cells[y][x] = cell

    def rows(self) -> List[Tuple[Cell, ...]]:
        """Snapshot of the grid, one tuple per row. Equal snapshots mean an unchanged board."""
        return [tuple(row) for row in self._cells]

    def cells_of(self, kind: Type[Cell]) -> List[Tuple[int, int]]:
        """Return (x, y) of every cell holding a *kind* value, row by row."""
        return [
            (x, y)
            for y, row in enumerate(self._cells)
            for x, cell in enumerate(row)
            if isinstance(cell, kind)
        ]

    def render(self) -> str:
        """Format the grid as a text block with column indices on top and row indices on the left."""
        wide = " " * _cfg.DISPLAY_SPACE_SHIP
        narrow = " " * _cfg.DISPLAY_SPACE

        header = wide + "".join(f"{i}{wide}" for i in range(self.size))
        lines = [header + " ", ""]
        for y, row in enumerate(self._cells):
            row_str = f"{y}{narrow}"
            for cell in row:
                # single-char ship / hit markers get extra padding to line up with "x-y"
                padding = narrow if isinstance(cell, EmptyCell) else wide
                row_str += cell.marker + padding
            lines.append(row_str)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()
