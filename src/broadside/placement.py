# placement.py
"""
Ship placement over a Grid.
Usage:
    segments = place_ship(grid, x, y, length, Direction.RIGHT, printer)
Returns the ordered 'x-y' keys of the new ship, or None (with a diagnostic
printed) when the placement is rejected. A rejected placement never writes to
the grid.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, List, Optional

from .coord_utils import format_coord, in_bounds, is_valid_number
from .grid import OCCUPIED, EmptyCell, Grid
from .io_utils import LinePrinter

logger = logging.getLogger(__name__)


class PlacementError(Exception):
    """Raised when a proposed ship cannot be placed. The message is user-facing."""


class InvalidPositionError(PlacementError):
    """Anchor x or y is not a number inside the board."""


class InvalidLengthError(PlacementError):
    """Ship length is not a number in [1, board size)."""


class OffBoardError(PlacementError):
    """The ship would run past the board edge in its direction."""


class CollisionError(PlacementError):
    """At least one covered cell already holds a ship."""


class InvalidDirectionError(PlacementError):
    """Direction text is neither 'right' nor 'down'."""


class Direction(enum.Enum):
    RIGHT = "right"  # along the row, +x
    DOWN = "down"  # down the column, +y

    @classmethod
    def parse(cls, text: str) -> "Direction":
        """Map prompt input to a Direction; blank means RIGHT, anything unknown is rejected."""
        cleaned = text.strip().lower()
        if not cleaned:
            return cls.RIGHT
        try:
            return cls(cleaned)
        except ValueError:
            raise InvalidDirectionError(
                f"Error! Unknown direction {text.strip()!r}, please enter either 'right' or 'down'"
            ) from None


def _covered(x: int, y: int, length: int, direction: Direction) -> List[tuple[int, int]]:
    if direction is Direction.RIGHT:
        return [(i, y) for i in range(x, x + length)]
    return [(x, i) for i in range(y, y + length)]


def check_placement(grid: Grid, x: Any, y: Any, length: Any, direction: Direction) -> List[str]:
    """
    Validate a ship without touching the grid and return the keys it would cover.

    Checks run in a fixed order and the first failure raises: x, y, length,
    extent in *direction*, then collision across every covered cell.
    """
    size = grid.size
    if not in_bounds(x, size):
        raise InvalidPositionError("Ship X Coordinate invalid!")
    if not in_bounds(y, size):
        raise InvalidPositionError("Ship Y Coordinate invalid!")
    # same upper bound as the coordinates, plus an explicit minimum of one segment
    if not is_valid_number(length) or not 1 <= length < size:
        raise InvalidLengthError("Ship size invalid!")

    if direction is Direction.RIGHT and x + length > size:
        raise OffBoardError("Error! Your ship goes off the board horizontally")
    if direction is Direction.DOWN and y + length > size:
        raise OffBoardError("Error! Your ship goes off the board vertically")

    cells = _covered(x, y, length, direction)
    for cx, cy in cells:
        if not isinstance(grid.get_cell(cx, cy), EmptyCell):
            raise CollisionError("Error! There's an existing ship at these coordinates. Please try again.")
    return [format_coord(cx, cy) for cx, cy in cells]


def place_ship(
    grid: Grid,
    x: Any,
    y: Any,
    length: Any,
    direction: Direction,
    printer: LinePrinter,
) -> Optional[List[str]]:
    """Validate and commit a ship; report and return None on any placement error."""
    logger.debug("place_ship() start – x=%r y=%r length=%r direction=%s", x, y, length, direction.value)
    try:
        segments = check_placement(grid, x, y, length, direction)
    except PlacementError as e:
        logger.debug("place_ship() rejected – %s: %s", type(e).__name__, e)
        printer.error(str(e))
        return None

    for cx, cy in _covered(x, y, length, direction):
        grid.set_cell(cx, cy, OCCUPIED)
    logger.debug("place_ship() committed – segments=%r", segments)
    return segments
