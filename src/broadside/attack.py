"""Attack resolution against the player's own grid."""

from __future__ import annotations

import logging
from typing import Any

from .coord_utils import format_coord, in_bounds
from .grid import HIT, Grid, OccupiedCell
from .io_utils import LinePrinter
from .ships import ShipRegistry

logger = logging.getLogger(__name__)


class InvalidCoordinateError(Exception):
    """Raised when an attack coordinate is not a number inside the board."""


def validate_target(grid: Grid, x: Any, y: Any) -> None:
    if not in_bounds(x, grid.size):
        raise InvalidCoordinateError("Error! Please input a valid X attack coordinate")
    if not in_bounds(y, grid.size):
        raise InvalidCoordinateError("Error! Please input a valid Y attack coordinate")


def resolve_attack(grid: Grid, x: Any, y: Any) -> bool:
    """Fire at (*x*,*y*) and return True on a hit. Only an intact ship segment counts as a hit."""
    validate_target(grid, x, y)
    if isinstance(grid.get_cell(x, y), OccupiedCell):
        grid.set_cell(x, y, HIT)
        return True
    return False


def attack(grid: Grid, ships: ShipRegistry, x: Any, y: Any, printer: LinePrinter) -> bool:
    """
    Resolve an attack, report it, and update ship bookkeeping on a hit.

    Out-of-bounds input is reported and counts as no hit. Attacking a cell
    that was already hit is a miss and changes nothing.
    """
    try:
        hit = resolve_attack(grid, x, y)
    except InvalidCoordinateError as e:
        logger.debug("attack() rejected – x=%r y=%r", x, y)
        printer.error(str(e))
        return False

    printer.info(f"ATTACKING: {format_coord(x, y)}")
    if not hit:
        printer.info("MISSED")
        return False

    printer.info("HIT")
    if sunk := ships.record_hit(x, y):
        printer.info(f"Ship {sunk.number} sunk!")
    return True
