"""Ship bookkeeping: which segments of each placed ship are still afloat."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .coord_utils import format_coord

logger = logging.getLogger(__name__)


@dataclass
class Ship:
    """A placed ship. *segments* holds the 'x-y' keys not yet hit, in placement order."""

    number: int
    segments: List[str] = field(default_factory=list)

    @property
    def sunk(self) -> bool:
        return len(self.segments) == 0

    def remove(self, coord: str) -> bool:
        """Drop *coord* from the live segments; return True if it was present."""
        before = len(self.segments)
        self.segments = [segment for segment in self.segments if segment != coord]
        return len(self.segments) != before


class ShipRegistry:
    """
    Ordered collection of the ships placed this session.

    Ships are appended in placement order and never merged or resized; the
    only mutation after creation is segment removal via record_hit(). The
    placement engine guarantees that no two ships share a coordinate.
    """

    def __init__(self) -> None:
        self._ships: List[Ship] = []

    def add(self, segments: List[str]) -> Ship:
        """Register a freshly placed ship and return it."""
        ship = Ship(number=len(self._ships) + 1, segments=list(segments))
        self._ships.append(ship)
        logger.debug("add() – ship %d segments=%r", ship.number, ship.segments)
        return ship

    def record_hit(self, x: int, y: int) -> Optional[Ship]:
        """
        Remove the hit coordinate from every ship and return the ship this sank, if any.

        Scans all ships rather than looking the coordinate up; at most one will
        actually contain it.
        """
        coord = format_coord(x, y)
        sunk: Optional[Ship] = None
        for ship in self._ships:
            if ship.remove(coord):
                logger.debug("record_hit() – %s removed from ship %d, %d left", coord, ship.number, len(ship.segments))
                if ship.sunk:
                    sunk = ship
        return sunk

    def all_destroyed(self) -> bool:
        """Return True if every ship in the registry has been sunk."""
        for ship in self._ships:
            if not ship.sunk:
                return False
        return True

    def __iter__(self) -> Iterator[Ship]:
        return iter(self._ships)

    def __len__(self) -> int:
        return len(self._ships)

    def __getitem__(self, index: int) -> Ship:
        return self._ships[index]
