"""Single-player game session for broadside.

GameSession owns one board and its ship registry for a full play-through and
drives it through a small state machine:

CONFIGURE   Ask for board size and ship count. Non-numeric answers, a board
            smaller than 2, or a ship count outside 1..size² are fatal: the
            session ends as ABORTED and no board is built.
SETUP       Place each ship in turn. A rejected placement is reported and the
            *same* ship slot is asked for again. There is no retry limit unless
            one is configured (PLACEMENT_RETRY_LIMIT / --retry-limit).
PLAYING     Attack one coordinate per turn and print the board after every
            move, until every ship segment has been hit.
GAME_OVER   Terminal.

All input goes through a PromptSource and all player-facing output through a
LinePrinter, so the whole game runs against scripted I/O in tests.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Optional

from . import config as _cfg
from .attack import attack
from .coord_utils import in_bounds, is_valid_number
from .events import Category, Event, EventRouter
from .grid import Grid
from .io_utils import LinePrinter, PromptSource
from .placement import Direction, PlacementError, place_ship
from .ships import ShipRegistry

logger = logging.getLogger(__name__)


class SetupError(Exception):
    """Board size or ship count unusable; the game cannot start."""


class PlacementAbortedError(Exception):
    """Raised when one ship slot fails placement more often than the configured retry limit."""


class Phase(enum.Enum):
    CONFIGURE = "configure"
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    ABORTED = "aborted"


class GameSession:
    """One play-through from board configuration to the last ship sunk."""

    def __init__(
        self,
        prompt: PromptSource,
        printer: LinePrinter,
        *,
        router: EventRouter | None = None,
        retry_limit: int | None = _cfg.PLACEMENT_RETRY_LIMIT,
    ):
        """Create a session that has not asked anything yet.

        Args:
            prompt: source of the player's answers.
            printer: sink for board renders, info lines and diagnostics.
            router: optional subscriber hub for session events.
            retry_limit: consecutive failed placements allowed per ship slot;
                None retries forever.
        """
        self.prompt = prompt
        self.printer = printer
        self.router = router
        self.retry_limit = retry_limit

        self.phase = Phase.CONFIGURE
        self.board_size: int | None = None
        self.ship_count: int | None = None
        self.grid: Grid | None = None
        self.ships = ShipRegistry()
        self.turns = 0

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _emit(self, category: Category, event_type: str, **payload: Any) -> None:
        if self.router is not None:
            self.router.route_event(Event(category, event_type, payload))

    def _render(self) -> None:
        assert self.grid is not None
        self.printer.info(self.grid.render())

    def _ask_direction(self, length: Optional[int]) -> Direction:
        # single-segment ships (and unusable lengths) have no direction to ask for
        if not is_valid_number(length) or length <= 1:
            return Direction.RIGHT
        answer = self.prompt.ask_str(
            "Please enter the direction of your ship - either 'right' or 'down': ",
            _cfg.DEFAULT_DIRECTION,
        )
        return Direction.parse(answer)

    # ------------------------------------------------------------------
    # phases
    # ------------------------------------------------------------------

    def configure(self) -> None:
        """Ask for board size and ship count and build the empty board."""
        board_size = self.prompt.ask_int("What board size would you like?: ")
        ship_count = self.prompt.ask_int("How many ships would you like to place?: ")
        logger.debug("configure() – board_size=%r ship_count=%r", board_size, ship_count)

        # ships must be shorter than the board, so a 1x1 board holds none;
        # a board holds at most one single-segment ship per cell
        if (
            not (is_valid_number(board_size) and is_valid_number(ship_count))
            or board_size < 2
            or not 1 <= ship_count <= board_size**2
        ):
            raise SetupError("Error! Please input valid numbers for board size and number of ships")

        self.board_size = board_size
        self.ship_count = ship_count
        self.grid = Grid(board_size)
        self.ships = ShipRegistry()
        self.phase = Phase.SETUP
        self._emit(Category.SETUP, "configured", board_size=board_size, ship_count=ship_count)

    def place_next_ship(self) -> bool:
        """Prompt for one ship and try to place it. Returns True if it was placed."""
        assert self.grid is not None
        slot = len(self.ships) + 1
        self.printer.info(f"DRAWING SHIP {slot} -----------")
        x = self.prompt.ask_int("Please enter an X coordinate: ")
        y = self.prompt.ask_int("Please enter a Y coordinate: ")
        length = self.prompt.ask_int("Please enter the length of your ship: ")

        try:
            direction = self._ask_direction(length)
        except PlacementError as e:
            self.printer.error(str(e))
            segments = None
        else:
            segments = place_ship(self.grid, x, y, length, direction, self.printer)

        if segments is None:
            self.printer.error("Error! Need to re-draw ship")
            self._emit(Category.SETUP, "placement_failed", slot=slot, x=x, y=y, length=length)
            return False

        ship = self.ships.add(segments)
        self._emit(Category.SETUP, "ship_placed", slot=slot, segments=list(ship.segments))
        return True

    def run_setup(self) -> None:
        """Place every ship, re-asking for the same slot after each failure."""
        if self.phase is not Phase.SETUP:
            raise RuntimeError(f"run_setup() called in phase {self.phase.value}")
        assert self.ship_count is not None

        failures = 0
        while len(self.ships) < self.ship_count:
            if self.place_next_ship():
                failures = 0
                continue
            failures += 1
            if self.retry_limit is not None and failures >= self.retry_limit:
                raise PlacementAbortedError(
                    f"Ship {len(self.ships) + 1} could not be placed after {failures} attempts"
                )

        self._render()
        self.phase = Phase.PLAYING

    def play_turn(self) -> bool:
        """Run one attack turn. Returns True if the attack was a hit."""
        if self.phase is not Phase.PLAYING:
            raise RuntimeError(f"play_turn() called in phase {self.phase.value}")
        assert self.grid is not None

        x = self.prompt.ask_int("Please enter an X coordinate: ")
        y = self.prompt.ask_int("Please enter a Y coordinate: ")
        self.turns += 1
        self._emit(Category.TURN, "attack", turn=self.turns, x=x, y=y)

        afloat = [ship for ship in self.ships if not ship.sunk]
        hit = attack(self.grid, self.ships, x, y, self.printer)
        self._render()

        if not hit:
            on_board = in_bounds(x, self.grid.size) and in_bounds(y, self.grid.size)
            self._emit(Category.TURN, "miss" if on_board else "invalid_attack", turn=self.turns, x=x, y=y)
            return False

        self._emit(Category.TURN, "hit", turn=self.turns, x=x, y=y)
        for ship in afloat:
            if ship.sunk:
                self._emit(Category.TURN, "sunk", turn=self.turns, ship=ship.number)
        if self.ships.all_destroyed():
            self.printer.info("You lose!")
            self.phase = Phase.GAME_OVER
            self._emit(Category.SYSTEM, "game_over", turns=self.turns)
        return True

    def run_attack_phase(self) -> None:
        self.printer.info("GAME STARTING -----------")
        while self.phase is Phase.PLAYING:
            self.play_turn()

    def run(self) -> Phase:
        """Play a full session and return the phase it finished in."""
        try:
            self.configure()
        except SetupError as e:
            self.printer.error(str(e))
            self.phase = Phase.ABORTED
            self._emit(Category.SYSTEM, "aborted", reason=str(e))
            return self.phase

        self.run_setup()
        self.run_attack_phase()
        return self.phase
