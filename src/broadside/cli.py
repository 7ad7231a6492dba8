"""Command-line entry point: play one game of broadside in the terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import config as _cfg
from .events import Event, EventRouter
from .io_utils import PromptClosedError, TerminalPrinter, TerminalPrompt
from .session import GameSession, Phase, PlacementAbortedError

logger = logging.getLogger(__name__)

# session events forwarded to the log; anything else is dropped at DEBUG by the router
LOGGED_EVENTS = (
    "configured",
    "ship_placed",
    "placement_failed",
    "attack",
    "hit",
    "miss",
    "invalid_attack",
    "sunk",
    "game_over",
    "aborted",
)


def _log_event(event: Event) -> None:
    logger.debug("event %s/%s %r", event.category.name, event.type, event.payload)


def build_router() -> EventRouter:
    router = EventRouter()
    for event_type in LOGGED_EVENTS:
        router.register_handler(event_type, _log_event)
    return router


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser("broadside", description="Single-player Battleship on a square grid")
    parser.add_argument("--debug", action="store_true", default=_cfg.DEBUG, help="Enable debug logging")
    parser.add_argument(
        "--retry-limit",
        type=int,
        default=_cfg.PLACEMENT_RETRY_LIMIT or 0,
        help="Failed placements allowed per ship before giving up (0 = unlimited)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING, format=_cfg.LOG_FORMAT)

    printer = TerminalPrinter()
    session = GameSession(
        TerminalPrompt(),
        printer,
        router=build_router(),
        retry_limit=args.retry_limit if args.retry_limit > 0 else None,
    )
    try:
        phase = session.run()
    except PlacementAbortedError as e:
        printer.error(f"Error! {e}")
        return 1
    except PromptClosedError as e:
        printer.error(f"Error! {e}")
        return 1
    except KeyboardInterrupt:
        printer.error("Interrupted")
        return 130

    return 0 if phase is Phase.GAME_OVER else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
