"""End-to-end tests for GameSession driven by scripted prompts."""

from __future__ import annotations

import pytest

from broadside.events import EventRouter
from broadside.grid import HitCell
from broadside.io_utils import PromptClosedError
from broadside.session import GameSession, Phase, PlacementAbortedError, SetupError

DIRECTION_Q = "Please enter the direction of your ship - either 'right' or 'down': "


def _ready(scripted, printer, *answers, **kwargs) -> GameSession:
    """Session that has gone through configure() and run_setup()."""
    session = GameSession(scripted(*answers), printer, **kwargs)
    session.configure()
    session.run_setup()
    return session


@pytest.mark.timeout(5)
def test_single_ship_game_runs_to_game_over(scripted, printer) -> None:
    session = _ready(scripted, printer, "3", "1", "0", "0", "2", "right")
    assert session.phase is Phase.PLAYING
    assert session.ships[0].segments == ["0-0", "1-0"]

    session.prompt.answers.extend(["0", "0"])
    assert session.play_turn() is True
    assert session.ships[0].segments == ["1-0"]
    assert not session.ships.all_destroyed()
    assert session.phase is Phase.PLAYING

    session.prompt.answers.extend(["1", "0"])
    assert session.play_turn() is True
    assert session.ships[0].segments == []
    assert session.ships.all_destroyed()
    assert session.phase is Phase.GAME_OVER
    assert printer.infos[-1] == "You lose!"
    assert session.grid.cells_of(HitCell) == [(0, 0), (1, 0)]


@pytest.mark.timeout(5)
def test_out_of_bounds_attack_changes_nothing(scripted, printer) -> None:
    session = _ready(scripted, printer, "3", "1", "0", "0", "2", "right", "5", "1")
    snapshot = session.grid.rows()
    printer.lines.clear()

    assert session.play_turn() is False
    assert session.grid.rows() == snapshot
    assert session.ships[0].segments == ["0-0", "1-0"]
    assert printer.errors == ["Error! Please input a valid X attack coordinate"]
    assert session.phase is Phase.PLAYING


@pytest.mark.timeout(5)
def test_run_plays_full_game_and_renders_after_every_move(scripted, printer) -> None:
    answers = [
        "3", "2",
        "0", "0", "2", "down",   # ship 1: 0-0, 0-1
        "2", "2", "1",           # ship 2: 2-2, no direction asked
        "1", "1",                # miss
        "0", "0", "0", "1",      # sink ship 1
        "9", "9",                # invalid
        "2", "2",                # sink ship 2
    ]
    prompt = scripted(*answers)
    session = GameSession(prompt, printer)

    assert session.run() is Phase.GAME_OVER
    assert prompt.answers == []
    assert session.turns == 5
    assert printer.infos.count("HIT") == 3
    assert printer.infos.count("MISSED") == 1
    assert "Ship 1 sunk!" in printer.infos
    assert "Ship 2 sunk!" in printer.infos
    # one render after setup plus one per turn
    renders = [text for text in printer.infos if text.startswith("     0")]
    assert len(renders) == 1 + 5
    assert printer.infos.index("GAME STARTING -----------") > printer.infos.index("DRAWING SHIP 2 -----------")
    assert prompt.questions.count(DIRECTION_Q) == 1


@pytest.mark.timeout(5)
def test_failed_placement_retries_same_slot(scripted, printer) -> None:
    answers = [
        "4", "2",
        "0", "0", "3", "right",  # ship 1
        "1", "0", "2", "down",   # collides with ship 1
        "3", "1", "2", "down",   # ship 2 on retry
    ]
    session = _ready(scripted, printer, *answers)

    assert [ship.segments for ship in session.ships] == [["0-0", "1-0", "2-0"], ["3-1", "3-2"]]
    assert printer.infos.count("DRAWING SHIP 2 -----------") == 2
    assert printer.errors == [
        "Error! There's an existing ship at these coordinates. Please try again.",
        "Error! Need to re-draw ship",
    ]


@pytest.mark.timeout(5)
def test_placement_retries_are_unlimited_by_default(scripted, printer) -> None:
    bad_attempts = ["9", "0", "1"] * 25
    session = _ready(scripted, printer, "3", "1", *bad_attempts, "0", "0", "1", retry_limit=None)
    assert len(session.ships) == 1
    assert printer.errors.count("Error! Need to re-draw ship") == 25


@pytest.mark.timeout(5)
def test_placement_retry_limit_aborts_setup(scripted, printer) -> None:
    session = GameSession(scripted("3", "1", "9", "0", "1", "0", "9", "1"), printer, retry_limit=2)
    session.configure()
    with pytest.raises(PlacementAbortedError, match="Ship 1 could not be placed after 2 attempts"):
        session.run_setup()
    assert session.phase is Phase.SETUP


@pytest.mark.timeout(5)
def test_retry_counter_resets_after_a_successful_placement(scripted, printer) -> None:
    answers = [
        "3", "2",
        "9", "0", "1",   # slot 1 fails once
        "0", "0", "1",   # slot 1 placed
        "9", "0", "1",   # slot 2 fails once
        "1", "1", "1",   # slot 2 placed
    ]
    session = _ready(scripted, printer, *answers, retry_limit=2)
    assert len(session.ships) == 2


@pytest.mark.timeout(5)
def test_unknown_direction_is_rejected_not_defaulted(scripted, printer) -> None:
    session = _ready(scripted, printer, "4", "1", "0", "0", "2", "sideways", "0", "0", "2", "down")
    assert session.ships[0].segments == ["0-0", "0-1"]
    assert printer.errors[0].startswith("Error! Unknown direction 'sideways'")
    assert printer.errors[1] == "Error! Need to re-draw ship"


@pytest.mark.timeout(5)
def test_blank_direction_defaults_to_right(scripted, printer) -> None:
    session = _ready(scripted, printer, "4", "1", "1", "1", "3", "")
    assert session.ships[0].segments == ["1-1", "2-1", "3-1"]


@pytest.mark.timeout(5)
def test_non_numeric_length_skips_direction_prompt(scripted, printer) -> None:
    prompt = scripted("4", "1", "0", "0", "long", "0", "0", "1")
    session = GameSession(prompt, printer)
    session.configure()
    session.run_setup()
    assert DIRECTION_Q not in prompt.questions
    assert "Ship size invalid!" in printer.errors


@pytest.mark.parametrize(
    "board_size,ship_count",
    [
        ("abc", "2"),
        ("3", "many"),
        ("", "1"),
        ("0", "1"),
        ("-4", "1"),
        # no ship fits: length must stay below the board size
        ("1", "1"),
        ("3", "0"),
        # more ships than cells
        ("2", "5"),
        ("3", "10"),
    ],
)
def test_bad_session_input_aborts_before_setup(scripted, printer, board_size, ship_count) -> None:
    prompt = scripted(board_size, ship_count, "0", "0", "1")
    session = GameSession(prompt, printer)

    assert session.run() is Phase.ABORTED
    assert session.grid is None
    assert printer.errors == ["Error! Please input valid numbers for board size and number of ships"]
    assert not any(text.startswith("DRAWING SHIP") for text in printer.infos)
    # both session prompts are asked before validation, nothing after
    assert len(prompt.questions) == 2


@pytest.mark.timeout(5)
def test_smallest_board_holds_one_single_segment_ship_per_cell(scripted, printer) -> None:
    answers = ["2", "4", "0", "0", "1", "1", "0", "1", "0", "1", "1", "1", "1", "1"]
    session = _ready(scripted, printer, *answers)
    assert session.phase is Phase.PLAYING
    assert [ship.segments for ship in session.ships] == [["0-0"], ["1-0"], ["0-1"], ["1-1"]]
    assert printer.errors == []


def test_configure_raises_setup_error(scripted, printer) -> None:
    session = GameSession(scripted("x", "1"), printer)
    with pytest.raises(SetupError):
        session.configure()
    assert session.phase is Phase.CONFIGURE


def test_phase_guards(scripted, printer) -> None:
    session = GameSession(scripted(), printer)
    with pytest.raises(RuntimeError):
        session.run_setup()
    with pytest.raises(RuntimeError):
        session.play_turn()


@pytest.mark.timeout(5)
def test_closed_input_propagates(scripted, printer) -> None:
    session = GameSession(scripted("3", "1", "0"), printer)
    with pytest.raises(PromptClosedError):
        session.run()


@pytest.mark.timeout(5)
def test_session_events_are_routed(scripted, printer) -> None:
    seen = []
    router = EventRouter()
    for event_type in ("configured", "ship_placed", "placement_failed", "hit", "miss", "sunk", "game_over"):
        router.register_handler(event_type, seen.append)

    answers = [
        "2", "1",
        "5", "0", "1",   # rejected
        "0", "0", "1",   # placed at 0-0
        "1", "1",        # miss
        "0", "0",        # hit, sunk, game over
    ]
    session = GameSession(scripted(*answers), printer, router=router)
    assert session.run() is Phase.GAME_OVER

    assert [event.type for event in seen] == [
        "configured",
        "placement_failed",
        "ship_placed",
        "miss",
        "hit",
        "sunk",
        "game_over",
    ]
    assert seen[0].payload == {"board_size": 2, "ship_count": 1}
    assert seen[2].payload["segments"] == ["0-0"]
    assert seen[5].payload["ship"] == 1
