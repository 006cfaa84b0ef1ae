"""Tests for the command loop."""

import io

import pytest
from rich.console import Console

from citadels.commands import CommandProcessor
from citadels.engine.cards import Card, Color
from citadels.engine.phases import GamePhase

SCENARIO = {1: "King", 2: "Bishop", 3: "Architect", 4: "Warlord"}


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def processor(game, output):
    console = Console(file=output, width=120, color_system=None)
    return CommandProcessor(game, console)


def to_human_turn(processor):
    while not processor.game.is_human_turn:
        processor.handle("t")


def test_empty_line_shows_help(processor, output):
    processor.handle("")
    assert "Available commands:" in output.getvalue()
    assert "income gold|cards" in output.getvalue()


def test_selection_phase_treats_text_as_a_role(processor, output):
    processor.handle("t")
    processor.handle("jester")
    assert "Unknown role: jester" in output.getvalue()
    assert processor.game.current_phase == GamePhase.SELECTION


def test_role_info(processor, seat_roles, output):
    seat_roles(processor.game, SCENARIO)
    processor.handle("info warlord")
    assert "Warlord (8): Gain 1 gold per red district." in output.getvalue()
    processor.handle("info nobody")
    assert "Invalid character name. Try one of: assassin, thief" in output.getvalue()


def test_commands_out_of_turn(processor, seat_roles, output):
    seat_roles(processor.game, SCENARIO)
    processor.handle("hand")
    processor.handle("build 1")
    text = output.getvalue()
    assert "It is not your turn." in text
    assert "Usage: build <hand-index>" in text


def test_human_turn_through_commands(processor, seat_roles, output, card):
    game = processor.game
    seat_roles(game, SCENARIO)
    to_human_turn(processor)
    game.human.hand = [card(3, name="Manor"), card(4, name="Castle")]
    game.human.gold = 2

    processor.handle("build 1")
    assert "You must take income first." in output.getvalue()

    processor.handle("income gold")
    processor.handle("hand")
    processor.handle("build 2")
    text = output.getvalue()
    assert "You have 4 gold. Cards in hand:" in text
    assert "2. Castle (yellow), cost: 4" in text
    assert "Player 1 builds Castle [yellow4]" in text
    assert game.human.gold == 0

    processor.handle("city")
    assert "Player 1 city:" in output.getvalue()

    processor.handle("end")
    assert game.current_player.id == 2


def test_income_cards_prompts_for_a_pick(game, seat_roles, output):
    seat_roles(game, SCENARIO)
    console = Console(file=output, width=120, color_system=None)
    processor = CommandProcessor(game, console, stream=io.StringIO("3\n2\n"))
    to_human_turn(processor)
    hand_before = game.human.hand_size

    processor.handle("income cards")
    assert "Drawn: 1) " in output.getvalue()
    assert game.human.hand_size == hand_before + 1
    assert game.is_income_taken()


def test_show_all_and_bad_city(processor, seat_roles, output):
    seat_roles(processor.game, SCENARIO)
    processor.handle("all")
    processor.handle("citadel 9")
    text = output.getvalue()
    assert "4 cards" in text
    assert "Invalid player number. Must be 1-4." in text


def test_unknown_command(processor, seat_roles, output):
    seat_roles(processor.game, SCENARIO)
    processor.handle("dance")
    assert "Unknown command." in output.getvalue()


def test_debug_toggle(processor, seat_roles, output):
    seat_roles(processor.game, SCENARIO)
    processor.handle("debug")
    assert "Debug mode ON" in output.getvalue()
    processor.handle("t")
    processor.handle("t")
    processor.handle("t")
    processor.handle("t")
    processor.handle("t")
    assert "AI hand:" in output.getvalue()


def test_save_and_load_commands(processor, seat_roles, output, tmp_path):
    seat_roles(processor.game, SCENARIO)
    path = tmp_path / "game.json"
    processor.handle(f"save {path}")
    processor.handle(f"load {path}")
    processor.handle(f"load {tmp_path / 'missing.json'}")
    text = output.getvalue()
    assert "Game saved to" in text
    assert "Game loaded from" in text
    assert "Load failed" in text


def test_run_stops_at_end_of_input(game, output):
    console = Console(file=output, width=120, color_system=None)
    CommandProcessor(game, console, stream=io.StringIO("t\njester\n")).run()
    text = output.getvalue()
    assert "A mystery character was removed." in text
    assert "Unknown role: jester" in text


def test_card_info(processor, seat_roles, output, card):
    game = processor.game
    seat_roles(game, SCENARIO)
    to_human_turn(processor)
    keep = Card("Keep", Color.PURPLE, 3, "The Keep cannot be destroyed by the Warlord.")
    game.human.hand = [card(2, name="Tavern"), keep]

    processor.handle("info 1")
    processor.handle("info 2")
    processor.handle("info 5")
    text = output.getvalue()
    assert "No special ability." in text
    assert "Special ability of Keep: The Keep cannot be destroyed" in text
    assert "Invalid card index." in text


def test_loading_a_binary_file_keeps_the_loop_alive(processor, seat_roles, output, tmp_path):
    seat_roles(processor.game, SCENARIO)
    path = tmp_path / "junk.bin"
    path.write_bytes(b"\xff\xfe\x00garbage")
    processor.handle(f"load {path}")
    assert "Load failed" in output.getvalue()
