"""Tests for saving and loading games."""

import json

import pytest

from citadels.engine.cards import Color
from citadels.engine.errors import PersistenceError
from citadels.engine.phases import GamePhase
from citadels.engine.roles import ROLES


def player_summary(game):
    return [
        (p.id, p.gold, [c.name for c in p.hand], [c.name for c in p.city], p.is_human)
        for p in game.players
    ]


def test_round_trip(make_game, tmp_path):
    game = make_game(seed=3)
    for _ in range(3):
        game.advance_step()
    path = game.save(tmp_path / "save.json")

    restored = make_game(seed=99, player_count=6)
    restored.load(path)

    assert restored.current_phase == game.current_phase
    assert restored.session.state.rank_pointer == game.session.state.rank_pointer
    assert restored.session.state.chooser_index == game.session.state.chooser_index
    assert player_summary(restored) == player_summary(game)
    assert restored.session.selection.assignments == game.session.selection.assignments
    assert restored.session.selection.mystery == game.session.selection.mystery
    assert restored.session.selection.face_up == game.session.selection.face_up
    assert sorted(restored.session.selection.pool) == sorted(game.session.selection.pool)


def test_round_trip_mid_turn(game, seat_roles, tmp_path):
    seat_roles(game, {1: "King", 2: "Bishop", 3: "Architect", 4: "Warlord"})
    while not game.is_human_turn:
        game.advance_step()
    game.take_gold_income()
    path = game.save(tmp_path / "turn.json")

    document = json.loads(path.read_text())
    assert document["phase"] == "TURN"
    assert document["rank_pointer"] == 5
    assert document["income_taken"] is True

    game.advance_step()
    game.load(path)
    assert game.is_human_turn
    assert game.is_income_taken()
    assert game.session.selection.assignments[1] == ROLES["King"]


def test_cards_are_rebuilt_from_the_catalog(game, tmp_path):
    path = tmp_path / "minimal.json"
    path.write_text(json.dumps({
        "phase": "SELECTION",
        "rank_pointer": 1,
        "chooser_index": 1,
        "players": [
            {"id": 1, "gold": 7, "hand": ["Castle"], "city": ["Keep", "temple"]},
            {"id": 2, "gold": 0},
        ],
    }))
    game.load(path)

    me = game.human
    assert me.gold == 7
    assert me.hand[0].color == Color.YELLOW and me.hand[0].cost == 4
    assert me.city[0].color == Color.PURPLE
    assert me.city[0].text.startswith("The Keep cannot be destroyed")
    assert me.city[1].name == "Temple"
    assert len(game.players) == 2
    assert not game.player_by_id(2).is_human
    assert game.current_phase == GamePhase.SELECTION
    assert len(game.session.selection.pool) == 8
    assert not game.session.selection.discards_made


@pytest.mark.parametrize("content", [
    "not json at all",
    json.dumps({"phase": "SELECTION"}),
    json.dumps({"phase": "LUNCH", "rank_pointer": 1, "chooser_index": 0,
                "players": [{"id": 1, "gold": 2}]}),
    json.dumps({"phase": "TURN", "rank_pointer": 12, "chooser_index": 0,
                "players": [{"id": 1, "gold": 2}]}),
    json.dumps({"phase": "TURN", "rank_pointer": 1, "chooser_index": 3,
                "players": [{"id": 1, "gold": 2}]}),
    json.dumps({"phase": "TURN", "rank_pointer": 1, "chooser_index": 0,
                "players": [{"id": 2, "gold": 2}]}),
    json.dumps({"phase": "TURN", "rank_pointer": 1, "chooser_index": 0,
                "players": [{"id": 1, "gold": 2, "hand": ["Moon Base"]}]}),
    json.dumps({"phase": "TURN", "rank_pointer": 1, "chooser_index": 0,
                "players": [{"id": 1, "gold": 2}], "assignments": {"1": "Jester"}}),
    json.dumps({"phase": "TURN", "rank_pointer": 1, "chooser_index": 0,
                "players": [{"id": 1, "gold": 2}, {"id": 2, "gold": 2}],
                "assignments": {"1": "King", "2": "King"}}),
    json.dumps({"phase": "SELECTION", "rank_pointer": 1, "chooser_index": 0,
                "players": [{"id": 1, "gold": 2}, {"id": 2, "gold": 2}],
                "assignments": {"1": "King", "2": "Bishop"}}),
])
def test_bad_documents_leave_the_game_untouched(game, tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content)
    players_before = list(game.players)
    summary_before = player_summary(game)
    state_before = game.session.state

    with pytest.raises(PersistenceError):
        game.load(path)

    assert game.players == players_before
    assert player_summary(game) == summary_before
    assert game.session.state is state_before


def test_missing_file(game, tmp_path):
    with pytest.raises(PersistenceError, match="Load failed"):
        game.load(tmp_path / "nowhere.json")


def test_cannot_save_a_finished_game(game, tmp_path):
    game.session.phases.end_game()
    with pytest.raises(PersistenceError):
        game.save(tmp_path / "over.json")
    assert not (tmp_path / "over.json").exists()


def test_undecodable_file(game, tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    state_before = game.session.state
    with pytest.raises(PersistenceError, match="Load failed"):
        game.load(path)
    assert game.session.state is state_before


def test_selection_save_with_every_role_taken_is_rejected(game, tmp_path):
    path = tmp_path / "picked.json"
    path.write_text(json.dumps({
        "phase": "SELECTION",
        "rank_pointer": 1,
        "chooser_index": 1,
        "players": [{"id": pid, "gold": 2} for pid in (1, 2, 3, 4)],
        "assignments": {"1": "King", "2": "Bishop", "3": "Thief", "4": "Warlord"},
    }))
    with pytest.raises(PersistenceError):
        game.load(path)
    assert game.current_phase == GamePhase.SELECTION
    assert game.session.selection.assignments == {}
