"""
Pytest fixtures for Citadels tests.
"""

import random
from typing import Callable, Optional

import pytest

from citadels.engine.cards import Card, Color, DistrictDeck
from citadels.engine.game import Game, GameConfig
from citadels.engine.roles import all_roles, get_role


def make_card(cost: int, color: Color = Color.YELLOW, name: Optional[str] = None) -> Card:
    return Card(name=name or f"District {cost}", color=color, cost=cost)


@pytest.fixture
def card() -> Callable[..., Card]:
    """Factory for district cards."""
    return make_card


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_game() -> Callable[..., Game]:
    """Factory for seated games using the bundled deck and a seeded random source."""

    def _make(player_count: int = 4, seed: int = 7, chooser_index: Optional[int] = None) -> Game:
        rng = random.Random(seed)
        game = Game(
            GameConfig(player_count=player_count),
            deck=DistrictDeck.from_tsv(rng=rng),
            rng=rng,
        )
        game.setup_players()
        if chooser_index is not None:
            game.session.state.chooser_index = chooser_index
        game.messages()
        return game

    return _make


@pytest.fixture
def game(make_game) -> Game:
    return make_game()


@pytest.fixture
def seat_roles() -> Callable[[Game, dict[int, str]], None]:
    """Skip selection: give each listed player a role and start the turn phase."""

    def _seat(game: Game, roles: dict[int, str]) -> None:
        selection = game.session.selection
        selection.reset()
        for player_id, name in roles.items():
            role = get_role(name)
            selection.pool.remove(role)
            selection.assignments[player_id] = role
        selection.discards_made = True
        game.session.phases.start_turns()

    return _seat


def assert_roles_partitioned(game: Game) -> None:
    accounted = game.session.selection.accounted_roles()
    assert sorted(accounted) == all_roles()


@pytest.fixture
def roles_partitioned() -> Callable[[Game], None]:
    return assert_roles_partitioned
