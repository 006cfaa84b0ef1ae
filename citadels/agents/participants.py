"""Turn participants: who decides what a player does on their turn.

Both kinds expose the same capabilities (take income, build). The automated
participant decides on the spot; the human participant is interactive and
leaves every decision to the command loop.
"""

import random
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..engine.cards import Card
    from ..engine.turns import TurnScheduler
    from .player import Player


class TurnParticipant(Protocol):
    """Capabilities the turn scheduler needs from whoever controls a player."""

    interactive: bool

    def take_income(self, player: "Player", turn: "TurnScheduler") -> None:
        ...

    def build(self, player: "Player", turn: "TurnScheduler") -> None:
        ...


def most_expensive_affordable(hand: Sequence["Card"], gold: int) -> Optional[int]:
    """Index of the costliest card the player can pay for.

    Ties go to the card that comes first in the hand.

    Returns:
        A 0-based hand index, or None if nothing is affordable.
    """
    best = None
    for index, card in enumerate(hand):
        if card.cost <= gold and (best is None or card.cost > hand[best].cost):
            best = index
    return best


class AutomatedParticipant:
    """A computer opponent.

    Income: with fewer than 2 cards in hand it draws two and keeps one at
    random, otherwise it takes 2 gold. Build: the most expensive affordable
    district, if any.
    """

    interactive = False

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def take_income(self, player: "Player", turn: "TurnScheduler") -> None:
        if player.hand_size < 2 and not turn.session.deck.is_empty():
            turn.draw_income(player, self.choose_card)
        else:
            turn.take_gold_income(player)

    def choose_card(self, cards: Sequence["Card"]) -> int:
        return self.rng.randrange(len(cards))

    def build(self, player: "Player", turn: "TurnScheduler") -> None:
        index = most_expensive_affordable(player.hand, player.gold)
        if index is not None:
            turn.build(player, index)


class HumanParticipant:
    """The human at the keyboard. Decisions arrive through the command loop."""

    interactive = True

    def take_income(self, player: "Player", turn: "TurnScheduler") -> None:
        pass

    def build(self, player: "Player", turn: "TurnScheduler") -> None:
        pass
