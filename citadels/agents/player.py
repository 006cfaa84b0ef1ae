"""Players: gold, hand and city, plus the participant that makes their decisions."""

from dataclasses import dataclass, field

from ..engine.cards import Card
from ..engine.errors import InvalidIndex, PreconditionViolation
from .participants import TurnParticipant

HUMAN_PLAYER_ID = 1
STARTING_GOLD = 2


@dataclass(eq=False)
class Player:
    """A seat at the table. Player 1 is the human, everyone else is automated."""

    id: int
    participant: TurnParticipant = field(repr=False)
    gold: int = STARTING_GOLD
    hand: list[Card] = field(default_factory=list)
    city: list[Card] = field(default_factory=list)

    @property
    def is_human(self) -> bool:
        return self.participant.interactive

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    @property
    def city_size(self) -> int:
        return len(self.city)

    def add_gold(self, amount: int) -> None:
        """Add (or with a negative amount, remove) gold."""
        self.gold += amount

    def add_to_hand(self, card: Card) -> None:
        self.hand.append(card)

    def remove_from_hand(self, index: int) -> Card:
        """Remove and return the card at a 0-based hand index."""
        self._check_index(index)
        return self.hand.pop(index)

    def add_to_city(self, card: Card) -> None:
        self.city.append(card)

    def card_at(self, index: int) -> Card:
        self._check_index(index)
        return self.hand[index]

    def build_from_hand(self, index: int) -> Card:
        """Build the district at a 0-based hand index.

        Removes the card from the hand, adds it to the city and pays its cost.

        Raises:
            InvalidIndex: The index is outside the hand.
            PreconditionViolation: The card costs more than the gold held.
        """
        card = self.card_at(index)
        if card.cost > self.gold:
            raise PreconditionViolation("You cannot afford to build this building.")
        self.remove_from_hand(index)
        self.add_to_city(card)
        self.add_gold(-card.cost)
        return card

    def draw(self, deck, count: int) -> int:
        """Draw up to `count` cards from the deck into the hand.

        Returns:
            How many cards were actually drawn.
        """
        drawn = 0
        for _ in range(count):
            card = deck.draw()
            if card is None:
                break
            self.add_to_hand(card)
            drawn += 1
        return drawn

    def has_colors(self, colors) -> bool:
        """Whether the city holds at least one district of every given color."""
        return set(colors) <= {card.color for card in self.city}

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.hand):
            raise InvalidIndex("Invalid card index.")
