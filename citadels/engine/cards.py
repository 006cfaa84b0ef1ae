"""District cards and the shuffled district deck."""

import csv
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Iterable, Optional, TextIO, Union


class Color(Enum):
    """The color categories of district cards."""
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    PURPLE = "purple"

    @classmethod
    def from_string(cls, value: str) -> "Color":
        """Parse a color name, ignoring case."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown color: {value}") from None


@dataclass(frozen=True, eq=False)
class Card:
    """A district card. Cards with the same name are still distinct cards."""

    name: str
    color: Color
    cost: int
    text: str = ""

    def display(self) -> str:
        """Display string, e.g. "Castle [yellow4]"."""
        return f"{self.name} [{self.color.value}{self.cost}]"

    def __str__(self) -> str:
        return self.display()


def parse_cards(stream: TextIO) -> list[Card]:
    """Read card definitions from a TSV stream.

    Each line after the header is: name, quantity, color, cost, text.
    The text column may be missing.
    """
    reader = csv.reader(stream, delimiter="\t")
    next(reader, None)

    cards = []
    for row in reader:
        if not row or not row[0].strip():
            continue
        name, quantity, color, cost = row[0], int(row[1]), Color.from_string(row[2]), int(row[3])
        text = row[4] if len(row) > 4 else ""
        if cost < 0:
            raise ValueError(f"Card {name} has a negative cost")
        cards.extend(Card(name=name, color=color, cost=cost, text=text) for _ in range(quantity))
    return cards


def open_default_cards() -> TextIO:
    """Open the card list bundled with the package."""
    return resources.files("citadels.data").joinpath("cards.tsv").open("r", encoding="utf-8")


class DistrictDeck:
    """A shuffled deck of district cards."""

    def __init__(self, cards: Iterable[Card], rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._cards: deque[Card] = deque(cards)
        # One template per name, kept even after the deck runs out
        self._catalog: dict[str, Card] = {}
        for card in self._cards:
            self._catalog.setdefault(card.name.lower(), card)
        self.shuffle()

    @classmethod
    def from_tsv(
        cls,
        source: Union[str, Path, TextIO, None] = None,
        rng: Optional[random.Random] = None,
    ) -> "DistrictDeck":
        """Build a deck from a TSV file path, an open stream, or the bundled list."""
        if source is None:
            with open_default_cards() as f:
                return cls(parse_cards(f), rng=rng)
        if isinstance(source, (str, Path)):
            with open(source, encoding="utf-8") as f:
                return cls(parse_cards(f), rng=rng)
        return cls(parse_cards(source), rng=rng)

    def shuffle(self) -> None:
        """Shuffle the deck into a new random order."""
        cards = list(self._cards)
        self.rng.shuffle(cards)
        self._cards = deque(cards)

    def draw(self) -> Optional[Card]:
        """Draw the top card, or None if the deck is empty."""
        if not self._cards:
            return None
        return self._cards.popleft()

    def return_to_top(self, cards: list[Card]) -> None:
        """Put drawn cards back on top, so the first card is drawn next."""
        for card in reversed(cards):
            self._cards.appendleft(card)

    def is_empty(self) -> bool:
        return not self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def card_named(self, name: str) -> Optional[Card]:
        """Create a card from the catalog by name, or None if the name is unknown."""
        template = self._catalog.get(name.strip().lower())
        if template is None:
            return None
        return Card(name=template.name, color=template.color, cost=template.cost, text=template.text)
