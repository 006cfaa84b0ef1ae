"""Tests for district cards and the district deck."""

import io
import random

import pytest

from citadels.engine.cards import Card, Color, DistrictDeck, parse_cards

HEADER = "Name\tQty\tcolor\tcost\ttext\n"


def test_card_display():
    card = Card(name="Castle", color=Color.YELLOW, cost=4)
    assert card.display() == "Castle [yellow4]"
    assert str(card) == "Castle [yellow4]"


def test_cards_with_the_same_name_are_distinct():
    a = Card(name="Market", color=Color.GREEN, cost=2)
    b = Card(name="Market", color=Color.GREEN, cost=2)
    hand = [a, b]
    hand.remove(b)
    assert hand[0] is a


def test_color_from_string():
    assert Color.from_string("red") == Color.RED
    assert Color.from_string("Blue") == Color.BLUE


def test_color_from_string_invalid():
    with pytest.raises(ValueError, match="Unknown color"):
        Color.from_string("invalid")


def test_parse_cards_expands_quantity():
    cards = parse_cards(io.StringIO(HEADER + "Castle\t2\tyellow\t4\t\nKeep\t1\tpurple\t3\tCannot be destroyed.\n"))
    assert [c.name for c in cards] == ["Castle", "Castle", "Keep"]
    assert cards[2].text == "Cannot be destroyed."
    assert cards[0].text == ""


def test_parse_cards_without_text_column():
    cards = parse_cards(io.StringIO(HEADER + "Tavern\t1\tgreen\t1\n"))
    assert cards[0].cost == 1
    assert cards[0].text == ""


def test_deck_draws_until_empty():
    deck = DistrictDeck.from_tsv(io.StringIO(HEADER + "Castle\t2\tyellow\t4\t\n"))
    assert deck.draw() is not None
    assert deck.draw() is not None
    assert deck.is_empty()
    assert deck.draw() is None


def test_deck_empty_on_zero_quantity():
    deck = DistrictDeck.from_tsv(io.StringIO(HEADER + "Empty\t0\tred\t1\t\n"))
    assert deck.is_empty()


def test_deck_shuffle_is_seeded():
    cards = parse_cards(io.StringIO(HEADER + "A\t1\tred\t1\t\nB\t1\tred\t2\t\nC\t1\tred\t3\t\nD\t1\tred\t4\t\n"))
    first = DistrictDeck(cards, rng=random.Random(5))
    second = DistrictDeck(cards, rng=random.Random(5))
    assert [first.draw().name for _ in range(4)] == [second.draw().name for _ in range(4)]


def test_bundled_deck():
    deck = DistrictDeck.from_tsv(rng=random.Random(0))
    assert len(deck) == 66
    castle = deck.card_named("castle")
    assert castle.name == "Castle"
    assert castle.color == Color.YELLOW
    assert castle.cost == 4


def test_card_named_survives_an_empty_deck():
    deck = DistrictDeck.from_tsv(io.StringIO(HEADER + "Castle\t1\tyellow\t4\t\n"))
    drawn = deck.draw()
    assert deck.is_empty()
    again = deck.card_named("Castle")
    assert again is not drawn
    assert again.display() == drawn.display()
    assert deck.card_named("Nowhere") is None


def test_return_to_top_keeps_order(card):
    deck = DistrictDeck([card(1)], rng=random.Random(0))
    top = [card(5, name="First"), card(6, name="Second")]
    deck.return_to_top(top)
    assert deck.draw().name == "First"
    assert deck.draw().name == "Second"
    assert deck.draw().cost == 1
