"""Tests for card and deck representation."""

import pytest

from drawcoach.game.cards import (
    Card, Deck, Rank, Suit,
    check_partition, full_deck, generate_deck, make_rng,
    parse_cards, random_index, remaining_cards,
)


class FixedSource:
    """Random source that always returns the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class TestCard:
    def test_from_string(self):
        card = Card.from_string("As")
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_from_string_ten(self):
        card = Card.from_string("Th")
        assert card.rank == Rank.TEN
        assert card.suit == Suit.HEARTS

    def test_from_string_lowercase(self):
        card = Card.from_string("kd")
        assert card.rank == Rank.KING
        assert card.suit == Suit.DIAMONDS

    def test_str(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert str(card) == "As"

    def test_from_string_invalid_rank(self):
        with pytest.raises(ValueError):
            Card.from_string("Xs")

    def test_from_string_invalid_suit(self):
        with pytest.raises(ValueError):
            Card.from_string("Ax")

    def test_equality(self):
        assert Card.from_string("As") == Card.from_string("As")
        assert Card.from_string("As") != Card.from_string("Ah")

    def test_hashable(self):
        assert len({Card.from_string("As"), Card(14, 3)}) == 1

    def test_to_treys(self):
        assert isinstance(Card.from_string("As").to_treys(), int)

    def test_dict_form(self):
        card = Card.from_string("Qc")
        assert card.to_dict() == {"rank": 12, "suit": "c"}
        assert Card.from_dict(card.to_dict()) == card

    def test_name(self):
        assert Card.from_string("Ah").name == "Ace of hearts"


class TestParseCards:
    def test_parse_run(self):
        assert parse_cards("AhKh") == [Card(14, Suit.HEARTS), Card(13, Suit.HEARTS)]

    def test_parse_spaced(self):
        assert len(parse_cards("Jh 7h 2d")) == 3

    def test_parse_odd_length(self):
        with pytest.raises(ValueError):
            parse_cards("AhK")


class TestGenerateDeck:
    def test_full_set(self):
        deck = generate_deck(make_rng(7))
        assert len(deck) == 52
        assert set(deck) == set(full_deck())

    def test_every_call_is_complete(self):
        rng = make_rng(0)
        for _ in range(50):
            deck = generate_deck(rng)
            assert len(set(deck)) == 52

    def test_seeded_is_repeatable(self):
        assert generate_deck(make_rng(42)) == generate_deck(make_rng(42))

    def test_shuffles(self):
        # Probability of the first ten cards matching is astronomically low
        assert generate_deck(make_rng(1))[:10] != full_deck()[:10]

    def test_fixed_source(self):
        # Always taking index 0 leaves the build order unchanged
        assert generate_deck(FixedSource(0.0)) == full_deck()

    def test_source_returning_one(self):
        deck = generate_deck(FixedSource(1.0))
        assert set(deck) == set(full_deck())

    def test_default_source(self):
        assert len(generate_deck()) == 52


class TestRandomIndex:
    def test_bounds(self):
        assert random_index(FixedSource(0.0), 5) == 0
        assert random_index(FixedSource(0.999), 5) == 4
        assert random_index(FixedSource(1.0), 5) == 4

    def test_empty(self):
        with pytest.raises(ValueError):
            random_index(FixedSource(0.5), 0)


class TestPartition:
    def test_valid(self, flush_draw):
        hole, board, remaining = flush_draw
        assert len(remaining) == 47
        check_partition(hole, board, remaining)

    def test_duplicate(self, flush_draw):
        hole, board, remaining = flush_draw
        with pytest.raises(ValueError, match="Duplicate"):
            check_partition(hole, board + [hole[0]], remaining)

    def test_missing(self, flush_draw):
        hole, board, remaining = flush_draw
        with pytest.raises(ValueError, match="Missing"):
            check_partition(hole, board, remaining[1:])

    def test_remaining_cards(self):
        known = parse_cards("AsKs")
        rest = remaining_cards(known)
        assert len(rest) == 50
        assert not set(known) & set(rest)


class TestDeck:
    def test_full_deck(self):
        deck = Deck()
        assert len(deck.cards) == 52

    def test_take(self):
        deck = Deck()
        card = deck.take(lambda c: c.suit == Suit.HEARTS and c.rank == Rank.ACE)
        assert card == Card.from_string("Ah")
        assert card not in deck.cards
        assert len(deck.cards) == 51
        assert deck.take(lambda c: c == card) is None

    def test_take_in_deck_order(self):
        deck = Deck(FixedSource(1.0))
        deck.shuffle()
        # Always popping the last card reverses the build order
        assert deck.take(lambda c: c.rank == Rank.KING) == Card.from_string("Ks")

    def test_shuffle(self):
        deck1 = Deck()
        deck2 = Deck(make_rng(3))
        deck2.shuffle()

        same_order = all(
            c1 == c2 for c1, c2 in zip(deck1.cards[:10], deck2.cards[:10])
        )
        assert not same_order
        assert set(deck2.cards) == set(deck1.cards)

    def test_reset(self):
        deck = Deck()
        for _ in range(20):
            deck.take(lambda c: True)
        assert len(deck.cards) == 32

        deck.reset()
        assert len(deck.cards) == 52
