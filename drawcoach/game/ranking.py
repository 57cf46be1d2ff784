"""Hand ranking categories and classification of partial hands."""

from collections import Counter
from enum import IntEnum
from typing import Iterable, Optional

from treys import Evaluator

from .cards import Card

# 5-rank runs, lowest first. The wheel plays the ace low.
WHEEL = (14, 2, 3, 4, 5)
STRAIGHT_WINDOWS: tuple[tuple[int, ...], ...] = (WHEEL,) + tuple(
    tuple(range(low, low + 5)) for low in range(2, 11)
)
ROYAL_WINDOW = (10, 11, 12, 13, 14)


class HandRanking(IntEnum):
    """Hand categories, weakest first."""
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def label(self) -> str:
        """Display name, e.g. 'Three of a Kind'."""
        return HAND_LABELS[self]

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_string(cls, s: str) -> "HandRanking":
        """Parse from a label ('Full House') or name ('FULL_HOUSE')."""
        key = s.strip().lower().replace("_", " ")
        for ranking, label in HAND_LABELS.items():
            if label.lower() == key:
                return ranking
        raise ValueError(f"Unknown hand ranking: {s}")


HAND_LABELS = {
    HandRanking.HIGH_CARD: "High Card",
    HandRanking.PAIR: "Pair",
    HandRanking.TWO_PAIR: "Two Pair",
    HandRanking.THREE_OF_A_KIND: "Three of a Kind",
    HandRanking.STRAIGHT: "Straight",
    HandRanking.FLUSH: "Flush",
    HandRanking.FULL_HOUSE: "Full House",
    HandRanking.FOUR_OF_A_KIND: "Four of a Kind",
    HandRanking.STRAIGHT_FLUSH: "Straight Flush",
    HandRanking.ROYAL_FLUSH: "Royal Flush",
}

# treys rank classes (1 = straight flush ... 9 = high card)
TREYS_CLASS_TO_RANKING = {
    1: HandRanking.STRAIGHT_FLUSH,
    2: HandRanking.FOUR_OF_A_KIND,
    3: HandRanking.FULL_HOUSE,
    4: HandRanking.FLUSH,
    5: HandRanking.STRAIGHT,
    6: HandRanking.THREE_OF_A_KIND,
    7: HandRanking.TWO_PAIR,
    8: HandRanking.PAIR,
    9: HandRanking.HIGH_CARD,
}

_evaluator: Optional[Evaluator] = None


def _get_evaluator() -> Evaluator:
    global _evaluator
    if _evaluator is None:
        _evaluator = Evaluator()
    return _evaluator


def rank_counts(cards: Iterable[Card]) -> Counter:
    """Number of cards held of each rank."""
    return Counter(c.rank for c in cards)


def suit_counts(cards: Iterable[Card]) -> Counter:
    """Number of cards held of each suit."""
    return Counter(c.suit for c in cards)


def has_straight(cards: Iterable[Card]) -> bool:
    """Check whether the distinct ranks contain a complete 5-card run."""
    ranks = {c.rank for c in cards}
    return any(all(r in ranks for r in window) for window in STRAIGHT_WINDOWS)


def _straight_flush_window(cards: list[Card]) -> Optional[tuple[int, ...]]:
    """Highest straight window completed within a single suit, if any."""
    best = None
    for suit, count in suit_counts(cards).items():
        if count < 5:
            continue
        ranks = {c.rank for c in cards if c.suit == suit}
        for window in STRAIGHT_WINDOWS:
            if all(r in ranks for r in window):
                if best is None or window[-1] > best[-1]:
                    best = window
    return best


def _classify_by_counts(cards: list[Card]) -> HandRanking:
    """Count-based classification for any number of cards."""
    sf = _straight_flush_window(cards)
    if sf is not None:
        return HandRanking.ROYAL_FLUSH if sf == ROYAL_WINDOW else HandRanking.STRAIGHT_FLUSH

    counts = sorted(rank_counts(cards).values(), reverse=True)
    if counts[0] >= 4:
        return HandRanking.FOUR_OF_A_KIND
    if counts[0] == 3 and len(counts) > 1 and counts[1] >= 2:
        return HandRanking.FULL_HOUSE
    if max(suit_counts(cards).values()) >= 5:
        return HandRanking.FLUSH
    if has_straight(cards):
        return HandRanking.STRAIGHT
    if counts[0] == 3:
        return HandRanking.THREE_OF_A_KIND
    if counts[0] == 2 and len(counts) > 1 and counts[1] == 2:
        return HandRanking.TWO_PAIR
    if counts[0] == 2:
        return HandRanking.PAIR
    return HandRanking.HIGH_CARD


def classify(cards: Iterable[Card]) -> HandRanking:
    """
    Classify a set of cards into its best hand category.

    Works on partial hands: with fewer than five cards the best sub-hand
    currently present is reported (e.g. two of a rank among four cards is
    a Pair). Five to seven cards go through the treys evaluator.

    Args:
        cards: Any number of distinct cards

    Returns:
        HandRanking of the best hand present
    """
    cards = list(cards)
    if len(cards) < 2:
        return HandRanking.HIGH_CARD

    if 5 <= len(cards) <= 7:
        evaluator = _get_evaluator()
        treys_cards = [c.to_treys() for c in cards]
        rank = evaluator.evaluate(treys_cards[:2], treys_cards[2:])
        if rank == 1:
            return HandRanking.ROYAL_FLUSH
        return TREYS_CLASS_TO_RANKING[evaluator.get_rank_class(rank)]

    return _classify_by_counts(cards)


def is_weak_hand(cards: Iterable[Card]) -> bool:
    """
    Check that a starting hand is still a draw.

    Weak means no rank held three or more times, no complete straight,
    and no suit held five or more times.
    """
    cards = list(cards)
    if not cards:
        return True
    if max(rank_counts(cards).values()) >= 3:
        return False
    if max(suit_counts(cards).values()) >= 5:
        return False
    return not has_straight(cards)
