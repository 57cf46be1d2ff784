"""Outs counting for drawing hands."""

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from .cards import Card
from .equity import saturating_outs
from .ranking import (
    HandRanking,
    ROYAL_WINDOW,
    STRAIGHT_WINDOWS,
    classify,
    rank_counts,
    suit_counts,
)

MAX_OUT_CARDS = 12


def cards_to_come(board_cards: list[Card]) -> int:
    """Board cards still to be dealt before the river is out (2 from the flop)."""
    if len(board_cards) <= 3:
        return 2
    return max(5 - len(board_cards), 0)


def coerce_target(target_hand: Union[HandRanking, str, None]) -> Optional[HandRanking]:
    """Accept a HandRanking, its label, or nothing."""
    if target_hand is None or target_hand == "":
        return None
    if isinstance(target_hand, HandRanking):
        return target_hand
    return HandRanking.from_string(target_hand)


def _count_ranks(deck: Iterable[Card], ranks: set[int]) -> int:
    return sum(1 for c in deck if c.rank in ranks)


def _missing_straight_ranks(ranks: set[int], windows=STRAIGHT_WINDOWS) -> set[int]:
    """Ranks that would fill a window currently missing exactly one rank."""
    missing = set()
    for window in windows:
        absent = [r for r in window if r not in ranks]
        if len(absent) == 1:
            missing.add(absent[0])
    return missing


def _missing_straight_flush_cards(known: list[Card], windows) -> set[Card]:
    missing = set()
    for suit in range(4):
        ranks = {c.rank for c in known if c.suit == suit}
        for rank in _missing_straight_ranks(ranks, windows):
            missing.add(Card(rank, suit))
    return missing


def count_outs(
    hole_cards: list[Card],
    board_cards: list[Card],
    target_hand: Union[HandRanking, str, None],
    remaining_deck: list[Card],
) -> int:
    """
    Count the remaining cards that would bring the hand to the target.

    This is a one-card-away count, not an enumeration of future boards.
    When the known cards already reach the target, a count large enough
    for equity to saturate at 100% is returned instead, clamped to the
    deck. On the turn that clamp leaves 46, which is only 92% equity with
    one card to come, so callers must check for a made hand themselves.

    Args:
        hole_cards: Exactly two hole cards
        board_cards: Empty, or a complete flop (3) or more
        target_hand: Target category (HandRanking or its label)
        remaining_deck: Unseen cards

    Returns:
        Outs in [0, len(remaining_deck)]
    """
    if len(hole_cards) != 2:
        return 0
    if 0 < len(board_cards) < 3:
        return 0
    target = coerce_target(target_hand)
    if target is None:
        return 0

    known = list(hole_cards) + list(board_cards)
    deck = list(remaining_deck)

    if classify(known) >= target:
        outs = saturating_outs(cards_to_come(board_cards))
        return max(0, min(outs, len(deck)))

    counts = rank_counts(known)
    pairs = {r for r, n in counts.items() if n == 2}
    singles = {r for r, n in counts.items() if n == 1}
    trips = {r for r, n in counts.items() if n == 3}

    outs = 0
    if target == HandRanking.PAIR:
        ranks = {c.rank for c in hole_cards if counts[c.rank] < 2}
        outs = _count_ranks(deck, ranks)

    elif target == HandRanking.TWO_PAIR:
        if len(pairs) == 1 and singles:
            outs = _count_ranks(deck, singles)

    elif target == HandRanking.THREE_OF_A_KIND:
        outs = _count_ranks(deck, pairs)

    elif target == HandRanking.STRAIGHT:
        outs = _count_ranks(deck, _missing_straight_ranks(set(counts)))

    elif target == HandRanking.FLUSH:
        suits = {s for s, n in suit_counts(known).items() if n == 4}
        outs = sum(1 for c in deck if c.suit in suits)

    elif target == HandRanking.FULL_HOUSE:
        if trips:
            outs = _count_ranks(deck, set(counts) - trips)
        elif pairs:
            outs = _count_ranks(deck, pairs)

    elif target == HandRanking.FOUR_OF_A_KIND:
        outs = _count_ranks(deck, trips)

    elif target == HandRanking.STRAIGHT_FLUSH:
        missing = _missing_straight_flush_cards(known, STRAIGHT_WINDOWS)
        outs = sum(1 for c in deck if c in missing)

    elif target == HandRanking.ROYAL_FLUSH:
        missing = _missing_straight_flush_cards(known, (ROYAL_WINDOW,))
        outs = sum(1 for c in deck if c in missing)

    return max(0, min(outs, len(deck)))


@dataclass(frozen=True)
class OutBreakdown:
    """Counts and labels of the primary and secondary draws."""
    primary_outs: int
    primary_type: str
    secondary_outs: int
    secondary_types: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "primaryOuts": self.primary_outs,
            "primaryType": self.primary_type,
            "secondaryOuts": self.secondary_outs,
            "secondaryTypes": list(self.secondary_types),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "OutBreakdown":
        return cls(
            primary_outs=int(d["primaryOuts"]),
            primary_type=d["primaryType"],
            secondary_outs=int(d["secondaryOuts"]),
            secondary_types=tuple(d.get("secondaryTypes", ())),
        )


@dataclass(frozen=True)
class DetailedOuts:
    """Out cards split into the main draw and extra outs."""
    primary: tuple[Card, ...]
    secondary: tuple[Card, ...]
    breakdown: OutBreakdown

    @property
    def total(self) -> tuple[Card, ...]:
        return self.primary + self.secondary

    @property
    def count(self) -> int:
        return len(self.primary) + len(self.secondary)


NO_DRAW = "None"
OVERCARDS = "Overcards"


def _primary_candidates(hole: list[Card], known: list[Card], deck: list[Card]):
    """Candidate out cards per draw type, in priority order."""
    counts = rank_counts(known)
    pairs = {r for r, n in counts.items() if n == 2}
    trips = {r for r, n in counts.items() if n >= 3}

    flush_suits = {s for s, n in suit_counts(known).items() if n >= 4}
    flush = [c for c in deck if c.suit in flush_suits]

    straight_ranks = _missing_straight_ranks(set(counts))
    straight = [c for c in deck if c.rank in straight_ranks]

    if trips:
        fh_ranks = set(counts) - trips
    elif len(pairs) >= 2:
        fh_ranks = pairs
    else:
        fh_ranks = set()
    full_house = [c for c in deck if c.rank in fh_ranks]

    # Only a pair the player holds part of: a board pair is shared
    held_pairs = {c.rank for c in hole if c.rank in pairs}
    three_kind = [c for c in deck if c.rank in held_pairs]

    two_pair = []
    if len(pairs) == 1:
        kickers = {c.rank for c in hole if counts[c.rank] == 1}
        two_pair = [c for c in deck if c.rank in kickers]

    return [
        (HandRanking.FLUSH.label, flush),
        (HandRanking.STRAIGHT.label, straight),
        (HandRanking.FULL_HOUSE.label, full_house),
        (HandRanking.THREE_OF_A_KIND.label, three_kind),
        (HandRanking.TWO_PAIR.label, two_pair),
    ]


def _secondary_candidates(hole: list[Card], board: list[Card], known: list[Card], deck: list[Card]):
    counts = rank_counts(known)
    overcard_ranks = set()
    if board:
        top = max(c.rank for c in board)
        overcard_ranks = {c.rank for c in hole if counts[c.rank] == 1 and c.rank > top}
    overcards = [c for c in deck if c.rank in overcard_ranks]

    trips = {r for r, n in counts.items() if n == 3}
    quads = [c for c in deck if c.rank in trips]

    return [
        (OVERCARDS, overcards),
        (HandRanking.FOUR_OF_A_KIND.label, quads),
    ]


def calculate_detailed_outs(
    hole_cards: list[Card],
    board_cards: list[Card],
    deck: list[Card],
    max_cards: int = MAX_OUT_CARDS,
) -> DetailedOuts:
    """
    Split a hand's outs into one primary draw and secondary extras.

    The primary draw is the first non-empty candidate among Flush,
    Straight, Full House, Three of a Kind and Two Pair. Secondary outs are
    overcards and quad completions, minus anything already counted as
    primary. The combined list is capped at ``max_cards``, trimming the
    secondary outs first.

    Args:
        hole_cards: Two hole cards
        board_cards: Board cards
        deck: Unseen cards
        max_cards: Cap on total out cards

    Returns:
        DetailedOuts with card lists and breakdown
    """
    known = list(hole_cards) + list(board_cards)
    known_set = set(known)
    unseen = [c for c in deck if c not in known_set]

    primary: list[Card] = []
    primary_type = NO_DRAW
    for label, cards in _primary_candidates(list(hole_cards), known, unseen):
        if cards:
            primary = cards
            primary_type = label
            break

    primary_set = set(primary)
    secondary: list[Card] = []
    secondary_labels: dict[Card, str] = {}
    for label, cards in _secondary_candidates(list(hole_cards), list(board_cards), known, unseen):
        for card in cards:
            if card in primary_set or card in secondary_labels:
                continue
            secondary.append(card)
            secondary_labels[card] = label

    primary = primary[:max_cards]
    secondary = secondary[:max(max_cards - len(primary), 0)]

    secondary_types = []
    for card in secondary:
        if secondary_labels[card] not in secondary_types:
            secondary_types.append(secondary_labels[card])

    breakdown = OutBreakdown(
        primary_outs=len(primary),
        primary_type=primary_type if primary else NO_DRAW,
        secondary_outs=len(secondary),
        secondary_types=tuple(secondary_types),
    )
    return DetailedOuts(
        primary=tuple(primary),
        secondary=tuple(secondary),
        breakdown=breakdown,
    )
