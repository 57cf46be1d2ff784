"""Card and deck representation utilities."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Protocol

import numpy as np
from treys import Card as TreysCard


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}

SUIT_STR = {0: "c", 1: "d", 2: "h", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}

SUIT_NAMES = {0: "clubs", 1: "diamonds", 2: "hearts", 3: "spades"}
RANK_NAMES = {
    2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six", 7: "Seven",
    8: "Eight", 9: "Nine", 10: "Ten", 11: "Jack", 12: "Queen", 13: "King",
    14: "Ace",
}


class RandomSource(Protocol):
    """Anything exposing ``random()`` -> float in [0, 1).

    ``numpy.random.Generator`` satisfies this, as does a seeded stub.
    """

    def random(self) -> float: ...


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the default random source, optionally seeded."""
    return np.random.default_rng(seed)


def random_index(rng: RandomSource, n: int) -> int:
    """Uniform index in [0, n) drawn from ``rng.random()``."""
    if n <= 0:
        raise ValueError("Cannot pick from an empty sequence")
    # Guard against sources that return exactly 1.0
    return min(int(float(rng.random()) * n), n - 1)


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @property
    def name(self) -> str:
        """Long form, e.g. 'Ace of spades'."""
        return f"{RANK_NAMES[self.rank]} of {SUIT_NAMES[self.suit]}"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '2c'."""
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()

        if rank_char not in STR_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")
        if suit_char not in STR_SUIT:
            raise ValueError(f"Invalid suit: {suit_char}")

        return cls(rank=STR_RANK[rank_char], suit=STR_SUIT[suit_char])

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(str(self))

    def to_dict(self) -> dict:
        """JSON-shaped form used by the attempt store."""
        return {"rank": int(self.rank), "suit": SUIT_STR[self.suit]}

    @classmethod
    def from_dict(cls, d: dict) -> "Card":
        return cls(rank=int(d["rank"]), suit=STR_SUIT[d["suit"]])


def parse_cards(s: str) -> list[Card]:
    """Parse a run of cards like 'AhKh' or 'Ah Kh Jd'."""
    s = s.replace(" ", "").replace(",", "")
    if len(s) % 2:
        raise ValueError(f"Invalid card list: {s}")
    return [Card.from_string(s[i:i + 2]) for i in range(0, len(s), 2)]


def format_cards(cards: Iterable[Card]) -> str:
    """Space-separated card codes."""
    return " ".join(str(c) for c in cards)


def full_deck() -> list[Card]:
    """All 52 cards in a fixed order."""
    return [
        Card(rank, suit)
        for suit in range(4)
        for rank in range(2, 15)
    ]


def generate_deck(rng: Optional[RandomSource] = None) -> list[Card]:
    """
    Generate a shuffled 52-card deck.

    Repeatedly removes a uniformly random card from the unshuffled
    remainder and appends it, so every permutation is equally likely
    under a fair source.

    Args:
        rng: Random source (a fresh unseeded generator if None)

    Returns:
        List of all 52 cards in random order
    """
    rng = rng if rng is not None else make_rng()
    unshuffled = full_deck()
    shuffled = []
    while unshuffled:
        shuffled.append(unshuffled.pop(random_index(rng, len(unshuffled))))
    return shuffled


def remaining_cards(known: Iterable[Card], deck: Optional[Iterable[Card]] = None) -> list[Card]:
    """Cards of ``deck`` (default: full deck) that are not in ``known``."""
    used = set(known)
    source = full_deck() if deck is None else deck
    return [c for c in source if c not in used]


def check_partition(
    hole_cards: list[Card],
    board_cards: list[Card],
    remaining_deck: list[Card],
) -> None:
    """
    Assert hole + board + remaining deck is exactly the 52-card set.

    Raises:
        ValueError: On duplicate or missing cards
    """
    all_cards = list(hole_cards) + list(board_cards) + list(remaining_deck)
    unique = set(all_cards)
    if len(unique) != len(all_cards):
        raise ValueError("Duplicate cards detected")
    missing = set(full_deck()) - unique
    if missing:
        raise ValueError(f"Missing cards: {format_cards(sorted(missing, key=lambda c: (c.suit, c.rank)))}")


class Deck:
    """A standard 52-card deck."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else make_rng()
        self.cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to full 52 cards."""
        self.cards = full_deck()

    def shuffle(self) -> None:
        """Shuffle the remaining cards."""
        unshuffled = self.cards
        self.cards = []
        while unshuffled:
            self.cards.append(unshuffled.pop(random_index(self.rng, len(unshuffled))))

    def take(self, predicate) -> Optional[Card]:
        """Remove and return the first card matching ``predicate``."""
        for i, card in enumerate(self.cards):
            if predicate(card):
                return self.cards.pop(i)
        return None
