"""Call-or-fold practice scenario generation.

Scenarios are built by rejection sampling: pick a street and a draw type,
assemble matching hole and board cards, then keep the result only if the
hand is still a draw, the outs and equity fall in a teachable range and
the pot odds land close to the equity. Every loop is bounded and ends in a
fixed fallback.
"""

import logging
from typing import Callable, Optional

from drawcoach.game.cards import (
    Card,
    Deck,
    RandomSource,
    check_partition,
    format_cards,
    make_rng,
    parse_cards,
    random_index,
    remaining_cards,
)
from drawcoach.game.equity import calculate_equity, calculate_pot_odds, pot_odds_ratio
from drawcoach.game.outs import OutBreakdown, calculate_detailed_outs
from drawcoach.game.ranking import STRAIGHT_WINDOWS, HandRanking, is_weak_hand

from .config import GeneratorConfig
from .scenario import Decision, DrawType, OutCards, Scenario

logger = logging.getLogger(__name__)

Hand = tuple[list[Card], list[Card]]
DrawStrategy = Callable[[Deck, RandomSource, int], Optional[Hand]]


def _shuffled(cards: list[Card], rng: RandomSource) -> list[Card]:
    pool = list(cards)
    out = []
    while pool:
        out.append(pool.pop(random_index(rng, len(pool))))
    return out


def _pick_ranks(rng: RandomSource, n: int, exclude: set[int] = frozenset()) -> list[int]:
    """n distinct random ranks not in ``exclude``."""
    pool = [r for r in range(2, 15) if r not in exclude]
    return _shuffled(pool, rng)[:n]


def _take_rank(deck: Deck, rank: int) -> Optional[Card]:
    return deck.take(lambda c: c.rank == rank)


def _fill_distinct(
    deck: Deck,
    board: list[Card],
    board_size: int,
    used_ranks: set[int],
    ceiling: int = 15,
) -> bool:
    """Top up the board with unpaired cards of fresh ranks below ``ceiling``."""
    while len(board) < board_size:
        card = deck.take(lambda c: c.rank not in used_ranks and c.rank < ceiling)
        if card is None:
            return False
        used_ranks.add(card.rank)
        board.append(card)
    return True


def _flush_strategy(deck: Deck, rng: RandomSource, board_size: int) -> Optional[Hand]:
    """Four cards of one suit, two in the hole and two on the board."""
    suit = random_index(rng, 4)
    suited = [deck.take(lambda c: c.suit == suit) for _ in range(4)]
    if None in suited:
        return None
    hole, board = suited[:2], suited[2:]
    while len(board) < board_size:
        card = deck.take(lambda c: c.suit != suit)
        if card is None:
            return None
        board.append(card)
    return hole, board


def _straight_strategy(deck: Deck, rng: RandomSource, board_size: int) -> Optional[Hand]:
    """Four ranks of a five-rank run, missing either an end or an inside rank."""
    window = STRAIGHT_WINDOWS[random_index(rng, len(STRAIGHT_WINDOWS))]
    gap = window[random_index(rng, len(window))]
    ranks = _shuffled([r for r in window if r != gap], rng)
    cards = [_take_rank(deck, r) for r in ranks]
    if None in cards:
        return None
    hole, board = cards[:2], cards[2:]
    while len(board) < board_size:
        card = deck.take(lambda c: c.rank not in window)
        if card is None:
            return None
        board.append(card)
    return hole, board


def _full_house_strategy(deck: Deck, rng: RandomSource, board_size: int) -> Optional[Hand]:
    """Two pair made with both hole cards, drawing to a full house."""
    x, y = _pick_ranks(rng, 2)
    cards = [_take_rank(deck, r) for r in (x, y, x, y)]
    if None in cards:
        return None
    hole, board = cards[:2], cards[2:]
    if not _fill_distinct(deck, board, board_size, {x, y}):
        return None
    return hole, board


def _two_pair_strategy(deck: Deck, rng: RandomSource, board_size: int) -> Optional[Hand]:
    """Paired board with two unpaired hole cards, drawing to pair either."""
    z, x, y = _pick_ranks(rng, 3)
    cards = [_take_rank(deck, r) for r in (x, y, z, z)]
    if None in cards:
        return None
    hole, board = cards[:2], cards[2:]
    if not _fill_distinct(deck, board, board_size, {x, y, z}):
        return None
    return hole, board


def _three_of_a_kind_strategy(deck: Deck, rng: RandomSource, board_size: int) -> Optional[Hand]:
    """One hole card paired on the board, the other an overcard."""
    x, y = sorted(_pick_ranks(rng, 2))
    cards = [_take_rank(deck, r) for r in (x, y, x)]
    if None in cards:
        return None
    hole, board = cards[:2], cards[2:]
    if not _fill_distinct(deck, board, board_size, {x, y}, ceiling=y):
        return None
    return hole, board


DRAW_STRATEGIES: dict[DrawType, DrawStrategy] = {
    DrawType.FLUSH: _flush_strategy,
    DrawType.STRAIGHT: _straight_strategy,
    DrawType.FULL_HOUSE: _full_house_strategy,
    DrawType.TWO_PAIR: _two_pair_strategy,
    DrawType.THREE_OF_A_KIND: _three_of_a_kind_strategy,
}

# Hole cards and a four-card board; flop hands use the first three.
FALLBACK_HANDS: dict[DrawType, tuple[str, str]] = {
    DrawType.FLUSH: ("AhKh", "Jh7h2d9c"),
    DrawType.STRAIGHT: ("9s8d", "7h6c2sKh"),
    DrawType.FULL_HOUSE: ("Kc9d", "Ks9h4c2d"),
    DrawType.TWO_PAIR: ("AcKd", "8s8h3c6d"),
    DrawType.THREE_OF_A_KIND: ("AdQs", "Qh8c3d5s"),
}


def build_draw(
    draw_type: DrawType,
    board_size: int,
    rng: RandomSource,
    retries: int = 50,
) -> Hand:
    """
    Assemble hole and board cards for a draw type.

    Each try deals from a freshly shuffled deck using the draw type's
    card-selection strategy. After ``retries`` failed tries a fixed hand
    for the draw type is returned.

    Args:
        draw_type: Draw archetype to build
        board_size: 3 (flop) or 4 (turn)
        rng: Random source
        retries: Tries before falling back

    Returns:
        Tuple of (hole_cards, board_cards)
    """
    strategy = DRAW_STRATEGIES[draw_type]
    for _ in range(retries):
        deck = Deck(rng)
        deck.shuffle()
        hand = strategy(deck, rng, board_size)
        if hand is None:
            continue
        hole, board = hand
        if len(hole) == 2 and len(board) == board_size and len(set(hole + board)) == 2 + board_size:
            return hole, _shuffled(board, rng)

    logger.debug("Falling back to fixed %s hand", draw_type.value)
    hole_str, board_str = FALLBACK_HANDS[draw_type]
    return parse_cards(hole_str), parse_cards(board_str)[:board_size]


def describe_scenario(
    hole_cards: list[Card],
    board_cards: list[Card],
    pot_amount: float,
    call_amount: float,
) -> str:
    """Plain-language problem statement."""
    street = "flop" if len(board_cards) == 3 else "turn"
    ratio = pot_odds_ratio(pot_amount, call_amount)
    return (
        f"You hold {format_cards(hole_cards)} on a {street} of "
        f"{format_cards(board_cards)}. The pot is ${pot_amount:,.0f} and you "
        f"face a ${call_amount:,.0f} call ({ratio:.1f}:1). Call or fold?"
    )


def fallback_scenario() -> Scenario:
    """Fixed nine-out flush draw used when generation gives up."""
    hole = parse_cards("AhKh")
    board = parse_cards("Jh7h2d")
    pot, call = 500.0, 150.0
    primary = tuple(c for c in remaining_cards(hole + board) if c.suit == hole[0].suit)
    equity = calculate_equity(len(primary), 2)
    pot_odds = calculate_pot_odds(pot, call)
    return Scenario(
        hole_cards=tuple(hole),
        board_cards=tuple(board),
        pot_amount=pot,
        call_amount=call,
        outs=len(primary),
        equity=equity,
        pot_odds=pot_odds,
        pot_odds_ratio=pot_odds_ratio(pot, call),
        correct_decision=Decision.CALL,
        description=describe_scenario(hole, board, pot, call),
        out_cards=OutCards(primary=primary, secondary=()),
        out_breakdown=OutBreakdown(
            primary_outs=len(primary),
            primary_type=HandRanking.FLUSH.label,
            secondary_outs=0,
        ),
        draw_type=DrawType.FLUSH,
    )


class ScenarioGenerator:
    """
    Generate balanced call-or-fold practice problems.

    The random source is injected so runs can be seeded.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        """
        Initialize generator.

        Args:
            config: Generation settings (uses defaults if None)
            rng: Random source exposing random() (unseeded numpy if None)
        """
        self.config = config or GeneratorConfig()
        self.rng = rng if rng is not None else make_rng()

    def choose_board_size(self) -> int:
        """3 cards (flop) or 4 (turn)."""
        return 3 if self.rng.random() < self.config.flop_probability else 4

    def choose_draw_type(self) -> DrawType:
        """Weighted draw type choice by cumulative weight."""
        weights = [(DrawType(k), w) for k, w in self.config.draw_weights.items() if w > 0]
        total = sum(w for _, w in weights)
        r = self.rng.random() * total
        cumulative = 0
        for draw_type, weight in weights:
            cumulative += weight
            if r < cumulative:
                return draw_type
        return weights[-1][0]

    def choose_pot_amount(self) -> float:
        """Pot size from a weighted bracket, rounded to a whole amount."""
        brackets = self.config.pot_brackets
        total = sum(w for _, _, w in brackets)
        r = self.rng.random() * total
        cumulative = 0
        low, high = brackets[-1][:2]
        for b_low, b_high, weight in brackets:
            cumulative += weight
            if r < cumulative:
                low, high = b_low, b_high
                break
        return float(round(low + self.rng.random() * (high - low)))

    def balance_pot(self, equity: float) -> tuple[float, float]:
        """
        Choose pot and call amounts whose pot odds sit near the equity.

        Args:
            equity: Equity percentage to balance against

        Returns:
            Tuple of (pot_amount, call_amount)
        """
        band_low, band_high = self.config.odds_band
        tolerance = self.config.odds_tolerance
        low = max(band_low, equity - tolerance)
        high = min(band_high, equity + tolerance)
        if high < low:
            low, high = high, low
        target = low + self.rng.random() * (high - low)

        pot = self.choose_pot_amount()
        call = max(1.0, float(round(target * pot / (100 - target))))
        return pot, call

    def is_valid(self, outs: int, equity: float, pot_odds: float) -> bool:
        """Final gate on a finished candidate."""
        cfg = self.config
        return (
            abs(equity - pot_odds) <= cfg.odds_tolerance
            and cfg.outs_range[0] <= outs <= cfg.outs_range[1]
            and cfg.equity_range[0] <= equity <= cfg.equity_range[1]
        )

    def attempt(self) -> Optional[Scenario]:
        """One generation attempt; None if the candidate is rejected."""
        cfg = self.config
        board_size = self.choose_board_size()
        draw_type = self.choose_draw_type()
        hole, board = build_draw(draw_type, board_size, self.rng, cfg.draw_retries)

        if not is_weak_hand(hole + board):
            logger.debug("Rejected %s: starting hand already made", draw_type.value)
            return None

        remaining = remaining_cards(hole + board)
        detailed = calculate_detailed_outs(hole, board, remaining, cfg.max_out_cards)
        outs = detailed.count
        if not cfg.outs_range[0] <= outs <= cfg.outs_range[1]:
            logger.debug("Rejected %s: %d outs", draw_type.value, outs)
            return None

        cards_to_see = 2 if board_size == 3 else 1
        equity = calculate_equity(outs, cards_to_see)
        pot, call = self.balance_pot(equity)
        pot_odds = calculate_pot_odds(pot, call)

        if not self.is_valid(outs, equity, pot_odds):
            logger.debug(
                "Rejected %s: equity %.1f, pot odds %.1f", draw_type.value, equity, pot_odds
            )
            return None

        check_partition(hole, board, remaining)

        return Scenario(
            hole_cards=tuple(hole),
            board_cards=tuple(board),
            pot_amount=pot,
            call_amount=call,
            outs=outs,
            equity=equity,
            pot_odds=pot_odds,
            pot_odds_ratio=pot_odds_ratio(pot, call),
            correct_decision=Decision.CALL if equity > pot_odds else Decision.FOLD,
            description=describe_scenario(hole, board, pot, call),
            out_cards=OutCards(primary=detailed.primary, secondary=detailed.secondary),
            out_breakdown=detailed.breakdown,
            draw_type=draw_type,
        )

    def generate(self) -> Scenario:
        """
        Generate one scenario.

        Returns:
            First valid scenario within ``max_attempts``, else the fallback
        """
        for attempt in range(1, self.config.max_attempts + 1):
            scenario = self.attempt()
            if scenario is not None:
                logger.debug("Generated %s scenario on attempt %d", scenario.draw_type.value, attempt)
                return scenario

        logger.warning(
            "No valid scenario after %d attempts, using fallback", self.config.max_attempts
        )
        return fallback_scenario()


def generate_call_practice_scenario(
    rng: Optional[RandomSource] = None,
    config: Optional[GeneratorConfig] = None,
) -> Scenario:
    """Generate one call-or-fold practice scenario."""
    return ScenarioGenerator(config=config, rng=rng).generate()
