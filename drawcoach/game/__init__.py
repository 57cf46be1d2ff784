"""Card, hand ranking, outs and equity module."""

from .cards import (
    Card,
    Deck,
    Rank,
    Suit,
    check_partition,
    generate_deck,
    make_rng,
    parse_cards,
)
from .ranking import HandRanking, classify, is_weak_hand
from .outs import OutBreakdown, DetailedOuts, count_outs, calculate_detailed_outs
from .equity import (
    calculate_equity,
    calculate_ev,
    calculate_pot_odds,
    pot_odds_ratio,
    validate_cash,
)
from .calculator import PokerCalcResult, calculate_result

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "check_partition",
    "generate_deck",
    "make_rng",
    "parse_cards",
    "HandRanking",
    "classify",
    "is_weak_hand",
    "OutBreakdown",
    "DetailedOuts",
    "count_outs",
    "calculate_detailed_outs",
    "calculate_equity",
    "calculate_ev",
    "calculate_pot_odds",
    "pot_odds_ratio",
    "validate_cash",
    "PokerCalcResult",
    "calculate_result",
]
