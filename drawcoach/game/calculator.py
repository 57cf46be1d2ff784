"""Staged outs/equity/EV calculation for a user-entered setup."""

from dataclasses import dataclass, field
from typing import Union

from .cards import Card
from .equity import calculate_equity, calculate_ev, calculate_pot_odds
from .outs import cards_to_come, coerce_target, count_outs
from .ranking import HandRanking, classify

INCOMPLETE_SETUP = "Complete setup to see calculation"
MISSING_CASH = "Enter pot and call amounts to see full results"


@dataclass
class PokerCalcResult:
    """
    Calculator output.

    Once ``is_draw_achieved`` is set the pot odds figure reads as the
    required call percentage and EV as guaranteed profit.
    """
    outs: int = 0
    pot_odds: float = 0.0
    equity: float = 0.0
    ev: float = 0.0
    is_draw_achieved: bool = False
    is_valid_setup: bool = False
    status_messages: list[str] = field(default_factory=list)


def calculate_result(
    hole_cards: list[Card],
    board_cards: list[Card],
    remaining_deck: list[Card],
    target_hand: Union[HandRanking, str, None],
    pot_amount: float,
    call_amount: float,
    is_cash_valid: bool = True,
) -> PokerCalcResult:
    """
    Gate and combine outs, equity, pot odds and EV.

    Outs need two hole cards, a flop or turn board and a target. Equity,
    pot odds and EV additionally need valid, positive pot and call
    amounts. Unmet stages produce a status message instead of numbers.

    Args:
        hole_cards: Hole cards selected so far
        board_cards: Board cards selected so far
        remaining_deck: Unselected cards
        target_hand: Target category or its label
        pot_amount: Chips in the pot
        call_amount: Chips needed to call
        is_cash_valid: Whether the entered amounts passed validation

    Returns:
        PokerCalcResult
    """
    target = coerce_target(target_hand)
    if len(hole_cards) != 2 or len(board_cards) not in (3, 4) or target is None:
        return PokerCalcResult(status_messages=[INCOMPLETE_SETUP])

    outs = count_outs(hole_cards, board_cards, target, remaining_deck)

    if not is_cash_valid or pot_amount <= 0 or call_amount <= 0:
        return PokerCalcResult(outs=outs, status_messages=[MISSING_CASH])

    # A made hand is certain even where the clamped outs count cannot say so
    if classify(list(hole_cards) + list(board_cards)) >= target:
        equity = 100.0
    else:
        equity = calculate_equity(outs, cards_to_come(board_cards))

    return PokerCalcResult(
        outs=outs,
        pot_odds=calculate_pot_odds(pot_amount, call_amount),
        equity=equity,
        ev=calculate_ev(equity, pot_amount, call_amount),
        is_draw_achieved=equity >= 100,
        is_valid_setup=True,
    )
