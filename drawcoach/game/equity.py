"""Equity, pot odds and expected value arithmetic.

Equity uses the rule of 4 and 2: with two cards to come each out is worth
about 4%, with one card to come about 2%.

Two pot odds conventions are provided:

- ``calculate_pot_odds`` is the share of the final pot the call represents,
  as a percentage. Compare it directly against equity: call when
  equity > pot odds.
- ``pot_odds_ratio`` is the final pot over the call, read as "N:1". A
  bigger ratio is a better price, so the comparison runs the other way.
"""

import math


def equity_multiplier(cards_to_see: int) -> int:
    """Percent of equity per out for the number of cards still to come."""
    return 4 if cards_to_see == 2 else 2


def saturating_outs(cards_to_see: int) -> int:
    """Smallest out count whose equity reaches 100%."""
    return math.ceil(100 / equity_multiplier(cards_to_see))


def calculate_equity(outs: int, cards_to_see: int) -> float:
    """
    Estimate equity from an outs count.

    Args:
        outs: Number of cards that complete the draw
        cards_to_see: Cards still to be dealt (2 on the flop, 1 on the turn)

    Returns:
        Equity percentage in [0, 100]
    """
    if outs <= 0 or cards_to_see <= 0:
        return 0.0
    return float(min(outs * equity_multiplier(cards_to_see), 100))


def calculate_pot_odds(pot_amount: float, call_amount: float) -> float:
    """Call as a percentage of the pot after calling."""
    if call_amount <= 0 or pot_amount < 0:
        return 0.0
    return call_amount / (pot_amount + call_amount) * 100


def pot_odds_ratio(pot_amount: float, call_amount: float) -> float:
    """Pot after calling divided by the call, e.g. 4.33 for $500/$150."""
    if call_amount <= 0 or pot_amount < 0:
        return 0.0
    return (pot_amount + call_amount) / call_amount


def calculate_ev(equity: float, pot_amount: float, call_amount: float) -> float:
    """
    Expected value of calling.

    Args:
        equity: Win chance as a percentage
        pot_amount: Chips already in the pot
        call_amount: Chips needed to call

    Returns:
        Net expected chips won by calling
    """
    win_chance = equity / 100
    return win_chance * (pot_amount + call_amount) - (1 - win_chance) * call_amount


def validate_cash(pot_amount: float, call_amount: float) -> bool:
    """Pot and call are non-negative and the call does not exceed the pot."""
    return pot_amount >= 0 and call_amount >= 0 and call_amount <= pot_amount
