"""Tunable constants for practice scenario generation."""

from dataclasses import dataclass, field


def _default_draw_weights() -> dict[str, int]:
    return {
        "flush": 35,
        "straight": 30,
        "full_house": 20,
        "two_pair": 10,
        "three_of_a_kind": 5,
    }


def _default_pot_brackets() -> list[tuple[float, float, int]]:
    # (low, high, weight)
    return [
        (50, 300, 30),
        (300, 1000, 40),
        (1000, 3000, 20),
        (3000, 10000, 10),
    ]


@dataclass
class GeneratorConfig:
    """Settings for the call/fold scenario generator."""

    # Retry bounds
    max_attempts: int = 100  # Whole-scenario attempts before the fallback
    draw_retries: int = 50  # Card-assembly tries per draw type

    # Street selection
    flop_probability: float = 0.7

    # Draw type weights (keys are DrawType values)
    draw_weights: dict[str, int] = field(default_factory=_default_draw_weights)

    # Pot size brackets
    pot_brackets: list[tuple[float, float, int]] = field(default_factory=_default_pot_brackets)

    # Validity gate
    odds_tolerance: float = 8.0  # Max |equity - pot odds|
    odds_band: tuple[float, float] = (8.0, 62.0)  # Pot odds target clamp
    outs_range: tuple[int, int] = (2, 12)
    equity_range: tuple[float, float] = (10.0, 50.0)
    max_out_cards: int = 12
