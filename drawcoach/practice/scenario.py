"""Practice scenario value types."""

import json
from dataclasses import dataclass
from enum import Enum

from drawcoach.game.cards import Card
from drawcoach.game.outs import OutBreakdown


class Decision(Enum):
    """Answer to a call-or-fold problem."""
    CALL = "call"
    FOLD = "fold"

    @classmethod
    def from_string(cls, s: str) -> "Decision":
        """Parse 'call'/'c' or 'fold'/'f'."""
        s = s.strip().lower()
        if s in ("call", "c"):
            return cls.CALL
        if s in ("fold", "f"):
            return cls.FOLD
        raise ValueError(f"Unknown decision: {s}")

    def __str__(self) -> str:
        return self.value


class DrawType(Enum):
    """Draw archetypes the generator can build."""
    FLUSH = "flush"
    STRAIGHT = "straight"
    FULL_HOUSE = "full_house"
    TWO_PAIR = "two_pair"
    THREE_OF_A_KIND = "three_of_a_kind"

    @property
    def label(self) -> str:
        return DRAW_LABELS[self]


DRAW_LABELS = {
    DrawType.FLUSH: "Flush draw",
    DrawType.STRAIGHT: "Straight draw",
    DrawType.FULL_HOUSE: "Full house draw",
    DrawType.TWO_PAIR: "Two pair draw",
    DrawType.THREE_OF_A_KIND: "Three of a kind draw",
}


@dataclass(frozen=True)
class OutCards:
    """Out cards by role."""
    primary: tuple[Card, ...]
    secondary: tuple[Card, ...]

    @property
    def total(self) -> tuple[Card, ...]:
        return self.primary + self.secondary


def _cards_to_json(cards) -> str:
    return json.dumps([c.to_dict() for c in cards])


def _cards_from_json(s: str) -> tuple[Card, ...]:
    return tuple(Card.from_dict(d) for d in json.loads(s))


@dataclass(frozen=True)
class Scenario:
    """A complete call-or-fold practice problem."""
    hole_cards: tuple[Card, ...]
    board_cards: tuple[Card, ...]
    pot_amount: float
    call_amount: float
    outs: int
    equity: float
    pot_odds: float  # Percentage: call / (pot + call) * 100
    pot_odds_ratio: float  # Ratio: (pot + call) / call
    correct_decision: Decision
    description: str
    out_cards: OutCards
    out_breakdown: OutBreakdown
    draw_type: DrawType = DrawType.FLUSH

    @property
    def street(self) -> str:
        return "flop" if len(self.board_cards) == 3 else "turn"

    @property
    def cards_to_see(self) -> int:
        return 2 if len(self.board_cards) == 3 else 1

    def is_correct(self, decision: Decision) -> bool:
        """Check a user's answer."""
        return decision == self.correct_decision

    def to_record(self) -> dict:
        """
        Flatten into a JSON-shaped record.

        Card lists and the breakdown are JSON strings so the record maps
        one-to-one onto storage columns.
        """
        return {
            "hole_cards": _cards_to_json(self.hole_cards),
            "board_cards": _cards_to_json(self.board_cards),
            "pot_amount": self.pot_amount,
            "call_amount": self.call_amount,
            "outs": self.outs,
            "equity": self.equity,
            "pot_odds": self.pot_odds,
            "correct_decision": self.correct_decision.value,
            "description": self.description,
            "out_cards_primary": _cards_to_json(self.out_cards.primary),
            "out_cards_secondary": _cards_to_json(self.out_cards.secondary),
            "out_cards_total": _cards_to_json(self.out_cards.total),
            "out_breakdown": json.dumps(self.out_breakdown.to_dict()),
            "draw_type": self.draw_type.value,
        }

    @classmethod
    def from_record(cls, record) -> "Scenario":
        """Rebuild a scenario from a flattened record or database row."""
        pot = record["pot_amount"]
        call = record["call_amount"]
        return cls(
            hole_cards=_cards_from_json(record["hole_cards"]),
            board_cards=_cards_from_json(record["board_cards"]),
            pot_amount=pot,
            call_amount=call,
            outs=record["outs"],
            equity=record["equity"],
            pot_odds=record["pot_odds"],
            pot_odds_ratio=(pot + call) / call if call > 0 else 0.0,
            correct_decision=Decision(record["correct_decision"]),
            description=record["description"],
            out_cards=OutCards(
                primary=_cards_from_json(record["out_cards_primary"]),
                secondary=_cards_from_json(record["out_cards_secondary"]),
            ),
            out_breakdown=OutBreakdown.from_dict(json.loads(record["out_breakdown"])),
            draw_type=DrawType(record["draw_type"] or DrawType.FLUSH.value),
        )
