"""Aggregated practice performance statistics."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional

from drawcoach.db.models import AttemptRecord

from .scenario import Decision

RECENT_WINDOWS = (7, 30, 90)  # Days


@dataclass
class Accuracy:
    """Attempt count and accuracy for one slice of attempts."""
    attempts: int = 0
    correct: int = 0

    @property
    def accuracy(self) -> float:
        """Percentage correct, 0 with no attempts."""
        if self.attempts == 0:
            return 0.0
        return self.correct / self.attempts * 100

    def add(self, is_correct: bool) -> None:
        self.attempts += 1
        if is_correct:
            self.correct += 1


@dataclass
class PracticeStats:
    """
    Call-practice performance summary.

    All percentages are stored as values 0-100.
    """
    overall: Accuracy = field(default_factory=Accuracy)

    # Split by the correct answer of each scenario
    call_spots: Accuracy = field(default_factory=Accuracy)
    fold_spots: Accuracy = field(default_factory=Accuracy)

    average_time_to_decision: Optional[float] = None  # Milliseconds

    # Keyed by window length in days
    recent: dict[int, Accuracy] = field(default_factory=dict)

    # Keyed by DrawType value
    by_draw_type: dict[str, Accuracy] = field(default_factory=dict)

    # low (< 20%), medium (20-40%), high (40%+)
    by_pot_odds: dict[str, Accuracy] = field(default_factory=dict)

    current_streak: int = 0
    longest_streak: int = 0

    @property
    def total_attempts(self) -> int:
        return self.overall.attempts

    @property
    def correct_attempts(self) -> int:
        return self.overall.correct

    @property
    def accuracy(self) -> float:
        return self.overall.accuracy

    def __repr__(self) -> str:
        return (
            f"PracticeStats(attempts={self.total_attempts}, "
            f"accuracy={self.accuracy:.1f}, streak={self.current_streak})"
        )


def pot_odds_band(pot_odds: float) -> str:
    """Bucket a pot odds percentage."""
    if pot_odds < 20:
        return "low"
    if pot_odds < 40:
        return "medium"
    return "high"


def compute_practice_stats(
    attempts: Iterable[AttemptRecord],
    now: Optional[datetime] = None,
) -> PracticeStats:
    """
    Compute practice statistics from stored attempts.

    Args:
        attempts: Attempts in any order
        now: Reference time for the recent windows (defaults to now)

    Returns:
        PracticeStats
    """
    now = now or datetime.now()
    ordered = sorted(attempts, key=lambda a: a.timestamp)

    stats = PracticeStats(
        recent={days: Accuracy() for days in RECENT_WINDOWS},
        by_pot_odds={band: Accuracy() for band in ("low", "medium", "high")},
    )

    times = []
    streak = 0
    for attempt in ordered:
        scenario = attempt.scenario
        stats.overall.add(attempt.is_correct)

        if scenario.correct_decision == Decision.CALL:
            stats.call_spots.add(attempt.is_correct)
        else:
            stats.fold_spots.add(attempt.is_correct)

        for days, bucket in stats.recent.items():
            if attempt.timestamp >= now - timedelta(days=days):
                bucket.add(attempt.is_correct)

        draw = scenario.draw_type.value
        stats.by_draw_type.setdefault(draw, Accuracy()).add(attempt.is_correct)
        stats.by_pot_odds[pot_odds_band(scenario.pot_odds)].add(attempt.is_correct)

        if attempt.time_to_decision is not None:
            times.append(attempt.time_to_decision)

        if attempt.is_correct:
            streak += 1
            stats.longest_streak = max(stats.longest_streak, streak)
        else:
            streak = 0

    stats.current_streak = streak
    if times:
        stats.average_time_to_decision = sum(times) / len(times)

    return stats
