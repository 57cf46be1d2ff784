"""Tests for practice statistics."""

import dataclasses
from datetime import datetime, timedelta

import pytest

from drawcoach.db.models import AttemptRecord
from drawcoach.practice.generator import fallback_scenario
from drawcoach.practice.scenario import Decision, DrawType
from drawcoach.practice.stats import compute_practice_stats, pot_odds_band

NOW = datetime(2024, 6, 1, 12, 0, 0)


def _attempt(i, is_correct, days_ago=0, time_ms=None, **scenario_changes):
    scenario = dataclasses.replace(fallback_scenario(), **scenario_changes)
    return AttemptRecord(
        id=f"attempt-{i}",
        timestamp=NOW - timedelta(days=days_ago, minutes=i),
        scenario=scenario,
        user_decision=scenario.correct_decision if is_correct else Decision.FOLD,
        is_correct=is_correct,
        time_to_decision=time_ms,
    )


class TestPotOddsBand:
    @pytest.mark.parametrize("pot_odds, band", [
        (5.0, "low"),
        (19.9, "low"),
        (20.0, "medium"),
        (39.9, "medium"),
        (40.0, "high"),
    ])
    def test_bands(self, pot_odds, band):
        assert pot_odds_band(pot_odds) == band


class TestComputeStats:
    def test_empty(self):
        stats = compute_practice_stats([], now=NOW)

        assert stats.total_attempts == 0
        assert stats.accuracy == 0.0
        assert stats.average_time_to_decision is None
        assert stats.current_streak == 0
        assert stats.recent[7].attempts == 0

    def test_accuracy(self):
        attempts = [_attempt(i, i % 4 != 0) for i in range(8)]
        stats = compute_practice_stats(attempts, now=NOW)

        assert stats.total_attempts == 8
        assert stats.correct_attempts == 6
        assert stats.accuracy == pytest.approx(75.0)

    def test_streaks_follow_timestamps(self):
        # Listed newest first; minutes offsets make later indexes older
        results = [True, True, False, True, True, True, False]
        attempts = [_attempt(i, ok) for i, ok in enumerate(results)]
        stats = compute_practice_stats(attempts, now=NOW)

        assert stats.current_streak == 2
        assert stats.longest_streak == 3

    def test_recent_windows(self):
        attempts = [
            _attempt(0, True, days_ago=1),
            _attempt(1, False, days_ago=10),
            _attempt(2, True, days_ago=60),
            _attempt(3, True, days_ago=200),
        ]
        stats = compute_practice_stats(attempts, now=NOW)

        assert stats.recent[7].attempts == 1
        assert stats.recent[30].attempts == 2
        assert stats.recent[30].accuracy == pytest.approx(50.0)
        assert stats.recent[90].attempts == 3
        assert stats.total_attempts == 4

    def test_call_and_fold_spots(self):
        attempts = [
            _attempt(0, True),
            _attempt(1, False),
            _attempt(2, True, correct_decision=Decision.FOLD),
        ]
        stats = compute_practice_stats(attempts, now=NOW)

        assert stats.call_spots.attempts == 2
        assert stats.call_spots.correct == 1
        assert stats.fold_spots.attempts == 1
        assert stats.fold_spots.accuracy == pytest.approx(100.0)

    def test_by_draw_type(self):
        attempts = [
            _attempt(0, True),
            _attempt(1, False, draw_type=DrawType.STRAIGHT),
            _attempt(2, True, draw_type=DrawType.STRAIGHT),
        ]
        stats = compute_practice_stats(attempts, now=NOW)

        assert stats.by_draw_type["flush"].attempts == 1
        assert stats.by_draw_type["straight"].attempts == 2
        assert stats.by_draw_type["straight"].accuracy == pytest.approx(50.0)
        assert "full_house" not in stats.by_draw_type

    def test_by_pot_odds(self):
        attempts = [
            _attempt(0, True),  # 23% pot odds
            _attempt(1, True, pot_odds=12.0),
            _attempt(2, False, pot_odds=45.0),
        ]
        stats = compute_practice_stats(attempts, now=NOW)

        assert stats.by_pot_odds["low"].attempts == 1
        assert stats.by_pot_odds["medium"].attempts == 1
        assert stats.by_pot_odds["high"].accuracy == 0.0

    def test_average_time(self):
        attempts = [
            _attempt(0, True, time_ms=2000),
            _attempt(1, True, time_ms=4000),
            _attempt(2, True),
        ]
        stats = compute_practice_stats(attempts, now=NOW)

        assert stats.average_time_to_decision == pytest.approx(3000.0)
