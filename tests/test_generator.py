"""Tests for practice scenario generation."""

import dataclasses

import pytest

from drawcoach.game.cards import make_rng, parse_cards, remaining_cards
from drawcoach.game.outs import count_outs
from drawcoach.game.ranking import HandRanking, is_weak_hand
from drawcoach.practice import generator as generator_module
from drawcoach.practice.config import GeneratorConfig
from drawcoach.practice.generator import (
    FALLBACK_HANDS, ScenarioGenerator, build_draw,
    describe_scenario, fallback_scenario, generate_call_practice_scenario,
)
from drawcoach.practice.scenario import Decision, DrawType, Scenario


class FixedSource:
    """Random source that always returns the same value."""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


def _assert_valid(scenario: Scenario) -> None:
    assert len(scenario.hole_cards) == 2
    assert len(scenario.board_cards) in (3, 4)
    assert len(set(scenario.hole_cards) | set(scenario.board_cards)) == 2 + len(scenario.board_cards)
    assert 2 <= scenario.outs <= 12
    assert scenario.outs == len(scenario.out_cards.total)
    assert 10 <= scenario.equity <= 50
    assert abs(scenario.equity - scenario.pot_odds) <= 8
    assert scenario.pot_amount > 0
    assert scenario.call_amount > 0
    assert (scenario.correct_decision == Decision.CALL) == (scenario.equity > scenario.pot_odds)
    known = set(scenario.hole_cards) | set(scenario.board_cards)
    assert not known & set(scenario.out_cards.total)


class TestGenerateScenario:
    def test_many_samples_valid(self):
        generator = ScenarioGenerator(rng=make_rng(2024))
        for _ in range(10_000):
            _assert_valid(generator.generate())

    def test_module_function(self, rng):
        _assert_valid(generate_call_practice_scenario(rng=rng))

    def test_default_source(self):
        _assert_valid(generate_call_practice_scenario())

    def test_seeded_repeatable(self):
        first = ScenarioGenerator(rng=make_rng(11)).generate()
        second = ScenarioGenerator(rng=make_rng(11)).generate()
        assert first == second

    def test_both_streets_and_decisions(self):
        generator = ScenarioGenerator(rng=make_rng(8))
        scenarios = [generator.generate() for _ in range(300)]
        assert {s.street for s in scenarios} == {"flop", "turn"}
        assert {s.correct_decision for s in scenarios} == {Decision.CALL, Decision.FOLD}

    def test_starting_hands_are_draws(self, rng):
        generator = ScenarioGenerator(rng=rng)
        for _ in range(200):
            scenario = generator.generate()
            assert is_weak_hand(list(scenario.hole_cards) + list(scenario.board_cards))

    @pytest.mark.parametrize("draw_type, label", [
        (DrawType.FLUSH, "Flush"),
        (DrawType.STRAIGHT, "Straight"),
        (DrawType.FULL_HOUSE, "Full House"),
        (DrawType.TWO_PAIR, "Two Pair"),
        (DrawType.THREE_OF_A_KIND, "Three of a Kind"),
    ])
    def test_draw_type_matches_primary_label(self, draw_type, label):
        config = GeneratorConfig(draw_weights={draw_type.value: 1})
        generator = ScenarioGenerator(config=config, rng=make_rng(3))
        labels = [generator.generate().out_breakdown.primary_type for _ in range(200)]

        # Flush and straight draws can also turn up by accident
        assert max(set(labels), key=labels.count) == label
        assert labels.count(label) > len(labels) // 2

    def test_two_pair_and_trips_do_not_mix(self):
        for draw_type, other in [
            (DrawType.TWO_PAIR, "Three of a Kind"),
            (DrawType.THREE_OF_A_KIND, "Two Pair"),
        ]:
            config = GeneratorConfig(draw_weights={draw_type.value: 1})
            generator = ScenarioGenerator(config=config, rng=make_rng(9))
            for _ in range(200):
                scenario = generator.generate()
                assert scenario.draw_type == draw_type
                assert scenario.out_breakdown.primary_type != other

    def test_immutable(self, rng):
        scenario = generate_call_practice_scenario(rng=rng)
        with pytest.raises(dataclasses.FrozenInstanceError):
            scenario.outs = 3

    def test_record_round_trip(self, rng):
        scenario = generate_call_practice_scenario(rng=rng)
        restored = Scenario.from_record(scenario.to_record())
        assert restored.hole_cards == scenario.hole_cards
        assert restored.out_cards == scenario.out_cards
        assert restored.out_breakdown == scenario.out_breakdown
        assert restored.pot_odds_ratio == pytest.approx(scenario.pot_odds_ratio)


class TestFallback:
    def test_fallback_values(self):
        scenario = fallback_scenario()
        assert [str(c) for c in scenario.hole_cards] == ["Ah", "Kh"]
        assert [str(c) for c in scenario.board_cards] == ["Jh", "7h", "2d"]
        assert scenario.pot_amount == 500
        assert scenario.call_amount == 150
        assert scenario.outs == 9
        assert scenario.equity == 36.0
        assert scenario.correct_decision == Decision.CALL
        assert scenario.out_breakdown.primary_type == "Flush"

    def test_unsatisfiable_gate(self, monkeypatch, rng):
        calls = []
        original = ScenarioGenerator.attempt

        def counting_attempt(self):
            calls.append(1)
            return original(self)

        monkeypatch.setattr(ScenarioGenerator, "attempt", counting_attempt)
        config = GeneratorConfig(equity_range=(90.0, 100.0))
        scenario = ScenarioGenerator(config=config, rng=rng).generate()

        assert len(calls) == 100
        assert scenario == fallback_scenario()

    def test_rejecting_outs(self, monkeypatch):
        monkeypatch.setattr(generator_module, "calculate_detailed_outs",
                            lambda *args, **kwargs: _NoOuts())
        scenario = ScenarioGenerator(rng=make_rng(1)).generate()
        assert scenario == fallback_scenario()

    @pytest.mark.parametrize("value", [0.0, 1.0])
    def test_constant_source_falls_back(self, monkeypatch, value):
        # Every attempt deals the same hand and misses the pot odds gate
        calls = []
        original = ScenarioGenerator.attempt

        def counting_attempt(self):
            calls.append(1)
            return original(self)

        monkeypatch.setattr(ScenarioGenerator, "attempt", counting_attempt)
        scenario = ScenarioGenerator(rng=FixedSource(value)).generate()

        assert len(calls) == 100
        assert scenario == fallback_scenario()

    @pytest.mark.parametrize("value", [0.5, 0.9999])
    def test_pathological_source_terminates(self, value):
        source = FixedSource(value)
        scenario = ScenarioGenerator(rng=source).generate()
        assert len(set(scenario.hole_cards) | set(scenario.board_cards)) == 2 + len(scenario.board_cards)
        assert source.calls > 0


class _NoOuts:
    count = 0


class TestChoices:
    def test_board_size(self):
        assert ScenarioGenerator(rng=FixedSource(0.69)).choose_board_size() == 3
        assert ScenarioGenerator(rng=FixedSource(0.7)).choose_board_size() == 4

    @pytest.mark.parametrize("value, expected", [
        (0.0, DrawType.FLUSH),
        (0.349, DrawType.FLUSH),
        (0.36, DrawType.STRAIGHT),
        (0.70, DrawType.FULL_HOUSE),
        (0.90, DrawType.TWO_PAIR),
        (0.97, DrawType.THREE_OF_A_KIND),
    ])
    def test_draw_type_cumulative(self, value, expected):
        assert ScenarioGenerator(rng=FixedSource(value)).choose_draw_type() == expected

    def test_draw_type_frequencies(self):
        generator = ScenarioGenerator(rng=make_rng(5))
        n = 20_000
        counts = {d: 0 for d in DrawType}
        for _ in range(n):
            counts[generator.choose_draw_type()] += 1
        assert counts[DrawType.FLUSH] / n == pytest.approx(0.35, abs=0.02)
        assert counts[DrawType.STRAIGHT] / n == pytest.approx(0.30, abs=0.02)
        assert counts[DrawType.THREE_OF_A_KIND] / n == pytest.approx(0.05, abs=0.01)

    def test_pot_brackets(self):
        generator = ScenarioGenerator(rng=make_rng(6))
        for _ in range(1000):
            assert 50 <= generator.choose_pot_amount() <= 10000

    def test_balance_pot(self):
        # Midpoint target 36% against a 650 pot
        pot, call = ScenarioGenerator(rng=FixedSource(0.5)).balance_pot(36.0)
        assert pot == 650
        assert call == 366
        assert call / (pot + call) * 100 == pytest.approx(36.0, abs=0.1)

    def test_balance_pot_band(self):
        generator = ScenarioGenerator(rng=make_rng(4))
        for equity in (10.0, 24.0, 48.0):
            for _ in range(200):
                pot, call = generator.balance_pot(equity)
                odds = call / (pot + call) * 100
                assert 7 <= odds <= 63


class TestBuildDraw:
    @pytest.mark.parametrize("draw_type", list(DrawType))
    @pytest.mark.parametrize("board_size", [3, 4])
    def test_shape(self, draw_type, board_size, rng):
        for _ in range(50):
            hole, board = build_draw(draw_type, board_size, rng)
            assert len(hole) == 2
            assert len(board) == board_size
            assert len(set(hole + board)) == 2 + board_size

    @pytest.mark.parametrize("board_size", [3, 4])
    def test_flush_has_four_suited(self, board_size, rng):
        for _ in range(50):
            hole, board = build_draw(DrawType.FLUSH, board_size, rng)
            remaining = remaining_cards(hole + board)
            assert count_outs(hole, board, HandRanking.FLUSH, remaining) == 9

    def test_full_house_is_two_pair(self, rng):
        for _ in range(50):
            hole, board = build_draw(DrawType.FULL_HOUSE, 3, rng)
            remaining = remaining_cards(hole + board)
            assert count_outs(hole, board, HandRanking.FULL_HOUSE, remaining) == 4

    @pytest.mark.parametrize("draw_type", list(DrawType))
    @pytest.mark.parametrize("board_size", [3, 4])
    def test_fallback_hands(self, draw_type, board_size, rng):
        hole, board = build_draw(draw_type, board_size, rng, retries=0)
        hole_str, board_str = FALLBACK_HANDS[draw_type]
        assert hole == parse_cards(hole_str)
        assert board == parse_cards(board_str)[:board_size]
        assert is_weak_hand(hole + board)


class TestDescription:
    def test_describe(self):
        text = describe_scenario(parse_cards("AhKh"), parse_cards("Jh7h2d"), 500, 150)
        assert "Ah Kh" in text
        assert "flop of Jh 7h 2d" in text
        assert "$500" in text
        assert "$150" in text
        assert "4.3:1" in text

    def test_describe_turn(self):
        text = describe_scenario(parse_cards("AhKh"), parse_cards("Jh7h2d3c"), 1200, 300)
        assert "turn" in text
        assert "$1,200" in text
