"""Call-or-fold practice module."""

from .config import GeneratorConfig
from .scenario import Decision, DrawType, OutCards, Scenario
from .generator import (
    ScenarioGenerator,
    build_draw,
    fallback_scenario,
    generate_call_practice_scenario,
)

__all__ = [
    "GeneratorConfig",
    "Decision",
    "DrawType",
    "OutCards",
    "Scenario",
    "ScenarioGenerator",
    "build_draw",
    "fallback_scenario",
    "generate_call_practice_scenario",
]
