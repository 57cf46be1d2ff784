#!/usr/bin/env python3
"""Call-or-fold pot odds drill.

Deals generated draw scenarios, asks whether to call or fold, reveals the
outs, equity and pot odds, and records each answer.
"""

import argparse
import logging
import sys
import time
import uuid
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich import box

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from drawcoach.db import AttemptMetadata, AttemptRepository, create_database
from drawcoach.game.cards import format_cards, make_rng
from drawcoach.practice import Decision, ScenarioGenerator
from drawcoach.practice.stats import compute_practice_stats


def main():
    parser = argparse.ArgumentParser(
        description="Practice call/fold decisions against pot odds"
    )
    parser.add_argument(
        "-d", "--database",
        default="practice.db",
        help="Database file path (default: practice.db)",
    )
    parser.add_argument(
        "-n", "--num",
        type=int,
        default=5,
        help="Number of scenarios to play (default: 5)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the scenario generator",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show practice statistics and exit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show generator debug logging",
    )

    args = parser.parse_args()
    console = Console()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    conn = create_database(Path(args.database))
    repo = AttemptRepository(conn)

    if args.stats:
        _display_stats(console, repo)
        conn.close()
        return 0

    generator = ScenarioGenerator(rng=make_rng(args.seed))
    session_id = str(uuid.uuid4())
    correct = 0

    for i in range(args.num):
        scenario = generator.generate()
        console.print()
        console.print(Panel(
            f"[bold]Hole:[/] {format_cards(scenario.hole_cards)}\n"
            f"[bold]Board:[/] {format_cards(scenario.board_cards)}\n"
            f"[bold]Pot:[/] ${scenario.pot_amount:,.0f}   "
            f"[bold]To call:[/] ${scenario.call_amount:,.0f}\n\n"
            f"{scenario.description}",
            title=f"Scenario {i + 1}/{args.num}",
            border_style="blue",
        ))

        start = time.monotonic()
        answer = Prompt.ask("Call or fold", choices=["call", "fold", "c", "f"])
        elapsed_ms = int((time.monotonic() - start) * 1000)

        decision = Decision.from_string(answer)
        is_correct = scenario.is_correct(decision)
        correct += is_correct

        repo.record_attempt(
            scenario,
            decision,
            is_correct=is_correct,
            time_to_decision=elapsed_ms,
            metadata=AttemptMetadata(session_id=session_id, platform=sys.platform),
        )
        _display_answer(console, scenario, is_correct)

    console.print()
    console.print(f"[bold]Session:[/] {correct}/{args.num} correct")
    conn.close()
    return 0


def _display_answer(console: Console, scenario, is_correct: bool) -> None:
    """Reveal the math behind a scenario."""
    verdict = "[green]Correct![/]" if is_correct else "[red]Wrong.[/]"
    console.print(f"{verdict} The right play is [bold]{scenario.correct_decision}[/].")

    table = Table(show_header=True, header_style="bold", box=box.SIMPLE)
    table.add_column("Outs", justify="right")
    table.add_column("Equity", justify="right")
    table.add_column("Pot Odds", justify="right")
    table.add_column("Draw")
    table.add_column("Out Cards")

    breakdown = scenario.out_breakdown
    draws = [f"{breakdown.primary_type} ({breakdown.primary_outs})"]
    if breakdown.secondary_types:
        draws.append(f"{', '.join(breakdown.secondary_types)} ({breakdown.secondary_outs})")

    table.add_row(
        str(scenario.outs),
        f"{scenario.equity:.0f}%",
        f"{scenario.pot_odds:.1f}% ({scenario.pot_odds_ratio:.1f}:1)",
        " + ".join(draws),
        format_cards(scenario.out_cards.total),
    )
    console.print(table)


def _display_stats(console: Console, repo: AttemptRepository) -> None:
    """Display accumulated practice statistics."""
    stats = compute_practice_stats(repo.get_attempts())

    if stats.total_attempts == 0:
        console.print("[yellow]No attempts recorded yet.[/]")
        return

    console.print(Panel(
        f"[bold]Attempts:[/] {stats.total_attempts}\n"
        f"[bold]Correct:[/] {stats.correct_attempts}\n"
        f"[bold]Accuracy:[/] {stats.accuracy:.0f}%\n"
        f"[bold]Streak:[/] {stats.current_streak} (best {stats.longest_streak})",
        title="Quick Stats",
        border_style="green",
    ))

    table = Table(
        title="Accuracy Breakdown",
        show_header=True,
        header_style="bold",
        box=box.ROUNDED,
    )
    table.add_column("Slice")
    table.add_column("Attempts", justify="right")
    table.add_column("Accuracy", justify="right")

    rows = [("Call spots", stats.call_spots), ("Fold spots", stats.fold_spots)]
    rows += [(f"Last {days} days", acc) for days, acc in stats.recent.items()]
    rows += [(f"Draw: {draw}", acc) for draw, acc in sorted(stats.by_draw_type.items())]
    rows += [(f"Pot odds: {band}", acc) for band, acc in stats.by_pot_odds.items()]

    for label, acc in rows:
        table.add_row(label, str(acc.attempts), f"{acc.accuracy:.0f}%")

    console.print(table)


if __name__ == "__main__":
    sys.exit(main())
