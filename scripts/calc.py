#!/usr/bin/env python3
"""Outs, equity and EV calculator.

Example:
    calc.py --hole AhKh --board Jh7h2d --target Flush --pot 100 --call 50
"""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from drawcoach.game import (
    HandRanking,
    calculate_result,
    check_partition,
    parse_cards,
    validate_cash,
)
from drawcoach.game.cards import remaining_cards


def main():
    parser = argparse.ArgumentParser(
        description="Calculate outs, equity, pot odds and EV for a draw"
    )
    parser.add_argument("--hole", required=True, help="Hole cards, e.g. AhKh")
    parser.add_argument("--board", default="", help="Board cards, e.g. Jh7h2d")
    parser.add_argument(
        "--target",
        required=True,
        choices=[r.label for r in reversed(HandRanking)],
        help="Target hand",
    )
    parser.add_argument("--pot", type=float, default=0.0, help="Chips in the pot")
    parser.add_argument("--call", type=float, default=0.0, help="Chips to call")

    args = parser.parse_args()
    console = Console()

    try:
        hole = parse_cards(args.hole)
        board = parse_cards(args.board) if args.board else []
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    remaining = remaining_cards(hole + board)
    try:
        check_partition(hole, board, remaining)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    is_cash_valid = validate_cash(args.pot, args.call)
    if not is_cash_valid:
        console.print("[red]Call amount cannot be greater than pot amount[/]")

    result = calculate_result(
        hole, board, remaining, args.target, args.pot, args.call, is_cash_valid
    )

    if not result.is_valid_setup:
        lines = []
        if result.outs:
            lines.append(f"[bold]Outs:[/] {result.outs}")
        lines.extend(f"[dim]{m}[/]" for m in result.status_messages)
        console.print(Panel("\n".join(lines), title="Results", border_style="yellow"))
        return 0

    odds_label = "Call %" if result.is_draw_achieved else "Pot Odds"
    ev_label = "Profit" if result.is_draw_achieved else "EV"
    equity_str = "Draw Achieved" if result.is_draw_achieved else f"{result.equity:.1f}%"
    ev_color = "green" if result.ev >= 0 else "red"

    console.print(Panel(
        f"[bold]Outs:[/] {result.outs}\n"
        f"[bold]{odds_label}:[/] {result.pot_odds:.1f}%\n"
        f"[bold]Equity:[/] {equity_str}\n"
        f"[bold]{ev_label}:[/] [{ev_color}]{result.ev:+.1f}[/]",
        title="Results",
        border_style="blue",
    ))
    return 0


if __name__ == "__main__":
    sys.exit(main())
