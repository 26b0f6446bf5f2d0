"""CLI report — prints a calculation summary to the console."""

import math
import numbers

from dcarisk.calc.metrics import overall_risk_level
from dcarisk.calc.models import CalculationResult


def _usable(value) -> bool:
    """``False`` for non-numbers and NaN; those render as zero."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)


def format_currency(amount: float) -> str:
    """``-1234.5`` → ``"-$1,234.50"``."""
    if not _usable(amount):
        return "$0.00"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_price(price: float) -> str:
    if not _usable(price):
        return "0.00000"
    return f"{price:.5f}"


def format_volume(volume: float) -> str:
    if not _usable(volume):
        return "0.00"
    return f"{volume:.2f}"


def format_pips(pips: float) -> str:
    if not _usable(pips):
        return "0 pips"
    return f"{pips:.0f} pips"


def print_summary(result: CalculationResult, advice: list[str]) -> str:
    """Format and print a calculation summary.

    Args:
        result: Output of ``run()``.
        advice: Output of ``advise()``.

    Returns:
        The formatted string (also printed to stdout).
    """
    metrics = result.risk_metrics
    largest = max(p.volume for p in result.positions)

    lines = [
        "──────────────── DCA Ladder Risk ────────────────",
        f"  Levels:            {len(result.positions)}",
        f"  Total Volume:      {format_volume(result.total_volume)}",
        f"  Largest Position:  {format_volume(largest)}",
        f"  Avg Cost Price:    {format_price(result.avg_cost_price)}",
        f"  Max Possible Loss: {format_currency(metrics.max_possible_loss)}",
        f"  Break-even:        {format_pips(metrics.break_even_pips)}",
        f"  Margin Required:   {format_currency(metrics.margin_required)}",
        f"  Risk/Reward:       {metrics.risk_reward_ratio:.3f}",
        f"  Size Multiple:     {metrics.position_size_risk:.2f}x",
        f"  Overall Risk:      {overall_risk_level(metrics).upper()}",
        "─────────────────────────────────────────────────",
    ]
    lines.extend(f"  {line}" for line in advice)
    output = "\n".join(lines)
    print(output)
    return output
