"""Ladder-wide risk metrics — pure math, no I/O."""

from typing import Sequence

from dcarisk.calc.drawdown import margin_for
from dcarisk.calc.models import (
    PIP_SIZE,
    REFERENCE_PRICE,
    RISK_HIGH,
    RISK_LOW,
    RISK_MEDIUM,
    Position,
    RiskMetrics,
)

# Worst-case loss thresholds for the overall risk badge.
HIGH_RISK_MAX_LOSS = 10_000.0
MEDIUM_RISK_MAX_LOSS = 5_000.0


def calculate_risk_metrics(
    positions: Sequence[Position],
    max_drawdown_pips: float,
    pip_value: float,
    total_volume: float,
    avg_cost_price: float,
    reference_price: float = REFERENCE_PRICE,
) -> RiskMetrics:
    """Summarise the worst case of a fully filled ladder.

    Formula::

        max_dd_price       = reference − max_drawdown_pips × 0.0001
        max_possible_loss  = (avg_cost − max_dd_price) / 0.0001 × total_volume × pip_value
        break_even_pips    = |reference − avg_cost| / 0.0001
        risk_reward_ratio  = break_even_pips / max_drawdown_pips
        position_size_risk = total_volume / first volume

    ``avg_cost_price`` and ``total_volume`` cover every ladder level, not
    just those reached within the horizon.

    Raises:
        ValueError: If *positions* is empty or the horizon is non-positive.
    """
    if not positions:
        raise ValueError("positions must not be empty")
    if max_drawdown_pips <= 0:
        raise ValueError(f"max_drawdown_pips must be positive, got {max_drawdown_pips}")

    max_drawdown_price = reference_price - max_drawdown_pips * PIP_SIZE
    pips_underwater = (avg_cost_price - max_drawdown_price) / PIP_SIZE
    break_even_pips = abs(reference_price - avg_cost_price) / PIP_SIZE

    return RiskMetrics(
        max_possible_loss=pips_underwater * total_volume * pip_value,
        break_even_pips=break_even_pips,
        margin_required=margin_for(total_volume, reference_price),
        risk_reward_ratio=break_even_pips / max_drawdown_pips,
        position_size_risk=total_volume / positions[0].volume,
    )


def overall_risk_level(metrics: RiskMetrics) -> str:
    """Badge for the whole configuration, based on max possible loss."""
    if metrics.max_possible_loss > HIGH_RISK_MAX_LOSS:
        return RISK_HIGH
    if metrics.max_possible_loss > MEDIUM_RISK_MAX_LOSS:
        return RISK_MEDIUM
    return RISK_LOW
