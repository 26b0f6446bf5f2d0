"""Position ladder construction — pure math, no I/O.

Entry prices form an arithmetic progression down from the reference price;
volumes form a geometric progression in ``volume_exponent``.
"""

import math

from dcarisk.calc.models import (
    PIP_SIZE,
    REFERENCE_PRICE,
    Ladder,
    Position,
    StrategyParameters,
)


def entry_price_for(level: int, pip_step: float, reference_price: float = REFERENCE_PRICE) -> float:
    """Entry price of *level* (0-indexed) on a ladder spaced *pip_step* pips apart."""
    return reference_price - level * pip_step * PIP_SIZE


def volume_for(level: int, first_volume: float, volume_exponent: float) -> float:
    """Volume of *level*: ``first_volume × volume_exponent^level``."""
    return first_volume * volume_exponent ** level


def build_ladder(
    params: StrategyParameters,
    reference_price: float = REFERENCE_PRICE,
) -> Ladder:
    """Build the ordered ladder for already-validated *params*.

    The average cost covers every level, triggered or not.

    Raises:
        ValueError: If the ladder total volume is zero or overflows.
    """
    positions: list[Position] = []
    total_volume = 0.0
    total_investment = 0.0
    weighted_price = 0.0

    for level in range(int(params.max_positions)):
        entry_price = entry_price_for(level, params.pip_step, reference_price)
        volume = volume_for(level, params.first_volume, params.volume_exponent)
        investment = volume * reference_price

        total_volume += volume
        total_investment += investment
        weighted_price += entry_price * volume

        positions.append(
            Position(
                level=level,
                entry_price=entry_price,
                volume=volume,
                investment=investment,
                pip_distance=level * params.pip_step,
                cumulative_volume=total_volume,
                cumulative_investment=total_investment,
            )
        )

    if not math.isfinite(total_volume) or total_volume <= 0:
        raise ValueError(f"ladder total volume must be positive and finite, got {total_volume}")

    return Ladder(
        positions=tuple(positions),
        total_volume=total_volume,
        total_investment=total_investment,
        avg_cost_price=weighted_price / total_volume,
        reference_price=reference_price,
    )
