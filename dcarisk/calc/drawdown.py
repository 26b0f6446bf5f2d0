"""Drawdown curve simulation — pure math, no I/O.

Walks price down from the reference price to the drawdown floor and
records the ladder's state at two kinds of sample:

    * grid samples every ``GRID_STEP_PIPS`` pips, and
    * trigger samples exactly at each ladder entry inside the range.

Both sets are merged into one curve keyed by pip bucket.  When a grid
sample and a trigger land in the same bucket the grid sample is kept.
"""

import math
from typing import Optional, Sequence

from dcarisk.calc.models import (
    CONTRACT_SIZE,
    GRID_STEP_PIPS,
    LEVERAGE,
    PIP_SIZE,
    POINT_GRID,
    POINT_TRIGGER,
    REFERENCE_PRICE,
    RISK_HIGH,
    RISK_LOW,
    RISK_MEDIUM,
    DrawdownPoint,
    Position,
)

# Absolute floating loss above which a sample is flagged.
HIGH_RISK_LOSS = 10_000.0
MEDIUM_RISK_LOSS = 5_000.0

# Tolerance (in pips) when deciding whether an entry lies inside the range.
_RANGE_EPSILON_PIPS = 1e-9


def price_bucket(price: float) -> int:
    """Integer pip bucket for *price*, rounding halves upward."""
    return math.floor(price / PIP_SIZE + 0.5)


def margin_for(volume: float, reference_price: float = REFERENCE_PRICE) -> float:
    """Margin needed to hold *volume* lots at the fixed contract size and leverage."""
    return volume * CONTRACT_SIZE * reference_price / LEVERAGE


def classify_loss(floating_pnl: float) -> str:
    """Bucket a floating PnL into ``"low"``, ``"medium"`` or ``"high"`` risk."""
    loss = abs(floating_pnl)
    if loss > HIGH_RISK_LOSS:
        return RISK_HIGH
    if loss > MEDIUM_RISK_LOSS:
        return RISK_MEDIUM
    return RISK_LOW


def position_pnl(current_price: float, entry_price: float, volume: float, pip_value: float) -> float:
    """Floating PnL of one position.

    The price difference is converted to pips first; ``pip_value`` is
    currency per pip per unit volume.
    """
    return (current_price - entry_price) / PIP_SIZE * volume * pip_value


def analyse_price(
    current_price: float,
    positions: Sequence[Position],
    pip_value: float,
    reference_price: float = REFERENCE_PRICE,
    point_type: str = POINT_GRID,
) -> DrawdownPoint:
    """Compute the ladder's state with price sitting at *current_price*.

    A position is active once price has fallen to or through its entry.
    """
    floating_pnl = 0.0
    active_count = 0
    active_volume = 0.0
    active_investment = 0.0
    weighted_price = 0.0
    next_trigger: Optional[float] = None

    for pos in positions:
        if current_price <= pos.entry_price:
            active_count += 1
            active_volume += pos.volume
            active_investment += pos.investment
            weighted_price += pos.entry_price * pos.volume
            floating_pnl += position_pnl(current_price, pos.entry_price, pos.volume, pip_value)
        elif next_trigger is None:
            next_trigger = pos.entry_price

    avg_cost = weighted_price / active_volume if active_volume > 0 else 0.0
    break_even = abs(avg_cost - current_price) / PIP_SIZE if avg_cost > 0 else 0.0

    if active_investment > 0:
        drawdown_pct = round(abs(floating_pnl) / active_investment * 100, 1)
    else:
        drawdown_pct = 0.0

    return DrawdownPoint(
        price=current_price,
        pips_from_start=math.floor((reference_price - current_price) / PIP_SIZE + 0.5),
        floating_pnl=floating_pnl,
        active_positions=active_count,
        total_active_volume=active_volume,
        avg_cost_price=avg_cost,
        cumulative_investment=active_investment,
        break_even_pips_needed=math.floor(break_even + 0.5),
        next_dca_trigger_price=next_trigger,
        risk_level=classify_loss(floating_pnl),
        margin_required=margin_for(active_volume, reference_price),
        drawdown_percentage=drawdown_pct,
        point_type=point_type,
    )


def grid_prices(
    max_drawdown_pips: float,
    reference_price: float = REFERENCE_PRICE,
    step_pips: int = GRID_STEP_PIPS,
) -> list[float]:
    """Grid sample prices from the reference price down to the floor.

    The floor is included only when it falls on a step boundary.
    """
    prices = []
    step = 0
    while step * step_pips <= max_drawdown_pips + _RANGE_EPSILON_PIPS:
        prices.append(reference_price - step * step_pips * PIP_SIZE)
        step += 1
    return prices


def trigger_prices(
    positions: Sequence[Position],
    max_drawdown_pips: float,
    reference_price: float = REFERENCE_PRICE,
) -> list[float]:
    """Entry prices of ladder levels lying within ``[floor, reference_price]``."""
    prices = []
    for pos in positions:
        pips_down = (reference_price - pos.entry_price) / PIP_SIZE
        if -_RANGE_EPSILON_PIPS <= pips_down <= max_drawdown_pips + _RANGE_EPSILON_PIPS:
            prices.append(pos.entry_price)
    return prices


def simulate_drawdown(
    positions: Sequence[Position],
    max_drawdown_pips: float,
    pip_value: float,
    reference_price: float = REFERENCE_PRICE,
) -> tuple[DrawdownPoint, ...]:
    """Build the merged drawdown curve, ordered by strictly descending price.

    Args:
        positions: Ladder positions in level order.
        max_drawdown_pips: Simulation horizon below the reference price.
        pip_value: Currency per pip per unit volume.
        reference_price: Normalised starting price.

    Returns:
        One ``DrawdownPoint`` per occupied pip bucket.
    """
    buckets: dict[int, DrawdownPoint] = {}

    for price in grid_prices(max_drawdown_pips, reference_price):
        point = analyse_price(price, positions, pip_value, reference_price, POINT_GRID)
        buckets[price_bucket(price)] = point

    for price in trigger_prices(positions, max_drawdown_pips, reference_price):
        key = price_bucket(price)
        if key in buckets:
            continue
        buckets[key] = analyse_price(price, positions, pip_value, reference_price, POINT_TRIGGER)

    return tuple(sorted(buckets.values(), key=lambda p: p.price, reverse=True))
