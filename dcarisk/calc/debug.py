"""Calculation introspection helpers.

Recompute individual formulas and echo them back with their inputs so a
result can be checked by hand.  Nothing here feeds the engine's decisions.
"""

from dcarisk.calc.drawdown import position_pnl
from dcarisk.calc.ladder import entry_price_for, volume_for
from dcarisk.calc.models import PIP_SIZE, REFERENCE_PRICE, CalculationResult, StrategyParameters

# A level whose volume exceeds this multiple of the first is flagged.
OVERSIZED_LEVEL_MULTIPLE = 10


def calculation_debug_info(params: StrategyParameters) -> dict:
    """Per-level calculation steps with formula text and anomaly notes."""
    steps = []
    potential_errors = []

    for level in range(int(params.max_positions)):
        entry_price = entry_price_for(level, params.pip_step)
        volume = volume_for(level, params.first_volume, params.volume_exponent)

        steps.append({
            "level": level + 1,
            "calculation": {
                "entryPriceFormula": f"{REFERENCE_PRICE} - ({level} * {params.pip_step} * {PIP_SIZE})",
                "entryPriceResult": entry_price,
                "volumeFormula": f"{params.first_volume} * {params.volume_exponent}^{level}",
                "volumeResult": volume,
                "pipDistance": level * params.pip_step,
            },
        })

        if volume > params.first_volume * OVERSIZED_LEVEL_MULTIPLE:
            potential_errors.append(f"Level {level + 1} volume too large: {volume:.2f} lots")
        if entry_price < 0:
            potential_errors.append(f"Level {level + 1} entry price invalid: {entry_price:.5f}")

    return {
        "inputParams": params.to_dict(),
        "referencePrice": REFERENCE_PRICE,
        "calculationSteps": steps,
        "potentialErrors": potential_errors,
    }


def verify_floating_pnl(
    current_price: float,
    entry_price: float,
    volume: float,
    pip_value: float,
) -> dict:
    """Recompute one position's floating PnL, returning each step as text."""
    price_diff = current_price - entry_price
    pnl = position_pnl(current_price, entry_price, volume, pip_value)
    return {
        "currentPrice": f"{current_price:.5f}",
        "entryPrice": f"{entry_price:.5f}",
        "priceDiff": f"{price_diff:.5f}",
        "priceDiffInPips": f"{price_diff / PIP_SIZE:.1f}",
        "volume": f"{volume:.2f}",
        "pipValue": f"{pip_value:.1f}",
        "floatingPnL": f"{pnl:.2f}",
        "formula": (
            f"({current_price:.5f} - {entry_price:.5f}) / {PIP_SIZE}"
            f" * {volume:.2f} * {pip_value:.1f}"
        ),
    }


def formula_verification(params: StrategyParameters, result: CalculationResult) -> list[dict]:
    """Spot-check table: first entry, first volume, average cost, max loss.

    Each row carries ``status`` ``"ok"`` or ``"warning"``.
    """
    if not result.positions:
        return []

    first = result.positions[0]
    metrics = result.risk_metrics
    return [
        {
            "name": "Level 1 entry price",
            "formula": f"{REFERENCE_PRICE:.5f} - (0 * {params.pip_step} * {PIP_SIZE})",
            "result": f"{first.entry_price:.5f}",
            "status": "ok" if first.entry_price == REFERENCE_PRICE else "warning",
        },
        {
            "name": "Level 1 volume",
            "formula": f"{params.first_volume} * {params.volume_exponent}^0",
            "result": f"{first.volume:.2f}",
            "status": "ok" if first.volume == params.first_volume else "warning",
        },
        {
            "name": "Average cost price",
            "formula": "sum(entry price * volume) / total volume",
            "result": f"{result.avg_cost_price:.5f}",
            "status": "ok" if result.avg_cost_price > 0 else "warning",
        },
        {
            "name": "Max possible loss",
            "formula": f"pip distance * {result.total_volume:.2f} * {params.pip_value}",
            "result": f"{metrics.max_possible_loss:.2f}",
            "status": "ok" if metrics.max_possible_loss > 0 else "warning",
        },
    ]
