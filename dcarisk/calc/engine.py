"""Calculation engine — the public entry points.

``validate`` → ``run`` → ``advise``.  Each call is pure: identical params
give identical results and nothing is shared between runs.
"""

import logging

from dcarisk.calc.advice import advise
from dcarisk.calc.drawdown import simulate_drawdown
from dcarisk.calc.ladder import build_ladder
from dcarisk.calc.metrics import calculate_risk_metrics
from dcarisk.calc.models import CalculationResult, StrategyParameters, ValidationResult
from dcarisk.calc.validator import validate_params
from dcarisk.errors import ComputeFault, ValidationError

logger = logging.getLogger("dcarisk")

__all__ = ["validate", "run", "advise"]


def validate(params: StrategyParameters) -> ValidationResult:
    """Check *params*; see ``validate_params`` for the rules."""
    return validate_params(params)


def run(params: StrategyParameters) -> CalculationResult:
    """Build the ladder, simulate the drawdown curve and compute risk metrics.

    Raises:
        ValidationError: If *params* fail validation.  Nothing is computed.
        ComputeFault: If a validated run fails unexpectedly.
    """
    validation = validate_params(params)
    if not validation.valid:
        logger.warning("Rejected parameters: %s", "; ".join(validation.errors))
        raise ValidationError(validation.errors)

    try:
        ladder = build_ladder(params)
        drawdown = simulate_drawdown(
            ladder.positions,
            max_drawdown_pips=params.max_drawdown_pips,
            pip_value=params.pip_value,
            reference_price=ladder.reference_price,
        )
        metrics = calculate_risk_metrics(
            ladder.positions,
            max_drawdown_pips=params.max_drawdown_pips,
            pip_value=params.pip_value,
            total_volume=ladder.total_volume,
            avg_cost_price=ladder.avg_cost_price,
            reference_price=ladder.reference_price,
        )
    except Exception as exc:
        logger.error("Calculation failed for %s: %s", params, exc)
        raise ComputeFault(f"calculation failed: {exc}") from exc

    logger.info(
        "Analysed %d levels: volume %.2f, avg cost %.5f, max loss %.2f",
        len(ladder.positions),
        ladder.total_volume,
        ladder.avg_cost_price,
        metrics.max_possible_loss,
    )

    return CalculationResult(
        positions=ladder.positions,
        total_volume=ladder.total_volume,
        total_investment=ladder.total_investment,
        avg_cost_price=ladder.avg_cost_price,
        drawdown_analysis=drawdown,
        risk_metrics=metrics,
    )
