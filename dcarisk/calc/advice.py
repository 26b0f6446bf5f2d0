"""Advisory text and parameter suggestions derived from a calculation result."""

from dcarisk.calc.models import CalculationResult, StrategyParameters, Suggestion

HIGH_LOSS_ADVICE = 6_000.0
MEDIUM_LOSS_ADVICE = 3_000.0
UNEVEN_SIZING_SHARE = 1 / 3
HARD_BREAK_EVEN_PIPS = 100.0
MODERATE_BREAK_EVEN_PIPS = 50.0
LOW_RISK_REWARD = 0.1


def advise(result: CalculationResult) -> list[str]:
    """Return advisory lines for *result*, in fixed check order.

    Loss tier and break-even tier each contribute exactly one line; the
    sizing and risk/reward warnings are added only when they apply.
    """
    metrics = result.risk_metrics
    advice: list[str] = []

    if metrics.max_possible_loss > HIGH_LOSS_ADVICE:
        advice.append(
            "HIGH RISK: max possible loss exceeds $6,000. "
            "Reduce the position volume or the number of ladder levels."
        )
    elif metrics.max_possible_loss > MEDIUM_LOSS_ADVICE:
        advice.append(
            "MEDIUM RISK: max possible loss is between $3,000 and $6,000. "
            "Make sure the account is funded for it."
        )
    else:
        advice.append("LOW RISK: max possible loss is within a manageable range.")

    largest = max((p.volume for p in result.positions), default=0.0)
    if largest > result.total_volume * UNEVEN_SIZING_SHARE:
        advice.append(
            "Uneven sizing: the largest single position is too big. "
            "Consider a lower volume exponent."
        )

    pips = metrics.break_even_pips
    if pips > HARD_BREAK_EVEN_PIPS:
        advice.append(
            f"Hard to break even: price must recover {pips:.0f} pips. "
            "Consider a tighter DCA spacing."
        )
    elif pips >= MODERATE_BREAK_EVEN_PIPS:
        advice.append(f"Moderate break-even: price must recover {pips:.0f} pips.")
    else:
        advice.append(f"Easy break-even: price only needs to recover {pips:.0f} pips.")

    if metrics.risk_reward_ratio < LOW_RISK_REWARD:
        advice.append("Risk/reward ratio is too low. Revisit the parameter set.")

    return advice


def optimization_suggestions(params: StrategyParameters) -> list[Suggestion]:
    """Suggest safer values for parameters that look aggressive."""
    suggestions: list[Suggestion] = []

    if params.volume_exponent is not None and params.volume_exponent > 2:
        suggestions.append(
            Suggestion(
                parameter="volume_exponent",
                current=params.volume_exponent,
                suggested=1.5,
                reason="A lower exponent keeps late ladder positions from growing too large",
            )
        )

    if params.pip_step is not None and params.pip_step < 10:
        suggestions.append(
            Suggestion(
                parameter="pip_step",
                current=params.pip_step,
                suggested=15,
                reason="Wider DCA spacing triggers new positions less often",
            )
        )

    return suggestions
