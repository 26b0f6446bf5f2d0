"""Parameter validation — pure checks, no I/O.

Every rule is checked independently so the caller sees all problems at
once rather than one per attempt.
"""

import math
import numbers

from dcarisk.calc.models import StrategyParameters, ValidationResult


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def _positive(value) -> bool:
    return _is_number(value) and value > 0


def _in_range(value, low: float, high: float) -> bool:
    return _is_number(value) and low <= value <= high


def validate_params(params: StrategyParameters) -> ValidationResult:
    """Check *params* against the allowed ranges.

    Rules (in reporting order):
        * pip_step present and > 0
        * first_volume present and > 0
        * volume_exponent in [0.1, 5]
        * max_positions present, integral, in [1, 50]
        * max_drawdown_pips present, in [10, 10000]
        * pip_value > 0

    Returns:
        ``ValidationResult`` with ``valid=False`` and one message per broken
        rule when anything fails.
    """
    errors: list[str] = []

    if not _positive(params.pip_step):
        errors.append("DCA spacing (pip_step) must be greater than 0")

    if not _positive(params.first_volume):
        errors.append("First position volume (first_volume) must be greater than 0")

    if not _in_range(params.volume_exponent, 0.1, 5):
        errors.append("Volume exponent (volume_exponent) must be between 0.1 and 5")

    max_positions = params.max_positions
    if (
        not _in_range(max_positions, 1, 50)
        or int(max_positions) != max_positions
    ):
        errors.append("Max positions (max_positions) must be an integer between 1 and 50")

    if not _in_range(params.max_drawdown_pips, 10, 10000):
        errors.append("Max drawdown pips (max_drawdown_pips) must be between 10 and 10000")

    if not _positive(params.pip_value):
        errors.append("Pip value (pip_value) must be greater than 0")

    return ValidationResult(valid=not errors, errors=errors)
