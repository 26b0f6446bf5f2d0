"""Calculation data models — typed, immutable values for one engine run."""

from dataclasses import dataclass, field
from typing import Optional


# ── Policy constants ─────────────────────────────────────────────────────

PIP_SIZE = 0.0001
REFERENCE_PRICE = 1.00000
GRID_STEP_PIPS = 10  # drawdown curve sample spacing
CONTRACT_SIZE = 100_000  # units per standard lot
LEVERAGE = 30

RISK_LOW = "low"
RISK_MEDIUM = "medium"
RISK_HIGH = "high"

POINT_GRID = "grid-sample"
POINT_TRIGGER = "trigger"


@dataclass(frozen=True)
class StrategyParameters:
    """The six inputs describing a DCA cBot configuration.

    Fields may be ``None`` when a caller only partially filled the form;
    the validator reports each missing field.
    """

    pip_step: Optional[float]
    first_volume: Optional[float]
    volume_exponent: Optional[float]
    max_positions: Optional[int]
    max_drawdown_pips: Optional[float]
    pip_value: Optional[float] = 1.0

    @classmethod
    def from_dict(cls, data: dict) -> "StrategyParameters":
        """Build from a camelCase or snake_case mapping (form / JSON payload)."""

        def pick(snake: str, camel: str, default=None):
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        return cls(
            pip_step=pick("pip_step", "pipStep"),
            first_volume=pick("first_volume", "firstVolume"),
            volume_exponent=pick("volume_exponent", "volumeExponent"),
            max_positions=pick("max_positions", "maxPositions"),
            max_drawdown_pips=pick("max_drawdown_pips", "maxDrawdownPips"),
            pip_value=pick("pip_value", "pipValue", 1.0),
        )

    def to_dict(self) -> dict:
        """Return the camelCase mapping used by exports and saved settings."""
        return {
            "pipStep": self.pip_step,
            "firstVolume": self.first_volume,
            "volumeExponent": self.volume_exponent,
            "maxPositions": self.max_positions,
            "maxDrawdownPips": self.max_drawdown_pips,
            "pipValue": self.pip_value,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of parameter validation."""

    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Position:
    """One rung of the DCA ladder."""

    level: int  # 0-indexed
    entry_price: float
    volume: float
    investment: float
    pip_distance: float
    cumulative_volume: float
    cumulative_investment: float

    @property
    def display_level(self) -> int:
        return self.level + 1


@dataclass(frozen=True)
class Ladder:
    """The full set of ladder positions plus their aggregates."""

    positions: tuple[Position, ...]
    total_volume: float
    total_investment: float
    avg_cost_price: float
    reference_price: float = REFERENCE_PRICE


@dataclass(frozen=True)
class DrawdownPoint:
    """State of the ladder when price sits at one sampled level."""

    price: float
    pips_from_start: int
    floating_pnl: float
    active_positions: int
    total_active_volume: float
    avg_cost_price: float
    cumulative_investment: float
    break_even_pips_needed: int
    next_dca_trigger_price: Optional[float]
    risk_level: str  # "low", "medium" or "high"
    margin_required: float
    drawdown_percentage: float
    point_type: str  # "grid-sample" or "trigger"


@dataclass(frozen=True)
class RiskMetrics:
    """Ladder-wide worst-case summary."""

    max_possible_loss: float
    break_even_pips: float
    margin_required: float
    risk_reward_ratio: float
    position_size_risk: float


@dataclass(frozen=True)
class CalculationResult:
    """Everything produced by a single ``run()``."""

    positions: tuple[Position, ...]
    total_volume: float
    total_investment: float
    avg_cost_price: float
    drawdown_analysis: tuple[DrawdownPoint, ...]
    risk_metrics: RiskMetrics


@dataclass(frozen=True)
class Suggestion:
    """A parameter change the optimiser recommends."""

    parameter: str
    current: float
    suggested: float
    reason: str
