"""Tests for parameter validation and ladder construction."""

import pytest

from dcarisk.calc.ladder import build_ladder, entry_price_for, volume_for
from dcarisk.calc.models import StrategyParameters
from dcarisk.calc.validator import validate_params


def _params(**overrides) -> StrategyParameters:
    base = dict(
        pip_step=5,
        first_volume=1,
        volume_exponent=1,
        max_positions=3,
        max_drawdown_pips=20,
        pip_value=10,
    )
    base.update(overrides)
    return StrategyParameters(**base)


# ── Validation ───────────────────────────────────────────────────────────


class TestValidation:
    def test_valid_params(self):
        result = validate_params(_params())
        assert result.valid is True
        assert result.errors == []

    def test_zero_pip_step_mentions_spacing(self):
        result = validate_params(_params(pip_step=0))
        assert result.valid is False
        assert len(result.errors) == 1
        assert "DCA spacing" in result.errors[0]

    def test_missing_fields_reported(self):
        result = validate_params(_params(first_volume=None, max_positions=None))
        assert result.valid is False
        assert len(result.errors) == 2
        assert "first_volume" in result.errors[0]
        assert "max_positions" in result.errors[1]

    def test_all_rules_checked_independently(self):
        params = StrategyParameters(
            pip_step=-1,
            first_volume=0,
            volume_exponent=6,
            max_positions=51,
            max_drawdown_pips=5,
            pip_value=0,
        )
        result = validate_params(params)
        assert result.valid is False
        assert len(result.errors) == 6
        assert "pip_step" in result.errors[0]
        assert "pip_value" in result.errors[5]

    @pytest.mark.parametrize("exponent", [0.1, 5])
    def test_exponent_bounds_inclusive(self, exponent):
        assert validate_params(_params(volume_exponent=exponent)).valid

    @pytest.mark.parametrize("exponent", [0.09, 5.01])
    def test_exponent_out_of_range(self, exponent):
        result = validate_params(_params(volume_exponent=exponent))
        assert result.errors == ["Volume exponent (volume_exponent) must be between 0.1 and 5"]

    def test_max_positions_must_be_integral(self):
        result = validate_params(_params(max_positions=2.5))
        assert result.valid is False
        assert "integer" in result.errors[0]

    def test_drawdown_bounds(self):
        assert validate_params(_params(max_drawdown_pips=10)).valid
        assert validate_params(_params(max_drawdown_pips=10000)).valid
        assert not validate_params(_params(max_drawdown_pips=10001)).valid

    def test_non_numeric_rejected(self):
        result = validate_params(_params(pip_step="5"))
        assert result.valid is False


# ── Ladder ───────────────────────────────────────────────────────────────


class TestLadder:
    def test_example_ladder(self):
        ladder = build_ladder(_params())
        prices = [p.entry_price for p in ladder.positions]
        assert prices == pytest.approx([1.00000, 0.99950, 0.99900], abs=1e-12)
        assert [p.volume for p in ladder.positions] == [1, 1, 1]
        assert ladder.total_volume == pytest.approx(3.0)
        assert ladder.avg_cost_price == pytest.approx(0.99950, abs=1e-12)

    def test_length_and_geometric_volumes(self):
        ladder = build_ladder(_params(first_volume=0.5, volume_exponent=1.7, max_positions=12))
        assert len(ladder.positions) == 12
        for i, pos in enumerate(ladder.positions):
            assert pos.level == i
            assert pos.display_level == i + 1
            assert pos.volume == pytest.approx(0.5 * 1.7 ** i)

    def test_total_volume_is_sum(self):
        ladder = build_ladder(_params(volume_exponent=1.3, max_positions=20))
        assert abs(ladder.total_volume - sum(p.volume for p in ladder.positions)) < 1e-9

    def test_running_totals(self):
        ladder = build_ladder(_params(volume_exponent=2, max_positions=4))
        assert [p.cumulative_volume for p in ladder.positions] == [1, 3, 7, 15]
        assert ladder.positions[-1].cumulative_investment == pytest.approx(ladder.total_investment)
        assert [p.pip_distance for p in ladder.positions] == [0, 5, 10, 15]

    @pytest.mark.parametrize("exponent", [0.5, 1, 2.5])
    def test_avg_cost_is_convex_combination(self, exponent):
        ladder = build_ladder(_params(volume_exponent=exponent, max_positions=15, pip_step=12))
        prices = [p.entry_price for p in ladder.positions]
        assert min(prices) <= ladder.avg_cost_price <= max(prices)

    def test_prices_strictly_decrease(self):
        ladder = build_ladder(_params(max_positions=50, pip_step=3.3))
        prices = [p.entry_price for p in ladder.positions]
        assert all(a > b for a, b in zip(prices, prices[1:]))

    def test_shrinking_volumes_below_one(self):
        ladder = build_ladder(_params(volume_exponent=0.5, max_positions=4))
        volumes = [p.volume for p in ladder.positions]
        assert all(a > b for a, b in zip(volumes, volumes[1:]))

    def test_single_level_avg_is_reference(self):
        ladder = build_ladder(_params(max_positions=1))
        assert ladder.avg_cost_price == 1.0

    def test_overflowing_volume_rejected(self):
        with pytest.raises(ValueError, match="finite"):
            build_ladder(_params(first_volume=1e280, volume_exponent=5, max_positions=50))

    def test_helpers(self):
        assert entry_price_for(4, 25) == pytest.approx(0.99)
        assert volume_for(3, 2, 3) == 54
