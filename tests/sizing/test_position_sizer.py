"""Tests for PositionSizer."""

import pytest

from src.sizing.models import AccountParameters
from src.sizing.position_sizer import PositionSizer


def make_params(**overrides) -> AccountParameters:
    """Create account parameters with the standard example values."""
    values = dict(
        account_size=10000.0,
        risk_percent=1.0,
        entry_price=150.0,
        atr_stop_distance=4.5,
        target_r_multiple=2.0,
        total_trade_cost=5.0,
    )
    values.update(overrides)
    return AccountParameters(**values)


class TestPositionSizerCalculate:
    """Tests for PositionSizer.calculate method."""

    @pytest.fixture
    def sizer(self):
        return PositionSizer()

    def test_shares_floor_risk_budget_over_stop(self, sizer):
        """Shares should be the floor of risk budget over stop distance."""
        result = sizer.calculate(make_params())

        assert result.risk_budget == 100.0
        assert result.max_shares == 22
        assert result.total_risk_amount == 99.0

    def test_prices_and_net_figures(self, sizer):
        """Stop, target, gain and net figures follow the realized risk."""
        result = sizer.calculate(make_params())

        assert result.stop_price == pytest.approx(145.50)
        assert result.target_price == pytest.approx(159.00)
        assert result.potential_gain == pytest.approx(198.00)
        assert result.total_cost == 5.0
        assert result.net_risk == pytest.approx(104.00)
        assert result.net_gain == pytest.approx(193.00)

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"account_size": 25000.0, "risk_percent": 0.5, "atr_stop_distance": 1.37},
            {"target_r_multiple": 3.5, "total_trade_cost": 12.4},
            {"entry_price": 12.0, "atr_stop_distance": 0.33, "total_trade_cost": 0.0},
        ],
    )
    def test_net_risk_minus_net_gain_identity(self, sizer, overrides):
        """net_risk - net_gain equals 2 x cost + gross risk - gross gain."""
        params = make_params(**overrides)
        result = sizer.calculate(params)

        assert result.max_shares > 0
        expected = (
            params.total_trade_cost * 2
            + result.total_risk_amount
            - result.potential_gain
        )
        assert result.net_risk - result.net_gain == pytest.approx(expected)

    def test_zero_shares_when_stop_exceeds_budget(self, sizer):
        """A stop wider than the budget yields zero shares and cost-only gain."""
        result = sizer.calculate(make_params(atr_stop_distance=200.0))

        assert result.max_shares == 0
        assert result.total_risk_amount == 100.0
        assert result.net_risk == 105.0
        assert result.net_gain == -5.0
        assert result.stop_price == 0.0
        assert result.target_price == 0.0
        assert result.potential_gain == 0.0

    def test_zero_shares_when_stop_is_zero(self, sizer):
        """A zero stop distance never divides and yields zero shares."""
        result = sizer.calculate(make_params(atr_stop_distance=0.0))

        assert result.max_shares == 0

    def test_stop_price_clamped_to_zero(self, sizer):
        """A stop below zero is never surfaced."""
        result = sizer.calculate(make_params(entry_price=3.0))

        assert result.max_shares == 22
        assert result.stop_price == 0.0

    def test_negative_inputs_never_produce_negative_shares(self, sizer):
        """Negative account size clamps risk figures to zero."""
        result = sizer.calculate(make_params(account_size=-5000.0))

        assert result.max_shares == 0
        assert result.total_risk_amount == 0.0
        assert result.potential_gain == 0.0

    def test_negative_budget_clamped_to_zero(self, sizer):
        """A negative account size never yields a negative budget or net risk."""
        result = sizer.calculate(make_params(account_size=-5000.0))

        assert result.risk_budget == 0.0
        assert result.net_risk == 5.0
        assert result.net_gain == -5.0

    def test_net_r_multiple(self, sizer):
        """Net R-multiple is net gain over net risk."""
        result = sizer.calculate(make_params())

        assert result.net_r_multiple == pytest.approx(193.0 / 104.0)

    def test_calculate_is_repeatable(self, sizer):
        """Recomputing with the same inputs gives identical results."""
        params = make_params()

        assert sizer.calculate(params) == sizer.calculate(params)


class TestPositionSizerCheck:
    """Tests for PositionSizer.check method."""

    @pytest.fixture
    def sizer(self):
        return PositionSizer()

    def test_valid_params_can_save(self, sizer):
        check = sizer.check(make_params())

        assert check.is_valid
        assert check.can_save
        assert check.max_shares == 22
        assert check.warnings == []

    @pytest.mark.parametrize(
        "overrides",
        [
            {"account_size": 0.0},
            {"entry_price": 0.0},
            {"atr_stop_distance": 0.0},
            {"account_size": -1.0},
        ],
    )
    def test_non_positive_core_inputs_block(self, sizer, overrides):
        """Non-positive account size, entry or stop distance is a blocking error."""
        check = sizer.check(make_params(**overrides))

        assert not check.is_valid
        assert not check.can_save
        assert "Account Size, Entry Price, and Stop Distance" in check.error

    def test_non_positive_risk_percent_blocks(self, sizer):
        check = sizer.check(make_params(risk_percent=0.0))

        assert check.error == "Risk per Trade must be a positive percentage."

    def test_target_below_half_r_blocks(self, sizer):
        check = sizer.check(make_params(target_r_multiple=0.4))

        assert "at least 0.5" in check.error

    def test_negative_cost_blocks(self, sizer):
        check = sizer.check(make_params(total_trade_cost=-1.0))

        assert check.error == "Total Trade Cost cannot be negative."

    def test_zero_shares_warns_with_stop_and_ceiling(self, sizer):
        """Zero shares with a real budget is a non-blocking warning."""
        check = sizer.check(make_params(atr_stop_distance=200.0))

        assert check.is_valid
        assert not check.can_save
        assert check.warnings == [
            "ATR Stop Distance ($200.00) is too large. You cannot buy even 1 share "
            "without exceeding your $100.00 risk limit."
        ]

    def test_trivial_budget_does_not_warn(self, sizer):
        """Budgets of a cent or less are not worth a warning."""
        check = sizer.check(make_params(account_size=0.5))

        assert check.max_shares == 0
        assert check.warnings == []
        assert not check.can_save
