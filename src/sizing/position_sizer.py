"""Fixed-fractional position sizing engine."""

import logging
import math

from src.sizing.models import (
    MIN_TARGET_R_MULTIPLE,
    AccountParameters,
    SizingCheck,
    SizingResult,
)

logger = logging.getLogger(__name__)

# Risk budgets at or below this are treated as rounding noise
WARNING_BUDGET_FLOOR = 0.01


class PositionSizer:
    """Computes share counts and risk figures from account parameters.

    Sizing is pure and synchronous so it can be re-run on every input change.
    """

    def calculate(self, params: AccountParameters) -> SizingResult:
        """Size a position for the given parameters.

        Args:
            params: Account and trade parameters.

        Returns:
            SizingResult with shares, risk, prices and net figures.
        """
        risk_budget = max(params.risk_budget, 0.0)
        cost = params.total_trade_cost

        shares = 0
        if params.atr_stop_distance > 0 and risk_budget > 0:
            shares = math.floor(risk_budget / params.atr_stop_distance)

        if shares > 0:
            actual_risk = shares * params.atr_stop_distance
            total_risk_amount = actual_risk
            stop_price = params.entry_price - params.atr_stop_distance
            potential_gain = actual_risk * params.target_r_multiple
            target_price = params.entry_price + (
                params.atr_stop_distance * params.target_r_multiple
            )
            net_risk = actual_risk + cost
            net_gain = potential_gain - cost
        else:
            total_risk_amount = risk_budget
            stop_price = 0.0
            target_price = 0.0
            potential_gain = 0.0
            net_risk = risk_budget + cost
            net_gain = -cost

        return SizingResult(
            max_shares=max(shares, 0),
            risk_budget=risk_budget,
            total_risk_amount=max(total_risk_amount, 0.0),
            stop_price=max(stop_price, 0.0),
            target_price=target_price,
            potential_gain=max(potential_gain, 0.0),
            total_cost=cost,
            net_risk=net_risk,
            net_gain=net_gain,
        )

    def check(self, params: AccountParameters) -> SizingCheck:
        """Validate parameters before a sizing is trusted or saved.

        Performs the following checks in order:
        1. Blocks non-positive account size, entry price or stop distance
        2. Blocks non-positive risk percent, a target below 0.5R and negative costs
        3. Warns when the stop is too wide to buy a single share

        Args:
            params: Account and trade parameters.

        Returns:
            SizingCheck with the share count, blocking error and warnings.
        """
        if (
            params.account_size <= 0
            or params.entry_price <= 0
            or params.atr_stop_distance <= 0
        ):
            return SizingCheck(
                max_shares=0,
                error="Please ensure Account Size, Entry Price, and Stop Distance are positive values.",
            )

        if params.risk_percent <= 0:
            return SizingCheck(max_shares=0, error="Risk per Trade must be a positive percentage.")

        if params.target_r_multiple < MIN_TARGET_R_MULTIPLE:
            return SizingCheck(
                max_shares=0,
                error=f"Target R-Multiple must be at least {MIN_TARGET_R_MULTIPLE}.",
            )

        if params.total_trade_cost < 0:
            return SizingCheck(max_shares=0, error="Total Trade Cost cannot be negative.")

        result = self.calculate(params)

        warnings = []
        if result.max_shares == 0 and result.risk_budget > WARNING_BUDGET_FLOOR:
            warnings.append(
                f"ATR Stop Distance (${params.atr_stop_distance:.2f}) is too large. "
                f"You cannot buy even 1 share without exceeding your "
                f"${result.risk_budget:.2f} risk limit."
            )
            logger.debug(f"Zero-share sizing for stop distance {params.atr_stop_distance}")

        return SizingCheck(max_shares=result.max_shares, warnings=warnings)
