# src/journal/metrics_calculator.py
"""Calculator for strategy performance metrics."""
from src.journal.models import EquityCurve, PerformanceMetrics, TradeRecord, TradeResult


class MetricsCalculator:
    """Calculates strategy performance metrics from journal records."""

    def calculate(
        self,
        records: list[TradeRecord],
        curve: EquityCurve,
        account_size: float,
    ) -> PerformanceMetrics:
        """Calculate performance metrics from a journal snapshot.

        Args:
            records: All journal records, pending included.
            curve: Equity curve built from the same records.
            account_size: Starting equity baseline of the curve.

        Returns:
            PerformanceMetrics; zero trades yield zero metrics.
        """
        total_trades = len(records)
        closed = [r for r in records if r.is_closed]
        closed_count = len(closed)

        wins = sum(1 for r in closed if r.result == TradeResult.WIN)
        losses_and_scratches = sum(
            1 for r in closed if r.result in (TradeResult.LOSS, TradeResult.SCRATCH)
        )

        win_rate = wins / closed_count * 100 if closed_count > 0 else 0.0

        final_equity = curve.final_equity
        if final_equity is None:
            final_equity = account_size
        total_profit_loss = final_equity - account_size

        max_drawdown_dollar = curve.max_drawdown_dollar
        max_drawdown_percent = (
            max_drawdown_dollar / account_size * 100 if account_size > 0 else 0.0
        )

        expected_value = total_profit_loss / closed_count if closed_count > 0 else 0.0

        return PerformanceMetrics(
            total_trades=total_trades,
            wins=wins,
            losses_and_scratches=losses_and_scratches,
            pending=total_trades - closed_count,
            win_rate=win_rate,
            final_equity=final_equity,
            total_profit_loss=total_profit_loss,
            max_drawdown_dollar=max_drawdown_dollar,
            max_drawdown_percent=max_drawdown_percent,
            expected_value=expected_value,
        )
