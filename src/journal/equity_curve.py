"""Builder for the running equity curve."""
from src.journal.models import EquityCurve, EquityPoint, TradeRecord
from src.journal.pnl import chronological, realized_pnl


class EquityCurveBuilder:
    """Replays journaled trades into an equity series."""

    def build(self, records: list[TradeRecord], account_size: float) -> EquityCurve:
        """Build the equity curve for a journal snapshot.

        The curve always starts from the current account size, not the size
        in effect when the trades were taken.

        Args:
            records: Journal records in any order.
            account_size: Starting equity baseline.

        Returns:
            EquityCurve with one start point plus one point per closed trade,
            or an empty curve when there are no records.
        """
        if not records:
            return EquityCurve()

        equity = account_size
        high_water_mark = account_size
        max_drawdown = 0.0

        points = [
            EquityPoint(
                trade_number=0,
                equity=account_size,
                high_water_mark=account_size,
            )
        ]

        for trade_number, record in enumerate(chronological(records), start=1):
            gain = realized_pnl(record)
            if gain is None:
                continue

            equity += gain
            if equity > high_water_mark:
                high_water_mark = equity

            drawdown = high_water_mark - equity
            if drawdown > max_drawdown:
                max_drawdown = drawdown

            points.append(
                EquityPoint(
                    trade_number=trade_number,
                    equity=round(equity, 2),
                    high_water_mark=round(high_water_mark, 2),
                    realized_gain=round(gain, 2),
                    ticker=record.ticker,
                    result=record.result,
                )
            )

        return EquityCurve(points=tuple(points), max_drawdown_dollar=max_drawdown)
