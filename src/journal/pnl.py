"""Realized profit/loss rule shared by the journal analytics."""
from src.journal.models import TradeRecord, TradeResult


def realized_pnl(record: TradeRecord) -> float | None:
    """Realized P&L of a trade from its stored risk figures.

    Args:
        record: The journaled trade.

    Returns:
        Dollar P&L after costs, or None while the trade is pending.
    """
    gross_risk = record.total_risk_amount or 0.0
    gross_gain = gross_risk * (record.target_r_multiple or 0.0)
    cost = record.total_cost or 0.0

    if record.result == TradeResult.WIN:
        return gross_gain - cost
    if record.result == TradeResult.LOSS:
        return -(gross_risk + cost)
    if record.result == TradeResult.SCRATCH:
        return -cost
    return None


def chronological(records: list[TradeRecord]) -> list[TradeRecord]:
    """Order records oldest first; ties keep their input order."""
    return sorted(records, key=lambda r: r.timestamp)
