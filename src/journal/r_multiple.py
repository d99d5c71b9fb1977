"""Binner for the realized R-multiple distribution."""
from collections import Counter

from src.journal.models import BucketTone, RMultipleBucket, TradeRecord
from src.journal.pnl import realized_pnl

WORST_CASE = "Worst Case (R < -1)"
STANDARD_LOSS = "-1R (Standard Loss)"
SCRATCH = "0R (Scratch/Cost)"
PARTIAL_WIN = "1R (Small/Partial Win)"
TARGET_HIT = "2R (Target Hit)"
BEST_CASE = "Best Case (R > 2)"

BUCKETS: list[tuple[str, BucketTone]] = [
    (WORST_CASE, BucketTone.LOSS),
    (STANDARD_LOSS, BucketTone.LOSS),
    (SCRATCH, BucketTone.SCRATCH),
    (PARTIAL_WIN, BucketTone.WIN),
    (TARGET_HIT, BucketTone.WIN),
    (BEST_CASE, BucketTone.WIN),
]


def bucket_for(realized_r: float) -> str:
    """Return the bucket label for a realized R-multiple."""
    if realized_r < -1:
        return WORST_CASE
    if realized_r < -0.5:
        return STANDARD_LOSS
    if realized_r <= 0.5:
        return SCRATCH
    if realized_r <= 1.5:
        return PARTIAL_WIN
    if realized_r <= 2.5:
        return TARGET_HIT
    return BEST_CASE


class RMultipleBinner:
    """Groups closed trades into fixed R-multiple buckets."""

    def bin(self, records: list[TradeRecord]) -> list[RMultipleBucket]:
        """Count closed trades per realized R bucket.

        Args:
            records: Journal records in any order.

        Returns:
            Six buckets in fixed order, zero counts included.
        """
        counts: Counter[str] = Counter()

        for record in records:
            if not record.is_closed or not record.total_risk_amount > 0:
                continue
            pnl = realized_pnl(record)
            counts[bucket_for(pnl / record.total_risk_amount)] += 1

        return [
            RMultipleBucket(label=label, tone=tone, count=counts[label])
            for label, tone in BUCKETS
        ]
