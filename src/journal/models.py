# src/journal/models.py
"""Data models for the trading journal."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

SENTIMENT_NOT_AVAILABLE = "N/A"


class TradeResult(str, Enum):
    """Outcome of a journaled trade."""

    PENDING = "Pending"
    WIN = "Win"
    LOSS = "Loss"
    SCRATCH = "Scratch"


class BucketTone(str, Enum):
    """Display tone of an R-multiple bucket."""

    LOSS = "loss"
    SCRATCH = "scratch"
    WIN = "win"


class MalformedRecordError(ValueError):
    """Raised when a trade is missing required numeric fields."""


class RecordNotFoundError(KeyError):
    """Raised when a record id does not exist for the user."""


class StoreUnavailableError(RuntimeError):
    """Raised when the journal or settings store cannot be used."""


class TradeRejectedError(ValueError):
    """Raised when a sizing cannot be confirmed into the journal."""


@dataclass(frozen=True)
class NewTrade:
    """A confirmed sizing waiting to be stored as a trade record."""

    ticker: str
    max_shares: int
    entry_price: float
    atr_stop_distance: float
    total_risk_amount: float
    total_cost: float
    net_risk: float
    net_gain: float
    target_r_multiple: float
    sentiment_text: str = SENTIMENT_NOT_AVAILABLE


@dataclass(frozen=True)
class TradeRecord:
    """A single trade entry in the journal.

    Only ``result`` changes after creation; the store hands back a new
    value when it does.
    """

    id: str
    ticker: str
    max_shares: int
    entry_price: float
    atr_stop_distance: float
    total_risk_amount: float
    total_cost: float
    net_risk: float
    net_gain: float
    target_r_multiple: float
    sentiment_text: str
    result: TradeResult
    timestamp: datetime

    @property
    def is_closed(self) -> bool:
        """Check if the trade has a final result."""
        return self.result != TradeResult.PENDING


@dataclass(frozen=True)
class EquityPoint:
    """One point of the running equity curve."""

    trade_number: int
    equity: float
    high_water_mark: float
    realized_gain: float = 0.0
    ticker: str | None = None
    result: TradeResult | None = None


@dataclass(frozen=True)
class EquityCurve:
    """Chronological equity series with drawdown tracking."""

    points: tuple[EquityPoint, ...] = ()
    max_drawdown_dollar: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def has_trades(self) -> bool:
        """True once at least one closed trade follows the start point."""
        return len(self.points) > 1

    @property
    def final_equity(self) -> float | None:
        if not self.points:
            return None
        return self.points[-1].equity


@dataclass(frozen=True)
class PerformanceMetrics:
    """Calculated strategy performance metrics."""

    total_trades: int
    wins: int
    losses_and_scratches: int
    pending: int
    win_rate: float
    final_equity: float
    total_profit_loss: float
    max_drawdown_dollar: float
    max_drawdown_percent: float
    expected_value: float


@dataclass(frozen=True)
class RMultipleBucket:
    """One bar of the R-multiple distribution."""

    label: str
    tone: BucketTone
    count: int = 0

    @property
    def color(self) -> str:
        return TONE_COLORS[self.tone]


TONE_COLORS = {
    BucketTone.LOSS: "#EF4444",
    BucketTone.SCRATCH: "#FBBF24",
    BucketTone.WIN: "#10B981",
}


@dataclass(frozen=True)
class JournalAnalytics:
    """All derived views over one journal snapshot."""

    equity_curve: EquityCurve
    metrics: PerformanceMetrics
    r_distribution: list[RMultipleBucket] = field(default_factory=list)
