# src/journal/journal_manager.py
"""Manager for orchestrating all journal components."""
import logging

from src.advisor.models import SentimentAnalysis
from src.journal.equity_curve import EquityCurveBuilder
from src.journal.metrics_calculator import MetricsCalculator
from src.journal.models import (
    SENTIMENT_NOT_AVAILABLE,
    JournalAnalytics,
    NewTrade,
    StoreUnavailableError,
    TradeRecord,
    TradeRejectedError,
    TradeResult,
)
from src.journal.r_multiple import RMultipleBinner
from src.journal.settings import JournalSettings
from src.journal.trade_store import JournalStore
from src.sizing.models import AccountParameters
from src.sizing.position_sizer import PositionSizer

logger = logging.getLogger(__name__)


class JournalManager:
    """Orchestrates all journal components for trade logging and analysis.

    Coordinates PositionSizer, the JournalStore, EquityCurveBuilder,
    MetricsCalculator and RMultipleBinner to provide a unified interface
    for confirming trades and analyzing the journal.
    """

    def __init__(
        self,
        settings: JournalSettings,
        store: JournalStore | None,
        sizer: PositionSizer | None = None,
    ) -> None:
        """Initialize the journal manager with all components.

        Args:
            settings: Journal configuration settings.
            store: Backing record store, or None when unavailable.
            sizer: Position sizer used to re-validate confirmed trades.
        """
        self._settings = settings
        self._store = store
        self._sizer = sizer or PositionSizer()
        self._curve_builder = EquityCurveBuilder()
        self._metrics_calculator = MetricsCalculator()
        self._binner = RMultipleBinner()

    @property
    def is_available(self) -> bool:
        """Whether trades can be written."""
        return self._settings.enabled and self._store is not None

    def _require_store(self) -> JournalStore:
        if not self.is_available:
            raise StoreUnavailableError("Database not ready. Journaling is disabled.")
        return self._store

    async def confirm_trade(
        self,
        user_id: str,
        params: AccountParameters,
        ticker: str,
        sentiment: SentimentAnalysis | None = None,
    ) -> TradeRecord:
        """Journal the sizing for the given parameters as a new trade.

        Args:
            user_id: Owner of the journal.
            params: Parameters the sizing was computed from.
            ticker: Symbol being traded.
            sentiment: Advisory snapshot to keep with the trade.

        Returns:
            The stored TradeRecord.

        Raises:
            TradeRejectedError: If the inputs are invalid or no shares fit.
            StoreUnavailableError: If journaling is unavailable.
        """
        store = self._require_store()

        check = self._sizer.check(params)
        if check.error:
            raise TradeRejectedError(check.error)
        if check.max_shares == 0:
            raise TradeRejectedError("Cannot save trade with 0 maximum shares.")
        if not ticker or not ticker.strip():
            raise TradeRejectedError("Enter a ticker before saving the trade.")

        sizing = self._sizer.calculate(params)
        trade = NewTrade(
            ticker=ticker.strip().upper(),
            max_shares=sizing.max_shares,
            entry_price=params.entry_price,
            atr_stop_distance=params.atr_stop_distance,
            total_risk_amount=sizing.total_risk_amount,
            total_cost=sizing.total_cost,
            net_risk=sizing.net_risk,
            net_gain=sizing.net_gain,
            target_r_multiple=params.target_r_multiple,
            sentiment_text=sentiment.text if sentiment and sentiment.text else SENTIMENT_NOT_AVAILABLE,
        )

        record_id = await store.create(user_id, trade)
        records = await store.list_records(user_id)
        return next(r for r in records if r.id == record_id)

    async def set_result(
        self, user_id: str, record_id: str, result: TradeResult
    ) -> TradeRecord:
        """Mark the outcome of a trade, overwriting any previous result."""
        return await self._require_store().update(user_id, record_id, result)

    async def delete_trade(self, user_id: str, record_id: str) -> None:
        """Remove a trade from the journal."""
        await self._require_store().delete(user_id, record_id)

    async def get_trades(self, user_id: str) -> list[TradeRecord]:
        """Get the user's journal, oldest first.

        Returns an empty list when journaling is unavailable.
        """
        if self._store is None:
            return []
        return await self._store.list_records(user_id)

    def analyze(self, records: list[TradeRecord], account_size: float) -> JournalAnalytics:
        """Derive every analytics view from a journal snapshot.

        Args:
            records: Journal records in any order.
            account_size: Starting equity baseline.

        Returns:
            JournalAnalytics with equity curve, metrics and R distribution.
        """
        curve = self._curve_builder.build(records, account_size)
        metrics = self._metrics_calculator.calculate(records, curve, account_size)
        distribution = self._binner.bin(records)

        return JournalAnalytics(
            equity_curve=curve,
            metrics=metrics,
            r_distribution=distribution,
        )
