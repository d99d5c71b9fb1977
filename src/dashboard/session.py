"""Recompute-on-write pipeline behind the dashboard."""
import dataclasses
import logging
import uuid

from src.advisor.models import SentimentAnalysis
from src.journal.journal_manager import JournalManager
from src.journal.models import JournalAnalytics, TradeRecord
from src.preferences.models import DefaultSettings
from src.sizing.models import AccountParameters, SizingCheck, SizingResult
from src.sizing.position_sizer import PositionSizer

logger = logging.getLogger(__name__)


def resolve_user_id(configured: str | None) -> str:
    """Use the identity supplied by the host, or an anonymous one."""
    if configured:
        return configured
    return f"anon-{uuid.uuid4().hex}"


class TradingSession:
    """Holds the session inputs and their derived views.

    Sizing is recomputed whenever a parameter changes. Journal analytics
    are recomputed whenever the record set or the account size changes,
    and skipped when neither did.
    """

    def __init__(
        self,
        manager: JournalManager,
        parameters: AccountParameters | None = None,
        ticker: str = "QQQ",
        sizer: PositionSizer | None = None,
    ) -> None:
        self._manager = manager
        self._sizer = sizer or PositionSizer()
        self._parameters = parameters or AccountParameters()
        self._ticker = ticker.strip().upper()
        self._sentiment: SentimentAnalysis | None = None
        self._records: tuple[TradeRecord, ...] = ()

        self._sizing = self._sizer.calculate(self._parameters)
        self._check = self._sizer.check(self._parameters)
        self._analytics_key: tuple | None = None
        self._analytics: JournalAnalytics | None = None
        self.analytics_runs = 0
        self._recompute_analytics()

    @property
    def parameters(self) -> AccountParameters:
        return self._parameters

    @property
    def ticker(self) -> str:
        return self._ticker

    @property
    def sentiment(self) -> SentimentAnalysis | None:
        return self._sentiment

    @property
    def records(self) -> tuple[TradeRecord, ...]:
        return self._records

    @property
    def sizing(self) -> SizingResult:
        return self._sizing

    @property
    def check(self) -> SizingCheck:
        return self._check

    @property
    def analytics(self) -> JournalAnalytics:
        return self._analytics

    def update_parameters(self, **changes: float) -> SizingResult:
        """Apply form changes and recompute what depends on them."""
        updated = dataclasses.replace(self._parameters, **changes)
        if updated == self._parameters:
            return self._sizing

        self._parameters = updated
        self._sizing = self._sizer.calculate(updated)
        self._check = self._sizer.check(updated)
        self._recompute_analytics()
        return self._sizing

    def apply_defaults(self, defaults: DefaultSettings | None) -> None:
        """Load saved account-level defaults into the form."""
        if defaults is None:
            return
        loaded = defaults.apply_to(self._parameters)
        self.update_parameters(**dataclasses.asdict(loaded))

    def set_ticker(self, ticker: str) -> None:
        self._ticker = ticker.strip().upper()

    def set_sentiment(self, sentiment: SentimentAnalysis | None) -> None:
        self._sentiment = sentiment

    @property
    def sentiment_for_ticker(self) -> SentimentAnalysis | None:
        """The advisory snapshot, only when it belongs to the current ticker."""
        if self._sentiment is not None and self._sentiment.ticker == self._ticker:
            return self._sentiment
        return None

    def on_records(self, records: list[TradeRecord]) -> None:
        """Journal subscription callback receiving the full record set."""
        self._records = tuple(records)
        self._recompute_analytics()

    def _recompute_analytics(self) -> None:
        key = (self._records, self._parameters.account_size)
        if key == self._analytics_key:
            return

        self._analytics = self._manager.analyze(list(self._records), self._parameters.account_size)
        self._analytics_key = key
        self.analytics_runs += 1
        logger.debug(f"Recomputed analytics over {len(self._records)} records")
