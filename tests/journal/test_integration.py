# tests/journal/test_integration.py
"""Integration tests for the Journal module."""
import pytest

from src.journal import JournalManager, JournalSettings, JsonJournalStore, TradeResult
from src.journal.r_multiple import TARGET_HIT, WORST_CASE
from src.sizing.models import AccountParameters


@pytest.fixture
def settings(tmp_path):
    return JournalSettings(data_dir=str(tmp_path / "journal"))


class TestJournalLifecycle:
    """Confirm, close and analyze trades through the file store."""

    async def test_full_lifecycle(self, settings):
        store = JsonJournalStore(settings)
        manager = JournalManager(settings=settings, store=store)
        params = AccountParameters()

        win = await manager.confirm_trade("alice", params, "QQQ")
        loss = await manager.confirm_trade("alice", params, "SPY")
        await manager.confirm_trade("alice", params, "IWM")

        await manager.set_result("alice", win.id, TradeResult.WIN)
        await manager.set_result("alice", loss.id, TradeResult.LOSS)

        records = await manager.get_trades("alice")
        analytics = manager.analyze(records, params.account_size)

        # 22 shares x $4.50 = $99 risked, $5 costs
        assert analytics.metrics.total_trades == 3
        assert analytics.metrics.pending == 1
        assert analytics.metrics.win_rate == 50.0
        assert analytics.metrics.final_equity == pytest.approx(10000 + 193 - 104)
        assert analytics.metrics.max_drawdown_dollar == pytest.approx(104.0)
        assert [p.trade_number for p in analytics.equity_curve.points] == [0, 1, 2]

        counts = {b.label: b.count for b in analytics.r_distribution}
        assert counts[TARGET_HIT] == 1
        assert counts[WORST_CASE] == 1

    async def test_journal_survives_new_store_instance(self, settings):
        """Records persist across store instances over the same directory."""
        manager = JournalManager(settings=settings, store=JsonJournalStore(settings))
        record = await manager.confirm_trade("alice", AccountParameters(), "QQQ")

        reopened = JournalManager(settings=settings, store=JsonJournalStore(settings))
        records = await reopened.get_trades("alice")

        assert [r.id for r in records] == [record.id]

    async def test_delete_removes_trade_from_analytics(self, settings):
        manager = JournalManager(settings=settings, store=JsonJournalStore(settings))
        record = await manager.confirm_trade("alice", AccountParameters(), "QQQ")
        await manager.set_result("alice", record.id, TradeResult.LOSS)

        await manager.delete_trade("alice", record.id)
        analytics = manager.analyze(await manager.get_trades("alice"), 10000.0)

        assert analytics.equity_curve.is_empty
        assert analytics.metrics.final_equity == 10000.0
