"""Tests for DashboardState."""
from datetime import datetime, timedelta

import pytest

from src.dashboard.models import MessageLevel, RowStatus
from src.dashboard.state import ADVISOR, CALCULATOR, SAVE, DashboardState


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = datetime(2026, 1, 17, 9, 30)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class TestDashboardState:
    """Tests for DashboardState."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def state(self, clock):
        return DashboardState(clock=clock)

    def test_banners_persist_until_cleared(self, state, clock) -> None:
        """Banners should stay regardless of elapsed time."""
        state.set_banner("database", "Database not ready.")
        clock.advance(3600)

        assert [b.text for b in state.banners] == ["Database not ready."]
        assert state.banners[0].level == MessageLevel.ERROR

        state.clear_banner("database")
        assert state.banners == []

    def test_clear_unknown_banner_is_noop(self, state) -> None:
        state.clear_banner("missing")

        assert state.banners == []

    def test_message_without_ttl_persists(self, state, clock) -> None:
        state.post_message(ADVISOR, MessageLevel.ERROR, "Failed to get analysis.")
        clock.advance(600)

        assert state.message(ADVISOR).text == "Failed to get analysis."

    def test_message_expires_after_ttl(self, state, clock) -> None:
        """Timed messages should disappear after their lifetime."""
        state.post_message(SAVE, MessageLevel.SUCCESS, "Trade saved.", ttl_seconds=5)

        clock.advance(4)
        assert state.message(SAVE) is not None

        clock.advance(1)
        assert state.message(SAVE) is None

    def test_new_message_replaces_previous(self, state) -> None:
        state.post_message(SAVE, MessageLevel.ERROR, "Failed.")
        state.post_message(SAVE, MessageLevel.SUCCESS, "Saved.")

        assert state.message(SAVE).level == MessageLevel.SUCCESS

    def test_areas_are_independent(self, state) -> None:
        state.post_message(SAVE, MessageLevel.SUCCESS, "Saved.")

        assert state.message(CALCULATOR) is None

    def test_clear_message(self, state) -> None:
        state.post_message(ADVISOR, MessageLevel.ERROR, "Failed.")

        state.clear_message(ADVISOR)

        assert state.message(ADVISOR) is None

    def test_row_status_clears_after_ttl(self, state, clock) -> None:
        """Row statuses should clear once their lifetime has passed."""
        state.set_row_status("rec-1", RowStatus.SUCCESS, ttl_seconds=2)

        clock.advance(1.9)
        assert state.row_status("rec-1") == RowStatus.SUCCESS

        clock.advance(0.1)
        assert state.row_status("rec-1") is None

    def test_row_status_without_ttl(self, state, clock) -> None:
        state.set_row_status("rec-1", RowStatus.LOADING)
        clock.advance(60)

        assert state.row_status("rec-1") == RowStatus.LOADING

    def test_row_status_replaced(self, state) -> None:
        state.set_row_status("rec-1", RowStatus.LOADING)
        state.set_row_status("rec-1", RowStatus.ERROR, ttl_seconds=2)

        assert state.row_status("rec-1") == RowStatus.ERROR

    def test_clear_row_status(self, state) -> None:
        """A cleared row reports no status even without a lifetime."""
        state.set_row_status("rec-1", RowStatus.DELETING)

        state.clear_row_status("rec-1")
        state.clear_row_status("missing")

        assert state.row_status("rec-1") is None

    def test_unknown_row(self, state) -> None:
        assert state.row_status("missing") is None
