"""Streamlit dashboard for position sizing and the trade journal."""

from src.dashboard.models import MessageLevel, RowStatus, StatusMessage
from src.dashboard.settings import DashboardSettings
from src.dashboard.state import DashboardState

__all__ = [
    "DashboardSettings",
    "DashboardState",
    "MessageLevel",
    "RowStatus",
    "StatusMessage",
]
