# src/journal/__init__.py
"""Journal module for trade records and performance analytics."""

from .equity_curve import EquityCurveBuilder
from .journal_manager import JournalManager
from .metrics_calculator import MetricsCalculator
from .models import (
    EquityCurve,
    EquityPoint,
    JournalAnalytics,
    PerformanceMetrics,
    RMultipleBucket,
    TradeRecord,
    TradeResult,
)
from .r_multiple import RMultipleBinner
from .settings import JournalSettings
from .trade_store import JournalStore, JsonJournalStore

__all__ = [
    "EquityCurve",
    "EquityCurveBuilder",
    "EquityPoint",
    "JournalAnalytics",
    "JournalManager",
    "JournalSettings",
    "JournalStore",
    "JsonJournalStore",
    "MetricsCalculator",
    "PerformanceMetrics",
    "RMultipleBinner",
    "RMultipleBucket",
    "TradeRecord",
    "TradeResult",
]
