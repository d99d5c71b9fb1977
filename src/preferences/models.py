"""Data models for saved default settings."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.sizing.models import (
    FALLBACK_ACCOUNT_SIZE,
    FALLBACK_R_MULTIPLE,
    FALLBACK_RISK_PERCENT,
    FALLBACK_TRADE_COST,
    AccountParameters,
)


class DefaultSettings(BaseModel):
    """Account-level inputs a user saved as their defaults.

    Per-trade inputs (entry price, stop distance) are never saved.
    """

    account_size: Optional[float] = Field(default=None, ge=0)
    risk_percent: Optional[float] = Field(default=None, ge=0)
    target_r_multiple: Optional[float] = Field(default=None, ge=0)
    total_trade_cost: Optional[float] = Field(default=None, ge=0)
    updated_at: Optional[datetime] = None

    @classmethod
    def from_parameters(cls, params: AccountParameters) -> "DefaultSettings":
        """Snapshot the account-level fields of the current inputs."""
        return cls(
            account_size=params.account_size,
            risk_percent=params.risk_percent,
            target_r_multiple=params.target_r_multiple,
            total_trade_cost=params.total_trade_cost,
        )

    def apply_to(self, params: AccountParameters) -> AccountParameters:
        """Return parameters with these defaults loaded.

        Missing or zero values fall back to the built-in defaults.
        """
        return AccountParameters(
            account_size=self.account_size or FALLBACK_ACCOUNT_SIZE,
            risk_percent=self.risk_percent or FALLBACK_RISK_PERCENT,
            entry_price=params.entry_price,
            atr_stop_distance=params.atr_stop_distance,
            target_r_multiple=self.target_r_multiple or FALLBACK_R_MULTIPLE,
            total_trade_cost=self.total_trade_cost or FALLBACK_TRADE_COST,
        )
