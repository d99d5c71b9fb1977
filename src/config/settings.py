from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.dashboard.settings import DashboardSettings
from src.journal.settings import JournalSettings
from src.sizing.models import (
    FALLBACK_ACCOUNT_SIZE,
    FALLBACK_ATR_STOP,
    FALLBACK_ENTRY_PRICE,
    FALLBACK_R_MULTIPLE,
    FALLBACK_RISK_PERCENT,
    FALLBACK_TRADE_COST,
    AccountParameters,
)


class SystemConfig(BaseModel):
    name: str = "ASSAP: Trading Strategy Simulator"
    version: str = "1.0.0"
    log_level: str = "INFO"


class SizingSettings(BaseModel):
    """Starting inputs for the position sizing form."""

    account_size: float = Field(default=FALLBACK_ACCOUNT_SIZE, gt=0)
    risk_percent: float = Field(default=FALLBACK_RISK_PERCENT, gt=0, le=100)
    entry_price: float = Field(default=FALLBACK_ENTRY_PRICE, gt=0)
    atr_stop_distance: float = Field(default=FALLBACK_ATR_STOP, gt=0)
    target_r_multiple: float = Field(default=FALLBACK_R_MULTIPLE, ge=0.5)
    total_trade_cost: float = Field(default=FALLBACK_TRADE_COST, ge=0)
    default_ticker: str = "QQQ"

    def to_parameters(self) -> AccountParameters:
        return AccountParameters(
            account_size=self.account_size,
            risk_percent=self.risk_percent,
            entry_price=self.entry_price,
            atr_stop_distance=self.atr_stop_distance,
            target_r_multiple=self.target_r_multiple,
            total_trade_cost=self.total_trade_cost,
        )


class AdvisorSettings(BaseModel):
    """Settings for the sentiment advisor."""

    enabled: bool = True
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = Field(default=1000, ge=100, le=4096)
    max_retries: int = Field(default=3, ge=0, le=10)
    base_delay_seconds: float = Field(default=1.0, ge=0.0, le=30.0)
    max_searches: int = Field(default=5, ge=1, le=20)


class AnthropicConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ANTHROPIC_")

    api_key: str = ""


class SessionConfig(BaseSettings):
    """Identity supplied by the hosting environment."""

    model_config = SettingsConfigDict(env_prefix="JOURNAL_")

    user_id: str = ""


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    sizing: SizingSettings = Field(default_factory=SizingSettings)
    journal: JournalSettings = Field(default_factory=JournalSettings)
    advisor: AdvisorSettings = Field(default_factory=AdvisorSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)
    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)

    @property
    def advisor_available(self) -> bool:
        return self.advisor.enabled and bool(self.anthropic.api_key)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        data.pop("anthropic", None)
        data.pop("session", None)

        return cls(
            **data,
            anthropic=AnthropicConfig(),
            session=SessionConfig(),
        )
