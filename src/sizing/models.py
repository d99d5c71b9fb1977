"""Data models for position sizing."""

from dataclasses import dataclass, field

FALLBACK_ACCOUNT_SIZE = 10000.0
FALLBACK_RISK_PERCENT = 1.0
FALLBACK_R_MULTIPLE = 2.0
FALLBACK_ENTRY_PRICE = 150.0
FALLBACK_ATR_STOP = 4.5
FALLBACK_TRADE_COST = 5.0

MIN_TARGET_R_MULTIPLE = 0.5


@dataclass(frozen=True)
class AccountParameters:
    """Risk parameters entered for a single sizing computation.

    Attributes:
        account_size: Account equity in currency units.
        risk_percent: Percent of the account risked per trade (1.0 = 1%).
        entry_price: Planned entry price.
        atr_stop_distance: Distance between entry and stop (1R per share).
        target_r_multiple: Desired reward-to-risk ratio.
        total_trade_cost: Estimated round-trip commissions and slippage.
    """

    account_size: float = FALLBACK_ACCOUNT_SIZE
    risk_percent: float = FALLBACK_RISK_PERCENT
    entry_price: float = FALLBACK_ENTRY_PRICE
    atr_stop_distance: float = FALLBACK_ATR_STOP
    target_r_multiple: float = FALLBACK_R_MULTIPLE
    total_trade_cost: float = FALLBACK_TRADE_COST

    @property
    def risk_budget(self) -> float:
        """Theoretical dollar risk ceiling for one trade."""
        return self.account_size * (self.risk_percent / 100)


@dataclass(frozen=True)
class SizingResult:
    """Output of a position sizing computation.

    Attributes:
        max_shares: Whole shares that fit inside the risk budget.
        risk_budget: Theoretical dollar risk (account size x risk percent).
        total_risk_amount: Realized gross dollar risk (budget when no shares fit).
        stop_price: Entry minus stop distance (0 when no shares fit).
        target_price: Entry plus stop distance x target R (0 when no shares fit).
        potential_gain: Gross gain if the target is hit.
        total_cost: Round-trip friction cost.
        net_risk: Gross risk plus cost.
        net_gain: Gross gain minus cost.
    """

    max_shares: int
    risk_budget: float
    total_risk_amount: float
    stop_price: float
    target_price: float
    potential_gain: float
    total_cost: float
    net_risk: float
    net_gain: float

    @property
    def net_r_multiple(self) -> float:
        """Net gain expressed as a multiple of net risk."""
        if self.net_risk == 0:
            return 0.0
        return self.net_gain / self.net_risk


@dataclass
class SizingCheck:
    """Validation outcome for a set of account parameters.

    Attributes:
        max_shares: Share count computed for the parameters.
        error: Blocking input error (None if inputs are usable).
        warnings: Non-blocking warnings about the sizing.
    """

    max_shares: int
    error: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def can_save(self) -> bool:
        """Whether the sizing may be confirmed into the journal."""
        return self.error is None and self.max_shares > 0
