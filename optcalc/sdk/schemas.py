"""Pydantic schemas for option-calc data validation.

Grant input uses extra='forbid' to reject unknown fields, ensuring
typos in grant files cause clear errors rather than silent ignoring.
All models are frozen: values are computed once per run and never mutated.
"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


QuoteSource = Literal["primary", "backup", "fallback", "manual"]

MAX_VESTING_PERIODS = 100


# =============================================================================
# Input - grant terms
# =============================================================================


class GrantConfig(BaseModel):
    """Terms of a single option grant.

    Field aliases match the keys of the grant file (camelCase), so a grant
    can be built straight from the loaded YAML mapping. Snake-case names
    are accepted too.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    symbol: str = Field(
        ..., alias="stockSymbol", min_length=1,
        description="Ticker, optionally suffixed with a market code (.hk, .sh, .sz)",
    )
    total_options: int = Field(..., alias="optionsCount", gt=0, description="Total options granted")
    strike_price: float = Field(..., alias="strikePrice", gt=0, description="Exercise price per option")
    vesting_periods: int = Field(
        ..., alias="vestingPeriods", gt=0, le=MAX_VESTING_PERIODS,
        description="Number of equal yearly tranches",
    )
    start_date: date = Field(..., alias="startDate", description="Vesting start date (YYYY-MM-DD)")
    tax_rate: float = Field(..., alias="taxRate", ge=0, le=1, description="Tax rate applied to gross profit")

    @field_validator("symbol")
    @classmethod
    def strip_symbol(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("symbol must not be blank")
        return v


# =============================================================================
# Output - quote and profit values
# =============================================================================


class PriceQuote(BaseModel):
    """A price point and the tier that produced it."""

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., description="Symbol as supplied by the caller")
    quote_symbol: str = Field(..., description="Provider-formatted symbol")
    price: float = Field(..., gt=0, description="Last traded, fallback or user-supplied price")
    source: QuoteSource = Field(..., description="Which tier produced the price")
    name: Optional[str] = Field(default=None, description="Instrument name reported by the quote service")

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"


class ProfitBreakdown(BaseModel):
    """Vesting and profit figures for a grant at one price point.

    completed_periods is the raw count of anniversaries since the start date
    and may exceed total_periods. The vested count and ratio are capped at
    the grant size.
    """

    model_config = ConfigDict(frozen=True)

    vested_options_count: int = Field(..., ge=0)
    vested_ratio: float = Field(..., ge=0, le=1)
    gross_profit: float
    net_profit: float
    completed_periods: int = Field(..., ge=0)
    total_periods: int = Field(..., gt=0)
    effective_periods: int = Field(..., ge=0)
    per_period_count: int = Field(..., ge=0)

    @property
    def fully_vested(self) -> bool:
        return self.completed_periods >= self.total_periods


class VestEvent(BaseModel):
    """One tranche of a grant's vesting schedule."""

    model_config = ConfigDict(frozen=True)

    period: int = Field(..., gt=0, description="1-based tranche number")
    vest_date: date
    shares: int = Field(..., ge=0)
    vested: bool = Field(..., description="True when vest_date is on or before the as-of date")
