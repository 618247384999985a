"""
Option vesting and profit calculations.

Grants vest in equal yearly tranches, one on each anniversary of the start
date. Shares left over from an uneven split (total_options not divisible by
vesting_periods) never vest.
"""

import calendar
from datetime import date, datetime
from typing import List, Optional, Union

from .schemas import GrantConfig, ProfitBreakdown, VestEvent


DateLike = Union[date, datetime]


def _as_date(value: Optional[DateLike]) -> date:
    """Reduce a datetime to its date; None means today."""
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def completed_anniversaries(start_date: DateLike, as_of: Optional[DateLike] = None) -> int:
    """
    Count whole years elapsed from start_date to as_of.

    A year counts once as_of reaches the start's month/day. Dates before
    the start give 0, never a negative count.

    Args:
        start_date: Vesting start date
        as_of: Reference date (defaults to today)

    Returns:
        Number of completed anniversaries, >= 0
    """
    start = _as_date(start_date)
    ref = _as_date(as_of)

    years = ref.year - start.year
    if (ref.month, ref.day) < (start.month, start.day):
        years -= 1

    return max(0, years)


def compute_profit(
    grant: GrantConfig,
    price: float,
    as_of: Optional[DateLike] = None,
) -> ProfitBreakdown:
    """
    Calculate vested options and profit for a grant at a given price.

    completed_periods is reported as the raw anniversary count and keeps
    growing after the grant is fully vested. The vested count and ratio
    stop at vesting_periods tranches.

    Args:
        grant: Grant terms
        price: Current share price
        as_of: Reference date (defaults to today)

    Returns:
        ProfitBreakdown. Gross and net profit are negative when the price is
        below the strike.
    """
    completed = completed_anniversaries(grant.start_date, as_of)
    effective = min(completed, grant.vesting_periods)
    per_period = grant.total_options // grant.vesting_periods

    vested = effective * per_period
    vested_ratio = vested / grant.total_options

    gross = vested * (price - grant.strike_price)
    net = gross * (1 - grant.tax_rate)

    return ProfitBreakdown(
        vested_options_count=vested,
        vested_ratio=vested_ratio,
        gross_profit=gross,
        net_profit=net,
        completed_periods=completed,
        total_periods=grant.vesting_periods,
        effective_periods=effective,
        per_period_count=per_period,
    )


def anniversary(start_date: date, years: int) -> date:
    """
    Return the date `years` years after start_date.

    A Feb 29 start falls on Mar 1 in non-leap years, the first day on which
    completed_anniversaries() counts that year.

    Raises:
        ValueError: If the resulting year is outside the supported date range
    """
    year = start_date.year + years
    if (start_date.month, start_date.day) == (2, 29) and not calendar.isleap(year):
        return date(year, 3, 1)
    return start_date.replace(year=year)


def get_vesting_schedule(grant: GrantConfig, as_of: Optional[DateLike] = None) -> List[VestEvent]:
    """
    List the grant's tranches with their vest dates.

    Args:
        grant: Grant terms
        as_of: Reference date for the `vested` flag (defaults to today)

    Returns:
        One VestEvent per vesting period, in date order
    """
    ref = _as_date(as_of)
    per_period = grant.total_options // grant.vesting_periods

    events = []
    for period in range(1, grant.vesting_periods + 1):
        vest_date = anniversary(grant.start_date, period)
        events.append(VestEvent(
            period=period,
            vest_date=vest_date,
            shares=per_period,
            vested=vest_date <= ref,
        ))
    return events
