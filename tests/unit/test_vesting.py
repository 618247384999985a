"""Tests for vesting and profit calculations."""

from datetime import date, datetime

import pytest

from optcalc.sdk.schemas import GrantConfig
from optcalc.sdk.vesting import (
    anniversary,
    completed_anniversaries,
    compute_profit,
    get_vesting_schedule,
)


def make_grant(**overrides) -> GrantConfig:
    """Create the reference grant: 50000 options @20, 5 yearly tranches."""
    values = {
        "symbol": "0700",
        "total_options": 50000,
        "strike_price": 20,
        "vesting_periods": 5,
        "start_date": date(2022, 9, 1),
        "tax_rate": 0.20,
    }
    values.update(overrides)
    return GrantConfig(**values)


class TestCompletedAnniversaries:
    """Tests for completed_anniversaries()."""

    def test_day_before_anniversary(self):
        assert completed_anniversaries(date(2022, 9, 1), date(2023, 8, 31)) == 0

    def test_on_anniversary(self):
        assert completed_anniversaries(date(2022, 9, 1), date(2023, 9, 1)) == 1

    def test_earlier_month_later_day(self):
        """Month decides before day: Aug 30 is before Sep 1."""
        assert completed_anniversaries(date(2022, 9, 1), date(2025, 8, 30)) == 2

    def test_before_start_is_zero(self):
        assert completed_anniversaries(date(2022, 9, 1), date(2020, 1, 1)) == 0

    def test_leap_day_start(self):
        start = date(2020, 2, 29)
        assert completed_anniversaries(start, date(2021, 2, 28)) == 0
        assert completed_anniversaries(start, date(2021, 3, 1)) == 1
        assert completed_anniversaries(start, date(2024, 2, 29)) == 4

    def test_datetime_is_reduced_to_date(self):
        assert completed_anniversaries(date(2022, 9, 1), datetime(2023, 9, 1, 0, 0, 1)) == 1


class TestComputeProfit:
    """Tests for compute_profit()."""

    def test_reference_scenario(self):
        """Three years in, 3 of 5 tranches vested at 25 vs strike 20."""
        profit = compute_profit(make_grant(), 25.00, date(2025, 9, 2))

        assert profit.completed_periods == 3
        assert profit.effective_periods == 3
        assert profit.per_period_count == 10000
        assert profit.vested_options_count == 30000
        assert profit.vested_ratio == pytest.approx(0.6)
        assert profit.gross_profit == pytest.approx(150000)
        assert profit.net_profit == pytest.approx(120000)
        assert profit.total_periods == 5

    def test_before_start_nothing_vested(self):
        profit = compute_profit(make_grant(), 25.00, date(2021, 1, 1))

        assert profit.completed_periods == 0
        assert profit.vested_options_count == 0
        assert profit.vested_ratio == 0
        assert profit.gross_profit == 0
        assert profit.net_profit == 0

    def test_fully_vested_caps_count_but_not_periods(self):
        """Years past the last tranche keep counting; vested stays at 100%."""
        grant = make_grant()

        at_end = compute_profit(grant, 25.00, date(2027, 9, 1))
        later = compute_profit(grant, 25.00, date(2030, 9, 1))

        for profit in (at_end, later):
            assert profit.vested_options_count == 50000
            assert profit.vested_ratio == pytest.approx(1.0)
            assert profit.effective_periods == 5
            assert profit.fully_vested
        assert at_end.completed_periods == 5
        assert later.completed_periods == 8

    def test_uneven_split_remainder_never_vests(self):
        grant = make_grant(total_options=50003, vesting_periods=5)

        profit = compute_profit(grant, 25.00, date(2040, 1, 1))

        assert profit.per_period_count == 10000
        assert profit.vested_options_count == 50000
        assert profit.vested_ratio == pytest.approx(50000 / 50003)
        assert profit.vested_ratio < 1.0

    def test_underwater_options_give_negative_profit(self):
        profit = compute_profit(make_grant(), 15.00, date(2025, 9, 2))

        assert profit.gross_profit == pytest.approx(30000 * -5)
        assert profit.net_profit == pytest.approx(30000 * -5 * 0.8)

    def test_zero_tax_rate(self):
        profit = compute_profit(make_grant(tax_rate=0), 25.00, date(2025, 9, 2))
        assert profit.net_profit == profit.gross_profit

    def test_idempotent(self):
        grant = make_grant()
        first = compute_profit(grant, 25.00, date(2025, 9, 2))
        second = compute_profit(grant, 25.00, date(2025, 9, 2))
        assert first == second

    def test_invariant_vested_count(self):
        grant = make_grant(total_options=1234, vesting_periods=4, start_date=date(2020, 6, 15))
        for year in range(2019, 2030):
            profit = compute_profit(grant, 10.0, date(year, 6, 15))
            expected = min(profit.completed_periods, 4) * (1234 // 4)
            assert profit.vested_options_count == expected

    def test_defaults_to_today(self):
        grant = make_grant(start_date=date(date.today().year - 1, 1, 1))

        profit = compute_profit(grant, 25.00)

        assert profit.completed_periods == 1


class TestAnniversary:
    """Tests for anniversary()."""

    def test_regular_date(self):
        assert anniversary(date(2022, 9, 1), 3) == date(2025, 9, 1)

    def test_leap_day_in_non_leap_year(self):
        assert anniversary(date(2020, 2, 29), 1) == date(2021, 3, 1)
        assert anniversary(date(2020, 2, 29), 4) == date(2024, 2, 29)

    def test_year_out_of_range(self):
        with pytest.raises(ValueError):
            anniversary(date(9995, 1, 1), 10)


class TestGetVestingSchedule:
    """Tests for get_vesting_schedule()."""

    def test_one_event_per_period(self):
        events = get_vesting_schedule(make_grant(), date(2025, 9, 2))

        assert [e.period for e in events] == [1, 2, 3, 4, 5]
        assert [e.vest_date for e in events] == [
            date(2023, 9, 1),
            date(2024, 9, 1),
            date(2025, 9, 1),
            date(2026, 9, 1),
            date(2027, 9, 1),
        ]
        assert all(e.shares == 10000 for e in events)
        assert [e.vested for e in events] == [True, True, True, False, False]

    def test_vested_flags_agree_with_profit(self):
        grant = make_grant(start_date=date(2020, 2, 29))
        for as_of in (date(2021, 2, 28), date(2021, 3, 1), date(2023, 3, 1)):
            events = get_vesting_schedule(grant, as_of)
            vested = sum(e.shares for e in events if e.vested)
            assert vested == compute_profit(grant, 25.0, as_of).vested_options_count
