"""Tests for runway.domain.frequency pure functions."""

from datetime import date

import pytest

from runway.domain.frequency import (
    annualized_amount,
    falls_within,
    monthly_equivalent,
    period_equivalent,
    weekly_equivalent,
    yearly_equivalent,
)


class TestMonthlyEquivalent:
    """Tests for monthly_equivalent."""

    @pytest.mark.parametrize(
        ("amount", "frequency", "expected"),
        [
            (100, "weekly", 433),
            (1200, "biweekly", 2600),
            (500, "monthly", 500),
            (600, "semiannually", 100),
            (1200, "yearly", 100),
            (999, "one-time", 0),
        ],
    )
    def test_factors(self, amount: float, frequency: str, expected: float) -> None:
        """Should apply the fixed monthly factor."""
        assert monthly_equivalent(amount, frequency) == pytest.approx(expected)  # type: ignore[arg-type]


class TestWeeklyEquivalent:
    """Tests for weekly_equivalent."""

    def test_monthly_uses_weeks_per_month(self) -> None:
        """Should divide a monthly amount by 4.33."""
        assert weekly_equivalent(433, "monthly") == pytest.approx(100)

    def test_yearly_and_biweekly(self) -> None:
        """Should spread yearly over 52 weeks and halve biweekly."""
        assert weekly_equivalent(52, "yearly") == pytest.approx(1)
        assert weekly_equivalent(200, "biweekly") == pytest.approx(100)


class TestYearlyEquivalent:
    """Tests for yearly_equivalent."""

    def test_biweekly_is_consistent_with_monthly(self) -> None:
        """Twelve monthly biweekly shares should make one yearly share."""
        assert monthly_equivalent(100, "biweekly") * 12 == pytest.approx(yearly_equivalent(100, "biweekly"))

    def test_one_time_is_zero(self) -> None:
        """Should give nothing for one-time entries."""
        assert yearly_equivalent(100, "one-time") == 0


class TestFallsWithin:
    """Tests for falls_within."""

    def test_half_open_interval(self) -> None:
        """Should include the start and exclude the end."""
        start, end = date(2026, 1, 1), date(2026, 2, 1)

        assert falls_within("2026-01-01", start, end)
        assert falls_within("2026-01-31", start, end)
        assert not falls_within("2026-02-01", start, end)
        assert not falls_within("2025-12-31", start, end)

    def test_missing_or_bad_date(self) -> None:
        """Should never match a missing or malformed date."""
        assert not falls_within(None, date(2026, 1, 1), date(2026, 2, 1))
        assert not falls_within("garbage", date(2026, 1, 1), date(2026, 2, 1))


class TestPeriodEquivalent:
    """Tests for period_equivalent."""

    def test_monthly_entry_in_yearly_period(self) -> None:
        """Should scale a monthly amount to a year."""
        result = period_equivalent(1200, "monthly", "yearly", date(2026, 1, 1), date(2027, 1, 1))

        assert result == pytest.approx(14400)

    def test_one_time_counts_in_exactly_one_period(self) -> None:
        """A one-time entry should land in one of a run of consecutive periods."""
        boundaries = [date(2026, m, 1) for m in range(1, 13)] + [date(2027, 1, 1)]
        for entry_date in ("2026-01-01", "2026-03-01", "2026-06-15", "2026-12-31"):
            hits = [
                period_equivalent(250, "one-time", "monthly", start, end, entry_date)
                for start, end in zip(boundaries, boundaries[1:])
            ]
            assert sum(hits) == 250
            assert len([h for h in hits if h]) == 1

    def test_one_time_on_boundary_goes_to_later_period(self) -> None:
        """Should count a date equal to a boundary in the period it opens."""
        first = period_equivalent(100, "one-time", "weekly", date(2026, 1, 5), date(2026, 1, 12), "2026-01-12")
        second = period_equivalent(100, "one-time", "weekly", date(2026, 1, 12), date(2026, 1, 19), "2026-01-12")

        assert first == 0
        assert second == 100

    def test_recurring_ignores_entry_date(self) -> None:
        """Should not use the date of recurring entries."""
        result = period_equivalent(100, "monthly", "monthly", date(2026, 1, 1), date(2026, 2, 1), "2020-01-01")

        assert result == 100


class TestAnnualizedAmount:
    """Tests for annualized_amount."""

    def test_one_time_counts_full_amount(self) -> None:
        """Should weight a one-time entry at its full amount."""
        assert annualized_amount(5000, "one-time") == 5000

    def test_recurring_uses_yearly_factor(self) -> None:
        """Should use the yearly equivalent for recurring entries."""
        assert annualized_amount(100, "monthly") == pytest.approx(1200)
        assert annualized_amount(10, "weekly") == pytest.approx(520)
