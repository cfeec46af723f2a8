"""Tests for runway.dates pure functions."""

from datetime import date, datetime

import pytest

from runway.dates import add_months, months_between, parse_iso_date, parse_strict_date, period_offset, period_range


class TestParseIsoDate:
    """Tests for parse_iso_date."""

    def test_valid_iso_string(self) -> None:
        """Should parse a YYYY-MM-DD string."""
        assert parse_iso_date("2026-01-05") == date(2026, 1, 5)

    def test_datetime_string_keeps_date_part(self) -> None:
        """Should ignore a time component."""
        assert parse_iso_date("2026-01-05T10:30:00") == date(2026, 1, 5)

    def test_date_and_datetime_objects(self) -> None:
        """Should accept date and datetime objects."""
        assert parse_iso_date(date(2026, 3, 1)) == date(2026, 3, 1)
        assert parse_iso_date(datetime(2026, 3, 1, 12, 0)) == date(2026, 3, 1)

    @pytest.mark.parametrize("value", [None, "", "   ", "not-a-date", "2026-13-01", "2026-02-30"])
    def test_missing_or_malformed_returns_none(self, value: str | None) -> None:
        """Should return None instead of raising."""
        assert parse_iso_date(value) is None


class TestParseStrictDate:
    """Tests for parse_strict_date."""

    def test_exact_iso_date(self) -> None:
        """Should parse a YYYY-MM-DD string with surrounding spaces."""
        assert parse_strict_date(" 2026-01-05 ") == date(2026, 1, 5)

    @pytest.mark.parametrize("value", ["", "2026-01-05xyz", "2026-01-05T10:30:00", "20260105", "2026-02-30"])
    def test_anything_else_returns_none(self, value: str) -> None:
        """Should reject trailing text, other ISO forms and impossible dates."""
        assert parse_strict_date(value) is None


class TestAddMonths:
    """Tests for add_months."""

    def test_simple_addition(self) -> None:
        """Should move to the same day of a later month."""
        assert add_months(date(2026, 1, 15), 2) == date(2026, 3, 15)

    def test_clamps_to_end_of_short_month(self) -> None:
        """Should clamp Jan 31 + 1 month to the last day of February."""
        assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_crosses_year_boundary(self) -> None:
        """Should roll over into the next year."""
        assert add_months(date(2025, 11, 10), 3) == date(2026, 2, 10)


class TestPeriodOffset:
    """Tests for period_offset."""

    def test_weekly(self) -> None:
        """Should step by seven days."""
        assert period_offset(date(2026, 1, 5), "weekly", 2) == date(2026, 1, 19)

    def test_yearly(self) -> None:
        """Should step by calendar years."""
        assert period_offset(date(2026, 1, 5), "yearly", 1) == date(2027, 1, 5)


class TestPeriodRange:
    """Tests for period_range."""

    def test_first_week(self) -> None:
        """Should label weeks by their first day."""
        start, end, label = period_range(date(2026, 1, 5), "weekly", 0)

        assert start == date(2026, 1, 5)
        assert end == date(2026, 1, 12)
        assert label == "Week of Jan 5, 2026"

    def test_second_month(self) -> None:
        """Should label months by month name and year."""
        start, end, label = period_range(date(2026, 1, 15), "monthly", 1)

        assert start == date(2026, 2, 15)
        assert end == date(2026, 3, 15)
        assert label == "February 2026"

    def test_year(self) -> None:
        """Should label years by year number."""
        start, end, label = period_range(date(2026, 1, 1), "yearly", 0)

        assert start == date(2026, 1, 1)
        assert end == date(2027, 1, 1)
        assert label == "2026"

    def test_consecutive_periods_are_contiguous(self) -> None:
        """Each period should end where the next one starts."""
        for index in range(24):
            _, end, _ = period_range(date(2026, 1, 31), "monthly", index)
            next_start, _, _ = period_range(date(2026, 1, 31), "monthly", index + 1)
            assert end == next_start


class TestMonthsBetween:
    """Tests for months_between."""

    def test_same_day_is_at_least_one(self) -> None:
        """Should never return less than one month."""
        assert months_between(date(2026, 1, 1), date(2026, 1, 1)) == 1

    def test_past_target_is_at_least_one(self) -> None:
        """Should clamp a target in the past to one month."""
        assert months_between(date(2026, 6, 1), date(2026, 1, 1)) == 1

    def test_almost_a_year(self) -> None:
        """Should round partial months up."""
        assert months_between(date(2026, 1, 1), date(2026, 12, 31)) == 12
