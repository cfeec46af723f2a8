"""Pure functions for normalizing recurring amounts to reporting periods.

Conversion factors are fixed. Biweekly uses a single canonical monthly
factor of 26/12 everywhere.

One-time entries have no period equivalent of their own: they contribute
their full amount to the one period whose half-open interval
[period_start, period_end) contains their date, and nothing elsewhere.
"""

from datetime import date

from runway.dates import parse_iso_date
from runway.domain.models import Frequency, PeriodType

WEEKS_PER_MONTH = 4.33
BIWEEKLY_PER_MONTH = 26 / 12

MONTHLY_FACTORS: dict[str, float] = {
    "weekly": WEEKS_PER_MONTH,
    "biweekly": BIWEEKLY_PER_MONTH,
    "monthly": 1.0,
    "semiannually": 1 / 6,
    "yearly": 1 / 12,
}

WEEKLY_FACTORS: dict[str, float] = {
    "weekly": 1.0,
    "biweekly": 1 / 2,
    "monthly": 1 / WEEKS_PER_MONTH,
    "semiannually": 1 / 26,
    "yearly": 1 / 52,
}

YEARLY_FACTORS: dict[str, float] = {
    "weekly": 52.0,
    "biweekly": 26.0,
    "monthly": 12.0,
    "semiannually": 2.0,
    "yearly": 1.0,
}

_FACTORS_BY_PERIOD: dict[str, dict[str, float]] = {
    "weekly": WEEKLY_FACTORS,
    "monthly": MONTHLY_FACTORS,
    "yearly": YEARLY_FACTORS,
}


def monthly_equivalent(amount: float, frequency: Frequency) -> float:
    """Monthly share of a recurring amount (0 for one-time entries)."""
    return amount * MONTHLY_FACTORS.get(frequency, 0.0)


def weekly_equivalent(amount: float, frequency: Frequency) -> float:
    """Weekly share of a recurring amount (0 for one-time entries)."""
    return amount * WEEKLY_FACTORS.get(frequency, 0.0)


def yearly_equivalent(amount: float, frequency: Frequency) -> float:
    """Yearly share of a recurring amount (0 for one-time entries)."""
    return amount * YEARLY_FACTORS.get(frequency, 0.0)


def falls_within(entry_date: str | date | None, period_start: date, period_end: date) -> bool:
    """Check whether a date lies in [period_start, period_end).

    A missing or malformed date is never within any period.
    """
    parsed = parse_iso_date(entry_date)
    if parsed is None:
        return False
    return period_start <= parsed < period_end


def period_equivalent(
    amount: float,
    frequency: Frequency,
    period_type: PeriodType,
    period_start: date,
    period_end: date,
    entry_date: str | date | None = None,
) -> float:
    """Amount an entry contributes to one reporting period.

    Args:
        amount: Entry amount at its own frequency.
        frequency: Entry frequency.
        period_type: Reporting period granularity.
        period_start: First day of the period (inclusive).
        period_end: First day of the next period (exclusive).
        entry_date: Date of a one-time entry; ignored for recurring entries.

    Returns:
        Period-equivalent amount.
    """
    if frequency == "one-time":
        return amount if falls_within(entry_date, period_start, period_end) else 0.0

    return amount * _FACTORS_BY_PERIOD[period_type].get(frequency, 0.0)


def annualized_amount(amount: float, frequency: Frequency) -> float:
    """Yearly weight of an entry for distribution breakdowns.

    One-time entries count once at their full amount.
    """
    if frequency == "one-time":
        return amount
    return yearly_equivalent(amount, frequency)
