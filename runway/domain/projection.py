"""Pure functions for capital projections and monthly summaries.

This module contains the functional core for projections:
- No I/O operations (no network, no database, no console)
- No side effects
- A strictly sequential fold: each period's ending capital is the next
  period's starting point

All amounts are floats in the requested display (or base) currency.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from runway.dates import period_range
from runway.domain.currency import to_base, to_display
from runway.domain.entries import Loan, MoneyEntry
from runway.domain.frequency import monthly_equivalent, period_equivalent
from runway.domain.loans import loan_monthly_payment
from runway.domain.models import ExchangeRates, PeriodType, Timeframe

TIMEFRAME_MONTHS: dict[str, int] = {"6M": 6, "1Y": 12, "2Y": 24, "3Y": 36}


@dataclass(frozen=True)
class PeriodResult:
    """Immutable projection for one period."""

    period_label: str
    period_start: date
    period_end: date
    costs: float
    income: float
    net_change: float
    end_capital: float


@dataclass(frozen=True)
class MonthlySummary:
    """Immutable dashboard figures in base currency."""

    total_monthly_costs: float
    total_monthly_income: float
    loan_payments: float
    burn_rate: float


@dataclass(frozen=True)
class CapitalPoint:
    """Immutable chart point for capital over time."""

    label: str
    capital: float
    costs: float
    income: float


def timeframe_periods(timeframe: Timeframe, period_type: PeriodType) -> int:
    """Number of periods of a given type covering a timeframe.

    Args:
        timeframe: "6M", "1Y", "2Y" or "3Y".
        period_type: Reporting period granularity.

    Returns:
        Period count, at least 1.
    """
    months = TIMEFRAME_MONTHS.get(timeframe, 12)
    if period_type == "weekly":
        return math.ceil(months * 52 / 12)
    if period_type == "yearly":
        return max(1, math.ceil(months / 12))
    return months


def sum_period_amounts(
    entries: Iterable[MoneyEntry],
    period_type: PeriodType,
    period_start: date,
    period_end: date,
    display_currency: str,
    base_currency: str,
    rates: ExchangeRates | None,
) -> float:
    """Total contribution of entries to one period, in display currency."""
    total = 0.0
    for entry in entries:
        amount = to_display(entry.amount, entry.currency, display_currency, base_currency, rates)
        total += period_equivalent(amount, entry.category, period_type, period_start, period_end, entry.date)
    return total


def project(
    costs: Iterable[MoneyEntry],
    income: Iterable[MoneyEntry],
    loans: Iterable[Loan],
    starting_capital: float,
    start_date: date,
    period_type: PeriodType,
    period_count: int,
    display_currency: str,
    *,
    base_currency: str,
    rates: ExchangeRates | None,
    capital_currency: str | None = None,
) -> list[PeriodResult]:
    """Project running capital over consecutive periods.

    Loans are accepted for signature symmetry with the summary but are not
    part of the per-period fold, which runs purely over cost and income
    entries.

    Args:
        costs: Cost entries.
        income: Income entries.
        loans: Loans (not folded into periods).
        starting_capital: Capital at `start_date`.
        start_date: First day of the first period.
        period_type: "weekly", "monthly" or "yearly".
        period_count: Number of periods to project.
        display_currency: Currency for every figure in the result.
        base_currency: Base currency of the rate table.
        rates: Base-relative rate table, or None if unavailable.
        capital_currency: Currency of `starting_capital` (defaults to base).

    Returns:
        Ordered list of PeriodResult.
    """
    cost_list = list(costs)
    income_list = list(income)

    running_capital = to_display(
        starting_capital, capital_currency or base_currency, display_currency, base_currency, rates
    )

    projections: list[PeriodResult] = []
    for index in range(period_count):
        period_start, period_end, label = period_range(start_date, period_type, index)

        period_costs = sum_period_amounts(
            cost_list, period_type, period_start, period_end, display_currency, base_currency, rates
        )
        period_income = sum_period_amounts(
            income_list, period_type, period_start, period_end, display_currency, base_currency, rates
        )

        net_change = period_income - period_costs
        running_capital += net_change

        projections.append(
            PeriodResult(
                period_label=label,
                period_start=period_start,
                period_end=period_end,
                costs=period_costs,
                income=period_income,
                net_change=net_change,
                end_capital=running_capital,
            )
        )

    return projections


def monthly_summary(
    costs: Iterable[MoneyEntry],
    income: Iterable[MoneyEntry],
    loans: Iterable[Loan],
    base_currency: str,
    rates: ExchangeRates | None,
) -> MonthlySummary:
    """Compute monthly totals and burn rate in base currency.

    Recurring entries count at their monthly equivalent; one-time entries are
    left out. Loan payments are added to the monthly costs.
    """
    recurring_costs = sum(
        monthly_equivalent(to_base(c.amount, c.currency, base_currency, rates), c.category) for c in costs
    )
    total_income = sum(
        monthly_equivalent(to_base(i.amount, i.currency, base_currency, rates), i.category) for i in income
    )
    loan_payments = sum(
        to_base(loan_monthly_payment(loan), loan.currency, base_currency, rates) for loan in loans
    )
    total_costs = recurring_costs + loan_payments

    return MonthlySummary(
        total_monthly_costs=total_costs,
        total_monthly_income=total_income,
        loan_payments=loan_payments,
        burn_rate=total_income - total_costs,
    )


def capital_series(
    costs: Iterable[MoneyEntry],
    income: Iterable[MoneyEntry],
    starting_capital: float,
    start_date: date,
    base_currency: str,
    rates: ExchangeRates | None,
    capital_currency: str | None = None,
    months: int = 12,
) -> list[CapitalPoint]:
    """Monthly capital, cost and income points for charting, in base currency."""
    periods = project(
        costs,
        income,
        (),
        starting_capital,
        start_date,
        "monthly",
        months,
        base_currency,
        base_currency=base_currency,
        rates=rates,
        capital_currency=capital_currency,
    )
    return [
        CapitalPoint(
            label=p.period_start.strftime("%b %y"),
            capital=p.end_capital,
            costs=p.costs,
            income=p.income,
        )
        for p in periods
    ]


def runway_months(capital: float, burn_rate: float) -> int | None:
    """Whole months the capital lasts at a negative burn rate.

    Returns:
        None when the burn rate is zero or positive (capital never runs out).
    """
    if burn_rate >= 0:
        return None
    if capital <= 0:
        return 0
    return math.floor(capital / -burn_rate)
