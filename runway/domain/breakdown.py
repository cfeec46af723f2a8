"""Pure functions for annual expense and income distribution.

This module contains the functional core for breakdown reports:
- No I/O operations (no network, no database, no console)
- No side effects
- Pure data transformations

All amounts are yearly figures in base currency.
"""

from dataclasses import dataclass
from typing import Iterable

from runway.domain.currency import to_base
from runway.domain.entries import Loan, MoneyEntry
from runway.domain.frequency import annualized_amount
from runway.domain.loans import loan_monthly_payment
from runway.domain.models import ExchangeRates


@dataclass(frozen=True)
class BreakdownLine:
    """Immutable share of the yearly total for one entry or loan."""

    label: str
    category: str
    yearly_amount: float
    percentage: float


@dataclass(frozen=True)
class Breakdown:
    """Immutable expense and income distribution."""

    expenses: list[BreakdownLine]
    income: list[BreakdownLine]
    total_expenses: float
    total_income: float


def calculate_percentage(amount: float, total: float) -> float:
    """Share of a total as a percentage (0 when the total is not positive)."""
    if total <= 0:
        return 0.0
    return (amount / total) * 100


def entry_yearly_amount(entry: MoneyEntry, base_currency: str, rates: ExchangeRates | None) -> float:
    """Yearly weight of an entry in base currency."""
    base_amount = to_base(entry.amount, entry.currency, base_currency, rates)
    return annualized_amount(base_amount, entry.category)


def loan_yearly_amount(loan: Loan, base_currency: str, rates: ExchangeRates | None) -> float:
    """Yearly loan repayments in base currency."""
    return to_base(loan_monthly_payment(loan) * 12, loan.currency, base_currency, rates)


def rank_lines(items: list[tuple[str, str, float]]) -> tuple[list[BreakdownLine], float]:
    """Attach percentages and sort by yearly amount, largest first.

    Args:
        items: List of (label, category, yearly_amount) tuples.

    Returns:
        Tuple of (sorted_lines, total).
    """
    total = sum(amount for _, _, amount in items)
    lines = [
        BreakdownLine(
            label=label,
            category=category,
            yearly_amount=amount,
            percentage=calculate_percentage(amount, total),
        )
        for label, category, amount in items
    ]
    return sorted(lines, key=lambda line: line.yearly_amount, reverse=True), total


def create_breakdown(
    costs: Iterable[MoneyEntry],
    income: Iterable[MoneyEntry],
    loans: Iterable[Loan],
    base_currency: str,
    rates: ExchangeRates | None,
) -> Breakdown:
    """Create the annual distribution of expenses and income.

    Loan repayments appear as expense lines with category "loan".

    Args:
        costs: Cost entries.
        income: Income entries.
        loans: Loans.
        base_currency: Currency for all figures.
        rates: Base-relative rate table, or None if unavailable.

    Returns:
        Breakdown with ranked expense and income lines.
    """
    expense_items = [
        (cost.description, cost.category, entry_yearly_amount(cost, base_currency, rates)) for cost in costs
    ]
    expense_items += [
        (f"{loan.name} (Loan Payment)", "loan", loan_yearly_amount(loan, base_currency, rates)) for loan in loans
    ]
    income_items = [
        (inc.description, inc.category, entry_yearly_amount(inc, base_currency, rates)) for inc in income
    ]

    expenses, total_expenses = rank_lines(expense_items)
    income_lines, total_income = rank_lines(income_items)

    return Breakdown(
        expenses=expenses,
        income=income_lines,
        total_expenses=total_expenses,
        total_income=total_income,
    )


def calculate_histogram_bar_length(
    amount: float,
    max_amount: float,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
