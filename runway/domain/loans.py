"""Pure functions for loan amortization.

Fixed-payment amortization over a whole number of months. Every function
recomputes from its inputs; there is no hidden state, so the same loan always
yields the same schedule.

Rates passed to the low-level functions are decimal fractions (0.05 for 5%).
The `loan_*` helpers take a Loan, whose rate is an annual percentage.

Amounts are floats. Cent-level drift over long schedules is accepted.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from runway.dates import add_months, parse_iso_date
from runway.domain.entries import Loan


@dataclass(frozen=True)
class AmortizationRow:
    """Immutable single payment in an amortization schedule."""

    month: int
    date: date
    payment: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float


def monthly_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """Calculate the fixed monthly payment.

    Args:
        principal: Borrowed amount.
        annual_rate: Annual interest rate as a decimal fraction.
        term_months: Number of monthly payments.

    Returns:
        Monthly payment. Straight-line principal / term for a zero rate.
    """
    if annual_rate == 0:
        return principal / term_months

    monthly_rate = annual_rate / 12
    growth = (1 + monthly_rate) ** term_months
    return principal * monthly_rate * growth / (growth - 1)


def amortization_schedule(
    principal: float,
    annual_rate: float,
    term_months: int,
    start_date: date,
) -> list[AmortizationRow]:
    """Generate the complete amortization schedule.

    Args:
        principal: Borrowed amount.
        annual_rate: Annual interest rate as a decimal fraction.
        term_months: Number of monthly payments.
        start_date: Date of the first payment.

    Returns:
        One row per month, in order. The balance never drops below zero.
    """
    payment = monthly_payment(principal, annual_rate, term_months)
    monthly_rate = annual_rate / 12
    balance = principal

    schedule: list[AmortizationRow] = []
    for month in range(1, term_months + 1):
        interest = balance * monthly_rate
        principal_portion = payment - interest
        balance = max(0.0, balance - principal_portion)

        schedule.append(
            AmortizationRow(
                month=month,
                date=add_months(start_date, month - 1),
                payment=payment,
                principal_portion=principal_portion,
                interest_portion=interest,
                remaining_balance=balance,
            )
        )

    return schedule


def total_interest(principal: float, annual_rate: float, term_months: int) -> float:
    """Total interest paid over the life of the loan."""
    return monthly_payment(principal, annual_rate, term_months) * term_months - principal


def loan_monthly_payment(loan: Loan) -> float:
    """Monthly payment for a loan record."""
    return monthly_payment(loan.principal, loan.interest_rate / 100, loan.term_months)


def loan_total_interest(loan: Loan) -> float:
    """Total interest for a loan record."""
    return total_interest(loan.principal, loan.interest_rate / 100, loan.term_months)


def loan_schedule(loan: Loan) -> list[AmortizationRow]:
    """Amortization schedule for a loan record.

    Raises:
        ValueError: If the loan's start date is not a valid ISO date.
    """
    start = parse_iso_date(loan.start_date)
    if start is None:
        raise ValueError(f"Invalid loan start date '{loan.start_date}'")
    return amortization_schedule(loan.principal, loan.interest_rate / 100, loan.term_months, start)


def balance_as_of(loan: Loan, as_of: date) -> float:
    """Remaining balance of a loan on a given date.

    Args:
        loan: Loan record.
        as_of: Date to evaluate.

    Returns:
        Principal before the start date or before the first payment; otherwise
        the balance after the last payment dated on or before `as_of`.
    """
    start = parse_iso_date(loan.start_date)
    if start is None or as_of < start:
        return loan.principal

    balance = loan.principal
    for row in loan_schedule(loan):
        if row.date > as_of:
            break
        balance = row.remaining_balance

    return balance


def upcoming_payments(
    schedule: list[AmortizationRow],
    today: date,
    limit: int = 12,
) -> list[AmortizationRow]:
    """Payments from about a month ago through the next twelve months.

    Args:
        schedule: Full amortization schedule.
        today: Reference date.
        limit: Maximum rows to return.

    Returns:
        Schedule rows within the window, at most `limit`.
    """
    window_start = today - timedelta(days=30)
    window_end = today + timedelta(days=360)
    return [row for row in schedule if window_start <= row.date <= window_end][:limit]


def paid_to_date(loan: Loan, as_of: date) -> tuple[int, float]:
    """Count payments made and principal repaid by a date.

    Returns:
        Tuple of (payments_made, principal_repaid).
    """
    payments = [row for row in loan_schedule(loan) if row.date <= as_of]
    return len(payments), loan.principal - balance_as_of(loan, as_of)
