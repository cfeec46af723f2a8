"""Entry management commands (add cost/income, add loan, delete)."""

from runway.commands.common import budget_session, console, fail, format_money, normalize_date, save
from runway.domain.entries import create_entry, create_loan, next_id
from runway.domain.loans import loan_monthly_payment, loan_total_interest
from runway.domain.state import add_entry, add_loan, delete_entry, delete_loan, entries_of


def warn_unknown_currency(currency: str, available: list[str]) -> None:
    if currency.upper() not in available:
        console.print(
            f"[yellow]Note: {currency.upper()} is not in your available currencies ({', '.join(available)})[/yellow]"
        )


def add_entry_command(
    kind: str,
    description: str,
    amount: float,
    frequency: str,
    currency: str | None = None,
    date: str | None = None,
    notes: str | None = None,
) -> None:
    """Add a cost or income entry.

    Args:
        kind: "cost" or "income".
        description: What the entry is for.
        amount: Positive amount.
        frequency: How often it recurs, or "one-time".
        currency: ISO currency code (defaults to base currency).
        date: ISO date, required for one-time entries.
        notes: Optional notes.
    """
    with budget_session() as (repo, state):
        entry_currency = currency or state.settings.base_currency
        entry, error = create_entry(
            id=next_id(list(entries_of(state, kind))),  # type: ignore[arg-type]
            kind=kind,
            description=description,
            amount=amount,
            currency=entry_currency,
            category=frequency,
            date=normalize_date(date),
            notes=notes,
        )
        if error or entry is None:
            fail(f"Invalid {kind}: {error}")

        warn_unknown_currency(entry.currency, state.settings.currency_codes())
        save(repo, add_entry(state, entry))

        console.print(f"[green]✓[/green] {kind.capitalize()} added (ID: {entry.id}):")
        console.print(f"  Description: {entry.description}")
        console.print(f"  Amount: {format_money(entry.amount, entry.currency)} ({entry.category})")
        if entry.date:
            console.print(f"  Date: {entry.date}")
        if entry.notes:
            console.print(f"  Notes: {entry.notes}")


def add_loan_command(
    name: str,
    principal: float,
    rate: float,
    term: int,
    start_date: str,
    currency: str | None = None,
    notes: str | None = None,
) -> None:
    """Add a loan.

    Args:
        name: Loan name.
        principal: Borrowed amount.
        rate: Annual interest rate in percent.
        term: Term in months.
        start_date: Date of the first payment (YYYY-MM-DD).
        currency: ISO currency code (defaults to base currency).
        notes: Optional notes.
    """
    with budget_session() as (repo, state):
        loan, error = create_loan(
            id=next_id(list(state.loans)),
            name=name,
            principal=principal,
            interest_rate=rate,
            term_months=term,
            start_date=normalize_date(start_date) or "",
            currency=currency or state.settings.base_currency,
            notes=notes,
        )
        if error or loan is None:
            fail(f"Invalid loan: {error}")

        warn_unknown_currency(loan.currency, state.settings.currency_codes())
        save(repo, add_loan(state, loan))

        console.print(f"[green]✓[/green] Loan added (ID: {loan.id}):")
        console.print(f"  {loan.name}: {format_money(loan.principal, loan.currency)} at {loan.interest_rate}% APR")
        console.print(f"  Term: {loan.term_months} months from {loan.start_date}")
        console.print(f"  Monthly payment: {format_money(loan_monthly_payment(loan), loan.currency)}")
        console.print(f"  Total interest: {format_money(loan_total_interest(loan), loan.currency)}")


def delete_command(kind: str, record_id: int) -> None:
    """Delete a cost, income entry or loan by ID.

    Args:
        kind: "cost", "income" or "loan".
        record_id: ID of the record to delete.
    """
    if kind not in ("cost", "income", "loan"):
        fail(f"Unknown type '{kind}'. Use cost, income or loan")

    with budget_session() as (repo, state):
        if kind == "loan":
            new_state, removed = delete_loan(state, record_id)
        else:
            new_state, removed = delete_entry(state, kind, record_id)  # type: ignore[arg-type]

        if not removed:
            fail(f"No {kind} with ID {record_id}")

        save(repo, new_state)
        console.print(f"[green]✓[/green] Deleted {kind} {record_id}")
