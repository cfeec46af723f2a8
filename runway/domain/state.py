"""The persisted budget snapshot and pure transitions over it.

A BudgetState holds everything the user has entered. Transitions return a
new state; the repository decides where it is stored.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from runway.domain.entries import (
    DEFAULT_CURRENCIES,
    CurrencyInfo,
    Loan,
    MoneyEntry,
    SavingsGoal,
    Settings,
    entry_from_dict,
    goal_from_dict,
    loan_from_dict,
    record_to_dict,
)
from runway.domain.models import CurrencyCode, EntryKind, IsoDate, Timeframe

SNAPSHOT_VERSION = 1


@dataclass(frozen=True)
class BudgetState:
    """Immutable snapshot of all user data."""

    settings: Settings
    costs: tuple[MoneyEntry, ...] = ()
    income: tuple[MoneyEntry, ...] = ()
    loans: tuple[Loan, ...] = ()
    current_capital: float = 0.0
    capital_currency: CurrencyCode = CurrencyCode("USD")
    start_date: IsoDate = IsoDate("2024-01-01")
    display_currency: CurrencyCode = CurrencyCode("USD")
    timeframe: Timeframe = "1Y"
    savings_goal: SavingsGoal | None = field(default=None)


def default_state(base_currency: str = "USD", today: date | None = None) -> BudgetState:
    """Fresh state with no entries."""
    base = CurrencyCode(base_currency)
    start = IsoDate((today or date.today()).isoformat())
    return BudgetState(
        settings=Settings(base_currency=base, available_currencies=DEFAULT_CURRENCIES),
        capital_currency=base,
        start_date=start,
        display_currency=base,
    )


def entries_of(state: BudgetState, kind: EntryKind) -> tuple[MoneyEntry, ...]:
    return state.costs if kind == "cost" else state.income


def add_entry(state: BudgetState, entry: MoneyEntry) -> BudgetState:
    """Append a validated entry to costs or income."""
    if entry.kind == "cost":
        return replace(state, costs=state.costs + (entry,))
    return replace(state, income=state.income + (entry,))


def delete_entry(state: BudgetState, kind: EntryKind, entry_id: int) -> tuple[BudgetState, bool]:
    """Remove an entry by id.

    Returns:
        Tuple of (new_state, removed).
    """
    entries = entries_of(state, kind)
    remaining = tuple(e for e in entries if e.id != entry_id)
    if len(remaining) == len(entries):
        return state, False
    if kind == "cost":
        return replace(state, costs=remaining), True
    return replace(state, income=remaining), True


def add_loan(state: BudgetState, loan: Loan) -> BudgetState:
    """Append a validated loan."""
    return replace(state, loans=state.loans + (loan,))


def delete_loan(state: BudgetState, loan_id: int) -> tuple[BudgetState, bool]:
    """Remove a loan by id.

    Returns:
        Tuple of (new_state, removed).
    """
    remaining = tuple(loan for loan in state.loans if loan.id != loan_id)
    if len(remaining) == len(state.loans):
        return state, False
    return replace(state, loans=remaining), True


def set_capital(
    state: BudgetState,
    amount: float,
    currency: CurrencyCode | None = None,
    start_date: IsoDate | None = None,
) -> BudgetState:
    """Set the starting capital and, optionally, its currency and start date."""
    return replace(
        state,
        current_capital=float(amount),
        capital_currency=currency or state.capital_currency,
        start_date=start_date or state.start_date,
    )


def set_base_currency(state: BudgetState, code: CurrencyCode) -> BudgetState:
    """Change the base currency. Rates must be refreshed afterwards."""
    return replace(state, settings=replace(state.settings, base_currency=code))


def add_available_currency(state: BudgetState, code: CurrencyCode, name: str) -> BudgetState:
    """Offer another currency for entries, keeping the existing order."""
    if code in state.settings.currency_codes():
        return state
    currencies = state.settings.available_currencies + (CurrencyInfo(code, name or code),)
    return replace(state, settings=replace(state.settings, available_currencies=currencies))


def used_currencies(state: BudgetState) -> list[str]:
    """Currencies that capital, entries or loans are held in."""
    used = [e.currency for e in state.costs + state.income] + [loan.currency for loan in state.loans]
    return sorted({state.capital_currency, *used})


def unknown_currencies(state: BudgetState) -> list[str]:
    """Currencies used by entries or loans that are not in the available list."""
    known = set(state.settings.currency_codes())
    used = [e.currency for e in state.costs + state.income] + [loan.currency for loan in state.loans]
    return sorted({code for code in used if code not in known})


def state_to_dict(state: BudgetState) -> dict[str, Any]:
    """Serialize a state to a JSON-compatible dict."""
    return {
        "version": SNAPSHOT_VERSION,
        "settings": {
            "base_currency": state.settings.base_currency,
            "available_currencies": [
                {"code": c.code, "name": c.name} for c in state.settings.available_currencies
            ],
        },
        "costs": [record_to_dict(e) for e in state.costs],
        "income": [record_to_dict(e) for e in state.income],
        "loans": [record_to_dict(loan) for loan in state.loans],
        "current_capital": state.current_capital,
        "capital_currency": state.capital_currency,
        "start_date": state.start_date,
        "display_currency": state.display_currency,
        "timeframe": state.timeframe,
        "savings_goal": record_to_dict(state.savings_goal) if state.savings_goal else None,
    }


def state_from_dict(data: dict[str, Any]) -> BudgetState:
    """Rebuild a state from a dict produced by state_to_dict."""
    settings_data = data.get("settings") or {}
    base = CurrencyCode(settings_data.get("base_currency", "USD"))
    currencies_data = settings_data.get("available_currencies")
    currencies = (
        tuple(CurrencyInfo(CurrencyCode(c["code"]), c.get("name", c["code"])) for c in currencies_data)
        if currencies_data
        else DEFAULT_CURRENCIES
    )
    goal_data = data.get("savings_goal")

    return BudgetState(
        settings=Settings(base_currency=base, available_currencies=currencies),
        costs=tuple(entry_from_dict({**e, "kind": "cost"}) for e in data.get("costs", [])),
        income=tuple(entry_from_dict({**e, "kind": "income"}) for e in data.get("income", [])),
        loans=tuple(loan_from_dict(loan) for loan in data.get("loans", [])),
        current_capital=float(data.get("current_capital", 0.0)),
        capital_currency=CurrencyCode(data.get("capital_currency") or base),
        start_date=IsoDate(data.get("start_date") or date.today().isoformat()),
        display_currency=CurrencyCode(data.get("display_currency") or base),
        timeframe=data.get("timeframe", "1Y"),
        savings_goal=goal_from_dict(goal_data) if goal_data else None,
    )
