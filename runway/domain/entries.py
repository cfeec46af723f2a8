"""Budget records and their validated constructors.

Entries, loans and savings goals are immutable. The `create_*` functions are
the only way user input should become a record: they return
(record, None) on success or (None, error_message) on failure, so nothing
with a non-finite or non-positive amount or term ever reaches the calculations.
"""

import math
import re
from dataclasses import asdict, dataclass
from typing import Any

from runway.dates import parse_strict_date
from runway.domain.models import (
    ENTRY_KINDS,
    FREQUENCIES,
    GOAL_TYPES,
    CurrencyCode,
    EntryKind,
    Frequency,
    GoalType,
    IsoDate,
)

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True)
class MoneyEntry:
    """Immutable cost or income entry."""

    id: int
    kind: EntryKind
    description: str
    amount: float
    currency: CurrencyCode
    category: Frequency
    date: IsoDate | None = None
    notes: str | None = None


@dataclass(frozen=True)
class Loan:
    """Immutable loan. Interest rate is an annual percentage (5 means 5%)."""

    id: int
    name: str
    principal: float
    interest_rate: float
    term_months: int
    start_date: IsoDate
    currency: CurrencyCode
    notes: str | None = None


@dataclass(frozen=True)
class CurrencyInfo:
    """Currency offered for entries and display."""

    code: CurrencyCode
    name: str


@dataclass(frozen=True)
class Settings:
    """Immutable currency settings."""

    base_currency: CurrencyCode
    available_currencies: tuple[CurrencyInfo, ...]

    def currency_codes(self) -> list[str]:
        return [c.code for c in self.available_currencies]

    def currency_name(self, code: str) -> str:
        for currency in self.available_currencies:
            if currency.code == code:
                return currency.name
        return code


@dataclass(frozen=True)
class SavingsGoal:
    """Immutable savings goal."""

    amount: float
    target_date: IsoDate | None
    currency: CurrencyCode
    goal_type: GoalType = "objective"
    include_current_capital: bool = True
    enabled: bool = False


DEFAULT_CURRENCIES: tuple[CurrencyInfo, ...] = (
    CurrencyInfo(CurrencyCode("USD"), "US Dollar"),
    CurrencyInfo(CurrencyCode("EUR"), "Euro"),
    CurrencyInfo(CurrencyCode("GBP"), "British Pound"),
    CurrencyInfo(CurrencyCode("PEN"), "Peruvian Sol"),
    CurrencyInfo(CurrencyCode("CHF"), "Swiss Franc"),
    CurrencyInfo(CurrencyCode("CAD"), "Canadian Dollar"),
    CurrencyInfo(CurrencyCode("AUD"), "Australian Dollar"),
    CurrencyInfo(CurrencyCode("JPY"), "Japanese Yen"),
    CurrencyInfo(CurrencyCode("CNY"), "Chinese Yuan"),
    CurrencyInfo(CurrencyCode("BRL"), "Brazilian Real"),
)


def normalize_currency(code: str) -> tuple[CurrencyCode | None, str | None]:
    """Validate and upper-case a currency code.

    Args:
        code: Raw currency code.

    Returns:
        Tuple of (currency_code, error_message).
    """
    normalized = code.strip().upper()
    if not _CURRENCY_RE.match(normalized):
        return None, f"Invalid currency code '{code}'"
    return CurrencyCode(normalized), None


def create_entry(
    id: int,
    kind: str,
    description: str,
    amount: float,
    currency: str,
    category: str,
    date: str | None = None,
    notes: str | None = None,
) -> tuple[MoneyEntry | None, str | None]:
    """Create a validated cost or income entry.

    Args:
        id: Entry identifier.
        kind: "cost" or "income".
        description: What the entry is for.
        amount: Positive amount in `currency`.
        currency: ISO currency code.
        category: Frequency of the entry.
        date: ISO date, required for one-time entries.
        notes: Optional free text.

    Returns:
        Tuple of (entry, error_message).
    """
    if kind not in ENTRY_KINDS:
        return None, f"Unknown entry type '{kind}'"

    if not description or not description.strip():
        return None, "Description is required"

    if not math.isfinite(amount):
        return None, "Amount must be a finite number"

    if amount <= 0:
        return None, "Amount must be positive"

    if category not in FREQUENCIES:
        return None, f"Unknown frequency '{category}'. Choose from: {', '.join(FREQUENCIES)}"

    currency_code, error = normalize_currency(currency)
    if error:
        return None, error

    entry_date: IsoDate | None = None
    if date:
        parsed = parse_strict_date(date)
        if parsed is None:
            return None, f"Invalid date '{date}'. Use YYYY-MM-DD"
        entry_date = IsoDate(parsed.isoformat())

    if category == "one-time" and entry_date is None:
        return None, "One-time entries need a date"

    # Only one-time entries carry a date
    if category != "one-time":
        entry_date = None

    return (
        MoneyEntry(
            id=id,
            kind=kind,  # type: ignore[arg-type]
            description=description.strip(),
            amount=float(amount),
            currency=currency_code,  # type: ignore[arg-type]
            category=category,  # type: ignore[arg-type]
            date=entry_date,
            notes=notes.strip() if notes and notes.strip() else None,
        ),
        None,
    )


def create_loan(
    id: int,
    name: str,
    principal: float,
    interest_rate: float,
    term_months: int,
    start_date: str,
    currency: str,
    notes: str | None = None,
) -> tuple[Loan | None, str | None]:
    """Create a validated loan.

    Args:
        id: Loan identifier.
        name: Loan name.
        principal: Positive borrowed amount.
        interest_rate: Annual percentage rate, zero or more.
        term_months: Positive whole number of months.
        start_date: ISO date of the first payment.
        currency: ISO currency code.
        notes: Optional free text.

    Returns:
        Tuple of (loan, error_message).
    """
    if not name or not name.strip():
        return None, "Loan name is required"

    if not math.isfinite(principal) or not math.isfinite(interest_rate):
        return None, "Principal and interest rate must be finite numbers"

    if principal <= 0:
        return None, "Principal must be positive"

    if interest_rate < 0:
        return None, "Interest rate cannot be negative"

    if int(term_months) != term_months or term_months <= 0:
        return None, "Term must be a positive whole number of months"

    parsed = parse_strict_date(start_date)
    if parsed is None:
        return None, f"Invalid start date '{start_date}'. Use YYYY-MM-DD"

    currency_code, error = normalize_currency(currency)
    if error:
        return None, error

    return (
        Loan(
            id=id,
            name=name.strip(),
            principal=float(principal),
            interest_rate=float(interest_rate),
            term_months=int(term_months),
            start_date=IsoDate(parsed.isoformat()),
            currency=currency_code,  # type: ignore[arg-type]
            notes=notes.strip() if notes and notes.strip() else None,
        ),
        None,
    )


def create_goal(
    amount: float,
    currency: str,
    goal_type: str = "objective",
    target_date: str | None = None,
    include_current_capital: bool = True,
) -> tuple[SavingsGoal | None, str | None]:
    """Create a validated savings goal.

    The goal is enabled when it has a positive amount and, for objectives,
    a target date.

    Returns:
        Tuple of (goal, error_message).
    """
    if goal_type not in GOAL_TYPES:
        return None, f"Unknown goal type '{goal_type}'. Choose from: {', '.join(GOAL_TYPES)}"

    if not math.isfinite(amount):
        return None, "Goal amount must be a finite number"

    if amount < 0:
        return None, "Goal amount cannot be negative"

    currency_code, error = normalize_currency(currency)
    if error:
        return None, error

    goal_date: IsoDate | None = None
    if target_date:
        parsed = parse_strict_date(target_date)
        if parsed is None:
            return None, f"Invalid target date '{target_date}'. Use YYYY-MM-DD"
        goal_date = IsoDate(parsed.isoformat())

    enabled = amount > 0 and (goal_type != "objective" or goal_date is not None)

    return (
        SavingsGoal(
            amount=float(amount),
            target_date=goal_date,
            currency=currency_code,  # type: ignore[arg-type]
            goal_type=goal_type,  # type: ignore[arg-type]
            include_current_capital=include_current_capital,
            enabled=enabled,
        ),
        None,
    )


def next_id(records: list[MoneyEntry] | list[Loan]) -> int:
    """Next free identifier for a list of entries or loans."""
    return max((r.id for r in records), default=0) + 1


def record_to_dict(record: MoneyEntry | Loan | SavingsGoal) -> dict[str, Any]:
    """Serialize a record to a JSON-compatible dict."""
    return asdict(record)


def entry_from_dict(data: dict[str, Any]) -> MoneyEntry:
    """Rebuild an entry from stored data without re-validating it."""
    return MoneyEntry(
        id=int(data["id"]),
        kind=data["kind"],
        description=data["description"],
        amount=float(data["amount"]),
        currency=CurrencyCode(data["currency"]),
        category=data["category"],
        date=IsoDate(data["date"]) if data.get("date") else None,
        notes=data.get("notes"),
    )


def loan_from_dict(data: dict[str, Any]) -> Loan:
    """Rebuild a loan from stored data without re-validating it."""
    return Loan(
        id=int(data["id"]),
        name=data["name"],
        principal=float(data["principal"]),
        interest_rate=float(data["interest_rate"]),
        term_months=int(data["term_months"]),
        start_date=IsoDate(data["start_date"]),
        currency=CurrencyCode(data["currency"]),
        notes=data.get("notes"),
    )


def goal_from_dict(data: dict[str, Any]) -> SavingsGoal:
    """Rebuild a savings goal from stored data."""
    return SavingsGoal(
        amount=float(data.get("amount") or 0),
        target_date=IsoDate(data["target_date"]) if data.get("target_date") else None,
        currency=CurrencyCode(data["currency"]),
        goal_type=data.get("goal_type", "objective"),
        include_current_capital=bool(data.get("include_current_capital", True)),
        enabled=bool(data.get("enabled", False)),
    )
