"""Tests for runway.domain.entries validated constructors."""

import pytest

from runway.domain.entries import (
    create_entry,
    create_goal,
    create_loan,
    entry_from_dict,
    loan_from_dict,
    next_id,
    normalize_currency,
    record_to_dict,
)


def entry_args(**overrides: object) -> dict[str, object]:
    args: dict[str, object] = {
        "id": 1,
        "kind": "cost",
        "description": "Rent",
        "amount": 1000,
        "currency": "usd",
        "category": "monthly",
    }
    args.update(overrides)
    return args


def loan_args(**overrides: object) -> dict[str, object]:
    args: dict[str, object] = {
        "id": 1,
        "name": "Car",
        "principal": 20000,
        "interest_rate": 6.5,
        "term_months": 48,
        "start_date": "2026-02-01",
        "currency": "EUR",
    }
    args.update(overrides)
    return args


class TestNormalizeCurrency:
    """Tests for normalize_currency."""

    def test_upper_cases(self) -> None:
        """Should upper-case and strip valid codes."""
        assert normalize_currency(" eur ") == ("EUR", None)

    @pytest.mark.parametrize("code", ["", "EURO", "E1R", "US"])
    def test_rejects_invalid(self, code: str) -> None:
        """Should reject anything but three letters."""
        normalized, error = normalize_currency(code)

        assert normalized is None
        assert error is not None
        assert "Invalid currency code" in error


class TestCreateEntry:
    """Tests for create_entry."""

    def test_valid_recurring_entry(self) -> None:
        """Should build an entry with a normalized currency."""
        entry, error = create_entry(**entry_args())  # type: ignore[arg-type]

        assert error is None
        assert entry is not None
        assert entry.currency == "USD"
        assert entry.amount == 1000.0
        assert entry.date is None

    def test_recurring_entry_drops_date(self) -> None:
        """Should not keep a date on recurring entries."""
        entry, error = create_entry(**entry_args(date="2026-03-01"))  # type: ignore[arg-type]

        assert error is None
        assert entry is not None
        assert entry.date is None

    def test_one_time_entry_keeps_date(self) -> None:
        """Should keep the date of a one-time entry."""
        entry, error = create_entry(**entry_args(category="one-time", date="2026-03-01"))  # type: ignore[arg-type]

        assert error is None
        assert entry is not None
        assert entry.date == "2026-03-01"

    def test_one_time_entry_requires_date(self) -> None:
        """Should reject a one-time entry without a date."""
        entry, error = create_entry(**entry_args(category="one-time"))  # type: ignore[arg-type]

        assert entry is None
        assert error == "One-time entries need a date"

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amount(self, amount: float) -> None:
        """Should reject zero and negative amounts."""
        entry, error = create_entry(**entry_args(amount=amount))  # type: ignore[arg-type]

        assert entry is None
        assert error == "Amount must be positive"

    @pytest.mark.parametrize("amount", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_amount(self, amount: float) -> None:
        """Should reject NaN and infinite amounts."""
        entry, error = create_entry(**entry_args(amount=amount))  # type: ignore[arg-type]

        assert entry is None
        assert error == "Amount must be a finite number"

    @pytest.mark.parametrize("date", ["2026-01-01xyz", "2026-01-01T10:00", "2026-1-1"])
    def test_date_must_be_exact(self, date: str) -> None:
        """Should reject dates with anything besides YYYY-MM-DD."""
        entry, error = create_entry(**entry_args(category="one-time", date=date))  # type: ignore[arg-type]

        assert entry is None
        assert error is not None
        assert error.startswith("Invalid date")

    def test_blank_description(self) -> None:
        """Should reject a blank description."""
        entry, error = create_entry(**entry_args(description="   "))  # type: ignore[arg-type]

        assert entry is None
        assert error == "Description is required"

    def test_unknown_frequency(self) -> None:
        """Should reject frequencies outside the fixed set."""
        entry, error = create_entry(**entry_args(category="daily"))  # type: ignore[arg-type]

        assert entry is None
        assert error is not None
        assert error.startswith("Unknown frequency")

    def test_unknown_kind(self) -> None:
        """Should reject kinds other than cost and income."""
        entry, error = create_entry(**entry_args(kind="loan"))  # type: ignore[arg-type]

        assert entry is None
        assert error is not None
        assert error.startswith("Unknown entry type")

    def test_invalid_date(self) -> None:
        """Should reject a malformed date."""
        entry, error = create_entry(**entry_args(category="one-time", date="31/02/2026"))  # type: ignore[arg-type]

        assert entry is None
        assert error is not None
        assert error.startswith("Invalid date")

    def test_blank_notes_become_none(self) -> None:
        """Should not store whitespace-only notes."""
        entry, _ = create_entry(**entry_args(notes="  "))  # type: ignore[arg-type]

        assert entry is not None
        assert entry.notes is None


class TestCreateLoan:
    """Tests for create_loan."""

    def test_valid_loan(self) -> None:
        """Should build a loan."""
        loan, error = create_loan(**loan_args())  # type: ignore[arg-type]

        assert error is None
        assert loan is not None
        assert loan.term_months == 48
        assert loan.interest_rate == 6.5

    def test_zero_rate_allowed(self) -> None:
        """Should accept interest-free loans."""
        loan, error = create_loan(**loan_args(interest_rate=0))  # type: ignore[arg-type]

        assert error is None
        assert loan is not None

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"name": ""}, "Loan name is required"),
            ({"principal": 0}, "Principal must be positive"),
            ({"interest_rate": -1}, "Interest rate cannot be negative"),
            ({"term_months": 0}, "Term must be a positive whole number of months"),
            ({"term_months": 12.5}, "Term must be a positive whole number of months"),
            ({"principal": float("nan")}, "Principal and interest rate must be finite numbers"),
            ({"principal": float("inf")}, "Principal and interest rate must be finite numbers"),
            ({"interest_rate": float("nan")}, "Principal and interest rate must be finite numbers"),
            ({"interest_rate": float("inf")}, "Principal and interest rate must be finite numbers"),
        ],
    )
    def test_rejects_invalid_fields(self, overrides: dict[str, object], message: str) -> None:
        """Should reject loans that would break amortization."""
        loan, error = create_loan(**loan_args(**overrides))  # type: ignore[arg-type]

        assert loan is None
        assert error == message

    def test_invalid_start_date(self) -> None:
        """Should reject a malformed start date."""
        loan, error = create_loan(**loan_args(start_date="soon"))  # type: ignore[arg-type]

        assert loan is None
        assert error is not None
        assert error.startswith("Invalid start date")

    def test_start_date_with_trailing_text(self) -> None:
        """Should not truncate a start date to its first ten characters."""
        loan, error = create_loan(**loan_args(start_date="2026-02-01xyz"))  # type: ignore[arg-type]

        assert loan is None
        assert error is not None
        assert error.startswith("Invalid start date")


class TestCreateGoal:
    """Tests for create_goal."""

    def test_objective_needs_date_to_be_enabled(self) -> None:
        """Should disable an objective without a target date."""
        goal, error = create_goal(5000, "USD", "objective")

        assert error is None
        assert goal is not None
        assert not goal.enabled

    def test_objective_with_date_is_enabled(self) -> None:
        """Should enable an objective with an amount and date."""
        goal, _ = create_goal(5000, "USD", "objective", "2027-01-01")

        assert goal is not None
        assert goal.enabled
        assert goal.target_date == "2027-01-01"

    def test_monthly_goal_enabled_without_date(self) -> None:
        """Should enable rate goals without a date."""
        goal, _ = create_goal(300, "usd", "monthly")

        assert goal is not None
        assert goal.enabled
        assert goal.currency == "USD"

    def test_zero_amount_is_disabled(self) -> None:
        """Should keep a zero goal disabled."""
        goal, _ = create_goal(0, "USD", "monthly")

        assert goal is not None
        assert not goal.enabled

    def test_rejects_unknown_type_and_negative_amount(self) -> None:
        """Should reject unknown goal types and negative amounts."""
        assert create_goal(100, "USD", "weekly")[0] is None
        assert create_goal(-1, "USD", "monthly") == (None, "Goal amount cannot be negative")

    @pytest.mark.parametrize("amount", [float("nan"), float("inf")])
    def test_rejects_non_finite_amount(self, amount: float) -> None:
        """Should reject NaN and infinite goal amounts."""
        assert create_goal(amount, "USD", "monthly") == (None, "Goal amount must be a finite number")

    def test_rejects_target_date_with_trailing_text(self) -> None:
        """Should reject a target date that is not exactly YYYY-MM-DD."""
        goal, error = create_goal(5000, "USD", "objective", "2027-01-01xyz")

        assert goal is None
        assert error is not None
        assert error.startswith("Invalid target date")


class TestNextId:
    """Tests for next_id."""

    def test_empty_starts_at_one(self) -> None:
        """Should start numbering at 1."""
        assert next_id([]) == 1

    def test_uses_highest_id(self) -> None:
        """Should not reuse ids after deletions."""
        first, _ = create_entry(**entry_args(id=1))  # type: ignore[arg-type]
        fifth, _ = create_entry(**entry_args(id=5))  # type: ignore[arg-type]

        assert next_id([first, fifth]) == 6  # type: ignore[list-item]


class TestRecordDicts:
    """Tests for record serialization."""

    def test_entry_survives_dict_conversion(self) -> None:
        """Should rebuild an identical entry."""
        entry, _ = create_entry(**entry_args(category="one-time", date="2026-03-01", notes="Deposit"))  # type: ignore[arg-type]
        assert entry is not None

        assert entry_from_dict(record_to_dict(entry)) == entry

    def test_loan_survives_dict_conversion(self) -> None:
        """Should rebuild an identical loan."""
        loan, _ = create_loan(**loan_args())  # type: ignore[arg-type]
        assert loan is not None

        assert loan_from_dict(record_to_dict(loan)) == loan
