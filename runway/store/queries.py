"""Read and replace the budget snapshot stored in sqlite."""

import json
import sqlite3
from pathlib import Path
from typing import Any

from runway.domain.state import BudgetState, state_from_dict, state_to_dict
from runway.store.schema import get_db_path

PREFERENCE_KEYS = (
    "base_currency",
    "current_capital",
    "capital_currency",
    "start_date",
    "display_currency",
    "timeframe",
    "savings_goal",
)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def get_preferences(db_path: Path | None = None) -> dict[str, Any]:
    """Get all stored preferences.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Dictionary of preference values decoded from JSON.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT key, value FROM preferences")
        return {row["key"]: json.loads(row["value"]) for row in cursor.fetchall()}


def get_entries(db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get all cost and income entries.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of entry dictionaries ordered by kind then id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT id, kind, description, amount, currency, category, date, notes FROM entries ORDER BY kind, id"
        )
        return [dict(row) for row in cursor.fetchall()]


def get_loans(db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get all loans.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of loan dictionaries ordered by id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT id, name, principal, interest_rate, term_months, start_date, currency, notes "
            "FROM loans ORDER BY id"
        )
        return [dict(row) for row in cursor.fetchall()]


def get_currencies(db_path: Path | None = None) -> list[dict[str, str]]:
    """Get the available currencies in their configured order.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT code, name FROM currencies ORDER BY position")
        return [dict(row) for row in cursor.fetchall()]


def load_state(db_path: Path | None = None) -> BudgetState | None:
    """Load the stored budget snapshot.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        BudgetState, or None if nothing has been saved yet.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    preferences = get_preferences(db_path)
    if not preferences:
        return None

    entries = get_entries(db_path)
    data = {
        "settings": {
            "base_currency": preferences.get("base_currency", "USD"),
            "available_currencies": get_currencies(db_path),
        },
        "costs": [e for e in entries if e["kind"] == "cost"],
        "income": [e for e in entries if e["kind"] == "income"],
        "loans": get_loans(db_path),
        **{key: preferences.get(key) for key in PREFERENCE_KEYS if key != "base_currency"},
    }
    return state_from_dict(data)


def save_state(state: BudgetState, db_path: Path | None = None) -> None:
    """Replace the stored snapshot with `state` in one transaction.

    Args:
        state: Snapshot to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    data = state_to_dict(state)
    preferences = {"base_currency": data["settings"]["base_currency"]}
    preferences.update({key: data[key] for key in PREFERENCE_KEYS if key != "base_currency"})

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM entries")
            cursor.execute("DELETE FROM loans")
            cursor.execute("DELETE FROM currencies")
            cursor.execute("DELETE FROM preferences")

            cursor.executemany(
                "INSERT INTO entries (id, kind, description, amount, currency, category, date, notes) "
                "VALUES (:id, :kind, :description, :amount, :currency, :category, :date, :notes)",
                data["costs"] + data["income"],
            )
            cursor.executemany(
                "INSERT INTO loans (id, name, principal, interest_rate, term_months, start_date, currency, notes) "
                "VALUES (:id, :name, :principal, :interest_rate, :term_months, :start_date, :currency, :notes)",
                data["loans"],
            )
            cursor.executemany(
                "INSERT INTO currencies (position, code, name) VALUES (?, ?, ?)",
                [
                    (position, c["code"], c["name"])
                    for position, c in enumerate(data["settings"]["available_currencies"])
                ],
            )
            cursor.executemany(
                "INSERT INTO preferences (key, value) VALUES (?, ?)",
                [(key, json.dumps(value)) for key, value in preferences.items()],
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def clear_state(db_path: Path | None = None) -> None:
    """Delete every stored record.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            for table in ("entries", "loans", "currencies", "preferences"):
                cursor.execute(f"DELETE FROM {table}")
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def count_records(db_path: Path | None = None) -> dict[str, int]:
    """Count stored costs, income entries and loans.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT kind, COUNT(*) FROM entries GROUP BY kind")
        counts = {"cost": 0, "income": 0}
        counts.update({row[0]: row[1] for row in cursor.fetchall()})
        cursor.execute("SELECT COUNT(*) FROM loans")
        counts["loan"] = cursor.fetchone()[0]
        return counts
