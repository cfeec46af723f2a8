"""Shared helpers for commands: session setup, rates and money display."""

import sqlite3
import sys
import tomllib
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, NoReturn

import pandas as pd
from rich.console import Console

from runway.config import load_config
from runway.dates import parse_strict_date
from runway.domain.models import ExchangeRates
from runway.domain.state import BudgetState, default_state
from runway.rates import load_rate_table
from runway.store.repository import BudgetRepository, RepositoryError, open_repository

console = Console()

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "¥",
    "PEN": "S/",
    "BRL": "R$",
    "CHF": "CHF ",
    "CAD": "CA$",
    "AUD": "A$",
}


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def load_settings() -> dict[str, Any]:
    """Load configuration, exiting on a malformed file."""
    try:
        return load_config()
    except tomllib.TOMLDecodeError as e:
        fail(f"Config file is not valid TOML: {e}")


@contextmanager
def budget_session() -> Iterator[tuple[BudgetRepository, BudgetState]]:
    """Open the configured repository and load the current budget.

    Yields:
        Tuple of (repository, state). A fresh default state is yielded when
        nothing has been saved yet. The repository is closed on exit, which
        writes any pending remote changes.
    """
    config = load_settings()
    try:
        repo = open_repository(config)
        state = repo.load() or default_state()
    except RepositoryError as e:
        fail(f"Storage error: {e}")
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    try:
        yield repo, state
    finally:
        try:
            repo.close()
        except RepositoryError as e:
            fail(f"Storage error: {e}")


def save(repo: BudgetRepository, state: BudgetState) -> None:
    """Store the state, exiting on storage errors."""
    try:
        repo.save(state)
    except RepositoryError as e:
        fail(f"Storage error: {e}")
    except sqlite3.Error as e:
        fail(f"Database error: {e}")


def fetch_rates(base_currency: str) -> ExchangeRates | None:
    """Fetch the rate table for a base currency, warning when unavailable."""
    config = load_settings()
    rates = load_rate_table(base_currency, config["rates"])
    if rates is None:
        console.print("[yellow]Exchange rates unavailable - amounts are shown unconverted[/yellow]\n")
    return rates


def format_money(amount: float, currency: str, include_sign: bool = False) -> str:
    """Format an amount for display.

    Args:
        amount: Amount in major units.
        currency: ISO currency code.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "-$1,234.50" or "€99.00").
    """
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    formatted = f"{symbol}{abs(amount):,.2f}"

    if amount < 0:
        return f"-{formatted}"
    if include_sign:
        return f"+{formatted}"
    return formatted


def colored_money(amount: float, currency: str) -> str:
    """Signed amount coloured green for gains and red for losses."""
    text = format_money(amount, currency, include_sign=True)
    return f"[green]{text}[/green]" if amount >= 0 else f"[red]{text}[/red]"


def normalize_date(raw_date: str | None) -> str | None:
    """Normalize a user-typed date to ISO format (YYYY-MM-DD).

    ISO input is kept as is. Anything else goes through pandas.to_datetime
    with day-first parsing, so "05/03/2026" is 5 March.

    Args:
        raw_date: Date as typed, or None.

    Returns:
        ISO date string, or None when no date was given.
    """
    if not raw_date:
        return None
    if parse_strict_date(raw_date):
        return raw_date.strip()
    try:
        return pd.to_datetime(raw_date, dayfirst=True).strftime("%Y-%m-%d")
    except (ValueError, pd.errors.ParserError) as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)
