"""CLI entry point for runway."""

import typer

from runway.commands.admin import backup_command, init_command, list_command, reset_command
from runway.commands.entries import add_entry_command, add_loan_command, delete_command
from runway.commands.goals import goal_command
from runway.commands.report import breakdown_command, loans_command, project_command, summary_command
from runway.commands.settings import capital_command, currency_command, rates_command
from runway.commands.sync import sync_command
from runway.log import configure_logging

app = typer.Typer(
    name="runway",
    help="Runway - how long your money lasts, projected from costs, income and loans",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
) -> None:
    """Runway - how long your money lasts, projected from costs, income and loans."""
    configure_logging(verbose)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.runway/backups)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    base_currency: str = typer.Option("USD", "--base", help="Base currency for the new budget"),
) -> None:
    """Initialize runway database and configuration."""
    init_command(force, base_currency)


@app.command(name="add")
def add(
    kind: str = typer.Argument(..., help="'cost' or 'income'"),
    description: str = typer.Argument(..., help="What the entry is for"),
    amount: float = typer.Argument(..., help="Amount per occurrence"),
    frequency: str = typer.Option("monthly", "--every", "-e", help="weekly, biweekly, monthly, semiannually, yearly or one-time"),
    currency: str = typer.Option(None, "--currency", "-c", help="Currency code (default: base currency)"),
    date: str = typer.Option(None, "--date", "-d", help="Date for one-time entries (YYYY-MM-DD)"),
    notes: str = typer.Option(None, "--notes", "-n", help="Free-form notes"),
) -> None:
    """Add a cost or income entry."""
    add_entry_command(kind, description, amount, frequency, currency, date, notes)


@app.command(name="add-loan")
def add_loan(
    name: str = typer.Argument(..., help="Loan name"),
    principal: float = typer.Argument(..., help="Borrowed amount"),
    rate: float = typer.Option(..., "--rate", "-r", help="Annual interest rate in percent"),
    term: int = typer.Option(..., "--term", "-t", help="Term in months"),
    start_date: str = typer.Option(..., "--start", "-s", help="First payment date (YYYY-MM-DD)"),
    currency: str = typer.Option(None, "--currency", "-c", help="Currency code (default: base currency)"),
    notes: str = typer.Option(None, "--notes", "-n", help="Free-form notes"),
) -> None:
    """Add a fixed-rate loan."""
    add_loan_command(name, principal, rate, term, start_date, currency, notes)


@app.command(name="delete")
def delete(
    kind: str = typer.Argument(..., help="'cost', 'income' or 'loan'"),
    record_id: int = typer.Argument(..., help="ID to delete"),
) -> None:
    """Delete an entry or loan."""
    delete_command(kind, record_id)


@app.command(name="list")
def list_entries() -> None:
    """List your costs, income and loans."""
    list_command()


@app.command()
def capital(
    amount: float = typer.Argument(None, help="Current capital"),
    currency: str = typer.Option(None, "--currency", "-c", help="Currency the capital is held in"),
    start_date: str = typer.Option(None, "--start", "-s", help="Projection start date (YYYY-MM-DD)"),
) -> None:
    """Show or set your current capital."""
    capital_command(amount, currency, start_date)


@app.command()
def currency(
    base: str = typer.Option(None, "--base", help="Set the base currency"),
    display: str = typer.Option(None, "--display", help="Set the display currency for projections"),
    add: str = typer.Option(None, "--add", help="Add a currency to the available list"),
    name: str = typer.Option(None, "--name", help="Name for the currency being added"),
    timeframe: str = typer.Option(None, "--timeframe", help="Default projection timeframe (6M, 1Y, 2Y, 3Y)"),
) -> None:
    """Show or change your currency settings."""
    currency_command(base, display, add, name, timeframe)


@app.command()
def rates() -> None:
    """Show current exchange rates for your base currency."""
    rates_command()


@app.command()
def project(
    period: str = typer.Option("monthly", "--period", "-p", help="weekly, monthly or yearly"),
    timeframe: str = typer.Option(None, "--timeframe", "-t", help="6M, 1Y, 2Y or 3Y"),
    currency: str = typer.Option(None, "--currency", "-c", help="Display currency"),
    periods: int = typer.Option(None, "--periods", help="Exact number of periods (overrides timeframe)"),
    csv_path: str = typer.Option(None, "--csv", help="Also write the projection to a CSV file"),
) -> None:
    """Project your capital period by period."""
    project_command(period, timeframe, currency, periods, csv_path)


@app.command()
def summary() -> None:
    """Show your monthly burn rate and capital over time."""
    summary_command()


@app.command()
def breakdown() -> None:
    """Show where your money goes over a year."""
    breakdown_command()


@app.command()
def loans(
    schedule_id: int = typer.Option(None, "--schedule", help="Show the payment schedule for a loan ID"),
    full: bool = typer.Option(False, "--full", help="Show every payment instead of the next year"),
) -> None:
    """List your loans or show a payment schedule."""
    loans_command(schedule_id, full)


@app.command()
def goal(
    amount: float = typer.Option(None, "--amount", "-a", help="Goal amount"),
    goal_type: str = typer.Option("objective", "--type", help="objective, monthly or yearly"),
    target_date: str = typer.Option(None, "--by", help="Target date for objectives (YYYY-MM-DD)"),
    currency: str = typer.Option(None, "--currency", "-c", help="Goal currency (default: base currency)"),
    exclude_capital: bool = typer.Option(False, "--exclude-capital", help="Do not count current capital"),
    clear: bool = typer.Option(False, "--clear", help="Remove the savings goal"),
) -> None:
    """Set or show your savings goal."""
    goal_command(amount, goal_type, target_date, currency, exclude_capital, clear)


@app.command()
def sync(
    direction: str = typer.Argument(..., help="'push' local to remote or 'pull' remote to local"),
) -> None:
    """Copy your budget between local and remote storage."""
    sync_command(direction)


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Delete all your budget data."""
    reset_command(yes)


if __name__ == "__main__":
    app()
