"""Admin commands for init, backup, reset, and listing entries."""

import shutil
import sqlite3
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from runway.commands.common import budget_session, fail, format_money, save
from runway.config import create_default_config, get_config_path
from runway.domain.entries import normalize_currency
from runway.domain.state import default_state
from runway.store.queries import count_records
from runway.store.schema import get_db_path, init_database

console = Console()

DEFAULT_BACKUP_DIR = Path.home() / ".runway" / "backups"


def backup_command(output_dir: str | None = None) -> None:
    """Copy the budget database and config into a timestamped snapshot.

    Args:
        output_dir: Target directory, defaults to ~/.runway/backups.
    """
    db_path = get_db_path()
    config_path = get_config_path()

    if not db_path.exists():
        fail("No budget database yet. Run 'runway init' first.")

    target = Path(output_dir).expanduser() if output_dir else DEFAULT_BACKUP_DIR
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    copies = [(db_path, target / f"runway_{stamp}.db")]
    if config_path.exists():
        copies.append((config_path, target / f"runway_{stamp}.toml"))

    try:
        target.mkdir(parents=True, exist_ok=True)
        for source, dest in copies:
            shutil.copy2(source, dest)
            console.print(f"[green]✓[/green] {source.name} -> {dest}")
    except OSError as e:
        fail(f"Could not write backup: {e}")

    console.print(f"\n[green]Saved {len(copies)} file(s) to {target}[/green]")


def run_full_init(db_path: Path, config_path: Path, base_currency: str) -> None:
    """Create the store, the config file and an empty budget."""
    init_database(db_path)
    console.print(f"[green]✓[/green] Store ready at {db_path}")

    create_default_config(config_path)
    console.print(f"[green]✓[/green] Settings written to {config_path} (owner-only)")

    with budget_session() as (repo, _):
        save(repo, default_state(base_currency))
    console.print(f"[green]✓[/green] Empty budget in {base_currency}")

    console.print("\n[dim]Next: 'runway capital <amount>' and 'runway add cost ...'[/dim]")


def init_command(force: bool = False, base_currency: str = "USD") -> None:
    """Set up runway for first use."""
    base, error = normalize_currency(base_currency)
    if error or base is None:
        fail(f"Invalid base currency: {error}")

    db_path = get_db_path()
    config_path = get_config_path()
    existing = [path for path in (db_path, config_path) if path.exists()]

    if existing and not force:
        for path in existing:
            console.print(f"  {path} already exists")
        console.print("[yellow]Pass --force to start over[/yellow]")
        fail("Refusing to overwrite an existing budget")

    try:
        if force and db_path.exists():
            db_path.unlink()
        run_full_init(db_path, config_path, base)
    except sqlite3.Error as e:
        fail(f"Database error: {e}")
    except OSError as e:
        fail(f"Could not create files: {e}")


def reset_command(yes: bool = False) -> None:
    """Delete all entries, loans and settings."""
    if not yes and not typer.confirm("Delete ALL budget data? This cannot be undone"):
        console.print("[dim]Nothing deleted[/dim]")
        return

    with budget_session() as (repo, state):
        repo.clear()
        save(repo, default_state(state.settings.base_currency))

    console.print("[green]✓[/green] All budget data deleted")


def list_command() -> None:
    """List costs, income and loans."""
    with budget_session() as (_, state):
        entries = [*state.costs, *state.income]

        if not entries and not state.loans:
            console.print("[yellow]No entries found[/yellow]")
            return

        if entries:
            table = Table(title=f"Entries (showing {len(entries)})")
            table.add_column("ID", style="dim", justify="right")
            table.add_column("Type", style="white")
            table.add_column("Description", style="white")
            table.add_column("Amount", justify="right")
            table.add_column("Frequency", style="magenta")
            table.add_column("Date", style="cyan")
            table.add_column("Notes", style="dim")

            for entry in entries:
                if entry.kind == "cost":
                    amount_display = f"[red]-{format_money(entry.amount, entry.currency)}[/red]"
                else:
                    amount_display = f"[green]+{format_money(entry.amount, entry.currency)}[/green]"

                table.add_row(
                    str(entry.id),
                    entry.kind,
                    entry.description,
                    amount_display,
                    entry.category,
                    entry.date or "[dim]-[/dim]",
                    entry.notes or "",
                )

            console.print(table)

        if state.loans:
            console.print(f"\n[dim]{len(state.loans)} loan(s) - see 'runway loans'[/dim]")

        if get_db_path().exists():
            try:
                counts = count_records()
                console.print(
                    f"[dim]Stored locally: {counts['cost']} costs, {counts['income']} income, {counts['loan']} loans[/dim]"
                )
            except sqlite3.Error as e:
                fail(f"Database error: {e}")
