"""Capital, currency and exchange-rate commands."""

from dataclasses import replace

from rich.table import Table

from runway.commands.common import budget_session, console, fail, fetch_rates, format_money, normalize_date, save
from runway.dates import parse_iso_date
from runway.domain.currency import has_rate, to_base
from runway.domain.entries import normalize_currency
from runway.domain.models import TIMEFRAMES, IsoDate
from runway.domain.state import (
    add_available_currency,
    set_base_currency,
    set_capital,
    unknown_currencies,
    used_currencies,
)

COMMON_CURRENCIES = ["USD", "EUR", "GBP", "CHF", "CAD", "AUD", "JPY", "CNY", "BRL", "PEN"]


def capital_command(
    amount: float | None = None,
    currency: str | None = None,
    start_date: str | None = None,
) -> None:
    """Show or set the starting capital and projection start date."""
    with budget_session() as (repo, state):
        if amount is None and currency is None and start_date is None:
            console.print(f"[bold]Current capital:[/bold] {format_money(state.current_capital, state.capital_currency)}")
            console.print(f"[bold]Projection start:[/bold] {state.start_date}")
            return

        capital_currency = None
        if currency:
            capital_currency, error = normalize_currency(currency)
            if error:
                fail(error)

        start = None
        if start_date:
            parsed = parse_iso_date(normalize_date(start_date) or "")
            if parsed is None:
                fail(f"Invalid start date '{start_date}'. Use YYYY-MM-DD")
            start = IsoDate(parsed.isoformat())

        new_state = set_capital(
            state,
            state.current_capital if amount is None else amount,
            capital_currency,
            start,
        )
        save(repo, new_state)

        console.print("[green]✓[/green] Capital updated:")
        console.print(f"  Amount: {format_money(new_state.current_capital, new_state.capital_currency)}")
        console.print(f"  Start date: {new_state.start_date}")

        if new_state.capital_currency != new_state.settings.base_currency:
            rates = fetch_rates(new_state.settings.base_currency)
            if rates is not None:
                base_amount = to_base(
                    new_state.current_capital, new_state.capital_currency, new_state.settings.base_currency, rates
                )
                console.print(f"  [dim]~ {format_money(base_amount, new_state.settings.base_currency)}[/dim]")


def currency_command(
    base: str | None = None,
    display: str | None = None,
    add: str | None = None,
    name: str | None = None,
    timeframe: str | None = None,
) -> None:
    """Show or change currency and projection settings."""
    with budget_session() as (repo, state):
        new_state = state

        if base:
            code, error = normalize_currency(base)
            if error or code is None:
                fail(error or "Invalid currency")
            new_state = set_base_currency(new_state, code)
            console.print(f"[green]✓[/green] Base currency set to {code}")

        if display:
            code, error = normalize_currency(display)
            if error or code is None:
                fail(error or "Invalid currency")
            new_state = replace(new_state, display_currency=code)
            console.print(f"[green]✓[/green] Display currency set to {code}")

        if add:
            code, error = normalize_currency(add)
            if error or code is None:
                fail(error or "Invalid currency")
            new_state = add_available_currency(new_state, code, name or code)
            console.print(f"[green]✓[/green] {code} is available for entries")

        if timeframe:
            if timeframe not in TIMEFRAMES:
                fail(f"Unknown timeframe '{timeframe}'. Choose from: {', '.join(TIMEFRAMES)}")
            new_state = replace(new_state, timeframe=timeframe)  # type: ignore[arg-type]
            console.print(f"[green]✓[/green] Projection timeframe set to {timeframe}")

        if new_state is not state:
            save(repo, new_state)
            if base:
                fetch_rates(new_state.settings.base_currency)
            return

        settings = state.settings
        console.print(f"[bold]Base currency:[/bold] {settings.base_currency}")
        console.print(f"[bold]Display currency:[/bold] {state.display_currency}")
        console.print(f"[bold]Projection timeframe:[/bold] {state.timeframe}")
        console.print("[bold]Available currencies:[/bold]")
        for currency in settings.available_currencies:
            console.print(f"  • {currency.code} - {currency.name}")

        unknown = unknown_currencies(state)
        if unknown:
            console.print(f"\n[yellow]Used but not available: {', '.join(unknown)}[/yellow]")


def rates_command() -> None:
    """Show exchange rates for the base currency."""
    with budget_session() as (_, state):
        settings = state.settings
        rates = fetch_rates(settings.base_currency)
        if rates is None:
            return

        codes = sorted(code for code in COMMON_CURRENCIES if code != settings.base_currency and rates.get(code))
        if not codes:
            console.print("[dim]No rates available[/dim]")
            return

        table = Table(title=f"Exchange Rates (1 {settings.base_currency} =)")
        table.add_column("Code", style="cyan")
        table.add_column("Currency", style="white")
        table.add_column("Rate", justify="right")

        for code in codes:
            table.add_row(code, settings.currency_name(code), f"{rates[code]:.4f}")

        console.print(table)
        console.print("[dim]Rates from Frankfurter API & Open Exchange Rates[/dim]")

        missing = [code for code in used_currencies(state) if not has_rate(code, settings.base_currency, rates)]
        if missing:
            console.print(f"\n[yellow]No rate for {', '.join(missing)}: those amounts stay unconverted[/yellow]")
