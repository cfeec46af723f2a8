"""Report commands: projections, monthly summary, breakdown and loans."""

from dataclasses import asdict
from datetime import date

import pandas as pd
from rich.table import Table

from runway.commands.common import budget_session, colored_money, console, fail, fetch_rates, format_money
from runway.dates import parse_iso_date
from runway.domain.breakdown import Breakdown, BreakdownLine, calculate_histogram_bar_length, create_breakdown
from runway.domain.currency import to_base
from runway.domain.loans import (
    balance_as_of,
    loan_monthly_payment,
    loan_schedule,
    loan_total_interest,
    paid_to_date,
    upcoming_payments,
)
from runway.domain.models import PERIOD_TYPES, TIMEFRAMES
from runway.domain.projection import PeriodResult, capital_series, monthly_summary, project, runway_months, timeframe_periods


def project_command(
    period: str = "monthly",
    timeframe: str | None = None,
    currency: str | None = None,
    periods: int | None = None,
    csv_path: str | None = None,
) -> None:
    """Show projected costs, income and capital period by period.

    Args:
        period: "weekly", "monthly" or "yearly".
        timeframe: Timeframe code, defaulting to the saved one.
        currency: Display currency, defaulting to the saved one.
        periods: Exact number of periods, overriding the timeframe.
        csv_path: Also write the projection to this CSV file.
    """
    if period not in PERIOD_TYPES:
        fail(f"Unknown period '{period}'. Choose from: {', '.join(PERIOD_TYPES)}")
    if timeframe and timeframe not in TIMEFRAMES:
        fail(f"Unknown timeframe '{timeframe}'. Choose from: {', '.join(TIMEFRAMES)}")

    with budget_session() as (_, state):
        base = state.settings.base_currency
        display = (currency or state.display_currency).upper()
        start = parse_iso_date(state.start_date) or date.today()
        count = periods or timeframe_periods(timeframe or state.timeframe, period)  # type: ignore[arg-type]

        rates = fetch_rates(base)
        results = project(
            state.costs,
            state.income,
            state.loans,
            state.current_capital,
            start,
            period,  # type: ignore[arg-type]
            count,
            display,
            base_currency=base,
            rates=rates,
            capital_currency=state.capital_currency,
        )

        table = Table(title=f"{period.capitalize()} projection ({display})")
        table.add_column("Period", style="cyan")
        table.add_column("Costs", justify="right", style="red")
        table.add_column("Income", justify="right", style="green")
        table.add_column("Net Change", justify="right")
        table.add_column("End Capital", justify="right", style="bold")

        for result in results:
            table.add_row(
                result.period_label,
                f"-{format_money(result.costs, display)}",
                f"+{format_money(result.income, display)}",
                colored_money(result.net_change, display),
                format_money(result.end_capital, display),
            )

        console.print(table)

        if csv_path:
            export_projection(results, csv_path)
            console.print(f"[green]✓[/green] Projection written to {csv_path}")


def export_projection(results: list[PeriodResult], csv_path: str) -> None:
    """Write projection rows to a CSV file."""
    frame = pd.DataFrame([asdict(result) for result in results])
    frame["period_start"] = pd.to_datetime(frame["period_start"]).dt.strftime("%Y-%m-%d")
    frame["period_end"] = pd.to_datetime(frame["period_end"]).dt.strftime("%Y-%m-%d")
    try:
        frame.round(2).to_csv(csv_path, index=False)
    except OSError as e:
        fail(f"Could not write {csv_path}: {e}")


def summary_command() -> None:
    """Show the monthly dashboard: capital, costs, income and burn rate."""
    with budget_session() as (_, state):
        base = state.settings.base_currency
        rates = fetch_rates(base)

        summary = monthly_summary(state.costs, state.income, state.loans, base, rates)
        capital = to_base(state.current_capital, state.capital_currency, base, rates)

        console.print(f"[bold cyan]Dashboard ({base})[/bold cyan]\n")
        console.print(f"  [bold]Current capital:[/bold]      {format_money(capital, base)}")
        console.print(f"  [bold]Total monthly costs:[/bold]  {format_money(summary.total_monthly_costs, base)}")
        if summary.loan_payments:
            console.print(f"    [dim]incl. loan payments {format_money(summary.loan_payments, base)}[/dim]")
        console.print(f"  [bold]Total monthly income:[/bold] {format_money(summary.total_monthly_income, base)}")
        console.print(f"  [bold]Monthly burn rate:[/bold]    {colored_money(summary.burn_rate, base)}")

        months = runway_months(capital, summary.burn_rate)
        if months is not None:
            console.print(f"\n  [yellow]Capital lasts about {months} months at this rate[/yellow]")

        start = parse_iso_date(state.start_date) or date.today()
        points = capital_series(
            state.costs, state.income, state.current_capital, start, base, rates, state.capital_currency
        )
        if not points:
            return

        console.print("\n[bold]Capital over time:[/bold]\n")
        max_capital = max(abs(p.capital) for p in points)
        for point in points:
            bar = "█" * calculate_histogram_bar_length(point.capital, max_capital, 30)
            amount_display = format_money(point.capital, base)
            console.print(f"  {point.label:8} {amount_display:>16} {bar}")


def render_breakdown_lines(lines: list[BreakdownLine], currency: str, color: str) -> None:
    """Render ranked breakdown lines with percentage bars."""
    bar_width = 30
    for line in lines:
        bar = "█" * calculate_histogram_bar_length(line.percentage, 100, bar_width)
        amount_display = format_money(line.yearly_amount, currency)
        console.print(
            f"  {line.label[:28]:28} [dim]{line.category:12}[/dim] "
            f"[{color}]{line.percentage:5.1f}%[/{color}] {amount_display:>14} [{color}]{bar}[/{color}]"
        )


def breakdown_command() -> None:
    """Show the annual distribution of expenses and income."""
    with budget_session() as (_, state):
        base = state.settings.base_currency
        rates = fetch_rates(base)
        breakdown: Breakdown = create_breakdown(state.costs, state.income, state.loans, base, rates)

        console.print("[bold red]Expense distribution:[/bold red]\n")
        if breakdown.expenses:
            render_breakdown_lines(breakdown.expenses, base, "red")
            console.print(f"\n  [bold]Total annual:[/bold] {format_money(breakdown.total_expenses, base)}\n")
        else:
            console.print("  [dim]No expenses to analyze[/dim]\n")

        console.print("[bold green]Income distribution:[/bold green]\n")
        if breakdown.income:
            render_breakdown_lines(breakdown.income, base, "green")
            console.print(f"\n  [bold]Total annual:[/bold] {format_money(breakdown.total_income, base)}")
        else:
            console.print("  [dim]No income to analyze[/dim]")


def loans_command(schedule_id: int | None = None, full: bool = False) -> None:
    """List loans, or show one loan's payment schedule."""
    today = date.today()

    with budget_session() as (_, state):
        if not state.loans:
            console.print("[yellow]No loans found[/yellow]")
            return

        if schedule_id is None:
            table = Table(title=f"Loans ({len(state.loans)})")
            table.add_column("ID", style="dim", justify="right")
            table.add_column("Name", style="white")
            table.add_column("Rate", justify="right")
            table.add_column("Term", justify="right")
            table.add_column("Monthly Payment", justify="right", style="yellow")
            table.add_column("Current Balance", justify="right")
            table.add_column("Total Interest", justify="right", style="red")
            table.add_column("Start", style="cyan")

            for loan in state.loans:
                table.add_row(
                    str(loan.id),
                    loan.name,
                    f"{loan.interest_rate}%",
                    f"{loan.term_months}m",
                    format_money(loan_monthly_payment(loan), loan.currency),
                    format_money(balance_as_of(loan, today), loan.currency),
                    format_money(loan_total_interest(loan), loan.currency),
                    loan.start_date,
                )

            console.print(table)
            return

        loan = next((loan for loan in state.loans if loan.id == schedule_id), None)
        if loan is None:
            fail(f"No loan with ID {schedule_id}")

        schedule = loan_schedule(loan)
        rows = schedule if full else upcoming_payments(schedule, today)
        made, repaid = paid_to_date(loan, today)

        title = f"{loan.name} - {'full' if full else 'upcoming'} schedule ({len(rows)} payments)"
        table = Table(title=title)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Payment", justify="right")
        table.add_column("Principal", justify="right", style="green")
        table.add_column("Interest", justify="right", style="red")
        table.add_column("Balance", justify="right", style="bold")

        for row in rows:
            table.add_row(
                str(row.month),
                row.date.isoformat(),
                format_money(row.payment, loan.currency),
                format_money(row.principal_portion, loan.currency),
                format_money(row.interest_portion, loan.currency),
                format_money(row.remaining_balance, loan.currency),
            )

        console.print(table)
        console.print(
            f"\n[bold]Paid so far:[/bold] {made} of {loan.term_months} payments, "
            f"{format_money(repaid, loan.currency)} principal repaid"
        )
        if loan.notes:
            console.print(f"[dim]{loan.notes}[/dim]")
