"""Savings goal command."""

from dataclasses import replace
from datetime import date

from runway.commands.common import (
    budget_session,
    colored_money,
    console,
    fail,
    fetch_rates,
    format_money,
    normalize_date,
    save,
)
from runway.domain.currency import to_base
from runway.domain.entries import create_goal
from runway.domain.goals import evaluate_goal
from runway.domain.projection import monthly_summary


def goal_command(
    amount: float | None = None,
    goal_type: str = "objective",
    target_date: str | None = None,
    currency: str | None = None,
    exclude_capital: bool = False,
    clear: bool = False,
) -> None:
    """Set, clear or show the savings goal."""
    with budget_session() as (repo, state):
        base = state.settings.base_currency

        if clear:
            save(repo, replace(state, savings_goal=None))
            console.print("[green]✓[/green] Savings goal cleared")
            return

        if amount is not None:
            goal, error = create_goal(
                amount=amount,
                currency=currency or base,
                goal_type=goal_type,
                target_date=normalize_date(target_date),
                include_current_capital=not exclude_capital,
            )
            if error or goal is None:
                fail(f"Invalid goal: {error}")
            state = replace(state, savings_goal=goal)
            save(repo, state)
            console.print(f"[green]✓[/green] Savings goal set ({goal.goal_type})")
            if not goal.enabled:
                console.print("[yellow]Goal is inactive: objectives need a target date and a positive amount[/yellow]")

        goal = state.savings_goal
        if goal is None:
            console.print("[dim]No savings goal set. Use --amount to set one.[/dim]")
            return

        rates = fetch_rates(base)
        summary = monthly_summary(state.costs, state.income, state.loans, base, rates)
        capital = to_base(state.current_capital, state.capital_currency, base, rates)
        status = evaluate_goal(goal, summary.burn_rate, capital, base, rates, date.today())

        console.print("\n[bold cyan]Financial health[/bold cyan]\n")
        if summary.total_monthly_income > 0:
            console.print(f"  Monthly income:   {format_money(summary.total_monthly_income, base)}")
            console.print(f"  Monthly expenses: {format_money(summary.total_monthly_costs, base)}")
            console.print(f"  Net income:       {colored_money(summary.burn_rate, base)}\n")

        label = {"objective": "Objective", "monthly": "Monthly savings", "yearly": "Yearly savings"}[goal.goal_type]
        console.print(f"  [bold]{label}:[/bold] {format_money(goal.amount, goal.currency)}", end="")
        console.print(f" by {goal.target_date}" if goal.target_date and goal.goal_type == "objective" else "")
        console.print(
            f"  Progress: {status.progress:.1f}% "
            f"({format_money(status.current_value, base)} of {format_money(status.goal_amount, base)})"
        )

        if status.months_to_goal == 0:
            console.print("  [green]Goal reached[/green]")
        elif status.months_to_goal is not None:
            console.print(f"  About {status.months_to_goal} months to go at the current rate")

        suggestion = status.suggestion
        if suggestion:
            color = "green" if suggestion.kind == "success" else "yellow"
            amount_text = f": {format_money(suggestion.amount, base)}" if suggestion.amount is not None else ""
            console.print(f"\n  [{color}]{suggestion.message}{amount_text}[/{color}]")
