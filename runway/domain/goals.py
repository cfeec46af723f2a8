"""Pure functions for savings-goal progress.

Three kinds of goal are supported:
- objective: reach an amount by a target date (e.g. a trip or a purchase)
- monthly: save at least an amount every month
- yearly: save at least an amount every year

All comparisons happen in base currency.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Literal

from runway.dates import months_between, parse_iso_date
from runway.domain.currency import to_base
from runway.domain.entries import SavingsGoal
from runway.domain.models import ExchangeRates

SuggestionKind = Literal["success", "warning"]


@dataclass(frozen=True)
class Suggestion:
    """Immutable advice about a goal."""

    kind: SuggestionKind
    message: str
    amount: float | None = None


@dataclass(frozen=True)
class GoalStatus:
    """Immutable evaluation of a savings goal."""

    current_value: float
    goal_amount: float
    progress: float
    months_to_goal: int | None
    suggestion: Suggestion | None


def current_savings_value(goal: SavingsGoal, monthly_net: float, capital: float) -> float:
    """Amount that counts towards the goal right now.

    Args:
        goal: Savings goal.
        monthly_net: Monthly income minus monthly costs, base currency.
        capital: Current capital in base currency.
    """
    if goal.goal_type == "monthly":
        return max(0.0, monthly_net)
    if goal.goal_type == "yearly":
        return max(0.0, monthly_net * 12)
    return max(0.0, capital if goal.include_current_capital else 0.0)


def months_to_goal(goal_amount: float, goal: SavingsGoal, monthly_net: float, capital: float) -> int | None:
    """Months until the goal is met at the current saving rate.

    Returns:
        0 if already met, None if unreachable at this rate.
    """
    if not goal_amount or monthly_net <= 0:
        return None

    if goal.goal_type == "monthly":
        return 0 if goal_amount <= monthly_net else None
    if goal.goal_type == "yearly":
        return 0 if goal_amount <= monthly_net * 12 else None

    starting_point = capital if goal.include_current_capital else 0.0
    remaining = goal_amount - starting_point
    if remaining <= 0:
        return 0
    return math.ceil(remaining / monthly_net)


def goal_suggestion(
    goal: SavingsGoal,
    goal_amount: float,
    monthly_net: float,
    capital: float,
    today: date,
) -> Suggestion | None:
    """Advice on how to reach a goal.

    Args:
        goal: Savings goal.
        goal_amount: Goal amount in base currency.
        monthly_net: Monthly income minus monthly costs, base currency.
        capital: Current capital in base currency.
        today: Reference date for objective deadlines.

    Returns:
        Suggestion, or None when there is nothing to advise on.
    """
    if not goal.amount:
        return None

    if goal.goal_type == "monthly":
        if monthly_net >= goal_amount:
            return Suggestion("success", "Already saving enough every month")
        shortfall = goal_amount - monthly_net
        return Suggestion("warning", "More monthly net income needed for the monthly goal", shortfall)

    if goal.goal_type == "yearly":
        annual_net = monthly_net * 12
        if annual_net >= goal_amount:
            return Suggestion("success", "On track for the yearly goal")
        shortfall = goal_amount - annual_net
        return Suggestion("warning", "More annual net income needed for the yearly goal", shortfall)

    target = parse_iso_date(goal.target_date)
    if target is None:
        return None

    starting_point = capital if goal.include_current_capital else 0.0
    remaining = goal_amount - starting_point
    if remaining <= 0:
        return Suggestion("success", "Objective already reached")

    needed_monthly = remaining / months_between(today, target)
    if monthly_net >= needed_monthly:
        return Suggestion("success", "On track. Save this much monthly to reach the objective", needed_monthly)

    shortfall = needed_monthly - monthly_net
    return Suggestion("warning", f"More monthly net income needed to reach the objective by {target}", shortfall)


def evaluate_goal(
    goal: SavingsGoal,
    monthly_net: float,
    capital_base: float,
    base_currency: str,
    rates: ExchangeRates | None,
    today: date,
) -> GoalStatus:
    """Evaluate progress towards a savings goal.

    Args:
        goal: Savings goal.
        monthly_net: Monthly net income in base currency.
        capital_base: Current capital in base currency.
        base_currency: Base currency of the rate table.
        rates: Base-relative rate table, or None if unavailable.
        today: Reference date.

    Returns:
        GoalStatus with progress, time to goal and a suggestion.
    """
    goal_amount = to_base(goal.amount, goal.currency, base_currency, rates)
    current = current_savings_value(goal, monthly_net, capital_base)
    progress = (current / goal_amount) * 100 if goal_amount > 0 else 0.0

    return GoalStatus(
        current_value=current,
        goal_amount=goal_amount,
        progress=progress,
        months_to_goal=months_to_goal(goal_amount, goal, monthly_net, capital_base),
        suggestion=goal_suggestion(goal, goal_amount, monthly_net, capital_base, today),
    )
