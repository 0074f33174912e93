"""
Budget Threshold Evaluation

A budget is compared with what was spent in its category during the
current calendar month:

    ok       spent <  80 % of the budget
    warning  spent >= 80 % and < 100 %
    danger   spent >= 100 %

Both thresholds are inclusive lower bounds. Nothing here is stored:
the status is recomputed whenever transactions or budgets change.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from finance_tracker.analytics.aggregation import (
    ZERO,
    category_totals,
    current_month_transactions,
)
from finance_tracker.formatting import format_currency, format_percentage
from finance_tracker.models.records import Budget, Transaction, TransactionType, parse_amount
from finance_tracker.models.reports import BudgetLevel, BudgetOverview, BudgetStatus


BUDGET_WARNING_THRESHOLD = 0.8
BUDGET_DANGER_THRESHOLD = 1.0


def classify_budget_usage(
    budget_amount: Decimal,
    spent: Decimal,
    warning_threshold: float = BUDGET_WARNING_THRESHOLD,
    danger_threshold: float = BUDGET_DANGER_THRESHOLD,
) -> BudgetLevel:
    """Alert level for `spent` against `budget_amount`. A zero budget is never alerted."""
    if budget_amount <= 0:
        return BudgetLevel.OK

    used = spent / budget_amount
    if used >= Decimal(str(danger_threshold)):
        return BudgetLevel.DANGER
    if used >= Decimal(str(warning_threshold)):
        return BudgetLevel.WARNING
    return BudgetLevel.OK


def evaluate_budget(
    budget_amount: Any,
    spent: Any,
    category: str = "",
    warning_threshold: float = BUDGET_WARNING_THRESHOLD,
    danger_threshold: float = BUDGET_DANGER_THRESHOLD,
) -> BudgetStatus:
    """
    Evaluate one budget.

    remaining is budget - spent and goes negative once the budget is
    exceeded. A budget of 0 or less reports 0 % used.
    """
    amount = parse_amount(budget_amount)
    spent_amount = parse_amount(spent)
    remaining = amount - spent_amount
    percentage = float(spent_amount / amount * 100) if amount > 0 else 0.0

    level = classify_budget_usage(amount, spent_amount, warning_threshold, danger_threshold)

    if level == BudgetLevel.DANGER:
        message = f"You have exceeded your budget by {format_currency(abs(remaining))}."
    elif level == BudgetLevel.WARNING:
        message = f"You have used {format_percentage(percentage, 0)} of your budget."
    else:
        message = f"You have {format_currency(remaining)} remaining in your budget."

    return BudgetStatus(
        category=category,
        budget_amount=amount,
        spent=spent_amount,
        remaining=remaining,
        percentage=percentage,
        level=level,
        message=message,
    )


def current_month_spending(
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
) -> dict[str, Decimal]:
    """This month's expense total per category."""
    expenses = [
        t for t in current_month_transactions(transactions, today)
        if t.type == TransactionType.EXPENSE
    ]
    return {total.category: total.amount for total in category_totals(expenses)}


def evaluate_budgets(
    budgets: Sequence[Budget],
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
    warning_threshold: float = BUDGET_WARNING_THRESHOLD,
    danger_threshold: float = BUDGET_DANGER_THRESHOLD,
) -> list[BudgetStatus]:
    """Evaluate every budget against this month's spending in its category."""
    spending = current_month_spending(transactions, today)
    return [
        evaluate_budget(
            budget.amount,
            spending.get(budget.category, ZERO),
            category=budget.category,
            warning_threshold=warning_threshold,
            danger_threshold=danger_threshold,
        )
        for budget in budgets
    ]


def budget_overview(
    budgets: Sequence[Budget],
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
    warning_threshold: float = BUDGET_WARNING_THRESHOLD,
    danger_threshold: float = BUDGET_DANGER_THRESHOLD,
) -> BudgetOverview:
    """
    Budget totals for the current month.

    total_spent covers every expense this month, including categories
    that have no budget.
    """
    spending = current_month_spending(transactions, today)
    return BudgetOverview(
        total_budget=sum((parse_amount(b.amount) for b in budgets), ZERO),
        total_spent=sum(spending.values(), ZERO),
        statuses=evaluate_budgets(
            budgets,
            transactions,
            today,
            warning_threshold=warning_threshold,
            danger_threshold=danger_threshold,
        ),
    )
