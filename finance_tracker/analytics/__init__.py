"""Aggregation, budget and savings analytics."""

from finance_tracker.analytics.aggregation import (
    balance,
    category_totals,
    current_month_transactions,
    expense_breakdown,
    month_over_month,
    monthly_trend,
    months_between,
    progress_percentage,
    recent_transactions,
    savings_rate,
    summary_stats,
    total_expenses,
    total_income,
)
from finance_tracker.analytics.budgets import (
    budget_overview,
    classify_budget_usage,
    evaluate_budget,
    evaluate_budgets,
)
from finance_tracker.analytics.savings import goal_progress, savings_overview

__all__ = [
    "balance",
    "budget_overview",
    "category_totals",
    "classify_budget_usage",
    "current_month_transactions",
    "evaluate_budget",
    "evaluate_budgets",
    "expense_breakdown",
    "goal_progress",
    "month_over_month",
    "monthly_trend",
    "months_between",
    "progress_percentage",
    "recent_transactions",
    "savings_overview",
    "savings_rate",
    "summary_stats",
    "total_expenses",
    "total_income",
]
