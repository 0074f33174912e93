"""Savings goal progress."""

from collections.abc import Sequence
from datetime import date
from typing import Optional

from finance_tracker.analytics.aggregation import ZERO, months_between, progress_percentage
from finance_tracker.models.records import SavingsGoal
from finance_tracker.models.reports import GoalProgress, SavingsOverview


def goal_progress(goal: SavingsGoal, today: Optional[date] = None) -> GoalProgress:
    """
    Progress of one goal.

    monthly_target is what still has to be saved per remaining month;
    it is 0 once the goal is reached or the deadline month has passed.
    """
    remaining = goal.target_amount - goal.current_amount
    months_remaining = months_between(today or date.today(), goal.deadline)

    monthly_target = ZERO
    if remaining > 0 and months_remaining > 0:
        monthly_target = remaining / months_remaining

    return GoalProgress(
        goal_id=goal.id,
        percentage=progress_percentage(goal.current_amount, goal.target_amount),
        remaining=remaining,
        months_remaining=months_remaining,
        monthly_target=monthly_target,
        completed=goal.completed,
    )


def savings_overview(goals: Sequence[SavingsGoal]) -> SavingsOverview:
    """Totals across all goals. Overall progress is not capped at 100."""
    total_target = sum((g.target_amount for g in goals), ZERO)
    total_current = sum((g.current_amount for g in goals), ZERO)
    completed = sum(1 for g in goals if g.completed)

    overall = float(total_current / total_target * 100) if total_target > 0 else 0.0

    return SavingsOverview(
        total_target=total_target,
        total_current=total_current,
        completed_count=completed,
        active_count=len(goals) - completed,
        overall_progress=overall,
    )
