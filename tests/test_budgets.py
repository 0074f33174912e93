"""Tests for budget threshold evaluation and savings goal progress."""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.analytics import (
    budget_overview,
    classify_budget_usage,
    evaluate_budget,
    evaluate_budgets,
    goal_progress,
    savings_overview,
)
from finance_tracker.models import Budget, BudgetLevel, SavingsGoal, Transaction


TODAY = date(2024, 5, 20)


def expense(amount, category, day=TODAY):
    return Transaction(
        type="expense",
        amount=Decimal(str(amount)),
        description="Spend",
        category=category,
        date=day,
    )


class TestBudgetClassification:
    """Tests for the ok / warning / danger thresholds."""

    def test_warning_at_85_percent(self):
        """Test a Food budget of 100 with 85 spent."""
        status = evaluate_budget(100, 85, category="Food")
        assert status.level == BudgetLevel.WARNING
        assert status.remaining == Decimal("15")
        assert status.percentage == pytest.approx(85.0)

    def test_danger_at_exactly_100_percent(self):
        """Test that spending the whole budget is danger."""
        status = evaluate_budget(100, 100)
        assert status.level == BudgetLevel.DANGER
        assert status.remaining == Decimal("0")

    def test_boundaries(self):
        """Test the inclusive lower bound of each level."""
        assert classify_budget_usage(Decimal("100"), Decimal("79.99")) == BudgetLevel.OK
        assert classify_budget_usage(Decimal("100"), Decimal("80")) == BudgetLevel.WARNING
        assert classify_budget_usage(Decimal("100"), Decimal("99.99")) == BudgetLevel.WARNING
        assert classify_budget_usage(Decimal("100"), Decimal("100")) == BudgetLevel.DANGER

    def test_remaining_goes_negative(self):
        """Test overspending."""
        status = evaluate_budget(200, 250)
        assert status.level == BudgetLevel.DANGER
        assert status.remaining == Decimal("-50")

    def test_zero_budget(self):
        """Test that a zero budget reports 0 % and ok."""
        status = evaluate_budget(0, 40)
        assert status.percentage == 0
        assert status.level == BudgetLevel.OK
        assert status.remaining == Decimal("-40")

    def test_custom_thresholds(self):
        """Test overriding the warning threshold."""
        status = evaluate_budget(100, 60, warning_threshold=0.5)
        assert status.level == BudgetLevel.WARNING


class TestBudgetMessages:
    """Tests for the per-level status messages."""

    def test_ok_message(self):
        """Test remaining amount message."""
        assert evaluate_budget(500, 100).message == "You have $400.00 remaining in your budget."

    def test_warning_message(self):
        """Test usage percentage message."""
        assert evaluate_budget(500, 450).message == "You have used 90% of your budget."

    def test_danger_message(self):
        """Test exceeded-by message."""
        assert evaluate_budget(500, 550).message == "You have exceeded your budget by $50.00."


class TestBudgetEvaluation:
    """Tests for evaluating budgets against this month's spending."""

    def test_only_current_month_expenses_count(self):
        """Test that last month's spending and income are ignored."""
        budgets = [Budget(category="Food", amount=100)]
        txns = [
            expense(50, "Food"),
            expense(40, "Food", date(2024, 4, 30)),
            Transaction(type="income", amount=500, description="Refund", category="Food", date=TODAY),
        ]
        [status] = evaluate_budgets(budgets, txns, TODAY)
        assert status.spent == Decimal("50")
        assert status.level == BudgetLevel.OK

    def test_budget_without_spending(self):
        """Test a budgeted category with nothing spent."""
        [status] = evaluate_budgets([Budget(category="Travel", amount=300)], [], TODAY)
        assert status.spent == Decimal("0")
        assert status.remaining == Decimal("300")

    def test_overview(self):
        """Test totals and alerts."""
        budgets = [
            Budget(category="Food", amount=100),
            Budget(category="Shopping", amount=200),
        ]
        txns = [
            expense(90, "Food"),
            expense(20, "Shopping"),
            expense(15, "Healthcare"),
        ]
        overview = budget_overview(budgets, txns, TODAY)
        assert overview.total_budget == Decimal("300")
        assert overview.total_spent == Decimal("125")
        assert overview.total_remaining == Decimal("175")
        assert [s.category for s in overview.alerts] == ["Food"]


class TestSavingsProgress:
    """Tests for savings goal progress figures."""

    def test_goal_progress(self):
        """Test percentage, remaining and monthly target."""
        goal = SavingsGoal(
            name="Laptop",
            target_amount=1200,
            current_amount=300,
            deadline=date(2024, 11, 1),
        )
        progress = goal_progress(goal, TODAY)
        assert progress.percentage == pytest.approx(25.0)
        assert progress.remaining == Decimal("900")
        assert progress.months_remaining == 6
        assert progress.monthly_target == Decimal("150")
        assert not progress.completed

    def test_completed_goal(self):
        """Test a goal past its target."""
        goal = SavingsGoal(name="Bike", target_amount=500, current_amount=510, deadline=date(2024, 9, 1))
        progress = goal_progress(goal, TODAY)
        assert progress.completed
        assert progress.percentage == 100
        assert progress.monthly_target == Decimal("0")

    def test_deadline_passed(self):
        """Test that an overdue goal has no monthly target."""
        goal = SavingsGoal(name="Late", target_amount=100, deadline=date(2024, 3, 1))
        progress = goal_progress(goal, TODAY)
        assert progress.months_remaining == -2
        assert progress.monthly_target == Decimal("0")

    def test_savings_overview(self):
        """Test totals across goals."""
        goals = [
            SavingsGoal(name="A", target_amount=100, current_amount=100, deadline=TODAY),
            SavingsGoal(name="B", target_amount=300, current_amount=100, deadline=TODAY),
        ]
        overview = savings_overview(goals)
        assert overview.total_target == Decimal("400")
        assert overview.total_current == Decimal("200")
        assert overview.completed_count == 1
        assert overview.active_count == 1
        assert overview.overall_progress == pytest.approx(50.0)

    def test_savings_overview_empty(self):
        """Test no goals."""
        overview = savings_overview([])
        assert overview.overall_progress == 0
        assert overview.completed_count == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
