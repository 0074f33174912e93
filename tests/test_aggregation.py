"""Tests for the aggregation engine."""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.analytics import (
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
from finance_tracker.models import Transaction


TODAY = date(2024, 5, 20)


def txn(kind, amount, day, category="General", description="Item"):
    return Transaction(
        type=kind,
        amount=Decimal(str(amount)),
        description=description,
        category=category,
        date=day,
    )


def sample_transactions():
    return [
        txn("income", 3000, date(2024, 5, 1), "Salary"),
        txn("expense", 120, date(2024, 5, 3), "Food"),
        txn("expense", 80, date(2024, 5, 31), "Transportation"),
        txn("expense", 30, date(2024, 5, 12), "Food"),
        txn("income", 2500, date(2024, 4, 1), "Salary"),
        txn("expense", 200, date(2024, 4, 30), "Food"),
        txn("expense", 60, date(2024, 6, 1), "Food"),
    ]


class TestTotals:
    """Tests for income, expense and balance totals."""

    def test_income_minus_expenses(self):
        """Test balance with income of 1000 and expenses of 400."""
        txns = [
            txn("income", 1000, date(2024, 5, 1)),
            txn("expense", 400, date(2024, 5, 15)),
        ]
        assert balance(txns) == Decimal("600")
        assert savings_rate(txns) == pytest.approx(60.0)

    def test_balance_is_income_minus_expenses(self):
        """Test the balance identity on a mixed list."""
        txns = sample_transactions()
        assert balance(txns) == total_income(txns) - total_expenses(txns)
        assert total_income(txns) == Decimal("5500")
        assert total_expenses(txns) == Decimal("490")

    def test_empty_list(self):
        """Test totals over nothing."""
        assert total_income([]) == Decimal("0")
        assert total_expenses([]) == Decimal("0")
        assert balance([]) == Decimal("0")

    def test_savings_rate_without_income(self):
        """Test that no income gives a 0 rate instead of an error."""
        assert savings_rate([]) == 0
        assert savings_rate([txn("expense", 50, date(2024, 5, 2))]) == 0

    def test_negative_savings_rate(self):
        """Test spending more than earned."""
        txns = [txn("income", 100, TODAY), txn("expense", 150, TODAY)]
        assert savings_rate(txns) == pytest.approx(-50.0)


class TestCurrentMonth:
    """Tests for the current calendar month window."""

    def test_inclusive_month_bounds(self):
        """Test that the first and last day of the month are included."""
        current = current_month_transactions(sample_transactions(), TODAY)
        days = sorted(t.date for t in current)
        assert days[0] == date(2024, 5, 1)
        assert days[-1] == date(2024, 5, 31)
        assert len(current) == 4

    def test_excludes_neighbouring_months(self):
        """Test April 30 and June 1 fall outside May."""
        current = current_month_transactions(sample_transactions(), TODAY)
        assert all(t.date.month == 5 for t in current)


class TestProgressPercentage:
    """Tests for goal-style progress percentages."""

    def test_capped_at_100(self):
        """Test current above target."""
        assert progress_percentage(750, 500) == 100
        assert progress_percentage(500, 500) == 100

    def test_zero_target(self):
        """Test that a zero target gives 0 for any current value."""
        for current in (0, 10, 1000):
            assert progress_percentage(current, 0) == 0

    def test_monotonic(self):
        """Test that progress never decreases as current grows."""
        values = [progress_percentage(current, 200) for current in range(0, 400, 25)]
        assert values == sorted(values)
        assert progress_percentage(50, 200) == pytest.approx(25.0)


class TestMonthsBetween:
    """Tests for whole calendar month differences."""

    def test_day_of_month_ignored(self):
        """Test Jan 31 to Feb 1 counts as one month."""
        assert months_between(date(2024, 1, 31), date(2024, 2, 1)) == 1

    def test_across_years(self):
        """Test a span crossing a year boundary."""
        assert months_between(date(2023, 11, 15), date(2024, 2, 1)) == 3

    def test_past_deadline(self):
        """Test a deadline before the start date."""
        assert months_between(date(2024, 5, 1), date(2024, 3, 1)) == -2


class TestGrouping:
    """Tests for category grouping and breakdowns."""

    def test_category_totals(self):
        """Test grouping keeps first-appearance order."""
        totals = category_totals(sample_transactions())
        assert [t.category for t in totals] == ["Salary", "Food", "Transportation"]

        food = totals[1]
        assert food.amount == Decimal("410")
        assert food.count == 4
        assert len(food.transactions) == 4

    def test_expense_breakdown(self):
        """Test this month's expenses, largest first."""
        breakdown = expense_breakdown(sample_transactions(), today=TODAY)
        assert [(c.category, c.amount) for c in breakdown] == [
            ("Food", Decimal("150")),
            ("Transportation", Decimal("80")),
        ]

    def test_expense_breakdown_limit(self):
        """Test that only the top categories are returned."""
        txns = [txn("expense", i + 1, TODAY, f"Cat {i}") for i in range(10)]
        breakdown = expense_breakdown(txns, limit=3, today=TODAY)
        assert [c.category for c in breakdown] == ["Cat 9", "Cat 8", "Cat 7"]


class TestMonthlyTrend:
    """Tests for the trailing monthly trend."""

    def test_six_months_oldest_first(self):
        """Test labels and ordering."""
        trend = monthly_trend(sample_transactions(), today=TODAY)
        assert [m.month for m in trend] == [
            "Dec 2023", "Jan 2024", "Feb 2024", "Mar 2024", "Apr 2024", "May 2024",
        ]

    def test_month_figures(self):
        """Test income, expenses and balance per month."""
        trend = monthly_trend(sample_transactions(), today=TODAY)
        april, may = trend[-2], trend[-1]
        assert april.income == Decimal("2500")
        assert april.expenses == Decimal("200")
        assert may.balance == Decimal("2770")
        assert trend[0].income == Decimal("0")

    def test_custom_length(self):
        """Test a three month trend."""
        assert len(monthly_trend([], months_back=3, today=TODAY)) == 3


class TestDashboardFigures:
    """Tests for summary stats and month-over-month comparison."""

    def test_summary_stats(self):
        """Test headline numbers."""
        stats = summary_stats(sample_transactions(), TODAY)
        assert stats.total_balance == Decimal("5010")
        assert stats.monthly_income == Decimal("3000")
        assert stats.monthly_expenses == Decimal("230")
        assert stats.monthly_balance == Decimal("2770")
        assert stats.total_transactions == 7
        assert stats.monthly_transactions == 4

    def test_summary_stats_empty(self):
        """Test an empty list gives zeros."""
        stats = summary_stats([], TODAY)
        assert stats.total_balance == Decimal("0")
        assert stats.savings_rate == 0

    def test_month_over_month(self):
        """Test trends against the previous month."""
        comparison = month_over_month(sample_transactions(), TODAY)
        assert comparison.previous_income == Decimal("2500")
        assert comparison.previous_expenses == Decimal("200")
        assert comparison.income_trend == pytest.approx(20.0)
        assert comparison.expense_trend == pytest.approx(15.0)
        assert comparison.category_count == 3

    def test_trend_without_previous_month(self):
        """Test that no previous data gives a 0 trend."""
        comparison = month_over_month([txn("income", 100, TODAY)], TODAY)
        assert comparison.income_trend == 0

    def test_recent_transactions(self):
        """Test newest-dated first."""
        recent = recent_transactions(sample_transactions(), limit=2)
        assert [t.date for t in recent] == [date(2024, 6, 1), date(2024, 5, 31)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
