"""
Derived Report Models

Everything the dashboards show is recomputed from the record lists on
demand. These models carry those results; they are never stored.
"""

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from finance_tracker.models.records import Transaction


class CategoryTotal(BaseModel):
    """Sum and count of the transactions in one category."""

    category: str
    amount: Decimal = Decimal("0")
    count: int = Field(default=0, ge=0)
    transactions: list[Transaction] = Field(default_factory=list)


class MonthlySummary(BaseModel):
    """Income, expenses and balance for one calendar month."""

    month: str = Field(..., description="Display label, e.g. 'May 2024'")
    month_start: date
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")


class SummaryStats(BaseModel):
    """Headline numbers for the dashboard."""

    total_balance: Decimal = Decimal("0")
    monthly_income: Decimal = Decimal("0")
    monthly_expenses: Decimal = Decimal("0")
    monthly_balance: Decimal = Decimal("0")
    savings_rate: float = 0.0
    all_time_income: Decimal = Decimal("0")
    all_time_expenses: Decimal = Decimal("0")
    total_transactions: int = 0
    monthly_transactions: int = 0


class PeriodComparison(BaseModel):
    """
    Current month against the previous one.

    Trends are percent changes; they are 0 when the previous month has
    nothing to compare against.
    """

    current_income: Decimal = Decimal("0")
    current_expenses: Decimal = Decimal("0")
    previous_income: Decimal = Decimal("0")
    previous_expenses: Decimal = Decimal("0")
    income_trend: float = 0.0
    expense_trend: float = 0.0
    category_count: int = 0
    average_amount: Decimal = Decimal("0")


class BudgetLevel(str, Enum):
    """Alert level of a budget for the current month."""
    OK = "ok"
    WARNING = "warning"
    DANGER = "danger"


class BudgetStatus(BaseModel):
    """Threshold evaluation of one budget against what was spent."""

    category: str = ""
    budget_amount: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: float
    level: BudgetLevel
    message: str = ""


class BudgetOverview(BaseModel):
    """All budgets for the current month."""

    total_budget: Decimal = Decimal("0")
    total_spent: Decimal = Decimal("0")
    statuses: list[BudgetStatus] = Field(default_factory=list)

    @property
    def total_remaining(self) -> Decimal:
        return self.total_budget - self.total_spent

    @property
    def alerts(self) -> list[BudgetStatus]:
        """Budgets that are at warning or danger level."""
        return [s for s in self.statuses if s.level != BudgetLevel.OK]


class GoalProgress(BaseModel):
    """Progress figures for one savings goal."""

    goal_id: str
    percentage: float
    remaining: Decimal
    months_remaining: int
    monthly_target: Decimal
    completed: bool


class SavingsOverview(BaseModel):
    """Totals across all savings goals."""

    total_target: Decimal = Decimal("0")
    total_current: Decimal = Decimal("0")
    completed_count: int = 0
    active_count: int = 0
    overall_progress: float = 0.0


# =============================================================================
# SCREEN VIEWS
# =============================================================================

class DashboardView(BaseModel):
    """Headline numbers plus the latest transactions."""

    summary: SummaryStats
    recent: list[Transaction] = Field(default_factory=list)


class AnalyticsView(BaseModel):
    """Trend, comparison and breakdown figures for the analytics screen."""

    monthly_trend: list[MonthlySummary] = Field(default_factory=list)
    comparison: PeriodComparison
    expense_breakdown: list[CategoryTotal] = Field(default_factory=list)
    category_totals: list[CategoryTotal] = Field(default_factory=list)


class SavingsView(BaseModel):
    """Savings totals plus progress for each goal, keyed by goal id."""

    overview: SavingsOverview
    progress: dict[str, GoalProgress] = Field(default_factory=dict)
