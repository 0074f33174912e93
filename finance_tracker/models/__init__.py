"""
Data Models Package

This package contains all Pydantic models used in the finance tracker.
All data flowing through the system must conform to these schemas.
"""

from finance_tracker.models.records import (
    DEFAULT_CATEGORIES,
    MAX_DESCRIPTION_LENGTH,
    Budget,
    SavingsGoal,
    Transaction,
    TransactionType,
    generate_id,
    parse_amount,
    parse_number,
)
from finance_tracker.models.results import (
    ImportReport,
    Page,
    RowError,
    SortDirection,
    TransactionFilters,
    TransactionQuery,
    ValidationResult,
)
from finance_tracker.models.reports import (
    AnalyticsView,
    BudgetLevel,
    BudgetOverview,
    BudgetStatus,
    CategoryTotal,
    DashboardView,
    GoalProgress,
    MonthlySummary,
    PeriodComparison,
    SavingsOverview,
    SavingsView,
    SummaryStats,
)
from finance_tracker.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Records
    "DEFAULT_CATEGORIES",
    "MAX_DESCRIPTION_LENGTH",
    "Budget",
    "SavingsGoal",
    "Transaction",
    "TransactionType",
    "generate_id",
    "parse_amount",
    "parse_number",
    # Results
    "ImportReport",
    "Page",
    "RowError",
    "SortDirection",
    "TransactionFilters",
    "TransactionQuery",
    "ValidationResult",
    # Reports
    "AnalyticsView",
    "BudgetLevel",
    "BudgetOverview",
    "BudgetStatus",
    "CategoryTotal",
    "DashboardView",
    "GoalProgress",
    "MonthlySummary",
    "PeriodComparison",
    "SavingsOverview",
    "SavingsView",
    "SummaryStats",
    # Activity
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
