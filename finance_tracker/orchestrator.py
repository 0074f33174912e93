"""
Main Orchestrator for the Finance Tracker

This module ties the stores and the analytics together and defines
what each screen gets:
1. Dashboard (summary stats → recent transactions)
2. Transactions (filter → sort → paginate)
3. Budgets (current-month spending per budgeted category)
4. Savings (totals → per-goal progress)
5. Analytics (trend → month-over-month → expense breakdown)

DESIGN DECISION: Nothing shown on a screen is stored. Every figure is
recomputed from the record lists on each call, so a view can never
drift from the records it describes.

Every date-dependent view takes an optional `today`; leaving it out
means the local current date.
"""

from datetime import date
from typing import Optional

from finance_tracker.analytics import (
    budget_overview,
    category_totals,
    current_month_transactions,
    expense_breakdown,
    goal_progress,
    month_over_month,
    monthly_trend,
    recent_transactions,
    savings_overview,
    summary_stats,
)
from finance_tracker.audit import ActivityLogger, configure_logging
from finance_tracker.config import AppSettings, StorageSettings, get_settings
from finance_tracker.models.reports import (
    AnalyticsView,
    BudgetOverview,
    DashboardView,
    SavingsView,
)
from finance_tracker.models.results import Page, TransactionQuery
from finance_tracker.services.storage import JsonFileStorage, KeyValueStorage
from finance_tracker.stores import BudgetStore, SavingsGoalStore, TransactionStore
from finance_tracker.validation import RecordValidator


class FinanceTracker:
    """
    One user's transactions, budgets and savings goals.

    The three stores share one storage backend and one activity log.
    Mutations go through the stores directly:

        tracker.transactions.add({...})
        tracker.budgets.set_budget("Food", 300)
        tracker.goals.add_amount(goal_id, 50)
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        app_settings: Optional[AppSettings] = None,
        storage_settings: Optional[StorageSettings] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        settings = get_settings()
        self._app = app_settings or settings.app
        keys = storage_settings or settings.storage
        self._activity = activity_logger or ActivityLogger()
        validator = RecordValidator()

        self.transactions = TransactionStore(
            storage, keys.transactions_key, self._activity, validator
        )
        self.budgets = BudgetStore(
            storage, keys.budgets_key, self._activity, validator
        )
        self.goals = SavingsGoalStore(
            storage, keys.savings_goals_key, self._activity, validator
        )

    @property
    def activity(self) -> ActivityLogger:
        return self._activity

    def reload(self) -> None:
        """Re-read all three collections from storage."""
        self.transactions.load()
        self.budgets.load()
        self.goals.load()

    # =========================================================================
    # VIEWS
    # =========================================================================

    def dashboard(self, today: Optional[date] = None) -> DashboardView:
        records = self.transactions.all()
        return DashboardView(
            summary=summary_stats(records, today),
            recent=recent_transactions(records, self._app.recent_transactions_limit),
        )

    def transaction_view(self, query: Optional[TransactionQuery] = None) -> Page:
        return self.transactions.view(query, self._app.items_per_page)

    def budget_overview(self, today: Optional[date] = None) -> BudgetOverview:
        return budget_overview(
            self.budgets.all(),
            self.transactions.all(),
            today,
            warning_threshold=self._app.budget_warning_threshold,
            danger_threshold=self._app.budget_danger_threshold,
        )

    def savings_overview(self, today: Optional[date] = None) -> SavingsView:
        goals = self.goals.all()
        return SavingsView(
            overview=savings_overview(goals),
            progress={goal.id: goal_progress(goal, today) for goal in goals},
        )

    def analytics(self, today: Optional[date] = None) -> AnalyticsView:
        records = self.transactions.all()
        return AnalyticsView(
            monthly_trend=monthly_trend(records, self._app.trend_months, today),
            comparison=month_over_month(records, today),
            expense_breakdown=expense_breakdown(
                records, self._app.expense_breakdown_limit, today
            ),
            category_totals=category_totals(current_month_transactions(records, today)),
        )


def create_app_components(
    storage: Optional[KeyValueStorage] = None,
) -> FinanceTracker:
    """
    Factory function to create the tracker from settings.

    Args:
        storage: Storage backend to use. Defaults to JSON files under
                 the configured data directory.
    """
    settings = get_settings()
    configure_logging(settings.app.log_level, settings.app.debug_mode)

    if storage is None:
        storage = JsonFileStorage(settings.storage.data_dir)

    return FinanceTracker(
        storage,
        app_settings=settings.app,
        storage_settings=settings.storage,
    )
