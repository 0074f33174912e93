"""Transaction listing package."""

from finance_tracker.queries.engine import (
    derive_view,
    filter_transactions,
    paginate,
    sort_transactions,
)

__all__ = ["derive_view", "filter_transactions", "paginate", "sort_transactions"]
