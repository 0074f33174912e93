"""
Transaction Listing Engine

Filter -> sort -> paginate, as plain functions over a transaction list.

DESIGN DECISION: The listing is DERIVED on demand by derive_view().
Nothing caches a filtered or paged copy; the caller asks again
whenever the transactions, filters, sort or page change.

All functions are pure and never fail on bad record data. The only
exception raised is ValueError for a page size below 1, which is a
programming error rather than bad data.
"""

import math
from collections.abc import Callable, Sequence
from datetime import date
from enum import Enum
from typing import Any, Optional, TypeVar, Union

from finance_tracker.analytics.aggregation import record_date
from finance_tracker.config import get_settings
from finance_tracker.models.records import Transaction, parse_amount
from finance_tracker.models.results import (
    Page,
    SortDirection,
    TransactionFilters,
    TransactionQuery,
)


T = TypeVar("T")


def _matches(transaction: Transaction, filters: TransactionFilters) -> bool:
    if filters.type is not None and transaction.type != filters.type:
        return False

    if filters.category is not None and transaction.category != filters.category:
        return False

    if filters.start_date is not None or filters.end_date is not None:
        day = record_date(transaction)
        if day is None:
            return False
        if filters.start_date is not None and day < filters.start_date:
            return False
        if filters.end_date is not None and day > filters.end_date:
            return False

    if filters.search is not None:
        description = transaction.description or ""
        if filters.search.lower() not in description.lower():
            return False

    return True


def filter_transactions(
    transactions: Sequence[Transaction],
    filters: Optional[TransactionFilters] = None,
) -> list[Transaction]:
    """
    Keep the transactions matching every provided filter.

    - type / category: exact match
    - start_date / end_date: inclusive bounds on the transaction date
    - search: case-insensitive substring of the description only
    """
    if filters is None:
        return list(transactions)
    return [t for t in transactions if _matches(t, filters)]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    return str(value).lower()


def _sort_key(field: str) -> Callable[[Transaction], Any]:
    if field == "date":
        return lambda t: record_date(t) or date.min
    if field == "amount":
        return lambda t: parse_amount(getattr(t, "amount", None))
    return lambda t: _text(getattr(t, field, None))


def sort_transactions(
    transactions: Sequence[Transaction],
    field: str = "date",
    direction: Union[SortDirection, str] = SortDirection.DESC,
) -> list[Transaction]:
    """
    Sort a copy of the list.

    date compares as dates, amount as numbers, any other field as
    case-insensitive text. Ties keep their input order.
    """
    descending = SortDirection(direction) == SortDirection.DESC
    return sorted(transactions, key=_sort_key(field), reverse=descending)


def paginate(items: Sequence[T], page: int, page_size: int) -> Page:
    """
    Slice out one 1-indexed page.

    Pages outside 1..total_pages give an empty item list, not an error.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")

    total_items = len(items)
    total_pages = math.ceil(total_items / page_size)

    window: list = []
    if page >= 1:
        start = (page - 1) * page_size
        window = list(items[start:start + page_size])

    return Page(
        items=window,
        total_pages=total_pages,
        current_page=page,
        total_items=total_items,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def derive_view(
    transactions: Sequence[Transaction],
    query: Optional[TransactionQuery] = None,
    default_page_size: Optional[int] = None,
) -> Page:
    """Run the full listing pipeline for one request."""
    query = query or TransactionQuery()
    page_size = (
        query.page_size
        or default_page_size
        or get_settings().app.items_per_page
    )

    filtered = filter_transactions(transactions, query.filters)
    ordered = sort_transactions(filtered, query.sort_field, query.sort_direction)
    return paginate(ordered, query.page, page_size)
