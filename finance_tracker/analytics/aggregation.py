"""
Aggregation Engine

Pure functions computing sums, rates and groupings over transaction
lists.

GUARANTEES:
- Deterministic for a given input (and a given `today`)
- Total over empty input: zeros and empty lists, never an exception
- Tolerant of bad data: unparsable amounts count as 0, records without
  a usable date fall outside every date window

DESIGN DECISION: Functions that depend on "now" take an optional
`today` argument. Callers leave it out; tests pin it.
"""

import calendar
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from finance_tracker.formatting import format_month
from finance_tracker.models.records import Transaction, TransactionType, parse_amount
from finance_tracker.models.reports import (
    CategoryTotal,
    MonthlySummary,
    PeriodComparison,
    SummaryStats,
)


ZERO = Decimal("0")


# =============================================================================
# DATE HELPERS
# =============================================================================

def record_date(record: Any) -> Optional[date]:
    """The calendar date of a record, or None if it has no usable date."""
    value = getattr(record, "date", None)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing `day`."""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def shift_months(day: date, months: int) -> date:
    """First day of the month `months` away from the month of `day`."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def months_between(start: date, end: date) -> int:
    """
    Whole calendar months from `start` to `end`.

    Only year and month count: Jan 31 -> Feb 1 is one month, the same
    as Jan 1 -> Feb 28.
    """
    return (end.year - start.year) * 12 + (end.month - start.month)


def transactions_between(
    transactions: Iterable[Transaction],
    start: date,
    end: date,
) -> list[Transaction]:
    """Transactions dated within the closed interval [start, end]."""
    result = []
    for t in transactions:
        day = record_date(t)
        if day is not None and start <= day <= end:
            result.append(t)
    return result


def current_month_transactions(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> list[Transaction]:
    """Transactions in the calendar month containing `today`, both ends inclusive."""
    start, end = month_bounds(today or date.today())
    return transactions_between(transactions, start, end)


# =============================================================================
# TOTALS
# =============================================================================

def _total_of_type(transactions: Iterable[Transaction], kind: TransactionType) -> Decimal:
    return sum(
        (parse_amount(t.amount) for t in transactions if t.type == kind),
        ZERO,
    )


def total_income(transactions: Iterable[Transaction]) -> Decimal:
    return _total_of_type(transactions, TransactionType.INCOME)


def total_expenses(transactions: Iterable[Transaction]) -> Decimal:
    return _total_of_type(transactions, TransactionType.EXPENSE)


def balance(transactions: Sequence[Transaction]) -> Decimal:
    """Income minus expenses."""
    return total_income(transactions) - total_expenses(transactions)


def savings_rate(transactions: Sequence[Transaction]) -> float:
    """
    Percentage of income kept after expenses.

    Defined as 0 when there is no income at all.
    """
    income = total_income(transactions)
    if income == 0:
        return 0.0
    expenses = total_expenses(transactions)
    return float((income - expenses) / income * 100)


def progress_percentage(current: Any, target: Any) -> float:
    """current / target as a percentage, capped at 100; 0 for a target <= 0."""
    target_value = parse_amount(target)
    if target_value <= 0:
        return 0.0
    return min(float(parse_amount(current) / target_value * 100), 100.0)


def percent_change(current: Decimal, previous: Decimal) -> float:
    """Relative change from previous to current; 0 when previous is 0."""
    if previous <= 0:
        return 0.0
    return float((current - previous) / previous * 100)


# =============================================================================
# GROUPING
# =============================================================================

def category_totals(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    """
    Group by category in order of first appearance.

    Each group carries the summed amount, the count and the members.
    """
    groups: dict[str, CategoryTotal] = {}
    for t in transactions:
        group = groups.get(t.category)
        if group is None:
            group = groups[t.category] = CategoryTotal(category=t.category)
        group.amount += parse_amount(t.amount)
        group.count += 1
        group.transactions.append(t)
    return list(groups.values())


def monthly_trend(
    transactions: Sequence[Transaction],
    months_back: int = 6,
    today: Optional[date] = None,
) -> list[MonthlySummary]:
    """
    Income, expenses and balance for each of the trailing months.

    Oldest month first, current month last. Each month scans the full
    list on its own; months without transactions report zeros.
    """
    today = today or date.today()
    months = []

    for offset in range(months_back - 1, -1, -1):
        month_start, month_end = month_bounds(shift_months(today, -offset))
        in_month = transactions_between(transactions, month_start, month_end)

        income = total_income(in_month)
        expenses = total_expenses(in_month)
        months.append(MonthlySummary(
            month=format_month(month_start),
            month_start=month_start,
            income=income,
            expenses=expenses,
            balance=income - expenses,
        ))

    return months


# =============================================================================
# DASHBOARD FIGURES
# =============================================================================

def summary_stats(
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
) -> SummaryStats:
    """Headline numbers: all-time balance plus this month's flows."""
    this_month = current_month_transactions(transactions, today)
    monthly_income = total_income(this_month)
    monthly_expenses = total_expenses(this_month)

    return SummaryStats(
        total_balance=balance(transactions),
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        monthly_balance=monthly_income - monthly_expenses,
        savings_rate=savings_rate(this_month),
        all_time_income=total_income(transactions),
        all_time_expenses=total_expenses(transactions),
        total_transactions=len(transactions),
        monthly_transactions=len(this_month),
    )


def month_over_month(
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
) -> PeriodComparison:
    """Compare this month's income and expenses with last month's."""
    today = today or date.today()
    this_month = current_month_transactions(transactions, today)
    previous_start, previous_end = month_bounds(shift_months(today, -1))
    previous_month = transactions_between(transactions, previous_start, previous_end)

    current_income = total_income(this_month)
    current_expenses = total_expenses(this_month)
    previous_income = total_income(previous_month)
    previous_expenses = total_expenses(previous_month)

    average = ZERO
    if this_month:
        average = sum((parse_amount(t.amount) for t in this_month), ZERO) / len(this_month)

    return PeriodComparison(
        current_income=current_income,
        current_expenses=current_expenses,
        previous_income=previous_income,
        previous_expenses=previous_expenses,
        income_trend=percent_change(current_income, previous_income),
        expense_trend=percent_change(current_expenses, previous_expenses),
        category_count=len({t.category for t in this_month}),
        average_amount=average,
    )


def expense_breakdown(
    transactions: Sequence[Transaction],
    limit: int = 8,
    today: Optional[date] = None,
) -> list[CategoryTotal]:
    """This month's expense categories, largest first, top `limit` only."""
    expenses = [
        t for t in current_month_transactions(transactions, today)
        if t.type == TransactionType.EXPENSE
    ]
    totals = sorted(category_totals(expenses), key=lambda c: c.amount, reverse=True)
    return totals[:limit]


def recent_transactions(
    transactions: Sequence[Transaction],
    limit: int = 5,
) -> list[Transaction]:
    """The most recently dated transactions, newest first."""
    dated = sorted(
        transactions,
        key=lambda t: record_date(t) or date.min,
        reverse=True,
    )
    return dated[:limit]
