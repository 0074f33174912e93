"""
Display formatting helpers.

Used for budget alert messages and monthly trend labels.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Union

from finance_tracker.config import get_settings
from finance_tracker.models.records import parse_amount


DISPLAY_DATE_FORMAT = "%b %d, %Y"
MONTH_YEAR_FORMAT = "%b %Y"

_CENTS = Decimal("0.01")


def format_currency(amount: Any, symbol: Optional[str] = None) -> str:
    """Format an amount as e.g. '$1,234.50' or '-$12.00'."""
    if symbol is None:
        symbol = get_settings().app.currency_symbol
    value = parse_amount(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percentage(value: Union[float, Decimal], decimals: int = 1) -> str:
    return f"{float(value):.{decimals}f}%"


def format_date(value: Union[date, datetime, str, None], fmt: str = DISPLAY_DATE_FORMAT) -> str:
    """
    Format a date for display.

    Accepts date objects or ISO strings. Missing or unparsable input
    gives an empty string.
    """
    if not value:
        return ""

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return ""

    return value.strftime(fmt)


def format_month(value: date) -> str:
    """Month label, e.g. 'May 2024'."""
    return value.strftime(MONTH_YEAR_FORMAT)
