"""
Core Record Models for the Finance Tracker

These models define the strict schemas for the three persisted record
kinds: transactions, budgets and savings goals.

DESIGN DECISION: Records serialize with camelCase keys so a stored
snapshot keeps the same shape as the browser dashboard wrote it
(createdAt, targetAmount, ...). Both camelCase and snake_case are
accepted on input.

DESIGN DECISION: Amounts are Decimal. Sums of money never pass
through binary floating point until they are turned into percentages.
"""

import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
)
from pydantic.alias_generators import to_camel


MAX_DESCRIPTION_LENGTH = 100

# Leading numeric prefix, e.g. "12.50 USD" -> "12.50"
_NUMBER_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_number(value: Any) -> Optional[Decimal]:
    """
    Read a raw amount as Decimal, or None when it holds no number.

    Strings are read up to the first non-numeric character, so
    "12.50 USD" is 12.50. Missing, boolean, NaN and infinite values
    are None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        return value if value.is_finite() else None

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return Decimal(str(value))

    match = _NUMBER_PREFIX.match(str(value).strip())
    if not match:
        return None
    try:
        parsed = Decimal(match.group(0))
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def parse_amount(value: Any) -> Decimal:
    """Coerce a raw amount to Decimal, never failing. No number counts as zero."""
    parsed = parse_number(value)
    return parsed if parsed is not None else Decimal("0")


def generate_id() -> str:
    """Opaque record identifier."""
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money flow for a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


DEFAULT_CATEGORIES: dict[TransactionType, list[str]] = {
    TransactionType.EXPENSE: [
        "Food & Dining",
        "Transportation",
        "Shopping",
        "Entertainment",
        "Bills & Utilities",
        "Healthcare",
        "Education",
        "Travel",
    ],
    TransactionType.INCOME: [
        "Salary",
        "Freelance",
        "Investment",
        "Business",
        "Gift",
        "Other",
    ],
}


# =============================================================================
# BASE
# =============================================================================

class RecordModel(BaseModel):
    """Shared configuration for persisted records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def to_storage(self) -> dict:
        """Dump to a JSON-compatible dict using the stored key names."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# RECORDS
# =============================================================================

class Transaction(RecordModel):
    """
    A single dated income or expense record.

    The id and both timestamps are assigned when the transaction is added;
    updated_at is refreshed on every update.
    """

    id: str = Field(
        default_factory=generate_id,
        description="Opaque transaction identifier"
    )
    type: TransactionType = Field(
        ...,
        description="income or expense"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Transaction amount, always positive"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="Short free-text description"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category name"
    )
    date: date
    created_at: datetime = Field(
        default_factory=utcnow,
        description="When the transaction was added"
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        description="Last update timestamp"
    )

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class Budget(RecordModel):
    """
    A monthly spending cap for one category.

    Category is the dedup key: there is at most one budget per category.
    """

    id: str = Field(
        default_factory=generate_id,
        description="Opaque budget identifier"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category this budget applies to (unique)"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Monthly budget amount"
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        description="Last time the amount was set"
    )


class SavingsGoal(RecordModel):
    """
    A target amount to accumulate by a deadline.

    DESIGN DECISION: completed is derived from the amounts on every read
    rather than stored, so it can never disagree with them. A completed
    flag found in an old snapshot is ignored on load.
    """

    id: str = Field(
        default_factory=generate_id,
        description="Opaque goal identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Goal name"
    )
    target_amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount to reach"
    )
    current_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Amount saved so far"
    )
    deadline: date = Field(
        ...,
        description="Date the goal should be reached by"
    )
    created_at: datetime = Field(
        default_factory=utcnow
    )
    updated_at: datetime = Field(
        default_factory=utcnow
    )

    @computed_field
    @property
    def completed(self) -> bool:
        return self.current_amount >= self.target_amount

    @property
    def remaining_amount(self) -> Decimal:
        return self.target_amount - self.current_amount
