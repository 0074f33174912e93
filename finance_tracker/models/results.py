"""
Query, Validation and Import Result Models

Value objects passed between the engines and their callers. None of
these are persisted.
"""

from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from finance_tracker.models.records import TransactionType


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationResult(BaseModel):
    """
    Outcome of validating one draft record.

    errors maps a field name to its message. Every violated field reports
    its own message; validation never stops at the first problem.
    """

    is_valid: bool
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def message(self) -> str:
        """All messages joined into one line for display."""
        return ", ".join(self.errors.values())


# =============================================================================
# QUERY MODELS
# =============================================================================

class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TransactionFilters(BaseModel):
    """
    Optional predicates over a transaction list. All provided predicates
    must hold; blank values count as not provided.
    """

    type: Optional[TransactionType] = None
    category: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    search: Optional[str] = None

    @field_validator('type', 'category', 'start_date', 'end_date', 'search', mode='before')
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class TransactionQuery(BaseModel):
    """A full listing request: filter, then sort, then page."""

    filters: TransactionFilters = Field(default_factory=TransactionFilters)
    sort_field: str = Field(
        default="date",
        min_length=1,
        description="Field to sort on (date, amount or any text field)"
    )
    sort_direction: SortDirection = SortDirection.DESC
    page: int = Field(
        default=1,
        description="1-indexed page number"
    )
    page_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Items per page; falls back to the configured default"
    )


class Page(BaseModel):
    """One page of a larger list."""

    items: list[Any] = Field(default_factory=list)
    total_pages: int = Field(ge=0)
    current_page: int
    total_items: int = Field(ge=0)
    has_next_page: bool
    has_prev_page: bool


# =============================================================================
# IMPORT MODELS
# =============================================================================

class RowError(BaseModel):
    """A CSV row that could not be imported."""

    row_number: int = Field(
        ...,
        ge=1,
        description="1-based data row number (the header is not counted)"
    )
    message: str
    errors: dict[str, str] = Field(default_factory=dict)


class ImportReport(BaseModel):
    """Result of a best-effort CSV import."""

    imported: int = Field(default=0, ge=0)
    errors: list[RowError] = Field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
