"""Record validation package."""

from finance_tracker.validation.validator import (
    RecordValidator,
    ValidationError,
    validate_transaction,
)

__all__ = ["RecordValidator", "ValidationError", "validate_transaction"]
