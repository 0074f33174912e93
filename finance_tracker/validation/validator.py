"""
Record Validation

DESIGN DECISION: Drafts (raw form values, CSV rows) are validated here
BEFORE any record model is built. Every rule is checked independently,
so one pass reports every problem with the draft instead of just the
first one.

IMPORTANT: Validation NEVER fixes values. It reports them, and the
caller rejects the whole mutation. A record is never partially admitted.

Amounts are read by leading number for every record kind, so
"100 USD" counts as 100 and "lots" as no number at all.
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from finance_tracker.errors import FinanceTrackerError
from finance_tracker.models.records import MAX_DESCRIPTION_LENGTH, parse_number
from finance_tracker.models.results import ValidationResult


class ValidationError(FinanceTrackerError):
    """
    A draft record failed its field constraints.

    Carries the field -> message mapping; str(error) is the messages
    joined for display.
    """

    def __init__(self, errors: Mapping[str, str]):
        self.errors = dict(errors)
        super().__init__(", ".join(self.errors.values()) or "Invalid record")

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationError":
        return cls(result.errors)

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        """Translate a model construction failure into field messages."""
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "record"
            errors.setdefault(field, error["msg"])
        return cls(errors)


def _get(data: Mapping[str, Any], *names: str) -> Any:
    """First present value among snake_case / camelCase spellings."""
    for name in names:
        if name in data:
            return data[name]
    return None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class RecordValidator:
    """
    Validates draft transactions, budgets and savings goals.

    Each validate_* method is pure and returns a ValidationResult.
    """

    def __init__(self, max_description_length: int = MAX_DESCRIPTION_LENGTH):
        self._max_description_length = max_description_length

    def validate_transaction(self, data: Mapping[str, Any]) -> ValidationResult:
        """
        Check a transaction draft.

        Checks:
        - amount present and > 0
        - description present (after trimming) and not too long
        - category, type and date present

        The type is not checked against income/expense here and the date
        format is not checked either; the model rejects those later.
        """
        errors: dict[str, str] = {}

        amount = parse_number(data.get("amount"))
        if amount is None or amount <= 0:
            errors["amount"] = "Amount must be greater than 0"

        description = data.get("description")
        if _is_blank(description):
            errors["description"] = "Description is required"
        elif len(str(description)) > self._max_description_length:
            errors["description"] = (
                f"Description must be {self._max_description_length} characters or less"
            )

        if _is_blank(data.get("category")):
            errors["category"] = "Category is required"

        if _is_blank(data.get("type")):
            errors["type"] = "Type is required"

        if _is_blank(data.get("date")):
            errors["date"] = "Date is required"

        return ValidationResult(is_valid=not errors, errors=errors)

    def validate_budget(self, category: Optional[str], amount: Any) -> ValidationResult:
        """Check a budget before it is set. Zero is a valid budget."""
        errors: dict[str, str] = {}

        if _is_blank(category):
            errors["category"] = "Category is required"
        elif not isinstance(category, str):
            errors["category"] = "Category must be text"

        value = parse_number(amount)
        if _is_blank(amount):
            errors["amount"] = "Budget amount is required"
        elif value is None or value < 0:
            errors["amount"] = "Budget amount must be a number of 0 or more"

        return ValidationResult(is_valid=not errors, errors=errors)

    def validate_savings_goal(self, data: Mapping[str, Any]) -> ValidationResult:
        """Check a savings goal draft."""
        errors: dict[str, str] = {}

        if _is_blank(data.get("name")):
            errors["name"] = "Name is required"

        target = _get(data, "target_amount", "targetAmount")
        if _is_blank(target):
            errors["target_amount"] = "Target amount is required"
        elif (parse_number(target) or 0) <= 0:
            errors["target_amount"] = "Target amount must be greater than 0"

        current = _get(data, "current_amount", "currentAmount")
        if (parse_number(current) or 0) < 0:
            errors["current_amount"] = "Current amount cannot be negative"

        if _is_blank(data.get("deadline")):
            errors["deadline"] = "Deadline is required"

        return ValidationResult(is_valid=not errors, errors=errors)


_default_validator = RecordValidator()


def validate_transaction(data: Mapping[str, Any]) -> ValidationResult:
    """Validate a transaction draft with the default rules."""
    return _default_validator.validate_transaction(data)
