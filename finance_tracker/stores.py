"""
Record Collection Stores

Each store owns one in-memory collection (transactions, budgets or
savings goals) and its persisted snapshot.

Lifecycle:
1. Construct with a KeyValueStorage → snapshot loaded (absent key = empty)
2. Mutate through the store → draft validated, collection updated
3. After every successful mutation → whole collection written back

DESIGN DECISION: Persisting is best-effort. A failed write is logged
and swallowed, never retried and never raised; the in-memory
collection stays authoritative for the session. Validation failures,
on the other hand, are raised to the caller as ValidationError and
leave the collection untouched.

Updating or deleting an id that does not exist is a silent no-op.
"""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from finance_tracker.analytics.aggregation import ZERO, summary_stats
from finance_tracker.audit import ActivityLogger
from finance_tracker.models.activity import ActivityEventBuilder
from finance_tracker.models.records import (
    Budget,
    RecordModel,
    SavingsGoal,
    Transaction,
    parse_amount,
    utcnow,
)
from finance_tracker.models.reports import SummaryStats
from finance_tracker.models.results import ImportReport, Page, RowError, TransactionQuery
from finance_tracker.queries import derive_view
from finance_tracker.services.csv_io import is_malformed, parse_csv, render_csv
from finance_tracker.services.storage import KeyValueStorage
from finance_tracker.validation import RecordValidator, ValidationError


R = TypeVar("R", bound=RecordModel)

# Assigned by the store, never taken from a draft
_MANAGED_FIELDS = {"id", "created_at", "updated_at", "completed"}


def _normalize_keys(model: type[RecordModel], data: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase keys onto the model's field names."""
    aliases = {
        info.alias: name
        for name, info in model.model_fields.items()
        if info.alias
    }
    return {aliases.get(key, key): value for key, value in data.items()}


def _build(model: type[R], payload: Mapping[str, Any]) -> R:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)


class SnapshotStore(Generic[R]):
    """Load/persist plumbing shared by the record stores."""

    record_type: type[R]

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str,
        activity_logger: Optional[ActivityLogger] = None,
        validator: Optional[RecordValidator] = None,
        autoload: bool = True,
    ):
        self._storage = storage
        self._key = key
        self._activity = activity_logger or ActivityLogger()
        self._validator = validator or RecordValidator()
        self._records: list[R] = []
        if autoload:
            self.load()

    @property
    def key(self) -> str:
        return self._key

    def all(self) -> list[R]:
        """A copy of the collection in its current order."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def load(self) -> list[R]:
        """
        Replace the in-memory collection with the stored snapshot.

        An absent key is an empty collection. Unreadable snapshots are
        logged and treated as empty; malformed records are skipped.
        """
        try:
            raw = self._storage.get(self._key)
        except Exception as e:
            self._activity.log_load_failed(self._key, str(e))
            raw = None

        records: list[R] = []
        if raw is not None and not isinstance(raw, list):
            self._activity.log_load_failed(
                self._key, f"Expected a list, found {type(raw).__name__}"
            )
        elif raw:
            for index, item in enumerate(raw):
                try:
                    records.append(self.record_type.model_validate(item))
                except PydanticValidationError as e:
                    self._activity.log(
                        ActivityEventBuilder.record_skipped(self._key, index, str(e))
                    )

        self._records = records
        self._activity.log(ActivityEventBuilder.collection_loaded(self._key, len(records)))
        return self.all()

    def _persist(self) -> bool:
        """Write the whole collection. Failures are logged, not raised."""
        snapshot = [record.to_storage() for record in self._records]
        try:
            self._storage.set(self._key, snapshot)
        except Exception as e:
            self._activity.log_persist_failed(self._key, str(e))
            return False
        return True

    def _index_of(self, record_id: str) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def get(self, record_id: str) -> Optional[R]:
        index = self._index_of(record_id)
        return None if index is None else self._records[index]


# =============================================================================
# TRANSACTIONS
# =============================================================================

class TransactionStore(SnapshotStore[Transaction]):
    """Income and expense transactions, newest-added first."""

    record_type = Transaction

    def _prepare(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result = self._validator.validate_transaction(data)
        if not result.is_valid:
            raise ValidationError.from_result(result)

        payload = {
            key: value
            for key, value in _normalize_keys(Transaction, data).items()
            if key not in _MANAGED_FIELDS
        }
        payload["amount"] = parse_amount(payload["amount"])
        return payload

    def add(self, data: Mapping[str, Any]) -> Transaction:
        """
        Validate a draft and add it as a new transaction.

        The id and both timestamps are always assigned here, even if the
        draft carries its own.

        Raises:
            ValidationError: If the draft is invalid
        """
        transaction = _build(Transaction, self._prepare(data))

        self._records.insert(0, transaction)
        self._persist()
        self._activity.log(ActivityEventBuilder.transaction_added(
            transaction.id, transaction.category, str(transaction.amount)
        ))
        return transaction

    def update(self, transaction_id: str, data: Mapping[str, Any]) -> Optional[Transaction]:
        """
        Replace the editable fields of a transaction.

        The update is validated as a complete draft. Returns the updated
        transaction, or None if the id is unknown.

        Raises:
            ValidationError: If the update is invalid
        """
        payload = self._prepare(data)

        index = self._index_of(transaction_id)
        if index is None:
            return None

        current = self._records[index]
        merged = {**current.model_dump(), **payload, "updated_at": utcnow()}
        updated = _build(Transaction, merged)

        self._records[index] = updated
        self._persist()
        self._activity.log(ActivityEventBuilder.transaction_updated(transaction_id))
        return updated

    def delete(self, transaction_id: str) -> bool:
        """Remove a transaction. Returns False if the id is unknown."""
        index = self._index_of(transaction_id)
        if index is None:
            return False

        del self._records[index]
        self._persist()
        self._activity.log(ActivityEventBuilder.transaction_deleted(transaction_id))
        return True

    def summary_stats(self, today: Optional[date] = None) -> SummaryStats:
        return summary_stats(self._records, today)

    def view(self, query: Optional[TransactionQuery] = None, default_page_size: Optional[int] = None) -> Page:
        """Filtered, sorted and paged listing."""
        return derive_view(self._records, query, default_page_size)

    def import_csv(self, text: str) -> ImportReport:
        """
        Add every row of a CSV export as its own transaction.

        Best-effort: a bad row is reported and skipped, the remaining
        rows are still imported.

        Raises:
            CsvFormatError: If the text is not parseable CSV at all
        """
        report = ImportReport()

        for row_number, row in enumerate(parse_csv(text), start=1):
            if is_malformed(row):
                report.errors.append(RowError(
                    row_number=row_number,
                    message="Row has more values than the header",
                ))
                continue
            try:
                self.add(row)
            except ValidationError as e:
                report.errors.append(RowError(
                    row_number=row_number,
                    message=str(e),
                    errors=e.errors,
                ))
                continue
            report.imported += 1

        self._activity.log(ActivityEventBuilder.transactions_imported(
            report.imported, report.failed
        ))
        return report

    def export_csv(self) -> str:
        """All transactions as CSV, in current order."""
        return render_csv([t.to_storage() for t in self._records])


# =============================================================================
# BUDGETS
# =============================================================================

class BudgetStore(SnapshotStore[Budget]):
    """Monthly budgets, at most one per category."""

    record_type = Budget

    def _index_of_category(self, category: str) -> Optional[int]:
        for index, budget in enumerate(self._records):
            if budget.category == category:
                return index
        return None

    def set_budget(self, category: str, amount: Any) -> Budget:
        """
        Create or overwrite the budget for a category.

        An existing budget keeps its id; only amount and updated_at change.

        Raises:
            ValidationError: If the category is blank or the amount negative
        """
        result = self._validator.validate_budget(category, amount)
        if not result.is_valid:
            raise ValidationError.from_result(result)

        category = category.strip()
        index = self._index_of_category(category)
        created = index is None

        if created:
            budget = _build(Budget, {"category": category, "amount": parse_amount(amount)})
            self._records.append(budget)
        else:
            budget = self._records[index].model_copy(update={
                "amount": parse_amount(amount),
                "updated_at": utcnow(),
            })
            self._records[index] = budget

        self._persist()
        self._activity.log(ActivityEventBuilder.budget_set(
            budget.id, category, str(budget.amount), created
        ))
        return budget

    def remove_budget(self, category: str) -> bool:
        index = self._index_of_category(category)
        if index is None:
            return False

        del self._records[index]
        self._persist()
        self._activity.log(ActivityEventBuilder.budget_removed(category))
        return True

    def get_budget(self, category: str) -> Optional[Budget]:
        index = self._index_of_category(category)
        return None if index is None else self._records[index]

    def total_budget(self) -> Decimal:
        return sum((b.amount for b in self._records), ZERO)


# =============================================================================
# SAVINGS GOALS
# =============================================================================

class SavingsGoalStore(SnapshotStore[SavingsGoal]):
    """Savings goals in creation order."""

    record_type = SavingsGoal

    def add(self, data: Mapping[str, Any]) -> SavingsGoal:
        """
        Validate a draft and add it as a new goal.

        Raises:
            ValidationError: If the draft is invalid
        """
        result = self._validator.validate_savings_goal(data)
        if not result.is_valid:
            raise ValidationError.from_result(result)

        payload = {
            key: value
            for key, value in _normalize_keys(SavingsGoal, data).items()
            if key not in _MANAGED_FIELDS
        }
        payload["target_amount"] = parse_amount(payload["target_amount"])
        payload["current_amount"] = parse_amount(payload.get("current_amount"))
        goal = _build(SavingsGoal, payload)

        self._records.append(goal)
        self._persist()
        self._activity.log(ActivityEventBuilder.goal_added(goal.id, goal.name))
        return goal

    def update(self, goal_id: str, changes: Mapping[str, Any]) -> Optional[SavingsGoal]:
        """
        Apply a partial edit to a goal.

        The edited goal must still satisfy the model constraints. Returns
        None if the id is unknown.

        Raises:
            ValidationError: If the edit leaves the goal invalid
        """
        index = self._index_of(goal_id)
        if index is None:
            return None

        edits = {
            key: value
            for key, value in _normalize_keys(SavingsGoal, changes).items()
            if key not in _MANAGED_FIELDS
        }
        current = self._records[index]
        merged = {**current.model_dump(exclude={"completed"}), **edits, "updated_at": utcnow()}
        updated = _build(SavingsGoal, merged)

        self._records[index] = updated
        self._persist()
        self._activity.log(ActivityEventBuilder.goal_updated(goal_id, sorted(edits)))
        return updated

    def delete(self, goal_id: str) -> bool:
        index = self._index_of(goal_id)
        if index is None:
            return False

        del self._records[index]
        self._persist()
        self._activity.log(ActivityEventBuilder.goal_deleted(goal_id))
        return True

    def add_amount(self, goal_id: str, amount: Any) -> Optional[SavingsGoal]:
        """
        Add a contribution to a goal.

        Returns the updated goal (completed once the target is reached),
        or None if the id is unknown.

        Raises:
            ValidationError: If the amount is not greater than 0
        """
        contribution = parse_amount(amount)
        if contribution <= 0:
            raise ValidationError({"amount": "Amount must be greater than 0"})

        index = self._index_of(goal_id)
        if index is None:
            return None

        current = self._records[index]
        updated = current.model_copy(update={
            "current_amount": current.current_amount + contribution,
            "updated_at": utcnow(),
        })

        self._records[index] = updated
        self._persist()
        self._activity.log(ActivityEventBuilder.goal_contribution(
            goal_id, str(contribution), updated.completed
        ))
        return updated

    def total_target(self) -> Decimal:
        return sum((g.target_amount for g in self._records), ZERO)

    def total_current(self) -> Decimal:
        return sum((g.current_amount for g in self._records), ZERO)
