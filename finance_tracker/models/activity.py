"""
Activity Models for the Finance Tracker

Every mutation of a record collection, and every storage failure, is
described by an ActivityEvent and written to the structured log.

DESIGN DECISION: Activity events are log records, not user
notifications. Toasts and alerts belong to whatever renders the data;
the core only reports what happened.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from finance_tracker.models.records import utcnow


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    TRANSACTIONS_IMPORTED = "transactions_imported"

    # Budgets
    BUDGET_SET = "budget_set"
    BUDGET_REMOVED = "budget_removed"

    # Savings goals
    GOAL_ADDED = "goal_added"
    GOAL_UPDATED = "goal_updated"
    GOAL_DELETED = "goal_deleted"
    GOAL_CONTRIBUTION = "goal_contribution"

    # Storage
    COLLECTION_LOADED = "collection_loaded"
    LOAD_FAILED = "load_failed"
    RECORD_SKIPPED = "record_skipped"
    PERSIST_FAILED = "persist_failed"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single logged event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # What record or collection is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="transaction, budget, savings_goal or a storage key"
    )
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.transaction_added(txn_id, "Groceries", "45.00")
        event = ActivityEventBuilder.persist_failed("pfd_budgets", str(exc))
    """

    @staticmethod
    def transaction_added(
        transaction_id: str,
        category: str,
        amount: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction added: {category} {amount}",
            details={"category": category, "amount": amount},
        )

    @staticmethod
    def transaction_updated(transaction_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction updated",
        )

    @staticmethod
    def transaction_deleted(transaction_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction deleted",
        )

    @staticmethod
    def transactions_imported(imported: int, failed: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRANSACTIONS_IMPORTED,
            severity=ActivitySeverity.WARNING if failed else ActivitySeverity.INFO,
            entity_type="transaction",
            description=f"CSV import: {imported} imported, {failed} failed",
            details={"imported": imported, "failed": failed},
        )

    @staticmethod
    def budget_set(budget_id: str, category: str, amount: str, created: bool) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.BUDGET_SET,
            entity_type="budget",
            entity_id=budget_id,
            description=f"Budget {'set' if created else 'updated'} for {category}",
            details={"category": category, "amount": amount, "created": created},
        )

    @staticmethod
    def budget_removed(category: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.BUDGET_REMOVED,
            entity_type="budget",
            description=f"Budget removed for {category}",
            details={"category": category},
        )

    @staticmethod
    def goal_added(goal_id: str, name: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.GOAL_ADDED,
            entity_type="savings_goal",
            entity_id=goal_id,
            description=f"Savings goal added: {name}",
        )

    @staticmethod
    def goal_updated(goal_id: str, fields: list[str]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.GOAL_UPDATED,
            entity_type="savings_goal",
            entity_id=goal_id,
            description="Savings goal updated",
            details={"fields": fields},
        )

    @staticmethod
    def goal_deleted(goal_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.GOAL_DELETED,
            entity_type="savings_goal",
            entity_id=goal_id,
            description="Savings goal deleted",
        )

    @staticmethod
    def goal_contribution(goal_id: str, amount: str, completed: bool) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.GOAL_CONTRIBUTION,
            entity_type="savings_goal",
            entity_id=goal_id,
            description=f"Added {amount} to savings goal",
            details={"amount": amount, "completed": completed},
        )

    @staticmethod
    def collection_loaded(key: str, count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.COLLECTION_LOADED,
            severity=ActivitySeverity.DEBUG,
            entity_type=key,
            description=f"Loaded {count} records from {key}",
            details={"count": count},
        )

    @staticmethod
    def load_failed(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LOAD_FAILED,
            severity=ActivitySeverity.ERROR,
            entity_type=key,
            description=f"Could not read {key}; starting empty",
            error_message=error_message,
        )

    @staticmethod
    def record_skipped(key: str, index: int, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.RECORD_SKIPPED,
            severity=ActivitySeverity.WARNING,
            entity_type=key,
            description=f"Skipped malformed record #{index} in {key}",
            details={"index": index},
            error_message=error_message,
        )

    @staticmethod
    def persist_failed(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.PERSIST_FAILED,
            severity=ActivitySeverity.ERROR,
            entity_type=key,
            description=f"Could not save {key}",
            error_message=error_message,
        )
