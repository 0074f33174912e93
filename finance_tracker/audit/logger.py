"""
Activity Logger

DESIGN DECISION: Every mutation and every storage failure is logged.
This provides:
1. Traceability of what changed a collection
2. Visibility of the failures that are otherwise swallowed (a snapshot
   that could not be saved never reaches the user as an error)

The activity logger:
- Is synchronous, like the stores that call it
- Never raises; a logging problem must not undo a mutation
- Keeps a bounded in-memory history of recent events
"""

import logging
from collections import deque
from typing import Optional

import structlog

from finance_tracker.models.activity import ActivityEvent, ActivityEventBuilder, ActivitySeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(log_level: str = "INFO", debug_mode: bool = False) -> None:
    """
    Route structlog output through the stdlib root logger.

    debug_mode overrides log_level with DEBUG.
    """
    level = "DEBUG" if debug_mode else log_level.upper()
    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))
    logging.getLogger("finance_tracker").setLevel(level)


class ActivityLogger:
    """
    Central activity logging service.

    Logs events to the structured log and remembers the most recent
    ones for inspection.
    """

    def __init__(self, history_size: int = 200):
        self._logger = structlog.get_logger("finance_tracker.activity")
        self._history: deque[ActivityEvent] = deque(maxlen=history_size)

    def log(self, event: ActivityEvent) -> bool:
        """
        Log an activity event.

        Returns True if the event reached the structured log.
        """
        self._history.append(event)
        log_dict = event.to_log_dict()

        try:
            if event.severity == ActivitySeverity.ERROR:
                self._logger.error("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.WARNING:
                self._logger.warning("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.DEBUG:
                self._logger.debug("activity_event", **log_dict)
            else:
                self._logger.info("activity_event", **log_dict)
        except Exception:
            # Logging must never break the mutation that triggered it
            return False

        return True

    def log_persist_failed(self, key: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.persist_failed(key, error_message))

    def log_load_failed(self, key: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.load_failed(key, error_message))

    def recent_events(self, limit: Optional[int] = None) -> list[ActivityEvent]:
        """Most recent events, newest first."""
        events = list(reversed(self._history))
        return events[:limit] if limit is not None else events
