"""Exception base for the finance tracker."""


class FinanceTrackerError(Exception):
    """Base exception for all finance tracker errors."""
    pass
