"""
Abstract Storage Interface

DESIGN DECISION: Record collections never touch a storage backend
directly. They are handed a KeyValueStorage, which allows us to:
1. Use in-memory storage for testing
2. Keep snapshots in JSON files on disk
3. Swap in another backend without changing the stores

The interface is intentionally tiny: each collection is saved as one
whole-collection snapshot under its own key.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from finance_tracker.errors import FinanceTrackerError


class KeyValueStorage(ABC):
    """
    String-keyed store of JSON-compatible values.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """
        Read the value stored under a key.

        Returns:
            The parsed value, or None if the key is absent

        Raises:
            StorageReadError: If the value exists but cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageWriteError: If the value cannot be written
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Delete a key. Removing an absent key is not an error.

        Raises:
            StorageWriteError: If the key exists but cannot be removed
        """
        pass


class StorageError(FinanceTrackerError):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """A stored value could not be read or parsed."""
    pass


class StorageWriteError(StorageError):
    """A value could not be written or removed."""
    pass
