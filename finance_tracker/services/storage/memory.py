"""In-memory storage, used by tests and throwaway sessions."""

import json
from typing import Any, Optional

from finance_tracker.services.storage.interface import (
    KeyValueStorage,
    StorageReadError,
    StorageWriteError,
)


class InMemoryStorage(KeyValueStorage):
    """
    Dictionary-backed storage.

    Values are kept as JSON text, like a browser's local storage, so a
    stored snapshot is detached from the objects it was made from and
    anything that would not survive serialization fails on set().
    """

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StorageReadError(f"Corrupt value under {key}: {e}")

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageWriteError(f"Value for {key} is not serializable: {e}")

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def raw(self, key: str) -> Optional[str]:
        """The stored JSON text for a key."""
        return self._data.get(key)

    def put_raw(self, key: str, text: str) -> None:
        """Store text verbatim, bypassing serialization."""
        self._data[key] = text
