"""Services package."""

from finance_tracker.services.csv_io import (
    CsvFormatError,
    is_malformed,
    parse_csv,
    render_csv,
)
from finance_tracker.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    # CSV
    "CsvFormatError",
    "is_malformed",
    "parse_csv",
    "render_csv",
    # Storage services
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
