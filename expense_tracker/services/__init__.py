"""Services package."""

from expense_tracker.services.storage import (
    CorruptDataError,
    ExpenseStorageInterface,
    InMemoryKeyValueStore,
    KeyValueExpenseStorage,
    KeyValueStoreInterface,
    LocalFileKeyValueStore,
    QuotaExceededError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "CorruptDataError",
    "ExpenseStorageInterface",
    "InMemoryKeyValueStore",
    "KeyValueExpenseStorage",
    "KeyValueStoreInterface",
    "LocalFileKeyValueStore",
    "QuotaExceededError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
