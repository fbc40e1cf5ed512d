"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Slots live in local files by default, or in memory for tests.
"""

from expense_tracker.services.storage.interface import (
    CorruptDataError,
    ExpenseStorageInterface,
    KeyValueStoreInterface,
    QuotaExceededError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from expense_tracker.services.storage.local import (
    InMemoryKeyValueStore,
    LocalFileKeyValueStore,
)
from expense_tracker.services.storage.expenses import (
    DEFAULT_SLOT_KEY,
    KeyValueExpenseStorage,
    parse_expenses,
    serialize_expenses,
)

__all__ = [
    # Interfaces
    "ExpenseStorageInterface",
    "KeyValueStoreInterface",
    # Exceptions
    "CorruptDataError",
    "QuotaExceededError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Slot stores
    "InMemoryKeyValueStore",
    "LocalFileKeyValueStore",
    # Expense adapter
    "DEFAULT_SLOT_KEY",
    "KeyValueExpenseStorage",
    "parse_expenses",
    "serialize_expenses",
]
