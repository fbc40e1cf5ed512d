"""
Abstract Storage Interfaces

DESIGN DECISION: Persistence is split in two layers.

1. A key-value slot store: named slots holding text, synchronous,
   in the spirit of browser local storage. Swappable (files on disk,
   process memory for tests).
2. An expense storage adapter that reads and writes the whole
   collection to one slot as JSON.

The store never talks to the slot layer directly, so tests can
substitute either layer with an in-memory fake.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from expense_tracker.models.expense import Expense


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for a synchronous key-value slot store.
    
    Values are text. Implementations raise StorageError subclasses
    on failure.
    """
    
    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read a slot.
        
        Returns:
            The stored text, or None if the slot does not exist
            
        Raises:
            StorageReadError: If the slot exists but cannot be read
        """
        pass
    
    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Write a slot, replacing any previous value.
        
        Raises:
            QuotaExceededError: If the value is larger than the slot allows
            StorageWriteError: If the write fails for any other reason
        """
        pass
    
    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete a slot. Missing slots are ignored."""
        pass


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for persisting the expense collection.
    
    Both operations are total: they never raise. Failures degrade to
    "no data" on load and "not durable" on save.
    """
    
    @abstractmethod
    def load(self) -> list[Expense]:
        """
        Load the persisted collection.
        
        Returns:
            The saved expenses in saved order, or an empty list when
            nothing usable is stored
        """
        pass
    
    @abstractmethod
    def save(self, expenses: Sequence[Expense]) -> bool:
        """
        Persist the full collection.
        
        Returns:
            True if the collection was written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """A slot exists but could not be read."""
    pass


class StorageWriteError(StorageError):
    """A slot could not be written."""
    pass


class QuotaExceededError(StorageWriteError):
    """The value is larger than a slot may hold."""
    pass


class CorruptDataError(StorageError):
    """A slot holds something that is not a valid expense collection."""
    pass
