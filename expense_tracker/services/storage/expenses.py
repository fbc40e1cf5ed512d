"""
Expense Storage Adapter

Reads and writes the whole expense collection to a single slot as a
JSON array of {id, date, amount, category, note} objects.

DESIGN DECISION: Storage problems are never the user's problem.
- Missing slot -> empty collection
- Unreadable or corrupt slot -> empty collection (overwritten on next save)
- Failed write -> collection stays in memory for the session
Each of these is audit-logged instead of raised.
"""

import json
from typing import Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import (
    CorruptDataError,
    ExpenseStorageInterface,
    KeyValueStoreInterface,
    StorageError,
)


DEFAULT_SLOT_KEY = "expenses_v1"

_EXPENSE_LIST = TypeAdapter(list[Expense])


def serialize_expenses(expenses: Sequence[Expense]) -> str:
    """Render a collection in the persisted JSON layout."""
    return json.dumps([expense.to_storage_dict() for expense in expenses])


def parse_expenses(raw: str) -> list[Expense]:
    """
    Parse the persisted JSON layout.
    
    Unknown keys on an entry are ignored. Anything else that does not
    fit the layout makes the whole document invalid.
    
    Raises:
        CorruptDataError: If the text is not a JSON array of valid expenses
    """
    try:
        return _EXPENSE_LIST.validate_json(raw)
    except ValidationError as e:
        raise CorruptDataError(
            f"Slot does not hold a valid expense list ({e.error_count()} error(s))"
        ) from e


class KeyValueExpenseStorage(ExpenseStorageInterface):
    """
    Expense storage on top of any key-value slot store.
    """
    
    def __init__(
        self,
        store: KeyValueStoreInterface,
        slot_key: str = DEFAULT_SLOT_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._slot_key = slot_key
        self._audit_logger = audit_logger
    
    @property
    def slot_key(self) -> str:
        return self._slot_key
    
    def load(self) -> list[Expense]:
        try:
            raw = self._store.get_item(self._slot_key)
            expenses = parse_expenses(raw) if raw is not None else []
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_load_failed(
                    slot_key=self._slot_key,
                    error_message=str(e),
                )
            return []
        
        if self._audit_logger:
            self._audit_logger.log_store_loaded(
                slot_key=self._slot_key,
                count=len(expenses),
            )
        return expenses
    
    def save(self, expenses: Sequence[Expense]) -> bool:
        try:
            self._store.set_item(self._slot_key, serialize_expenses(expenses))
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_save_failed(
                    slot_key=self._slot_key,
                    error_message=str(e),
                    count=len(expenses),
                )
            return False
        return True
