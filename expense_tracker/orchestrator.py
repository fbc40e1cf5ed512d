"""
Main Orchestrator for Personal Expenses

Ties the store, the storage adapter and the validator to the two
things the page does:
1. Entry (form values -> add -> reset the form for the next entry)
2. Dashboard (selected month -> summary, month choices)

DESIGN DECISION: The page only talks to these flows. Everything that
decides what a form submission does, or what a month summary
contains, lives here or below and can be tested without Streamlit.
"""

from datetime import date
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.config import get_settings
from expense_tracker.models.expense import Category, Expense
from expense_tracker.models.summary import MonthlySummary
from expense_tracker.services.storage import (
    InMemoryKeyValueStore,
    KeyValueExpenseStorage,
    KeyValueStoreInterface,
    LocalFileKeyValueStore,
    StorageError,
)
from expense_tracker.store import ExpenseStore
from expense_tracker.summaries import current_month, top_category_label
from expense_tracker.validation import ExpenseValidator


class EntryForm(BaseModel):
    """
    Current values of the entry form.
    
    Amount is kept as the raw text the user typed, so an invalid value
    stays on screen after a rejected submit.
    """
    model_config = ConfigDict(frozen=True)
    
    date: str = Field(
        default="",
        description="ISO date"
    )
    amount: str = Field(
        default="",
        description="Raw amount text"
    )
    category: Category = Field(
        default_factory=Category.default
    )
    note: str = ""


class ExpenseEntryFlow:
    """
    Handles submissions of the entry form.
    
    On success the amount and note are cleared while date and category
    are kept, so several expenses from the same day go in quickly.
    On failure the form comes back exactly as submitted.
    """
    
    def __init__(
        self,
        store: ExpenseStore,
        today: Optional[Callable[[], date]] = None,
    ):
        self._store = store
        self._today = today or date.today
    
    def blank_form(self) -> EntryForm:
        """A fresh form dated today."""
        return EntryForm(date=self._today().isoformat())
    
    def submit(self, form: EntryForm) -> tuple[Optional[Expense], EntryForm]:
        """
        Try to add an expense from the form.
        
        Returns:
            (expense or None, form to show next)
        """
        expense = self._store.add(
            date=form.date,
            amount=form.amount,
            category=form.category,
            note=form.note,
        )
        if expense is None:
            return None, form
        return expense, form.model_copy(update={"amount": "", "note": ""})
    
    def delete(self, expense_id: str) -> bool:
        """Delete one expense. No confirmation step."""
        return self._store.remove(expense_id)


class DashboardFlow:
    """
    Read side of the page: month choices and month summaries.
    """
    
    def __init__(
        self,
        store: ExpenseStore,
        today: Optional[Callable[[], date]] = None,
        currency_symbol: str = "$",
    ):
        self._store = store
        self._today = today or date.today
        self._currency_symbol = currency_symbol
    
    @property
    def currency_symbol(self) -> str:
        return self._currency_symbol
    
    def today(self) -> date:
        return self._today()
    
    def default_month(self) -> str:
        """The month selected when a session starts: the current one."""
        return current_month(self._today)
    
    def month_options(self, selected: str) -> list[str]:
        return self._store.month_options(selected)
    
    def summarize(self, month: str) -> MonthlySummary:
        return self._store.summarize(month)
    
    def top_category_label(self, summary: MonthlySummary) -> str:
        return top_category_label(summary, self._currency_symbol)


def _create_slot_store(
    use_storage: bool,
    audit_logger: AuditLogger,
) -> KeyValueStoreInterface:
    storage_settings = get_settings().storage
    
    if not use_storage or storage_settings.backend == "memory":
        return InMemoryKeyValueStore(max_slot_bytes=storage_settings.max_slot_bytes)
    
    try:
        return LocalFileKeyValueStore(
            data_dir=storage_settings.data_dir,
            max_slot_bytes=storage_settings.max_slot_bytes,
        )
    except StorageError as e:
        # Data directory unusable - keep working for this session only
        audit_logger.log_error(
            error_type="storage_unavailable",
            error_message=str(e),
            details={"data_dir": str(storage_settings.data_dir)},
        )
        return InMemoryKeyValueStore(max_slot_bytes=storage_settings.max_slot_bytes)


def create_app_components(
    use_storage: bool = True,
    today: Optional[Callable[[], date]] = None,
) -> tuple[ExpenseEntryFlow, DashboardFlow, ExpenseStore]:
    """
    Factory function to create all application components.
    
    Args:
        use_storage: Whether to persist to the configured slot store.
                    Set to False to keep everything in memory.
        today: Clock override (tests)
                    
    Returns:
        (entry_flow, dashboard_flow, store)
    """
    settings = get_settings()
    configure_logging(settings.app.effective_log_level)
    
    audit_logger = AuditLogger()
    slot_store = _create_slot_store(use_storage, audit_logger)
    storage = KeyValueExpenseStorage(
        slot_store,
        slot_key=settings.storage.slot_key,
        audit_logger=audit_logger,
    )
    validator = ExpenseValidator(
        max_reasonable_amount=settings.app.max_reasonable_amount,
        today=today,
    )
    store = ExpenseStore(
        storage=storage,
        validator=validator,
        audit_logger=audit_logger,
        today=today,
    )
    
    entry_flow = ExpenseEntryFlow(store, today=today)
    dashboard_flow = DashboardFlow(
        store,
        today=today,
        currency_symbol=settings.app.currency_symbol,
    )
    
    return entry_flow, dashboard_flow, store
