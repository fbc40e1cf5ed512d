"""
Expense Store

Owns the in-memory expense collection for one session.

Lifecycle:
1. Construction -> load the collection from storage (once)
2. add / remove -> change the collection, then save it (every time)
3. Queries -> pure derivations over the current collection

The collection is newest-first by insertion, not by date.
Failed adds and unknown ids are no-ops; nothing here raises on bad
user input.
"""

from datetime import date
from typing import Any, Callable, Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.formatting import to_date
from expense_tracker.models.expense import Category, Expense, round_to_cents
from expense_tracker.models.summary import MonthlySummary
from expense_tracker.services.storage import ExpenseStorageInterface
from expense_tracker.summaries import (
    filtered_by_month,
    month_options,
    months_available,
    summarize_month,
)
from expense_tracker.validation import ExpenseValidator


class ExpenseStore:
    """
    The expense collection plus its mutations and derived views.
    """
    
    def __init__(
        self,
        storage: ExpenseStorageInterface,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self._storage = storage
        self._today = today or date.today
        self._validator = validator or ExpenseValidator(today=self._today)
        self._audit_logger = audit_logger
        self._expenses: list[Expense] = list(storage.load())
    
    @property
    def expenses(self) -> tuple[Expense, ...]:
        """Read-only view of the collection, newest first."""
        return tuple(self._expenses)
    
    def __len__(self) -> int:
        return len(self._expenses)
    
    def add(
        self,
        date: Any,
        amount: Any,
        category: Any = None,
        note: Optional[str] = "",
    ) -> Optional[Expense]:
        """
        Record a new expense at the front of the collection.
        
        Args:
            date: ISO date string or date; must not be after today
            amount: Positive amount (text or number); rounded to cents
            category: Category or its value; defaults to the first category
            note: Free text; surrounding whitespace is dropped
            
        Returns:
            The new Expense, or None if the input was invalid (the
            collection is left untouched)
        """
        result = self._validator.validate(date, amount, category)
        if not result.is_valid:
            if self._audit_logger:
                self._audit_logger.log_expense_rejected(
                    issues=[
                        {"field": i.field, "type": i.issue_type, "message": i.message}
                        for i in result.issues
                    ],
                    summary=self._validator.get_user_friendly_summary(result),
                )
            return None
        
        expense = Expense(
            date=to_date(date),
            amount=round_to_cents(amount),
            category=Category(category) if category is not None else Category.default(),
            note=note or "",
        )
        self._expenses.insert(0, expense)
        self._persist()
        
        if self._audit_logger:
            self._audit_logger.log_expense_added(
                expense_id=expense.id,
                category=expense.category.value,
                amount=str(expense.amount),
                expense_date=expense.date.isoformat(),
                warnings=result.warnings,
            )
        
        return expense
    
    def remove(self, expense_id: str) -> bool:
        """
        Drop the expense with the given id.
        
        Returns:
            True if something was removed. Unknown ids are a no-op and
            do not touch storage.
        """
        remaining = [e for e in self._expenses if e.id != expense_id]
        if len(remaining) == len(self._expenses):
            if self._audit_logger:
                self._audit_logger.log_remove_missed(expense_id)
            return False
        
        self._expenses = remaining
        self._persist()
        
        if self._audit_logger:
            self._audit_logger.log_expense_removed(expense_id)
        return True
    
    def _persist(self) -> bool:
        return self._storage.save(self._expenses)
    
    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------
    
    def filtered_by_month(self, key: str) -> list[Expense]:
        return filtered_by_month(self._expenses, key)
    
    def months_available(self) -> list[str]:
        return months_available(self._expenses, self._today)
    
    def month_options(self, selected: str) -> list[str]:
        return month_options(self._expenses, selected, self._today)
    
    def summarize(self, key: str) -> MonthlySummary:
        return summarize_month(self._expenses, key)
