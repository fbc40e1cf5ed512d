"""
Data Models Package

This package contains all Pydantic models used in Personal Expenses.
"""

from expense_tracker.models.expense import (
    Category,
    Expense,
    ValidationIssue,
    ValidationResult,
    round_to_cents,
)
from expense_tracker.models.summary import (
    CategoryShare,
    MonthlySummary,
    Totals,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "Category",
    "Expense",
    "ValidationIssue",
    "ValidationResult",
    "round_to_cents",
    # Summary models
    "CategoryShare",
    "MonthlySummary",
    "Totals",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
