"""
Core Data Models for Personal Expenses

These models define the schemas for everything that is stored or
passed between the store, the validator and the page.

DESIGN DECISION: Amounts are Decimals rounded to cents on the way in.
Sums over Decimals are exact, so the per-category totals always add up
to the overall total. They are written to storage as plain JSON numbers.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

from expense_tracker.formatting import CENT


def round_to_cents(value: Any) -> Decimal:
    """
    Round an amount to the nearest cent, halves away from zero.
    
    "12.345" -> Decimal("12.35"). Floats go through their shortest repr,
    so 12.345 behaves the same as "12.345".
    
    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Amount is not a number: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Amount is too large: {value!r}") from e


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Category(str, Enum):
    """
    Expense categories, in display order.
    
    The first member is the form default, and the breakdown lists
    categories in this order.
    """
    GROCERIES = "Groceries"
    DINING = "Dining"
    TRANSPORT = "Transport"
    HOUSING = "Housing"
    HEALTH = "Health"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    TRAVEL = "Travel"
    OTHER = "Other"
    
    @classmethod
    def default(cls) -> "Category":
        return next(iter(cls))


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    One recorded spending transaction.
    
    Expenses are immutable once created: the store only ever adds
    new ones or drops existing ones.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )
    
    id: str = Field(
        default_factory=lambda: str(uuid4()),
        min_length=1,
        description="Opaque unique identifier"
    )
    date: dt.date = Field(
        ...,
        description="Day the money was spent"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount in major currency units, rounded to cents"
    )
    category: Category = Field(
        default_factory=Category.default,
        description="Spending category"
    )
    note: str = Field(
        default="",
        description="Optional free-text note"
    )
    
    @field_validator('amount', mode='before')
    @classmethod
    def normalize_amount(cls, v: Any) -> Decimal:
        return round_to_cents(v)
    
    @field_validator('note', mode='before')
    @classmethod
    def normalize_note(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()
    
    @field_serializer('amount')
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)
    
    def to_storage_dict(self) -> dict:
        """
        Convert to the persisted shape:
        {id, date: "YYYY-MM-DD", amount: number, category, note}
        """
        return self.model_dump(mode="json")


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found with form input."""
    
    field: str = Field(
        ...,
        description="Form field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'not_positive')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating one form submission.
    
    Only error-level issues block an add. Warnings are logged.
    """
    
    is_valid: bool = Field(
        ...,
        description="True when there are no error-level issues"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All issues found"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )
    
    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)
    
    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
