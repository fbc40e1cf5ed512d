"""
Summary Models

Derived views over the expense collection. None of these are stored;
they are rebuilt from the raw entries every time the page renders.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from expense_tracker.models.expense import Category, Expense


class Totals(BaseModel):
    """
    Aggregate over a set of expenses.
    
    `by_category` only holds categories that actually occur, in the
    order they were first encountered. Use `amount_for` to read it with
    a zero default.
    """
    
    total: Decimal = Field(
        default=Decimal("0.00"),
        description="Sum of all amounts"
    )
    by_category: dict[Category, Decimal] = Field(
        default_factory=dict,
        description="Sum of amounts per category"
    )
    
    def amount_for(self, category: Category) -> Decimal:
        return self.by_category.get(category, Decimal("0.00"))


class CategoryShare(BaseModel):
    """One row of the per-category breakdown."""
    
    category: Category
    amount: Decimal = Field(ge=0)
    percent: int = Field(
        ge=0,
        le=100,
        description="Share of the month's total, rounded to a whole percent"
    )


class MonthlySummary(BaseModel):
    """Everything the page shows for one selected month."""
    
    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Month key (YYYY-MM)"
    )
    month_label: str = Field(
        ...,
        description="Human month name, e.g. 'October 2026'"
    )
    period_start: str = Field(
        ...,
        description="ISO date of the first day of the month"
    )
    total: Decimal
    transaction_count: int = Field(ge=0)
    top_category: Optional[Category] = None
    top_amount: Optional[Decimal] = None
    breakdown: list[CategoryShare] = Field(default_factory=list)
    expenses: list[Expense] = Field(
        default_factory=list,
        description="The month's entries, newest first"
    )
    
    @property
    def is_empty(self) -> bool:
        return self.transaction_count == 0
