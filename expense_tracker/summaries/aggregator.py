"""
Monthly Summaries

DESIGN DECISION: Every derived number is a pure function of the
collection and the selected month, recomputed in full on each render.
There is no cache to invalidate, so a summary can never be stale.
The collection is small enough that a few linear scans cost nothing.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Optional, Sequence

from expense_tracker.formatting import (
    format_currency,
    month_key,
    month_key_to_date,
    month_label,
    start_of_month_iso,
)
from expense_tracker.models.expense import Category, Expense
from expense_tracker.models.summary import CategoryShare, MonthlySummary, Totals


TOP_CATEGORY_PLACEHOLDER = "-"

ZERO = Decimal("0.00")


def filtered_by_month(expenses: Iterable[Expense], key: str) -> list[Expense]:
    """Entries dated in the given month, in collection order."""
    return [expense for expense in expenses if month_key(expense.date) == key]


def aggregate(expenses: Iterable[Expense]) -> Totals:
    """
    Sum amounts overall and per category.
    
    Categories are inserted into `by_category` in the order they are
    first met, and categories with no entries are left out.
    """
    total = ZERO
    by_category: dict[Category, Decimal] = {}
    for expense in expenses:
        total += expense.amount
        by_category[expense.category] = by_category.get(expense.category, ZERO) + expense.amount
    return Totals(total=total, by_category=by_category)


def top_category(
    by_category: dict[Category, Decimal],
) -> Optional[tuple[Category, Decimal]]:
    """
    Category with the largest sum, or None if there are none.
    
    Ties go to whichever category was accumulated first.
    """
    if not by_category:
        return None
    # max() keeps the first of equal keys
    return max(by_category.items(), key=lambda item: item[1])


def current_month(today: Optional[Callable[[], date]] = None) -> str:
    return month_key((today or date.today)())


def months_available(
    expenses: Iterable[Expense],
    today: Optional[Callable[[], date]] = None,
) -> list[str]:
    """
    Distinct month keys across all entries, newest first.
    
    An empty collection yields exactly one key: the current month.
    """
    keys = sorted({month_key(expense.date) for expense in expenses}, reverse=True)
    if not keys:
        keys.append(current_month(today))
    return keys


def month_options(
    expenses: Iterable[Expense],
    selected: str,
    today: Optional[Callable[[], date]] = None,
) -> list[str]:
    """
    Choices for the month selector.
    
    Same as months_available, plus the selected month when it has no
    entries (e.g. right after its last entry was deleted), so the
    selector always shows the active filter.
    """
    keys = months_available(expenses, today)
    if selected not in keys:
        keys = sorted(keys + [selected], reverse=True)
    return keys


def percent_of(amount: Decimal, total: Decimal) -> int:
    """Whole-number share of total, halves rounded up. 0 when total is 0."""
    if total <= 0:
        return 0
    share = (amount / total * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(share)


def category_breakdown(totals: Totals) -> list[CategoryShare]:
    """One row per category, in display order, including empty ones."""
    return [
        CategoryShare(
            category=category,
            amount=totals.amount_for(category),
            percent=percent_of(totals.amount_for(category), totals.total),
        )
        for category in Category
    ]


def summarize_month(expenses: Sequence[Expense], key: str) -> MonthlySummary:
    """
    Build everything the page shows for one month.
    
    Raises:
        ValueError: If `key` is not a valid YYYY-MM month key
    """
    first_day = month_key_to_date(key)
    filtered = filtered_by_month(expenses, key)
    totals = aggregate(filtered)
    top = top_category(totals.by_category)
    
    return MonthlySummary(
        month=key,
        month_label=month_label(key),
        period_start=start_of_month_iso(first_day),
        total=totals.total,
        transaction_count=len(filtered),
        top_category=top[0] if top else None,
        top_amount=top[1] if top else None,
        breakdown=category_breakdown(totals),
        expenses=filtered,
    )


def top_category_label(summary: MonthlySummary, symbol: str = "$") -> str:
    """Text for the top-category card: "Dining ($42.00)", or a placeholder."""
    if summary.top_category is None:
        return TOP_CATEGORY_PLACEHOLDER
    return f"{summary.top_category.value} ({format_currency(summary.top_amount, symbol)})"
