"""Monthly summaries package."""

from expense_tracker.summaries.aggregator import (
    TOP_CATEGORY_PLACEHOLDER,
    aggregate,
    category_breakdown,
    current_month,
    filtered_by_month,
    month_options,
    months_available,
    percent_of,
    summarize_month,
    top_category,
    top_category_label,
)

__all__ = [
    "TOP_CATEGORY_PLACEHOLDER",
    "aggregate",
    "category_breakdown",
    "current_month",
    "filtered_by_month",
    "month_options",
    "months_available",
    "percent_of",
    "summarize_month",
    "top_category",
    "top_category_label",
]
