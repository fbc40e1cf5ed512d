"""
Form Input Validation

Checks the raw values from the entry form before an expense is created.

DESIGN DECISION: Validation only reports. It never fixes input and it
never raises. The store decides what to do with the result: any
error-level issue turns the add into a silent no-op, and the issues
go to the audit log.

Error-level (blocks the add):
- Missing or malformed date, or a date after today
- Missing, non-numeric, non-finite or non-positive amount
- Amount that rounds to 0.00
- Amount whose cents do not survive a round trip through storage
- Unknown category

Warning-level (logged only):
- Amount above the configured "reasonable" ceiling
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from expense_tracker.config import get_settings
from expense_tracker.formatting import format_currency, to_date
from expense_tracker.models.expense import (
    Category,
    ValidationIssue,
    ValidationResult,
    round_to_cents,
)


class ExpenseValidator:
    """
    Validates one submission of the entry form.
    """
    
    def __init__(
        self,
        max_reasonable_amount: Optional[float] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize validator.
        
        Args:
            max_reasonable_amount: Warning threshold. Defaults to
                AppSettings.max_reasonable_amount.
            today: Clock used for the future-date check.
        """
        if max_reasonable_amount is None:
            max_reasonable_amount = get_settings().app.max_reasonable_amount
        self._max_amount = Decimal(str(max_reasonable_amount))
        self._today = today or date.today
    
    def _validate_date(self, value: Any) -> list[ValidationIssue]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return [ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
                severity="error",
            )]
        
        try:
            parsed = to_date(value)
        except ValueError:
            return [ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Date {value!r} is not a valid YYYY-MM-DD date",
                severity="error",
            )]
        
        today = self._today()
        if parsed > today:
            return [ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({parsed.isoformat()}) is after today ({today.isoformat()})",
                severity="error",
            )]
        
        return []
    
    def _validate_amount(self, value: Any) -> list[ValidationIssue]:
        raw = value.strip() if isinstance(value, str) else value
        if raw is None or raw == "":
            return [ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            )]
        
        try:
            if isinstance(raw, bool):
                raise InvalidOperation
            amount = raw if isinstance(raw, Decimal) else Decimal(str(raw))
        except (InvalidOperation, ValueError):
            return [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount {value!r} is not a number",
                severity="error",
            )]
        
        if not amount.is_finite():
            return [ValidationIssue(
                field="amount",
                issue_type="not_finite",
                message="Amount must be a finite number",
                severity="error",
            )]
        
        if amount <= 0:
            return [ValidationIssue(
                field="amount",
                issue_type="not_positive",
                message="Amount must be greater than zero",
                severity="error",
            )]
        
        try:
            rounded = round_to_cents(amount)
        except ValueError as e:
            return [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=str(e),
                severity="error",
            )]
        
        if rounded <= 0:
            return [ValidationIssue(
                field="amount",
                issue_type="rounds_to_zero",
                message=f"Amount {amount} rounds to zero cents",
                severity="error",
            )]
        
        # Stored as a JSON number, so the cents must survive a float
        if Decimal(str(float(rounded))) != rounded:
            return [ValidationIssue(
                field="amount",
                issue_type="too_precise",
                message=f"Amount {amount} has too many digits to store exactly",
                severity="error",
            )]
        
        if rounded > self._max_amount:
            return [ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({format_currency(rounded)}) seems unusually high",
                severity="warning",
            )]
        
        return []
    
    def _validate_category(self, value: Any) -> list[ValidationIssue]:
        try:
            Category(value)
        except ValueError:
            allowed = ", ".join(c.value for c in Category)
            return [ValidationIssue(
                field="category",
                issue_type="unknown",
                message=f"Category {value!r} is not one of: {allowed}",
                severity="error",
            )]
        return []
    
    def validate(
        self,
        date_value: Any,
        amount: Any,
        category: Any = None,
    ) -> ValidationResult:
        """
        Validate raw form values.
        
        Args:
            date_value: ISO date string or date
            amount: Raw amount text or number
            category: Category or its value; None means the default category
            
        Returns:
            ValidationResult with all issues found
        """
        issues = []
        issues.extend(self._validate_date(date_value))
        issues.extend(self._validate_amount(amount))
        if category is not None:
            issues.extend(self._validate_category(category))
        
        warnings = [i.message for i in issues if i.severity == "warning"]
        
        return ValidationResult(
            is_valid=not any(i.severity == "error" for i in issues),
            issues=issues,
            warnings=warnings,
        )
    
    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Summarize validation results in plain language.
        """
        if result.is_valid and not result.warnings:
            return "All checks passed."
        
        lines = []
        
        if result.has_errors:
            lines.append("The expense was not added:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"  - {issue.message}")
        
        if result.warnings:
            lines.append("Please double-check:")
            for warning in result.warnings:
                lines.append(f"  - {warning}")
        
        return "\n".join(lines)
