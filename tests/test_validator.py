"""Tests for form input validation."""

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.models.expense import Category


def issue_types(result):
    return [(i.field, i.issue_type) for i in result.issues]


class TestDateValidation:
    """Tests for the date field."""
    
    def test_today_is_valid(self, validator):
        assert validator.validate("2026-10-19", "5").is_valid
    
    def test_date_object_is_valid(self, validator):
        assert validator.validate(date(2026, 1, 1), "5").is_valid
    
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_date(self, validator, value):
        result = validator.validate(value, "5")
        assert not result.is_valid
        assert ("date", "missing") in issue_types(result)
    
    def test_malformed_date(self, validator):
        result = validator.validate("19/10/2026", "5")
        assert ("date", "invalid_format") in issue_types(result)
    
    @pytest.mark.parametrize("value", ["20261001", "2026-W40-4", "2026-10-1"])
    def test_non_dashed_iso_forms_are_rejected(self, validator, value):
        result = validator.validate(value, "1")
        assert ("date", "invalid_format") in issue_types(result)
    
    def test_future_date(self, validator):
        result = validator.validate("2026-10-20", "5")
        assert not result.is_valid
        assert ("date", "future_date") in issue_types(result)


class TestAmountValidation:
    """Tests for the amount field."""
    
    @pytest.mark.parametrize("value", ["12.34", 12.34, Decimal("0.01"), " 3 ", 7])
    def test_valid_amounts(self, validator, value):
        assert validator.validate("2026-10-01", value).is_valid
    
    @pytest.mark.parametrize("value, issue", [
        ("", "missing"),
        (None, "missing"),
        ("abc", "invalid_format"),
        ("12abc", "invalid_format"),
        (True, "invalid_format"),
        ("nan", "not_finite"),
        ("inf", "not_finite"),
        ("0", "not_positive"),
        ("-4", "not_positive"),
        ("0.004", "rounds_to_zero"),
        ("12345678901234567.89", "too_precise"),
    ])
    def test_invalid_amounts(self, validator, value, issue):
        result = validator.validate("2026-10-01", value)
        assert not result.is_valid
        assert ("amount", issue) in issue_types(result)
    
    def test_large_amount_is_only_a_warning(self, validator):
        result = validator.validate("2026-10-01", "25000")
        assert result.is_valid
        assert result.warnings
        assert result.issues[0].severity == "warning"


class TestCategoryValidation:
    """Tests for the category field."""
    
    def test_none_means_default(self, validator):
        assert validator.validate("2026-10-01", "1", None).is_valid
    
    @pytest.mark.parametrize("value", [Category.TRAVEL, "Travel"])
    def test_known_category(self, validator, value):
        assert validator.validate("2026-10-01", "1", value).is_valid
    
    def test_unknown_category(self, validator):
        result = validator.validate("2026-10-01", "1", "Pets")
        assert ("category", "unknown") in issue_types(result)


class TestSummary:
    """Tests for the plain-language summary."""
    
    def test_all_passed(self, validator):
        result = validator.validate("2026-10-01", "1")
        assert validator.get_user_friendly_summary(result) == "All checks passed."
    
    def test_lists_every_error(self, validator):
        result = validator.validate("", "0")
        summary = validator.get_user_friendly_summary(result)
        assert result.error_count == 2
        assert "Date is required" in summary
        assert "greater than zero" in summary
    
    def test_warning_only_summary(self, validator):
        result = validator.validate("2026-10-01", "25000")
        summary = validator.get_user_friendly_summary(result)
        assert summary.startswith("Please double-check:")
        assert "unusually high" in summary


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
