"""Tests for the entry/dashboard flows and component wiring."""

import pytest
from decimal import Decimal

from expense_tracker.config import get_settings, validate_all_settings
from expense_tracker.models.expense import Category
from expense_tracker.orchestrator import (
    DashboardFlow,
    EntryForm,
    ExpenseEntryFlow,
    create_app_components,
)


@pytest.fixture
def entry_flow(store):
    return ExpenseEntryFlow(store)


@pytest.fixture
def dashboard_flow(store, today):
    return DashboardFlow(store, today=today, currency_symbol="$")


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """Point settings at a temp data dir and reload them."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("EXPENSES_STORAGE_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


class TestExpenseEntryFlow:
    """Tests for form submission."""
    
    def test_success_clears_amount_and_note(self, entry_flow, store):
        form = EntryForm(date="2026-10-05", amount="12.5", category=Category.DINING, note="tacos")
        
        expense, next_form = entry_flow.submit(form)
        
        assert expense is not None
        assert store.expenses[0] == expense
        assert next_form.amount == ""
        assert next_form.note == ""
        assert next_form.date == "2026-10-05"
        assert next_form.category == Category.DINING
    
    def test_failure_keeps_form(self, entry_flow, store):
        form = EntryForm(date="2026-10-05", amount="-1", category=Category.TRAVEL, note="bus")
        
        expense, next_form = entry_flow.submit(form)
        
        assert expense is None
        assert next_form == form
        assert len(store) == 0
    
    def test_delete(self, entry_flow, store):
        expense, _ = entry_flow.submit(EntryForm(date="2026-10-05", amount="1"))
        assert entry_flow.delete(expense.id) is True
        assert entry_flow.delete(expense.id) is False
        assert len(store) == 0
    
    def test_blank_form_uses_the_clock(self, today, store):
        form = ExpenseEntryFlow(store, today=today).blank_form()
        assert form.date == "2026-10-19"
        assert form.amount == ""
        assert form.note == ""
        assert form.category == Category.GROCERIES


class TestDashboardFlow:
    """Tests for the read side of the page."""
    
    def test_default_month_is_current(self, dashboard_flow):
        assert dashboard_flow.default_month() == "2026-10"
    
    def test_today_comes_from_the_clock(self, dashboard_flow, today):
        assert dashboard_flow.today() == today()
    
    def test_empty_dashboard(self, dashboard_flow):
        summary = dashboard_flow.summarize("2026-10")
        assert dashboard_flow.month_options("2026-10") == ["2026-10"]
        assert dashboard_flow.top_category_label(summary) == "-"
    
    def test_top_category_label(self, dashboard_flow, entry_flow):
        entry_flow.submit(EntryForm(date="2026-10-01", amount="1234.5", category=Category.HOUSING))
        summary = dashboard_flow.summarize("2026-10")
        assert dashboard_flow.top_category_label(summary) == "Housing ($1,234.50)"


class TestCreateAppComponents:
    """Tests for create_app_components."""
    
    def test_in_memory_components(self, clean_settings, today):
        entry_flow, dashboard_flow, store = create_app_components(use_storage=False, today=today)
        assert entry_flow.blank_form().date == "2026-10-19"
        expense, _ = entry_flow.submit(EntryForm(date="2026-10-01", amount="3"))
        assert expense is not None
        assert dashboard_flow.summarize("2026-10").total == Decimal("3.00")
        assert not (clean_settings / "data").exists()
    
    def test_file_components_persist_between_sessions(self, clean_settings, today):
        entry_flow, _, _ = create_app_components(use_storage=True, today=today)
        entry_flow.submit(EntryForm(date="2026-10-01", amount="3", note="coffee"))
        
        assert (clean_settings / "data" / "expenses_v1.json").exists()
        
        _, _, store = create_app_components(use_storage=True, today=today)
        assert len(store) == 1
        assert store.expenses[0].note == "coffee"
    
    def test_memory_backend_setting(self, clean_settings, monkeypatch, today):
        monkeypatch.setenv("EXPENSES_STORAGE_BACKEND", "memory")
        entry_flow, _, _ = create_app_components(use_storage=True, today=today)
        entry_flow.submit(EntryForm(date="2026-10-01", amount="3"))
        assert not (clean_settings / "data").exists()
    
    def test_currency_symbol_setting(self, clean_settings, monkeypatch, today):
        monkeypatch.setenv("CURRENCY_SYMBOL", "€")
        _, dashboard_flow, _ = create_app_components(use_storage=False, today=today)
        assert dashboard_flow.currency_symbol == "€"


class TestSettings:
    """Tests for settings validation."""
    
    def test_defaults_are_valid(self, clean_settings):
        status = validate_all_settings()
        assert status["storage"] is True
        assert status["app"] is True
        assert get_settings().storage.slot_key == "expenses_v1"
    
    def test_bad_slot_key_is_reported(self, clean_settings, monkeypatch):
        monkeypatch.setenv("EXPENSES_STORAGE_SLOT_KEY", "../escape")
        status = validate_all_settings()
        assert status["storage"] is False
        assert "storage_error" in status
    
    def test_bad_log_level_is_reported(self, clean_settings, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        status = validate_all_settings()
        assert status["app"] is False
    
    def test_debug_mode_forces_debug_logging(self, clean_settings, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        assert get_settings().app.effective_log_level == "WARNING"
        
        monkeypatch.setenv("DEBUG_MODE", "true")
        get_settings.cache_clear()
        assert get_settings().app.effective_log_level == "DEBUG"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
