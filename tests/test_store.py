"""Tests for the expense store."""

import json
import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.models.expense import Category
from expense_tracker.services.storage import (
    InMemoryKeyValueStore,
    KeyValueExpenseStorage,
    QuotaExceededError,
)
from expense_tracker.store import ExpenseStore


class FlakyStore(InMemoryKeyValueStore):
    """Slot store that starts refusing writes once `full` is set."""
    
    full = False
    
    def set_item(self, key, value):
        if self.full:
            raise QuotaExceededError("quota exceeded")
        super().set_item(key, value)


class TestAdd:
    """Tests for ExpenseStore.add."""
    
    @pytest.mark.parametrize("amount, category, note", [
        ("12.30", Category.DINING, "lunch"),
        ("0.01", Category.OTHER, ""),
        (99, "Travel", "  train  "),
    ])
    def test_valid_add_prepends_one(self, store, amount, category, note):
        store.add("2026-10-01", "1", Category.GROCERIES)
        before = len(store)
        
        expense = store.add("2026-10-05", amount, category, note)
        
        assert expense is not None
        assert len(store) == before + 1
        assert store.expenses[0] == expense
        assert expense.note == note.strip()
    
    @pytest.mark.parametrize("amount", ["0", "-1", "abc", "", None, "nan"])
    def test_invalid_amount_leaves_collection_unchanged(self, store, slot_store, amount):
        store.add("2026-10-01", "5")
        snapshot = store.expenses
        saved = slot_store.get_item("expenses_v1")
        
        assert store.add("2026-10-02", amount, Category.DINING) is None
        assert store.expenses == snapshot
        assert slot_store.get_item("expenses_v1") == saved
    
    def test_empty_date_is_a_no_op(self, store):
        assert store.add("", "5") is None
        assert len(store) == 0
    
    def test_future_date_is_a_no_op(self, store):
        assert store.add("2026-10-20", "5") is None
        assert len(store) == 0
    
    def test_compact_date_is_a_no_op(self, store):
        assert store.add("20261001", "5") is None
        assert len(store) == 0
    
    def test_amount_normalization(self, store):
        """Half-up rounding: 12.345 is stored as 12.35."""
        assert store.add("2026-10-01", "12.345").amount == Decimal("12.35")
        assert store.add("2026-10-01", "12.344").amount == Decimal("12.34")
    
    def test_default_category(self, store):
        assert store.add(date(2026, 10, 1), "5").category == Category.GROCERIES
    
    def test_newest_first_by_insertion_not_date(self, store):
        first = store.add("2026-10-10", "1")
        second = store.add("2026-10-01", "1")
        assert [e.id for e in store.expenses] == [second.id, first.id]
    
    def test_add_writes_through(self, store, slot_store):
        store.add("2026-10-01", "5", Category.HEALTH, "pills")
        data = json.loads(slot_store.get_item("expenses_v1"))
        assert data[0]["amount"] == 5.0
        assert data[0]["category"] == "Health"
        assert data[0]["note"] == "pills"


class TestRemove:
    """Tests for ExpenseStore.remove."""
    
    def test_remove(self, store, slot_store):
        keep = store.add("2026-10-01", "1")
        drop = store.add("2026-10-02", "2")
        
        assert store.remove(drop.id) is True
        assert store.expenses == (keep,)
        assert len(json.loads(slot_store.get_item("expenses_v1"))) == 1
    
    def test_remove_is_idempotent(self, store):
        expense = store.add("2026-10-01", "1")
        store.add("2026-10-01", "2")
        
        assert store.remove(expense.id) is True
        after_first = store.expenses
        assert store.remove(expense.id) is False
        assert store.expenses == after_first
    
    def test_unknown_id_does_not_save(self, store, slot_store):
        assert store.remove("missing") is False
        assert slot_store.get_item("expenses_v1") is None


class TestPersistence:
    """Tests for load-on-construction and write failures."""
    
    def test_new_store_sees_saved_entries(self, store, slot_store, validator, today):
        a = store.add("2026-09-01", "3")
        b = store.add("2026-10-01", "4", Category.DINING, "x")
        
        reopened = ExpenseStore(
            storage=KeyValueExpenseStorage(slot_store),
            validator=validator,
            today=today,
        )
        assert set(reopened.expenses) == {a, b}
        assert reopened.expenses == (b, a)
    
    def test_corrupt_slot_starts_empty(self, validator, today):
        slot_store = InMemoryKeyValueStore()
        slot_store.set_item("expenses_v1", "[{]")
        store = ExpenseStore(KeyValueExpenseStorage(slot_store), validator=validator, today=today)
        assert len(store) == 0
    
    def test_failed_write_keeps_memory_state(self, validator, today):
        slot_store = FlakyStore()
        store = ExpenseStore(KeyValueExpenseStorage(slot_store), validator=validator, today=today)
        store.add("2026-10-01", "1")
        
        slot_store.full = True
        expense = store.add("2026-10-02", "2")
        
        assert expense is not None
        assert store.expenses[0] == expense
        assert len(json.loads(slot_store.get_item("expenses_v1"))) == 1


class TestDerivedViews:
    """Tests for month views on the store."""
    
    def test_empty_store(self, store):
        summary = store.summarize("2026-10")
        assert store.months_available() == ["2026-10"]
        assert summary.total == Decimal("0")
        assert summary.transaction_count == 0
        assert summary.top_category is None
    
    def test_scenario_three_entries(self, store):
        store.add("2026-10-01", "10.00", Category.DINING)
        store.add("2026-10-02", "20.00", Category.DINING)
        store.add("2026-10-03", "5.00", Category.HEALTH)
        
        summary = store.summarize("2026-10")
        assert summary.total == Decimal("35.00")
        assert summary.top_category == Category.DINING
        assert summary.top_amount == Decimal("30.00")
    
    def test_month_filter_leaves_collection_alone(self, store):
        store.add("2026-09-15", "100", Category.HOUSING)
        store.add("2026-10-01", "10", Category.DINING)
        
        assert store.months_available() == ["2026-10", "2026-09"]
        assert [e.amount for e in store.filtered_by_month("2026-09")] == [Decimal("100.00")]
        assert store.summarize("2026-10").total == Decimal("10.00")
        assert len(store) == 2
    
    def test_month_options_keep_emptied_month(self, store):
        only = store.add("2026-09-15", "100")
        store.remove(only.id)
        assert store.month_options("2026-09") == ["2026-10", "2026-09"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
