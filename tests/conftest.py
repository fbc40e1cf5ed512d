"""Shared fixtures: a fixed clock and in-memory storage."""

from datetime import date

import pytest

from expense_tracker.services.storage import InMemoryKeyValueStore, KeyValueExpenseStorage
from expense_tracker.store import ExpenseStore
from expense_tracker.validation import ExpenseValidator


FIXED_TODAY = date(2026, 10, 19)


def fixed_today() -> date:
    return FIXED_TODAY


@pytest.fixture
def today():
    return fixed_today


@pytest.fixture
def validator(today):
    return ExpenseValidator(max_reasonable_amount=10000, today=today)


@pytest.fixture
def slot_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def storage(slot_store):
    return KeyValueExpenseStorage(slot_store)


@pytest.fixture
def store(storage, validator, today):
    return ExpenseStore(storage=storage, validator=validator, today=today)
