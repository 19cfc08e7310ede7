"""Shared fixtures for the expense tracker tests."""

from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.config import ThresholdSettings, get_settings
from expense_tracker.models import Budget, Category, ExpenseRecord


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings around each test so env overrides don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def thresholds() -> ThresholdSettings:
    return ThresholdSettings()


@pytest.fixture
def categories() -> dict[str, Category]:
    return {
        "food": Category(id="food", name="Food", icon="🍔", color="#FF6B6B"),
        "transport": Category(id="transport", name="Transport", icon="🚗", color="#4ECDC4"),
        "shopping": Category(id="shopping", name="Shopping", icon="🛍️", color="#95E1D3"),
    }


@pytest.fixture
def february_records() -> list[ExpenseRecord]:
    """500 + 1500 on food, 1000 uncategorised, February 2024."""
    return [
        ExpenseRecord(amount=Decimal("500"), date=date(2024, 2, 1), category_id="food"),
        ExpenseRecord(amount=Decimal("1500"), date=date(2024, 2, 15), category_id="food"),
        ExpenseRecord(amount=Decimal("1000"), date=date(2024, 2, 20), category_id=None),
    ]


@pytest.fixture
def february_budget() -> Budget:
    return Budget(amount=Decimal("5000"), month=2, year=2024)
