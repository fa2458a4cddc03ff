"""
Pytest configuration and fixtures for budgetboard-core tests.
"""

from pathlib import Path
from typing import List

import pytest

from budgetboard_core.models.category import Category


@pytest.fixture(scope="session")
def demo_ledger_path() -> Path:
    """Path to demo ledger snapshot for testing."""
    path = Path(__file__).parent / "fixtures" / "demo_ledger.json"
    if not path.exists():
        pytest.skip(f"Demo ledger not found at {path}.")
    return path


@pytest.fixture
def categories() -> List[Category]:
    """A small two-level category list."""
    return [
        Category(value="Income", parent=""),
        Category(value="Salary", parent="Income"),
        Category(value="Food", parent=""),
        Category(value="Groceries", parent="Food"),
        Category(value="Restaurants", parent="food"),
        Category(value="Housing", parent=""),
        Category(value="Orphan", parent="Missing"),
    ]
