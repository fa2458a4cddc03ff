"""
Unit tests for Pydantic models.
"""

import pytest
from pydantic import ValidationError

from budgetboard_core.models.account import Account, Asset
from budgetboard_core.models.budget import Budget
from budgetboard_core.models.category import Category
from budgetboard_core.models.rule import AutomaticRule
from budgetboard_core.models.transaction import Transaction, TransactionPatch


class TestTransaction:
    """Tests for Transaction model."""

    def test_transaction_creation_with_required_fields(self) -> None:
        """Test creating a transaction with only required fields."""
        txn = Transaction(id="txn_123", amount=-42.50, date="2026-01-10")
        assert txn.id == "txn_123"
        assert txn.amount == -42.50
        assert txn.category is None
        assert txn.hidden is False

    def test_transaction_accepts_camel_case_keys(self) -> None:
        """Test that snapshot-style camelCase keys populate fields."""
        txn = Transaction.model_validate(
            {
                "id": "txn_1",
                "amount": 10,
                "date": "2026-01-01",
                "merchantName": "Coffee Co",
                "accountId": "acc_1",
            }
        )
        assert txn.merchant_name == "Coffee Co"
        assert txn.account_id == "acc_1"

    def test_category_key_prefers_subcategory(self) -> None:
        txn = Transaction(
            id="t", amount=1.0, date="2026-01-01", category="Food", subcategory="Groceries"
        )
        assert txn.category_key == "Groceries"

    def test_category_key_falls_back_to_category(self) -> None:
        txn = Transaction(id="t", amount=1.0, date="2026-01-01", category="Food", subcategory="")
        assert txn.category_key == "Food"

    def test_category_key_uncategorized(self) -> None:
        txn = Transaction(id="t", amount=1.0, date="2026-01-01")
        assert txn.category_key == ""

    def test_transaction_validates_date_format(self) -> None:
        """Test that date validation works."""
        with pytest.raises(ValidationError):
            Transaction(id="t", amount=5.00, date="01/15/2026")

    def test_transaction_validates_amount_range(self) -> None:
        """Test that amount validation rejects extreme values."""
        Transaction(id="t1", amount=-9_999_999.99, date="2026-01-01")

        with pytest.raises(ValidationError):
            Transaction(id="t2", amount=10_000_001, date="2026-01-01")

    def test_transaction_is_strict(self) -> None:
        """Test that strings are not coerced into amounts."""
        with pytest.raises(ValidationError):
            Transaction(id="t", amount="12.00", date="2026-01-01")  # type: ignore[arg-type]


class TestTransactionPatch:
    """Tests for TransactionPatch model."""

    def test_empty_patch(self) -> None:
        assert TransactionPatch().is_empty()

    def test_empty_string_is_a_change(self) -> None:
        assert not TransactionPatch(subcategory="").is_empty()

    def test_merge_overrides_populated_fields(self) -> None:
        first = TransactionPatch(category="Food", merchant_name="A")
        merged = first.merge(TransactionPatch(category="Travel"))
        assert merged.category == "Travel"
        assert merged.merchant_name == "A"

    def test_apply_to_transaction(self) -> None:
        txn = Transaction(id="t", amount=-5.0, date="2026-01-01", merchant_name="amzn")
        patched = TransactionPatch(merchant_name="Amazon").apply_to(txn)
        assert patched.merchant_name == "Amazon"
        assert txn.merchant_name == "amzn"


class TestBudget:
    """Tests for Budget model."""

    def test_budget_creation(self) -> None:
        budget = Budget(category="Food", limit=250, date="2026-01-01")
        assert budget.limit == 250
        assert budget.id is None

    def test_budget_rejects_negative_limit(self) -> None:
        with pytest.raises(ValidationError):
            Budget(category="Food", limit=-1, date="2026-01-01")


class TestAccount:
    """Tests for Account and Asset models."""

    def test_account_from_snapshot_keys(self) -> None:
        acc = Account.model_validate(
            {"id": "a1", "currentBalance": 100.5, "type": "Checking", "hideAccount": False}
        )
        assert acc.current_balance == 100.5
        assert acc.is_visible

    def test_hidden_account_is_not_visible(self) -> None:
        acc = Account(id="a1", current_balance=1.0, hide_account=True)
        assert not acc.is_visible

    def test_deleted_asset_is_not_visible(self) -> None:
        asset = Asset(id="s1", current_value=10.0, deleted="2025-01-01")
        assert not asset.is_visible


class TestCategory:
    """Tests for Category model."""

    def test_root_category(self) -> None:
        assert Category(value="Food").is_root

    def test_subcategory(self) -> None:
        cat = Category(value="Groceries", parent="Food")
        assert not cat.is_root


class TestAutomaticRule:
    """Tests for AutomaticRule model."""

    def test_rule_requires_a_condition(self) -> None:
        with pytest.raises(ValidationError):
            AutomaticRule(conditions=[], actions=[])

    def test_rule_from_dict(self) -> None:
        rule = AutomaticRule.model_validate(
            {
                "conditions": [{"field": "merchant", "operator": "contains", "value": "x"}],
                "actions": [{"field": "category", "operator": "set", "value": "Food"}],
            }
        )
        assert rule.conditions[0].operator == "contains"
        assert rule.actions[0].value == "Food"
