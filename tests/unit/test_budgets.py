"""
Unit tests for budget rollup calculations.
"""

import math
from datetime import date

import pytest

from budgetboard_core.core.budgets import (
    BudgetGroup,
    build_budget_category_tree,
    build_budget_summary,
    build_category_to_budgets_map,
    build_category_to_limits_map,
    get_budget_amount,
    get_budget_group_for_category,
    get_budgets_for_group,
    get_budgets_for_month,
    get_parent_categories_missing_budgets,
    get_sign_for_budget,
    get_total_limit_for_category,
    get_unbudgeted_totals,
    sum_budget_amounts,
)
from budgetboard_core.core.transactions import build_category_to_transactions_total_map
from budgetboard_core.models.budget import Budget
from budgetboard_core.models.category import Category, CategoryNode
from budgetboard_core.models.transaction import Transaction


def _budget(category, limit, date="2026-01-01"):
    return Budget(category=category, limit=limit, date=date)


def _txn(id, amount, category=None, subcategory=None):
    return Transaction(
        id=id, amount=amount, date="2026-01-10", category=category, subcategory=subcategory
    )


@pytest.fixture
def rollup_categories():
    return [
        Category(value="P"),
        Category(value="A", parent="P"),
        Category(value="B", parent="P"),
        Category(value="Q"),
    ]


class TestBudgetGroups:
    """Tests for income/spending classification."""

    def test_income_root(self, categories):
        assert get_budget_group_for_category("Income", categories) is BudgetGroup.INCOME

    def test_income_child(self, categories):
        assert get_budget_group_for_category("salary", categories) is BudgetGroup.INCOME

    def test_spending(self, categories):
        assert get_budget_group_for_category("Groceries", categories) is BudgetGroup.SPENDING

    def test_without_categories_compares_directly(self):
        assert get_budget_group_for_category("income") is BudgetGroup.INCOME
        assert get_budget_group_for_category("Salary") is BudgetGroup.SPENDING

    def test_unknown_category_is_spending(self, categories):
        assert get_budget_group_for_category("Mystery", categories) is BudgetGroup.SPENDING

    def test_signs(self, categories):
        assert get_sign_for_budget("Salary", categories) == 1
        assert get_sign_for_budget("Food", categories) == -1

    def test_get_budgets_for_group(self, categories):
        budgets = [_budget("Salary", 10), _budget("Food", 20), _budget("Groceries", 5)]
        income = get_budgets_for_group(budgets, BudgetGroup.INCOME, categories)
        spending = get_budgets_for_group(budgets, BudgetGroup.SPENDING, categories)
        assert [b.category for b in income] == ["Salary"]
        assert [b.category for b in spending] == ["Food", "Groceries"]
        assert get_budgets_for_group(None, BudgetGroup.INCOME, categories) == []


class TestGetBudgetAmount:
    """Tests for get_budget_amount."""

    def test_parent_rolls_up_children(self, rollup_categories):
        totals = {"p": 10.0, "a": 5.0, "b": -3.0}
        assert get_budget_amount("P", totals, rollup_categories) == 12.0

    def test_parent_lookup_ignores_case(self, rollup_categories):
        totals = {"p": 10.0, "a": 5.0}
        assert get_budget_amount("p", totals, rollup_categories) == 15.0

    def test_child_uses_own_bucket(self, rollup_categories):
        totals = {"p": 10.0, "a": 5.0, "b": -3.0}
        assert get_budget_amount("A", totals, rollup_categories) == 5.0

    def test_missing_bucket_is_zero(self, rollup_categories):
        assert get_budget_amount("Q", {}, rollup_categories) == 0.0

    def test_unknown_category_uses_own_bucket(self, rollup_categories):
        assert get_budget_amount("Legacy", {"legacy": -7.0}, rollup_categories) == -7.0

    def test_income_scenario(self):
        categories = [Category(value="Income"), Category(value="Salary", parent="Income")]
        totals = build_category_to_transactions_total_map(
            [_txn("1", 2000.0, "Income", "Salary")]
        )
        assert get_budget_amount("Income", totals, categories) == 2000.0
        assert get_budget_group_for_category("Income", categories) is BudgetGroup.INCOME


class TestLimits:
    """Tests for limit aggregation."""

    def test_child_limit_rolls_up_to_unbudgeted_parent(self, rollup_categories):
        limits = build_category_to_limits_map(
            [_budget("A", 100), _budget("B", 50)], rollup_categories
        )
        assert limits == {"a": 100, "b": 50, "p": 150}

    def test_no_double_counting_with_parent_budget(self, rollup_categories):
        limits = build_category_to_limits_map(
            [_budget("P", 300), _budget("A", 100)], rollup_categories
        )
        assert limits["p"] == 300
        assert limits["a"] == 100

    def test_parent_budget_after_child_still_blocks_rollup(self, rollup_categories):
        limits = build_category_to_limits_map(
            [_budget("A", 100), _budget("p", 300)], rollup_categories
        )
        assert limits == {"a": 100, "p": 300}

    def test_duplicate_budgets_are_summed(self, rollup_categories):
        limits = build_category_to_limits_map(
            [_budget("Q", 10), _budget("q", 15)], rollup_categories
        )
        assert limits == {"q": 25}

    def test_unknown_budget_category_is_tolerated(self, rollup_categories):
        limits = build_category_to_limits_map([_budget("Legacy", 40)], rollup_categories)
        assert limits == {"legacy": 40}

    def test_sum_budget_amounts(self):
        assert sum_budget_amounts([_budget("A", 1.5), _budget("B", 2)]) == 3.5

    def test_get_budgets_for_month(self):
        budgets = [_budget("A", 1, "2026-01-01"), _budget("A", 1, "2026-02-01")]
        assert get_budgets_for_month(budgets, date(2026, 2, 14)) == [budgets[1]]


class TestBudgetTrees:
    """Tests for budget grouping helpers."""

    def test_build_category_to_budgets_map(self):
        budgets = [_budget("food", 1), _budget("Auto", 2), _budget("Food", 3)]
        grouped = build_category_to_budgets_map(budgets)
        assert list(grouped) == ["auto", "food"]
        assert [b.limit for b in grouped["food"]] == [1, 3]

    def test_build_budget_category_tree(self, rollup_categories):
        tree = build_budget_category_tree(
            [_budget("A", 1), _budget("b", 2), _budget("Q", 3), _budget("Legacy", 4)],
            rollup_categories,
        )
        assert [node.value for node in tree] == ["P", "Q", "Legacy"]
        assert [child.value for child in tree[0].sub_categories] == ["A", "B"]
        assert tree[1].sub_categories == []

    def test_total_limit_prefers_own_budgets(self):
        node = CategoryNode(
            value="P", sub_categories=[CategoryNode(value="A", parent="P")]
        )
        assert get_total_limit_for_category([_budget("P", 10), _budget("A", 4)], node) == 10
        assert get_total_limit_for_category([_budget("a", 4), _budget("Z", 9)], node) == 4

    def test_missing_parent_budgets(self, rollup_categories):
        suggestions = get_parent_categories_missing_budgets(
            [_budget("A", 100, "2026-03-01"), _budget("B", 25)], rollup_categories
        )
        assert len(suggestions) == 1
        assert suggestions[0].category == "P"
        assert suggestions[0].limit == 125
        assert suggestions[0].date == "2026-03-01"

    def test_no_suggestion_when_parent_budgeted(self, rollup_categories):
        assert get_parent_categories_missing_budgets(
            [_budget("A", 100), _budget("P", 200)], rollup_categories
        ) == []


class TestUnbudgeted:
    """Tests for the unbudgeted remainder."""

    def test_families_with_a_budget_are_covered(self, rollup_categories):
        totals = {"p": -1.0, "a": -2.0, "b": -3.0, "q": -4.0, "": -5.0}
        unbudgeted = get_unbudgeted_totals([_budget("A", 10)], totals, rollup_categories)
        assert unbudgeted == {"q": -4.0, "": -5.0}

    def test_unknown_categories_are_unbudgeted(self, rollup_categories):
        totals = {"legacy": -1.0, "q": -2.0}
        unbudgeted = get_unbudgeted_totals([_budget("Q", 10)], totals, rollup_categories)
        assert unbudgeted == {"legacy": -1.0}

    def test_uncategorized_can_be_budgeted(self, rollup_categories):
        totals = {"": -5.0}
        assert get_unbudgeted_totals([_budget("", 10)], totals, rollup_categories) == {}


class TestBudgetSummary:
    """Tests for build_budget_summary."""

    @pytest.fixture
    def summary(self, categories):
        budgets = [
            _budget("Income", 1800),
            _budget("Food", 400),
            _budget("Groceries", 250),
            _budget("Mystery", 20),
        ]
        transactions = [
            _txn("1", 2000.0, "Income", "Salary"),
            _txn("2", -100.0, "Food", "Groceries"),
            _txn("3", -30.0, "Food", "Restaurants"),
            _txn("4", -500.0, "Housing"),
            _txn("5", -12.0),
        ]
        return build_budget_summary(budgets, categories, transactions)

    def test_income_items(self, summary):
        assert [i.category for i in summary.income] == ["Income"]
        item = summary.income[0]
        assert item.amount == 2000.0
        assert item.limit == 1800
        assert item.sign == 1
        assert item.group == "income"

    def test_spending_items(self, summary):
        by_category = {i.category: i for i in summary.spending}
        assert set(by_category) == {"Food", "Groceries", "Mystery"}
        assert by_category["Food"].amount == -130.0
        assert by_category["Food"].top_level
        assert by_category["Groceries"].amount == -100.0
        assert not by_category["Groceries"].top_level
        assert by_category["Groceries"].parent == "Food"
        assert by_category["Mystery"].top_level
        assert all(i.sign == -1 for i in summary.spending)

    def test_group_totals_do_not_double_count(self, summary):
        assert summary.spending_amount == -130.0
        assert summary.spending_limit == 420
        assert summary.income_amount == 2000.0
        assert summary.income_limit == 1800

    def test_unbudgeted_and_cash_flow(self, summary):
        assert summary.unbudgeted == {"housing": -500.0, "": -12.0}
        assert summary.unbudgeted_amount == -512.0
        assert math.isclose(summary.net_cash_flow, 1358.0)

    def test_zero_limit_is_reported_raw(self, categories):
        summary = build_budget_summary(
            [_budget("Housing", 0)], categories, [_txn("1", -50.0, "Housing")]
        )
        item = summary.spending[0]
        assert item.limit == 0
        assert item.amount == -50.0

    def test_empty_inputs(self, categories):
        summary = build_budget_summary([], categories, [])
        assert summary.income == []
        assert summary.spending == []
        assert summary.unbudgeted == {}
        assert summary.net_cash_flow == 0.0
