"""
Budget rollup calculations.

Combines the category hierarchy, per-category transaction totals and
user-defined budget limits into effective actual/limit pairs. Parent
categories include their subcategories' totals, and a subcategory's limit
rolls up into its parent unless the parent has a budget of its own.
"""

import logging
from collections import defaultdict
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set

from budgetboard_core.core.categories import (
    build_categories_tree,
    find_category,
    get_is_parent_category,
    get_parent_category,
    get_sub_categories,
)
from budgetboard_core.core.transactions import (
    build_category_to_transactions_total_map,
    sum_transaction_amounts,
)
from budgetboard_core.models.budget import Budget, BudgetRollupItem, BudgetSummary
from budgetboard_core.models.category import Category, CategoryNode
from budgetboard_core.models.transaction import Transaction
from budgetboard_core.utils.date_utils import is_same_month
from budgetboard_core.utils.strings import are_strings_equal, category_key

logger = logging.getLogger(__name__)

INCOME_CATEGORY = "Income"


class BudgetGroup(str, Enum):
    INCOME = "income"
    SPENDING = "spending"


def get_budget_group_for_category(
    category: str, categories: Optional[Sequence[Category]] = None
) -> BudgetGroup:
    """
    Classify a category as income or spending.

    A category belongs to the income group when its root category is
    "Income". When ``categories`` is given the root is resolved from the
    hierarchy, otherwise ``category`` is taken to be a root already.
    """
    root = category
    if categories is not None:
        root = get_parent_category(category, categories) or category
    if are_strings_equal(root, INCOME_CATEGORY):
        return BudgetGroup.INCOME
    return BudgetGroup.SPENDING


def get_sign_for_budget(category: str, categories: Sequence[Category]) -> int:
    """Return +1 for income categories and -1 for spending categories."""
    if get_budget_group_for_category(category, categories) is BudgetGroup.INCOME:
        return 1
    return -1


def get_budgets_for_group(
    budgets: Optional[Iterable[Budget]],
    group: BudgetGroup,
    categories: Sequence[Category],
) -> List[Budget]:
    """Filter budgets down to one budget group."""
    if budgets is None:
        return []
    return [b for b in budgets if get_budget_group_for_category(b.category, categories) is group]


def get_budgets_for_month(budgets: Iterable[Budget], month: date) -> List[Budget]:
    """Return budgets dated in the same calendar month as ``month``."""
    return [b for b in budgets if is_same_month(b.date, month)]


def sum_budget_amounts(budgets: Iterable[Budget]) -> float:
    """Sum of all budget limits."""
    return sum((b.limit for b in budgets), 0.0)


def get_budget_amount(
    category: str,
    category_totals: Mapping[str, float],
    categories: Sequence[Category],
) -> float:
    """
    Effective transaction total for a budgeted category.

    For a parent category this is its own bucket plus the buckets of every
    subcategory. Anything else (subcategory or unknown) uses only its own
    bucket, defaulting to 0.

    Args:
        category: Category value to total
        category_totals: Output of build_category_to_transactions_total_map
        categories: All categories for hierarchy lookups

    Returns:
        The signed effective total
    """
    own_total = category_totals.get(category_key(category), 0.0)
    if not get_is_parent_category(category, categories):
        return own_total

    children_total = sum(
        category_totals.get(category_key(child.value), 0.0)
        for child in get_sub_categories(category, categories)
    )
    return own_total + children_total


def build_category_to_budgets_map(budgets: Iterable[Budget]) -> Dict[str, List[Budget]]:
    """Group budgets by lowercase category, ordered by category name."""
    grouped: Dict[str, List[Budget]] = {}
    for budget in sorted(budgets, key=lambda b: b.category.upper()):
        grouped.setdefault(category_key(budget.category), []).append(budget)
    return grouped


def build_budget_category_tree(
    budgets: Iterable[Budget], categories: Sequence[Category]
) -> List[CategoryNode]:
    """
    Build a category tree containing only budgeted categories.

    Each budget contributes its root category as a node, and subcategory
    budgets are nested below their root. A budget whose category is unknown
    becomes a root node of its own.
    """
    tree: List[CategoryNode] = []
    index: Dict[str, CategoryNode] = {}

    for budget in budgets:
        root_value = get_parent_category(budget.category, categories) or budget.category
        root = index.get(category_key(root_value))
        if root is None:
            root = CategoryNode(value=root_value, parent="")
            index[category_key(root_value)] = root
            tree.append(root)

        if are_strings_equal(root_value, budget.category):
            continue

        found = find_category(budget.category, categories)
        value = found.value if found is not None else budget.category
        if not any(are_strings_equal(child.value, value) for child in root.sub_categories):
            root.sub_categories.append(CategoryNode(value=value, parent=root.value))

    return tree


def get_total_limit_for_category(budgets: Sequence[Budget], category: CategoryNode) -> float:
    """
    Limit for a tree node.

    Uses the node's own budgets when it has any, otherwise the sum of its
    subcategories' budgets.
    """
    own = [b for b in budgets if are_strings_equal(b.category, category.value)]
    if own:
        return sum_budget_amounts(own)

    return sum_budget_amounts(
        b
        for b in budgets
        if any(are_strings_equal(child.value, b.category) for child in category.sub_categories)
    )


def build_category_to_limits_map(
    budgets: Sequence[Budget], categories: Sequence[Category]
) -> Dict[str, float]:
    """
    Sum budget limits by lowercase category.

    A subcategory's limit is also added to its parent's bucket, but only when
    no budget exists directly on that parent, so parent and child budgets are
    never counted twice.

    Args:
        budgets: Budgets to aggregate
        categories: All categories for hierarchy lookups

    Returns:
        Dict mapping lowercase category key to summed limit
    """
    tree = build_categories_tree(categories)
    budgeted: Set[str] = {category_key(b.category) for b in budgets}
    limits: Dict[str, float] = defaultdict(float)

    for budget in budgets:
        limits[category_key(budget.category)] += budget.limit

        if any(are_strings_equal(root.value, budget.category) for root in tree):
            continue

        parent = next(
            (
                child.parent
                for root in tree
                for child in root.sub_categories
                if are_strings_equal(child.value, budget.category)
            ),
            "",
        )
        if not parent or category_key(parent) in budgeted:
            continue

        limits[category_key(parent)] += budget.limit

    return dict(limits)


def _covered_category_keys(
    budgets: Iterable[Budget], categories: Sequence[Category]
) -> Set[str]:
    covered: Set[str] = set()
    for budget in budgets:
        covered.add(category_key(budget.category))
        root = get_parent_category(budget.category, categories)
        if not root:
            continue
        covered.add(category_key(root))
        covered.update(category_key(c.value) for c in get_sub_categories(root, categories))
    return covered


def get_unbudgeted_totals(
    budgets: Iterable[Budget],
    category_totals: Mapping[str, float],
    categories: Sequence[Category],
) -> Dict[str, float]:
    """
    Transaction totals that no budget accounts for.

    A budget on any category of a root family covers the whole family,
    because limits and totals both roll up to the root. Uncategorized
    transactions (the "" key) are unbudgeted unless budgeted explicitly.

    Returns:
        Dict of lowercase category key to total, in ``category_totals`` order
    """
    covered = _covered_category_keys(budgets, categories)
    return {key: total for key, total in category_totals.items() if key not in covered}


def get_parent_categories_missing_budgets(
    budgets: Sequence[Budget], categories: Sequence[Category]
) -> List[Budget]:
    """
    Suggest budgets for parents whose children are budgeted but who are not.

    Each suggestion carries the summed limit of the budgeted children and the
    date of the first child budget.
    """
    suggestions: List[Budget] = []
    for root in build_categories_tree(categories):
        if any(are_strings_equal(b.category, root.value) for b in budgets):
            continue
        child_budgets = [
            b
            for b in budgets
            if any(are_strings_equal(child.value, b.category) for child in root.sub_categories)
        ]
        if not child_budgets:
            continue
        suggestions.append(
            Budget(
                category=root.value,
                limit=sum_budget_amounts(child_budgets),
                date=child_budgets[0].date,
            )
        )
    return suggestions


def _display_value(key: str, budgets: Sequence[Budget], categories: Sequence[Category]) -> str:
    found = find_category(key, categories)
    if found is not None:
        return found.value
    return next((b.category for b in budgets if category_key(b.category) == key), key)


def build_budget_summary(
    budgets: Sequence[Budget],
    categories: Sequence[Category],
    transactions: Sequence[Transaction],
) -> BudgetSummary:
    """
    Roll budgets and transactions up into income and spending groups.

    Every category with a limit (directly or rolled up from a child) gets an
    item carrying its raw amount/limit pair. Group totals only count
    top-level items: a root category, or a category whose parent has no
    item of its own.

    Args:
        budgets: Budgets for the period
        categories: All categories for hierarchy lookups
        transactions: Pre-filtered transactions for the period

    Returns:
        BudgetSummary with per-category items, group totals and the
        unbudgeted remainder
    """
    totals = build_category_to_transactions_total_map(transactions)
    limits = build_category_to_limits_map(budgets, categories)

    summary = BudgetSummary()
    for key, limit in limits.items():
        value = _display_value(key, budgets, categories)
        parent = get_parent_category(value, categories)
        top_level = not parent or are_strings_equal(parent, value) or category_key(parent) not in limits
        group = get_budget_group_for_category(value, categories)
        item = BudgetRollupItem(
            category=value,
            parent="" if are_strings_equal(parent, value) else parent,
            group=group.value,
            amount=get_budget_amount(value, totals, categories),
            limit=limit,
            sign=get_sign_for_budget(value, categories),
            top_level=top_level,
        )

        if group is BudgetGroup.INCOME:
            summary.income.append(item)
            if top_level:
                summary.income_amount += item.amount
                summary.income_limit += item.limit
        else:
            summary.spending.append(item)
            if top_level:
                summary.spending_amount += item.amount
                summary.spending_limit += item.limit

    summary.unbudgeted = get_unbudgeted_totals(budgets, totals, categories)
    summary.unbudgeted_amount = sum(summary.unbudgeted.values(), 0.0)
    summary.net_cash_flow = sum_transaction_amounts(transactions)

    logger.debug(
        f"Built budget summary: {len(summary.income)} income items, "
        f"{len(summary.spending)} spending items, {len(summary.unbudgeted)} unbudgeted keys"
    )
    return summary
