"""
Category hierarchy helpers.

Categories arrive as a flat list of ``Category(value, parent)`` records. All
lookups compare values case-insensitively; the first match wins when a list
holds duplicates.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from budgetboard_core.models.category import Category, CategoryNode
from budgetboard_core.utils.strings import are_strings_equal, category_key


def _c(value: str, parent: str = "") -> Category:
    return Category(value=value, parent=parent)


DEFAULT_TRANSACTION_CATEGORIES: List[Category] = [
    _c("Income"),
    _c("Paycheck", "Income"),
    _c("Bonus", "Income"),
    _c("Interest Income", "Income"),
    _c("Reimbursement", "Income"),
    _c("Auto & Transport"),
    _c("Auto Insurance", "Auto & Transport"),
    _c("Auto Payment", "Auto & Transport"),
    _c("Gas & Fuel", "Auto & Transport"),
    _c("Parking", "Auto & Transport"),
    _c("Public Transportation", "Auto & Transport"),
    _c("Service & Parts", "Auto & Transport"),
    _c("Bills & Utilities"),
    _c("Internet", "Bills & Utilities"),
    _c("Mobile Phone", "Bills & Utilities"),
    _c("Utilities", "Bills & Utilities"),
    _c("Food & Dining"),
    _c("Coffee Shops", "Food & Dining"),
    _c("Fast Food", "Food & Dining"),
    _c("Groceries", "Food & Dining"),
    _c("Restaurants", "Food & Dining"),
    _c("Entertainment"),
    _c("Movies & DVDs", "Entertainment"),
    _c("Music", "Entertainment"),
    _c("Health & Fitness"),
    _c("Doctor", "Health & Fitness"),
    _c("Gym", "Health & Fitness"),
    _c("Pharmacy", "Health & Fitness"),
    _c("Home"),
    _c("Home Improvement", "Home"),
    _c("Mortgage & Rent", "Home"),
    _c("Shopping"),
    _c("Clothing", "Shopping"),
    _c("Electronics & Software", "Shopping"),
    _c("Travel"),
    _c("Air Travel", "Travel"),
    _c("Hotel", "Travel"),
    _c("Transfer"),
    _c("Credit Card Payment", "Transfer"),
]

ACCOUNT_CATEGORIES: List[Category] = [
    _c("Checking"),
    _c("Savings"),
    _c("Money Market", "Savings"),
    _c("Certificate of Deposit", "Savings"),
    _c("Loan"),
    _c("Auto", "Loan"),
    _c("Student", "Loan"),
    _c("Personal", "Loan"),
    _c("Home Equity", "Loan"),
    _c("Credit Card"),
    _c("Investment"),
    _c("401k", "Investment"),
    _c("Roth IRA", "Investment"),
    _c("Rollover IRA", "Investment"),
    _c("ESPP", "Investment"),
    _c("Trust", "Investment"),
    _c("Taxable", "Investment"),
    _c("Mortgage"),
    _c("Cash"),
    _c("Other"),
]


def get_all_transaction_categories(
    custom_categories: Iterable[Category], disable_built_in: bool = False
) -> List[Category]:
    """
    Combine built-in and custom categories into one list.

    Args:
        custom_categories: User-defined categories
        disable_built_in: Skip the built-in defaults when True

    Returns:
        Built-in categories (unless disabled) followed by custom ones
    """
    combined: List[Category] = []
    if not disable_built_in:
        combined.extend(DEFAULT_TRANSACTION_CATEGORIES)
    combined.extend(custom_categories)
    return combined


def find_category(value: str, categories: Sequence[Category]) -> Optional[Category]:
    """Return the first category whose value matches ``value``."""
    return next((c for c in categories if are_strings_equal(c.value, value)), None)


def build_categories_tree(categories: Sequence[Category]) -> List[CategoryNode]:
    """
    Build a forest of root nodes from a flat category list.

    Subcategories are attached under the root whose value matches their
    parent and sorted by value. A subcategory whose parent is not a root in
    ``categories`` is left out of the tree.

    Args:
        categories: Flat list of categories

    Returns:
        Root nodes in input order, each with its subcategories
    """
    roots: List[CategoryNode] = []
    root_index: Dict[str, CategoryNode] = {}

    for category in categories:
        if category.parent == "":
            node = CategoryNode(value=category.value, parent="")
            roots.append(node)
            root_index.setdefault(category_key(category.value), node)

    for category in categories:
        if category.parent == "":
            continue
        root = root_index.get(category_key(category.parent))
        if root is not None:
            root.sub_categories.append(
                CategoryNode(value=category.value, parent=category.parent)
            )

    for root in roots:
        root.sub_categories.sort(key=lambda node: category_key(node.value))

    return roots


def get_is_parent_category(value: str, categories: Sequence[Category]) -> bool:
    """True if ``value`` names a root category."""
    found = find_category(value, categories)
    return found is not None and found.parent == ""


def get_parent_category(value: str, categories: Sequence[Category]) -> str:
    """
    Resolve the root category for ``value``.

    Returns the category's own value when it is a root, its parent when it is
    a subcategory, and "" when it is not found.
    """
    found = find_category(value, categories)
    if found is None:
        return ""
    return found.value if found.parent == "" else found.parent


def get_sub_categories(root_value: str, categories: Sequence[Category]) -> List[Category]:
    """Return every category whose parent matches ``root_value``."""
    return [c for c in categories if c.parent and are_strings_equal(c.parent, root_value)]


def get_formatted_category_value(value: str, categories: Sequence[Category]) -> str:
    """Format a category for display as "Parent / Child" or "Parent"."""
    found = find_category(value, categories)
    if found is None:
        return value
    if found.parent == "":
        return found.value
    return f"{found.parent} / {found.value}"
