"""
Transaction aggregation.

Reduces transaction lists into per-category totals. No filtering happens
here; callers drop hidden or deleted transactions first.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List

from budgetboard_core.models.transaction import Transaction
from budgetboard_core.utils.date_utils import is_same_month
from budgetboard_core.utils.strings import category_key


def build_category_to_transactions_total_map(
    transactions: Iterable[Transaction],
) -> Dict[str, float]:
    """
    Sum transaction amounts by effective category key.

    The key is the lowercased subcategory if set, else the lowercased
    category, else "" for uncategorized transactions.

    Args:
        transactions: Transactions to aggregate

    Returns:
        Dict mapping lowercase category key to summed signed amount
    """
    totals: Dict[str, float] = defaultdict(float)
    for txn in transactions:
        totals[category_key(txn.category_key)] += txn.amount
    return dict(totals)


def sum_transaction_amounts(transactions: Iterable[Transaction]) -> float:
    """Net cash flow of ``transactions``."""
    return sum((txn.amount for txn in transactions), 0.0)


def filter_visible_transactions(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Drop hidden and deleted transactions."""
    return [txn for txn in transactions if not txn.hidden and txn.deleted is None]


def get_transactions_for_month(
    transactions: Iterable[Transaction], month: date
) -> List[Transaction]:
    """Return transactions dated in the same calendar month as ``month``."""
    return [txn for txn in transactions if is_same_month(txn.date, month)]
