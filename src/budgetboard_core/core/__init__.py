"""
Core rollup engine for Budget Board.
"""

from budgetboard_core.core.budgets import (
    BudgetGroup,
    build_budget_summary,
    build_category_to_limits_map,
    get_budget_amount,
)
from budgetboard_core.core.categories import build_categories_tree
from budgetboard_core.core.exceptions import (
    BudgetBoardError,
    InvalidRuleError,
    LedgerDecodeError,
    LedgerNotFoundError,
)
from budgetboard_core.core.ledger import LedgerSnapshot
from budgetboard_core.core.transactions import build_category_to_transactions_total_map
from budgetboard_core.core.widgets import calculate_line_total, parse_net_worth_configuration

__all__ = [
    "BudgetBoardError",
    "BudgetGroup",
    "InvalidRuleError",
    "LedgerDecodeError",
    "LedgerNotFoundError",
    "LedgerSnapshot",
    "build_budget_summary",
    "build_categories_tree",
    "build_category_to_limits_map",
    "build_category_to_transactions_total_map",
    "calculate_line_total",
    "get_budget_amount",
    "parse_net_worth_configuration",
]
