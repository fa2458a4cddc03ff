"""
Pydantic models for Budget Board data structures.
"""

from budgetboard_core.models.account import Account, Asset
from budgetboard_core.models.budget import Budget, BudgetRollupItem, BudgetSummary
from budgetboard_core.models.category import Category, CategoryNode
from budgetboard_core.models.rule import AutomaticRule, RuleParameter
from budgetboard_core.models.transaction import Transaction, TransactionPatch
from budgetboard_core.models.widget import (
    NetWorthWidgetCategory,
    NetWorthWidgetConfiguration,
    NetWorthWidgetGroup,
    NetWorthWidgetLine,
)

__all__ = [
    "Account",
    "Asset",
    "AutomaticRule",
    "Budget",
    "BudgetRollupItem",
    "BudgetSummary",
    "Category",
    "CategoryNode",
    "NetWorthWidgetCategory",
    "NetWorthWidgetConfiguration",
    "NetWorthWidgetGroup",
    "NetWorthWidgetLine",
    "RuleParameter",
    "Transaction",
    "TransactionPatch",
]
