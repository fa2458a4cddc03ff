"""
MCP tool definitions for Budget Board data.

Exposes the rollup engine through the Model Context Protocol.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from budgetboard_core.core.budgets import build_budget_summary
from budgetboard_core.core.categories import build_categories_tree
from budgetboard_core.core.ledger import LedgerSnapshot
from budgetboard_core.core.rules import apply_rules
from budgetboard_core.core.transactions import build_category_to_transactions_total_map
from budgetboard_core.core.widgets import (
    DEFAULT_NET_WORTH_CONFIGURATION,
    calculate_net_worth,
    find_cyclic_lines,
    parse_net_worth_configuration,
)
from budgetboard_core.utils.date_utils import parse_iso_date, parse_period


class BudgetBoardTools:
    """Collection of MCP tools for querying Budget Board rollups."""

    def __init__(self, ledger: LedgerSnapshot):
        """
        Initialize tools with a ledger snapshot.

        Args:
            ledger: LedgerSnapshot instance
        """
        self.ledger = ledger

    def _resolve_month(self, month: Optional[str]) -> date:
        start, _ = parse_period(month or "this_month")
        return parse_iso_date(start)

    def get_category_tree(self) -> Dict[str, Any]:
        """
        Get the transaction category hierarchy.

        Returns:
            Dict with root count and nested category nodes
        """
        tree = build_categories_tree(self.ledger.get_categories())
        return {
            "count": len(tree),
            "categories": [node.model_dump(mode="json", by_alias=True) for node in tree],
        }

    def get_category_totals(self, month: Optional[str] = None) -> Dict[str, Any]:
        """
        Get transaction totals per category for one month.

        Args:
            month: "YYYY-MM" or a period shorthand (default: this_month)

        Returns:
            Dict with per-category totals, largest magnitude first
        """
        month_date = self._resolve_month(month)
        totals = build_category_to_transactions_total_map(
            self.ledger.get_transactions(month=month_date)
        )
        categories = [
            {"category": key or "uncategorized", "total": round(total, 2)}
            for key, total in totals.items()
        ]
        categories.sort(key=lambda x: abs(x["total"]), reverse=True)

        return {
            "month": month_date.strftime("%Y-%m"),
            "category_count": len(categories),
            "categories": categories,
        }

    def get_budget_summary(self, month: Optional[str] = None) -> Dict[str, Any]:
        """
        Get budget-vs-actual rollups for one month.

        Args:
            month: "YYYY-MM" or a period shorthand (default: this_month)

        Returns:
            Dict with income and spending items, group totals and the
            unbudgeted remainder
        """
        month_date = self._resolve_month(month)
        summary = build_budget_summary(
            self.ledger.get_budgets(month=month_date),
            self.ledger.get_categories(),
            self.ledger.get_transactions(month=month_date),
        )
        return {
            "month": month_date.strftime("%Y-%m"),
            **summary.model_dump(mode="json"),
        }

    def get_net_worth(self) -> Dict[str, Any]:
        """
        Get the net worth report.

        Falls back to the default layout when no configuration is stored.

        Returns:
            Dict with line totals and any lines that reference themselves
        """
        configuration = parse_net_worth_configuration(
            self.ledger.get_net_worth_configuration()
        )
        is_default = configuration is None
        if configuration is None:
            configuration = DEFAULT_NET_WORTH_CONFIGURATION

        lines = calculate_net_worth(
            configuration, self.ledger.get_accounts(), self.ledger.get_assets()
        )
        return {
            "is_default_configuration": is_default,
            "lines": [
                {"group": group, "name": name, "total": round(total, 2)}
                for group, name, total in lines
            ],
            "cyclic_lines": find_cyclic_lines(configuration),
        }

    def match_rules(self, transaction_id: str) -> Dict[str, Any]:
        """
        Evaluate automatic rules against one transaction.

        Args:
            transaction_id: Transaction ID to evaluate

        Returns:
            Dict with the field changes the rules would make

        Raises:
            ValueError: If transaction_id is not found
        """
        transaction = self.ledger.find_transaction(transaction_id)
        if transaction is None:
            raise ValueError(f"Transaction not found: {transaction_id}")

        patch = apply_rules(self.ledger.get_rules(), transaction, self.ledger.get_categories())
        return {
            "transaction_id": transaction.id,
            "matched": not patch.is_empty(),
            "changes": patch.model_dump(mode="json", exclude_none=True),
        }


_MONTH_PROPERTY = {
    "type": "string",
    "description": (
        "Month as YYYY-MM, or a period shorthand: this_month, last_month "
        "(default: this_month)"
    ),
}


def create_tool_schemas() -> List[Dict[str, Any]]:
    """
    Create MCP tool schemas for all tools.

    Returns:
        List of tool schema definitions
    """
    return [
        {
            "name": "get_category_tree",
            "description": (
                "Get the transaction category hierarchy: root categories with "
                "their subcategories."
            ),
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "get_category_totals",
            "description": (
                "Get signed transaction totals per category for a month. "
                "Negative totals are spending, positive totals are income."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {"month": _MONTH_PROPERTY},
            },
        },
        {
            "name": "get_budget_summary",
            "description": (
                "Get budget vs actual for a month. Parent categories include "
                "their subcategories. Also returns unbudgeted totals."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {"month": _MONTH_PROPERTY},
            },
        },
        {
            "name": "get_net_worth",
            "description": (
                "Get the net worth report: every configured line with its "
                "total from accounts, assets and other lines."
            ),
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "match_rules",
            "description": (
                "Evaluate automatic rules against a transaction and return "
                "the changes they would make."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "transaction_id": {
                        "type": "string",
                        "description": "Transaction ID to evaluate",
                    },
                },
                "required": ["transaction_id"],
            },
        },
    ]
