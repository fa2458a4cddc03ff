"""
Ledger snapshot access.

Loads categories, transactions, budgets, accounts, assets, rules and the
net worth widget configuration from a JSON snapshot and provides filtered
access to them.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from budgetboard_core.core.accounts import filter_visible_accounts, filter_visible_assets
from budgetboard_core.core.budgets import get_budgets_for_month
from budgetboard_core.core.categories import get_all_transaction_categories
from budgetboard_core.core.exceptions import LedgerDecodeError, LedgerNotFoundError
from budgetboard_core.core.transactions import (
    filter_visible_transactions,
    get_transactions_for_month,
)
from budgetboard_core.models.account import Account, Asset
from budgetboard_core.models.budget import Budget
from budgetboard_core.models.category import Category
from budgetboard_core.models.rule import AutomaticRule
from budgetboard_core.models.transaction import Transaction

logger = logging.getLogger(__name__)

DEFAULT_LEDGER_PATH = Path.home() / ".budgetboard" / "ledger.json"


class LedgerSnapshot:
    """
    Read-only view over a ledger snapshot file.

    The file is read on first access. Snapshot keys use camelCase (the
    models also accept snake_case).
    """

    def __init__(self, ledger_path: Optional[Path] = None):
        """
        Initialize the snapshot.

        Args:
            ledger_path: Path to the JSON snapshot.
                    If None, uses ~/.budgetboard/ledger.json.
        """
        if ledger_path is None:
            ledger_path = DEFAULT_LEDGER_PATH

        self.ledger_path = ledger_path
        self._data: Optional[Dict[str, Any]] = None
        self._transactions: Optional[List[Transaction]] = None
        self._budgets: Optional[List[Budget]] = None
        self._accounts: Optional[List[Account]] = None
        self._assets: Optional[List[Asset]] = None
        self._rules: Optional[List[AutomaticRule]] = None

    def is_available(self) -> bool:
        """Check if the snapshot file exists."""
        return self.ledger_path.is_file()

    def _load(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data

        if not self.is_available():
            raise LedgerNotFoundError(f"Ledger snapshot not found: {self.ledger_path}")

        try:
            data = json.loads(self.ledger_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise LedgerDecodeError(f"Cannot read ledger snapshot {self.ledger_path}: {e}") from e

        if not isinstance(data, dict):
            raise LedgerDecodeError(f"Ledger snapshot {self.ledger_path} is not a JSON object")

        logger.debug(f"Loaded ledger snapshot from {self.ledger_path}")
        self._data = data
        return data

    def _records(self, key: str, model: Any) -> List[Any]:
        raw = self._load().get(key) or []
        if not isinstance(raw, list):
            raise LedgerDecodeError(f"Ledger key '{key}' must be a list")
        try:
            return [model.model_validate(item) for item in raw]
        except ValidationError as e:
            raise LedgerDecodeError(f"Invalid record under '{key}': {e}") from e

    def get_categories(self) -> List[Category]:
        """
        Built-in plus custom transaction categories.

        Returns:
            Merged category list, honouring ``disableBuiltInCategories``
        """
        data = self._load()
        custom = self._records("customCategories", Category)
        return get_all_transaction_categories(
            custom, disable_built_in=bool(data.get("disableBuiltInCategories", False))
        )

    def get_transactions(self, month: Optional[date] = None) -> List[Transaction]:
        """
        Visible transactions, optionally limited to one month.

        Args:
            month: Any date within the wanted month

        Returns:
            Transactions that are neither hidden nor deleted
        """
        if self._transactions is None:
            self._transactions = self._records("transactions", Transaction)

        result = filter_visible_transactions(self._transactions)
        if month is not None:
            result = get_transactions_for_month(result, month)
        return result

    def get_budgets(self, month: Optional[date] = None) -> List[Budget]:
        if self._budgets is None:
            self._budgets = self._records("budgets", Budget)

        if month is None:
            return self._budgets[:]
        return get_budgets_for_month(self._budgets, month)

    def get_accounts(self) -> List[Account]:
        """Visible accounts."""
        if self._accounts is None:
            self._accounts = self._records("accounts", Account)
        return filter_visible_accounts(self._accounts)

    def get_assets(self) -> List[Asset]:
        """Visible assets."""
        if self._assets is None:
            self._assets = self._records("assets", Asset)
        return filter_visible_assets(self._assets)

    def get_rules(self) -> List[AutomaticRule]:
        if self._rules is None:
            self._rules = self._records("rules", AutomaticRule)
        return self._rules[:]

    def get_net_worth_configuration(self) -> Optional[str]:
        """The raw persisted net worth configuration string, if any."""
        raw = self._load().get("netWorthConfiguration")
        return raw if isinstance(raw, str) else None

    def find_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self.get_transactions() if t.id == transaction_id), None)
