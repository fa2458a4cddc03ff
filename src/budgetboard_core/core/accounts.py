"""
Account and asset helpers.
"""

from typing import Iterable, List

from budgetboard_core.models.account import Account, Asset
from budgetboard_core.utils.strings import are_strings_equal


def filter_visible_accounts(accounts: Iterable[Account]) -> List[Account]:
    """Drop hidden and deleted accounts."""
    return [a for a in accounts if a.is_visible]


def filter_visible_assets(assets: Iterable[Asset]) -> List[Asset]:
    """Drop hidden and deleted assets."""
    return [a for a in assets if a.is_visible]


def get_accounts_of_types(accounts: Iterable[Account], types: Iterable[str]) -> List[Account]:
    """
    Return accounts whose type or subtype matches any of ``types``.

    Matching ignores case, so "savings" selects every account typed
    "Savings" as well as any account with subtype "Savings".
    """
    wanted = [t for t in types if t]
    return [
        a
        for a in accounts
        if any(are_strings_equal(a.type, t) or are_strings_equal(a.subtype, t) for t in wanted)
    ]


def sum_accounts_total_balance(accounts: Iterable[Account]) -> float:
    return sum((a.current_balance for a in accounts), 0.0)


def sum_assets_total_value(assets: Iterable[Asset]) -> float:
    return sum((a.current_value for a in assets), 0.0)
