"""
Unit tests for account and asset helpers.
"""

from budgetboard_core.core.accounts import (
    filter_visible_accounts,
    filter_visible_assets,
    get_accounts_of_types,
    sum_accounts_total_balance,
    sum_assets_total_value,
)
from budgetboard_core.models.account import Account, Asset


ACCOUNTS = [
    Account(id="1", current_balance=100.0, type="Checking"),
    Account(id="2", current_balance=200.0, type="Savings", subtype="Money Market"),
    Account(id="3", current_balance=300.0, type="Savings", hide_account=True),
    Account(id="4", current_balance=400.0, type="Savings", deleted="2025-01-01"),
    Account(id="5", current_balance=-50.0, type="Credit Card"),
]


def test_filter_visible_accounts():
    assert [a.id for a in filter_visible_accounts(ACCOUNTS)] == ["1", "2", "5"]


def test_filter_visible_assets():
    assets = [
        Asset(id="h", current_value=1.0),
        Asset(id="c", current_value=2.0, hide=True),
        Asset(id="b", current_value=3.0, deleted="2025-01-01"),
    ]
    visible = filter_visible_assets(assets)
    assert [a.id for a in visible] == ["h"]
    assert sum_assets_total_value(visible) == 1.0


def test_accounts_of_types_matches_type_and_subtype():
    visible = filter_visible_accounts(ACCOUNTS)
    assert [a.id for a in get_accounts_of_types(visible, ["savings"])] == ["2"]
    assert [a.id for a in get_accounts_of_types(visible, ["MONEY MARKET"])] == ["2"]
    assert [a.id for a in get_accounts_of_types(visible, ["Checking", "Credit Card"])] == ["1", "5"]


def test_accounts_of_types_ignores_empty_type():
    assert get_accounts_of_types(ACCOUNTS, [""]) == []


def test_sum_accounts_total_balance():
    assert sum_accounts_total_balance(filter_visible_accounts(ACCOUNTS)) == 250.0
    assert sum_accounts_total_balance([]) == 0.0
