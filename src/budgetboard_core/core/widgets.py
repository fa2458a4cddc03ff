"""
Net worth widget configuration parsing and line resolution.

Configuration is persisted as an opaque JSON string that may use either
lowerCamelCase or UpperPascalCase keys. ``parse_net_worth_configuration`` is
the only place that deals with that; everything else works on the
normalized models.
"""

import json
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from pydantic import ValidationError

from budgetboard_core.core.accounts import (
    get_accounts_of_types,
    sum_accounts_total_balance,
    sum_assets_total_value,
)
from budgetboard_core.models.account import Account, Asset
from budgetboard_core.models.widget import (
    NetWorthWidgetCategory,
    NetWorthWidgetConfiguration,
    NetWorthWidgetGroup,
    NetWorthWidgetLine,
)
from budgetboard_core.utils.strings import are_strings_equal

logger = logging.getLogger(__name__)

NET_WORTH_CATEGORY_TYPES = ["account", "asset", "line"]
NET_WORTH_CATEGORY_ACCOUNT_SUBTYPES = ["category"]
NET_WORTH_CATEGORY_ASSET_SUBTYPES = ["all"]
NET_WORTH_CATEGORY_LINE_SUBTYPES = ["name"]


def _ref(value: str, type_: str, subtype: str) -> NetWorthWidgetCategory:
    return NetWorthWidgetCategory(value=value, type=type_, subtype=subtype)


def _line(name: str, index: int, categories: List[NetWorthWidgetCategory]) -> NetWorthWidgetLine:
    return NetWorthWidgetLine(name=name, index=index, categories=categories)


DEFAULT_NET_WORTH_CONFIGURATION = NetWorthWidgetConfiguration(
    groups=[
        NetWorthWidgetGroup(
            index=0,
            lines=[
                _line(
                    "Spending",
                    0,
                    [
                        _ref("Checking", "Account", "Category"),
                        _ref("Cash", "Account", "Category"),
                        _ref("Other", "Account", "Category"),
                    ],
                ),
                _line("Credit Cards", 1, [_ref("Credit Card", "Account", "Category")]),
                _line("Loans", 2, [_ref("Loan", "Account", "Category")]),
                _line("Savings", 3, [_ref("Savings", "Account", "Category")]),
            ],
        ),
        NetWorthWidgetGroup(
            index=1,
            lines=[
                _line(
                    "Liquid",
                    0,
                    [
                        _ref("Spending", "Line", "Name"),
                        _ref("Credit Cards", "Line", "Name"),
                        _ref("Loans", "Line", "Name"),
                        _ref("Savings", "Line", "Name"),
                    ],
                ),
                _line("Investments", 1, [_ref("Investment", "Account", "Category")]),
                _line("Assets", 2, [_ref("", "Asset", "All")]),
            ],
        ),
        NetWorthWidgetGroup(
            index=2,
            lines=[
                _line(
                    "Total",
                    0,
                    [
                        _ref("Liquid", "Line", "Name"),
                        _ref("Investments", "Line", "Name"),
                        _ref("Assets", "Line", "Name"),
                    ],
                ),
            ],
        ),
    ]
)


def parse_net_worth_configuration(
    configuration: Optional[str],
) -> Optional[NetWorthWidgetConfiguration]:
    """
    Parse a persisted net worth configuration.

    Args:
        configuration: Serialized JSON, possibly absent or malformed

    Returns:
        The normalized configuration, or None when the input is absent,
        cannot be parsed, or normalizes to zero groups
    """
    if not configuration:
        return None

    try:
        parsed = json.loads(configuration)
    except ValueError:
        logger.debug("Ignoring net worth configuration that is not valid JSON")
        return None

    if not isinstance(parsed, dict):
        return None

    try:
        normalized = NetWorthWidgetConfiguration.model_validate(parsed)
    except ValidationError as e:
        logger.debug(f"Ignoring net worth configuration that failed validation: {e}")
        return None

    if not normalized.groups:
        return None

    return normalized


def serialize_net_worth_configuration(configuration: NetWorthWidgetConfiguration) -> str:
    """Serialize a configuration to its persisted JSON form."""
    return configuration.model_dump_json()


def is_net_worth_widget_type(widget_type: str) -> bool:
    return are_strings_equal(widget_type, "Net Worth") or are_strings_equal(widget_type, "NetWorth")


def is_asset_category(category: NetWorthWidgetCategory) -> bool:
    return "asset" in category.type.lower()


def is_account_category(category: NetWorthWidgetCategory) -> bool:
    return "account" in category.type.lower()


def is_line_category(category: NetWorthWidgetCategory) -> bool:
    return "line" in category.type.lower()


def get_subtype_options(type_: str) -> List[str]:
    """Subtypes that can be chosen for a reference of the given type."""
    options: Dict[str, List[str]] = {
        "account": NET_WORTH_CATEGORY_ACCOUNT_SUBTYPES,
        "asset": NET_WORTH_CATEGORY_ASSET_SUBTYPES,
        "line": NET_WORTH_CATEGORY_LINE_SUBTYPES,
    }
    return list(options.get((type_ or "").lower(), []))


def get_asset_value_for_category(category: NetWorthWidgetCategory, assets: Sequence[Asset]) -> float:
    # Only "all" is supported for assets.
    if are_strings_equal(category.subtype, "all"):
        return sum_assets_total_value(assets)
    return 0.0


def get_account_value_for_category(
    category: NetWorthWidgetCategory, accounts: Sequence[Account]
) -> float:
    if not are_strings_equal(category.subtype, "category") or not category.value:
        return 0.0
    return sum_accounts_total_balance(get_accounts_of_types(accounts, [category.value]))


def _index_lines(lines: Sequence[NetWorthWidgetLine]) -> Dict[str, NetWorthWidgetLine]:
    # The first line with a given name wins.
    index: Dict[str, NetWorthWidgetLine] = {}
    for line in lines:
        index.setdefault(line.name, line)
    return index


def calculate_line_total(
    line: NetWorthWidgetLine,
    accounts: Sequence[Account],
    assets: Sequence[Asset],
    lines: Sequence[NetWorthWidgetLine],
) -> float:
    """
    Total value of a net worth line.

    Account references sum balances of matching accounts, asset references
    sum every asset, and line references add the referenced line's total.
    A line that is still being resolved higher up the chain contributes 0,
    so cyclic references always terminate. Unknown types, unsupported
    subtypes and missing lines contribute 0.

    Lines are resolved with an explicit stack and each line is totalled
    once per call, so long chains and shared references stay cheap.

    Args:
        line: The line to total
        accounts: Pre-filtered accounts
        assets: Pre-filtered assets
        lines: Every line in the configuration, for line references

    Returns:
        The line total
    """
    index = _index_lines(lines)
    resolved: Dict[str, float] = {}
    in_progress: Set[str] = {line.name}
    # Each frame is [line, position of the next category, running total].
    stack: List[list] = [[line, 0, 0.0]]
    total = 0.0

    while stack:
        frame = stack[-1]
        current, position = frame[0], frame[1]

        if position == len(current.categories):
            stack.pop()
            in_progress.discard(current.name)
            resolved[current.name] = frame[2]
            if stack:
                stack[-1][2] += frame[2]
            else:
                total = frame[2]
            continue

        category = current.categories[position]
        frame[1] += 1

        if is_asset_category(category):
            frame[2] += get_asset_value_for_category(category, assets)
        elif is_account_category(category):
            frame[2] += get_account_value_for_category(category, accounts)
        elif is_line_category(category):
            if category.value in in_progress:
                logger.warning(
                    f"Cyclic net worth line reference: '{current.name}' -> '{category.value}'"
                )
            elif category.value in resolved:
                frame[2] += resolved[category.value]
            elif category.value not in index:
                logger.debug(f"Net worth line '{category.value}' not found")
            else:
                in_progress.add(category.value)
                stack.append([index[category.value], 0, 0.0])

    return total


def calculate_net_worth(
    configuration: NetWorthWidgetConfiguration,
    accounts: Sequence[Account],
    assets: Sequence[Asset],
) -> List[Tuple[int, str, float]]:
    """
    Total every line of a configuration.

    Returns:
        (group position, line name, total) tuples, with groups and lines
        ordered by their index
    """
    all_lines = configuration.lines
    results: List[Tuple[int, str, float]] = []

    for position, group in enumerate(sorted(configuration.groups, key=lambda g: g.index)):
        for line in sorted(group.lines, key=lambda l: l.index):
            results.append(
                (position, line.name, calculate_line_total(line, accounts, assets, all_lines))
            )

    return results


def find_cyclic_lines(configuration: NetWorthWidgetConfiguration) -> List[str]:
    """
    Names of lines that take part in a reference cycle.

    Meant for rejecting a configuration when it is edited.
    """
    lines = configuration.lines
    index = _index_lines(lines)
    edges: Dict[str, List[str]] = {}
    for line in lines:
        if line.name in edges:
            continue
        edges[line.name] = [
            c.value
            for c in line.categories
            if is_line_category(c) and c.value in index
        ]

    cyclic: Set[str] = set()
    for start in edges:
        stack = list(edges[start])
        seen: Set[str] = set()
        while stack:
            name = stack.pop()
            if name == start:
                cyclic.add(start)
                break
            if name in seen:
                continue
            seen.add(name)
            stack.extend(edges.get(name, []))

    return [name for name in edges if name in cyclic]
