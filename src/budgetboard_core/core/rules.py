"""
Automatic rule evaluation.

A rule applies to a transaction when every condition holds. Applying a rule
does not touch the transaction; it produces a ``TransactionPatch`` that the
caller persists.
"""

import re
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from budgetboard_core.core.categories import (
    find_category,
    get_is_parent_category,
    get_parent_category,
)
from budgetboard_core.core.exceptions import InvalidRuleError
from budgetboard_core.models.category import Category
from budgetboard_core.models.rule import AutomaticRule, RuleParameter
from budgetboard_core.models.transaction import Transaction, TransactionPatch
from budgetboard_core.utils.date_utils import parse_iso_date
from budgetboard_core.utils.strings import are_strings_equal


class TransactionField(str, Enum):
    MERCHANT = "merchant"
    AMOUNT = "amount"
    DATE = "date"
    CATEGORY = "category"


class OperatorType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    CATEGORY = "category"


FIELD_TO_OPERATOR_TYPE: Dict[str, OperatorType] = {
    TransactionField.MERCHANT.value: OperatorType.STRING,
    TransactionField.AMOUNT.value: OperatorType.NUMBER,
    TransactionField.DATE.value: OperatorType.DATE,
    TransactionField.CATEGORY.value: OperatorType.CATEGORY,
}

# operator -> operator types it is valid for
OPERATORS: Dict[str, List[OperatorType]] = {
    "equals": [OperatorType.STRING, OperatorType.NUMBER],
    "notEquals": [OperatorType.STRING, OperatorType.NUMBER],
    "contains": [OperatorType.STRING],
    "doesNotContain": [OperatorType.STRING],
    "startsWith": [OperatorType.STRING],
    "endsWith": [OperatorType.STRING],
    "matchesRegex": [OperatorType.STRING],
    "greaterThan": [OperatorType.NUMBER],
    "lessThan": [OperatorType.NUMBER],
    "on": [OperatorType.DATE],
    "before": [OperatorType.DATE],
    "after": [OperatorType.DATE],
    "is": [OperatorType.CATEGORY],
    "isNot": [OperatorType.CATEGORY],
}

ACTION_OPERATOR_SET = "set"


def get_operators_for_field(field: str) -> List[str]:
    """Condition operators that can be used with ``field``."""
    operator_type = FIELD_TO_OPERATOR_TYPE.get(field.lower())
    if operator_type is None:
        return []
    return [op for op, types in OPERATORS.items() if operator_type in types]


def is_operator_valid_for_field(field: str, operator: str) -> bool:
    return any(are_strings_equal(op, operator) for op in get_operators_for_field(field))


def _parse_amount(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise InvalidRuleError(f"The amount '{value}' is not a valid number.") from None


def _parse_date(value: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError:
        raise InvalidRuleError(f"The date '{value}' is not a valid date.") from None


def _matches_merchant(operator: str, value: str, merchant: str) -> bool:
    merchant_lower = merchant.lower()
    value_lower = value.lower()

    if operator == "equals":
        return merchant_lower == value_lower
    if operator == "notequals":
        return merchant_lower != value_lower
    if operator == "contains":
        return value_lower in merchant_lower
    if operator == "doesnotcontain":
        return value_lower not in merchant_lower
    if operator == "startswith":
        return merchant_lower.startswith(value_lower)
    if operator == "endswith":
        return merchant_lower.endswith(value_lower)
    if operator == "matchesregex":
        try:
            return re.search(value, merchant) is not None
        except re.error:
            raise InvalidRuleError(f"The regex pattern '{value}' is not valid.") from None

    raise InvalidRuleError(f"Unsupported operator '{operator}' for merchant field.")


def _matches_amount(operator: str, value: str, amount: float) -> bool:
    target = _parse_amount(value)

    if operator == "equals":
        return amount == target
    if operator == "notequals":
        return amount != target
    if operator == "greaterthan":
        return amount > target
    if operator == "lessthan":
        return amount < target

    raise InvalidRuleError(f"Unsupported operator '{operator}' for amount field.")


def _matches_date(operator: str, value: str, transaction_date: str) -> bool:
    target = _parse_date(value)
    try:
        actual = parse_iso_date(transaction_date)
    except ValueError:
        raise InvalidRuleError(
            f"The transaction date '{transaction_date}' is not a valid date."
        ) from None

    if operator == "on":
        return actual == target
    if operator == "before":
        return actual < target
    if operator == "after":
        return actual > target

    raise InvalidRuleError(f"Unsupported operator '{operator}' for date field.")


def _matches_category(
    operator: str, value: str, transaction: Transaction, categories: Sequence[Category]
) -> bool:
    if value and find_category(value, categories) is None:
        raise InvalidRuleError(f"The category '{value}' does not exist.")

    # Parent categories are compared against the transaction's category,
    # subcategories against its subcategory.
    if value == "" or get_is_parent_category(value, categories):
        is_match = are_strings_equal(transaction.category, value)
    else:
        is_match = are_strings_equal(transaction.subcategory, value)

    if operator == "is":
        return is_match
    if operator == "isnot":
        return not is_match

    raise InvalidRuleError(f"Unsupported operator '{operator}' for category field.")


def matches_condition(
    condition: RuleParameter, transaction: Transaction, categories: Sequence[Category]
) -> bool:
    """
    Evaluate one rule condition against a transaction.

    Raises:
        InvalidRuleError: If the field, operator or value cannot be evaluated
    """
    field = condition.field.lower()
    operator = condition.operator.lower()

    if field == TransactionField.MERCHANT.value:
        return _matches_merchant(operator, condition.value, transaction.merchant_name or "")
    if field == TransactionField.AMOUNT.value:
        return _matches_amount(operator, condition.value, transaction.amount)
    if field == TransactionField.DATE.value:
        return _matches_date(operator, condition.value, transaction.date)
    if field == TransactionField.CATEGORY.value:
        return _matches_category(operator, condition.value, transaction, categories)

    raise InvalidRuleError(f"Unsupported field '{condition.field}' in rule condition.")


def matches_rule(
    rule: AutomaticRule, transaction: Transaction, categories: Sequence[Category]
) -> bool:
    """True if every condition of ``rule`` holds for ``transaction``."""
    return all(matches_condition(c, transaction, categories) for c in rule.conditions)


def build_action_patch(action: RuleParameter, categories: Sequence[Category]) -> TransactionPatch:
    """
    Translate one rule action into a patch.

    Raises:
        InvalidRuleError: If the action cannot be applied
    """
    if not are_strings_equal(action.operator, ACTION_OPERATOR_SET):
        raise InvalidRuleError(f"Unsupported operator '{action.operator}' in rule action.")

    field = action.field.lower()

    if field == TransactionField.MERCHANT.value:
        return TransactionPatch(merchant_name=action.value)

    if field == TransactionField.AMOUNT.value:
        return TransactionPatch(amount=_parse_amount(action.value))

    if field == TransactionField.DATE.value:
        return TransactionPatch(date=_parse_date(action.value).isoformat())

    if field == TransactionField.CATEGORY.value:
        if not action.value:
            return TransactionPatch(category="", subcategory="")
        found = find_category(action.value, categories)
        if found is None:
            raise InvalidRuleError(f"The category '{action.value}' does not exist.")
        if get_is_parent_category(found.value, categories):
            return TransactionPatch(category=found.value, subcategory="")
        return TransactionPatch(
            category=get_parent_category(found.value, categories), subcategory=found.value
        )

    raise InvalidRuleError(f"Unsupported field '{action.field}' in rule action.")


def build_rule_patch(
    rule: AutomaticRule, transaction: Transaction, categories: Sequence[Category]
) -> Optional[TransactionPatch]:
    """
    Decide whether ``rule`` applies and what it changes.

    Returns:
        The combined patch of the rule's actions, or None when a condition
        does not hold
    """
    if not matches_rule(rule, transaction, categories):
        return None

    patch = TransactionPatch()
    for action in rule.actions:
        patch = patch.merge(build_action_patch(action, categories))
    return patch


def apply_rules(
    rules: Iterable[AutomaticRule], transaction: Transaction, categories: Sequence[Category]
) -> TransactionPatch:
    """
    Evaluate rules in order against one transaction.

    Conditions always see the original transaction. When several matching
    rules set the same field, the later rule wins.
    """
    patch = TransactionPatch()
    for rule in rules:
        rule_patch = build_rule_patch(rule, transaction, categories)
        if rule_patch is not None:
            patch = patch.merge(rule_patch)
    return patch
