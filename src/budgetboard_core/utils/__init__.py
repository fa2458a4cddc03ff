"""
Utility functions for Budget Board.
"""

from budgetboard_core.utils.date_utils import get_month_range, parse_month, parse_period
from budgetboard_core.utils.strings import are_strings_equal, category_key

__all__ = [
    "are_strings_equal",
    "category_key",
    "get_month_range",
    "parse_month",
    "parse_period",
]
