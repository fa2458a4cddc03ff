"""
Custom exceptions for Budget Board.
"""


class BudgetBoardError(Exception):
    """Base exception for Budget Board errors."""
    pass


class LedgerNotFoundError(BudgetBoardError):
    """Raised when the ledger snapshot file cannot be found."""
    pass


class LedgerDecodeError(BudgetBoardError):
    """Raised when the ledger snapshot cannot be decoded."""
    pass


class InvalidRuleError(BudgetBoardError):
    """Raised when an automatic rule cannot be evaluated."""
    pass
