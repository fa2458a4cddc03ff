"""
Transaction models for Budget Board data.
"""

from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


class Transaction(BaseModel):
    """
    Represents a ledger transaction.

    Amounts are signed: negative values are outflows (expenses), positive
    values are inflows (income).
    """

    model_config = {"strict": True, "populate_by_name": True, "alias_generator": to_camel}

    # Required fields
    id: str
    amount: float
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")

    # Categorization
    category: Optional[str] = None
    subcategory: Optional[str] = None

    # Merchant
    merchant_name: Optional[str] = None

    # Ownership & status
    account_id: Optional[str] = None
    hidden: bool = False
    deleted: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def category_key(self) -> str:
        """Subcategory if set, else category, else "" (uncategorized)."""
        return self.subcategory or self.category or ""

    @field_validator("amount")
    @classmethod
    def validate_amount_range(cls, v: float) -> float:
        """Validate that amount is within reasonable range."""
        if abs(v) > 10_000_000:
            raise ValueError(f"Amount {v} exceeds maximum allowed value")
        return v


class TransactionPatch(BaseModel):
    """
    Field updates produced by automatic rules.

    Only fields that a rule action set are populated; ``None`` means "leave
    unchanged".
    """

    model_config = {"populate_by_name": True, "alias_generator": to_camel}

    merchant_name: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    amount: Optional[float] = None
    date: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)

    def merge(self, other: "TransactionPatch") -> "TransactionPatch":
        """Return a patch with ``other``'s populated fields layered on top."""
        return self.model_copy(update=other.model_dump(exclude_none=True))

    def apply_to(self, transaction: Transaction) -> Transaction:
        """Return a copy of ``transaction`` with this patch applied."""
        return transaction.model_copy(update=self.model_dump(exclude_none=True))
