"""
Budget model for Budget Board data.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class Budget(BaseModel):
    """
    A monthly spending or income limit for one category.

    The category may name a root category or a subcategory. Limits are
    always non-negative; direction comes from the category's budget group.
    """

    model_config = {"strict": True, "populate_by_name": True, "alias_generator": to_camel}

    category: str
    limit: float
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    id: Optional[str] = None

    @field_validator("limit")
    @classmethod
    def validate_limit_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"Budget limit {v} must not be negative")
        return v


class BudgetRollupItem(BaseModel):
    """
    Effective actual and limit amounts for one budgeted category.

    ``amount`` is the raw signed transaction total (rolled up for parent
    categories); multiply by ``sign`` to compare it against ``limit``.
    """

    model_config = {"populate_by_name": True, "alias_generator": to_camel}

    category: str
    parent: str = ""
    group: str
    amount: float
    limit: float
    sign: int
    top_level: bool = True


class BudgetSummary(BaseModel):
    """Budget-vs-actual rollup for a set of budgets and transactions."""

    model_config = {"populate_by_name": True, "alias_generator": to_camel}

    income: List[BudgetRollupItem] = Field(default_factory=list)
    spending: List[BudgetRollupItem] = Field(default_factory=list)
    income_amount: float = 0.0
    income_limit: float = 0.0
    spending_amount: float = 0.0
    spending_limit: float = 0.0
    unbudgeted: Dict[str, float] = Field(default_factory=dict)
    unbudgeted_amount: float = 0.0
    net_cash_flow: float = 0.0
