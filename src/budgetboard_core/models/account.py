"""
Account and asset models for Budget Board data.
"""

from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class Account(BaseModel):
    """
    Represents a financial account.

    ``type`` and ``subtype`` are values from the account category hierarchy
    (e.g. type "Savings", subtype "Money Market").
    """

    model_config = {"strict": True, "populate_by_name": True, "alias_generator": to_camel}

    # Required fields
    id: str
    current_balance: float

    name: Optional[str] = None
    type: str = ""
    subtype: str = ""

    # Visibility
    hide_account: bool = False
    deleted: Optional[str] = None

    @property
    def is_visible(self) -> bool:
        return not self.hide_account and self.deleted is None


class Asset(BaseModel):
    """Represents a manually tracked asset such as a house or a car."""

    model_config = {"strict": True, "populate_by_name": True, "alias_generator": to_camel}

    id: str
    current_value: float

    name: Optional[str] = None
    hide: bool = False
    deleted: Optional[str] = None

    @property
    def is_visible(self) -> bool:
        return not self.hide and self.deleted is None
