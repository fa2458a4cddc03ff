"""
Automatic rule models for Budget Board data.
"""

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class RuleParameter(BaseModel):
    """
    One condition or action of an automatic rule.

    ``field`` is one of "merchant", "amount", "date" or "category". For
    conditions ``operator`` is a comparison such as "contains"; for actions
    it is "set".
    """

    model_config = {"strict": True, "populate_by_name": True, "alias_generator": to_camel}

    field: str
    operator: str
    value: str = ""
    id: Optional[str] = None


class AutomaticRule(BaseModel):
    """A rule whose actions apply when all of its conditions hold."""

    model_config = {"populate_by_name": True, "alias_generator": to_camel}

    conditions: List[RuleParameter] = Field(min_length=1)
    actions: List[RuleParameter] = Field(default_factory=list)
    id: Optional[str] = None
