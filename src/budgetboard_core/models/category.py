"""
Category models for Budget Board data.
"""

from typing import List

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Category(BaseModel):
    """
    Represents a transaction or account category.

    Categories form a two-level hierarchy: a category with an empty parent is
    a root, otherwise ``parent`` names its root category by value.
    """

    model_config = {"strict": True, "populate_by_name": True, "alias_generator": to_camel}

    value: str
    parent: str = ""

    @property
    def is_root(self) -> bool:
        """True when this category has no parent."""
        return self.parent == ""


class CategoryNode(BaseModel):
    """A category with its resolved subcategories attached."""

    model_config = {"populate_by_name": True, "alias_generator": to_camel}

    value: str
    parent: str = ""
    sub_categories: List["CategoryNode"] = Field(default_factory=list)
