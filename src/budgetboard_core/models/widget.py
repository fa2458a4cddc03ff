"""
Net worth widget configuration models.

These models are the normalization boundary for persisted widget
configuration. Every field accepts both its lowerCamelCase and its
UpperPascalCase key (lowerCamelCase wins unless it is null) and coerces
bad values to safe defaults instead of failing validation.
"""

import math
from typing import Any, List, Tuple

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


def coerce_string(value: Any) -> str:
    """Return ``value`` if it is a string, otherwise ""."""
    if isinstance(value, str):
        return value
    return ""


def coerce_number(value: Any) -> float:
    """Return ``value`` as a finite number, falling back to 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return 0
    if isinstance(value, str) and not value.strip():
        return 0
    try:
        parsed = float(value)
    except (ValueError, OverflowError):
        return 0
    return parsed if math.isfinite(parsed) else 0


def coerce_records(value: Any) -> List[dict]:
    """
    Return a list of dicts; non-lists become [] and non-dict items {}.

    Model instances are dumped back to dicts so they are normalized again.
    """
    if not isinstance(value, list):
        return []
    records: List[dict] = []
    for item in value:
        if isinstance(item, BaseModel):
            records.append(item.model_dump())
        elif isinstance(item, dict):
            records.append(item)
        else:
            records.append({})
    return records


def _keys(name: str) -> Tuple[str, ...]:
    if name == "id":
        return ("id", "Id", "ID")
    return (name, name[0].upper() + name[1:])


def _choices(name: str) -> AliasChoices:
    return AliasChoices(*_keys(name))


class _WidgetModel(BaseModel):
    model_config = {"populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _prefer_non_null_keys(cls, data: Any) -> Any:
        # A null lowerCamelCase key falls through to the UpperPascalCase one.
        if not isinstance(data, dict):
            return data
        normalized = dict(data)
        for name in cls.model_fields:
            keys = _keys(name)
            if normalized.get(keys[0]) is not None:
                continue
            fallback = next((normalized[k] for k in keys[1:] if normalized.get(k) is not None), None)
            if fallback is not None:
                normalized[keys[0]] = fallback
        return normalized


class NetWorthWidgetCategory(_WidgetModel):
    """
    A typed reference summed into a net worth line.

    ``type`` is "account", "asset" or "line". For accounts ``value`` names an
    account category, for lines it names another line, for assets it is
    ignored.
    """

    id: str = Field(default="", validation_alias=_choices("id"))
    value: str = Field(default="", validation_alias=_choices("value"))
    type: str = Field(default="", validation_alias=_choices("type"))
    subtype: str = Field(default="", validation_alias=_choices("subtype"))

    @field_validator("id", "value", "type", "subtype", mode="before")
    @classmethod
    def _string_fields(cls, v: Any) -> str:
        return coerce_string(v)


class NetWorthWidgetLine(_WidgetModel):
    """A named net worth row."""

    id: str = Field(default="", validation_alias=_choices("id"))
    name: str = Field(default="", validation_alias=_choices("name"))
    index: float = Field(default=0, validation_alias=_choices("index"))
    categories: List[NetWorthWidgetCategory] = Field(
        default_factory=list, validation_alias=_choices("categories")
    )

    @field_validator("id", "name", mode="before")
    @classmethod
    def _string_fields(cls, v: Any) -> str:
        return coerce_string(v)

    @field_validator("index", mode="before")
    @classmethod
    def _number_fields(cls, v: Any) -> float:
        return coerce_number(v)

    @field_validator("categories", mode="before")
    @classmethod
    def _list_fields(cls, v: Any) -> List[dict]:
        return coerce_records(v)


class NetWorthWidgetGroup(_WidgetModel):
    """An ordered group of net worth lines."""

    id: str = Field(default="", validation_alias=_choices("id"))
    index: float = Field(default=0, validation_alias=_choices("index"))
    lines: List[NetWorthWidgetLine] = Field(
        default_factory=list, validation_alias=_choices("lines")
    )

    @field_validator("id", mode="before")
    @classmethod
    def _string_fields(cls, v: Any) -> str:
        return coerce_string(v)

    @field_validator("index", mode="before")
    @classmethod
    def _number_fields(cls, v: Any) -> float:
        return coerce_number(v)

    @field_validator("lines", mode="before")
    @classmethod
    def _list_fields(cls, v: Any) -> List[dict]:
        return coerce_records(v)


class NetWorthWidgetConfiguration(_WidgetModel):
    """The full net worth widget configuration."""

    groups: List[NetWorthWidgetGroup] = Field(
        default_factory=list, validation_alias=_choices("groups")
    )

    @field_validator("groups", mode="before")
    @classmethod
    def _list_fields(cls, v: Any) -> List[dict]:
        return coerce_records(v)

    @property
    def lines(self) -> List[NetWorthWidgetLine]:
        """Every line across all groups, in configuration order."""
        return [line for group in self.groups for line in group.lines]
