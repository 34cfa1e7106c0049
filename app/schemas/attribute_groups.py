# app/schemas/attribute_groups.py
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

# texto só com espaços conta como vazio
GroupKey = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
GroupName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
VariantValue = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class VariantIn(BaseModel):
    value: VariantValue
    label: str | None = None


class VariantUpdateIn(BaseModel):
    """Todos os campos opcionais: só os enviados são alterados."""

    value: VariantValue | None = None
    label: str | None = None
    active: bool | None = None


class AttributeGroupIn(BaseModel):
    key: GroupKey
    name: GroupName
    type: Literal["single", "multi"] = "single"
    variants: list[VariantIn] = Field(default_factory=list)


class AttributeGroupUpdateIn(BaseModel):
    key: GroupKey | None = None
    name: GroupName | None = None


class VariantOut(BaseModel):
    value: str
    label: str | None = None
    active: bool

    model_config = ConfigDict(from_attributes=True)


class AttributeGroupOut(BaseModel):
    id: int
    key: str
    name: str
    type: str
    variants: list[VariantOut] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
