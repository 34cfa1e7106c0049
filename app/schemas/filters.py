# app/schemas/filters.py
"""
Schemas do filtro de perfis.

FilterSpec é a forma normalizada (depois de spec_normalizer); o payload
bruto do cliente nunca chega ao compilador.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SortBy = Literal["createdAt", "updatedAt", "name", "price"]
SortOrder = Literal["asc", "desc"]

SORT_FIELDS: tuple[str, ...] = ("createdAt", "updatedAt", "name", "price")
SORT_ORDERS: tuple[str, ...] = ("asc", "desc")

# Campos mínimos para um cartão de resultado
DEFAULT_PROFILE_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "age",
    "location",
    "description",
    "verification",
    "media",
    "isActive",
)

PROFILE_FIELDS: frozenset[str] = frozenset(
    DEFAULT_PROFILE_FIELDS
    + ("features", "rates", "availability", "createdAt", "updatedAt", "userId")
)


# ----------- FilterSpec (normalizado) ---------------
class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class LocationFilter(_Frozen):
    country: str | None = None
    department: str | None = None
    city: str | None = None


class PriceRange(_Frozen):
    min: float | None = None
    max: float | None = None


class AgeRange(_Frozen):
    min: int | None = None
    max: int | None = None


class TimeSlot(_Frozen):
    start: str | None = None
    end: str | None = None


class AvailabilityFilter(_Frozen):
    day_of_week: str | None = None
    time_slot: TimeSlot | None = None


class FilterSpec(_Frozen):
    location: LocationFilter | None = None
    # groupKey -> valores (sempre lista; a forma escalar é resolvida no normalizer)
    features: dict[str, list[str]] = Field(default_factory=dict)
    price_range: PriceRange | None = None
    age_range: AgeRange | None = None
    availability: AvailabilityFilter | None = None

    is_active: bool | None = None
    is_verified: bool | None = None
    profile_verified: bool | None = None
    document_verified: bool | None = None
    has_videos: bool | None = None

    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1)
    sort_by: SortBy = "createdAt"
    sort_order: SortOrder = "desc"
    fields: tuple[str, ...] | None = None


# ----------- Outputs ---------------
class _CamelOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfilePageOut(_CamelOut):
    profiles: list[dict[str, Any]] = Field(default_factory=list)
    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class ProfileCountOut(_CamelOut):
    total_count: int


class OptionOut(BaseModel):
    label: str
    value: str


class LabeledValueOut(BaseModel):
    value: str
    label: str | None = None


class LocationOptionsOut(BaseModel):
    countries: list[str] = Field(default_factory=list)
    departments: list[LabeledValueOut] = Field(default_factory=list)
    cities: list[LabeledValueOut] = Field(default_factory=list)


class PriceBoundsOut(BaseModel):
    min: float = 0
    max: float = 0


class FilterOptionsOut(_CamelOut):
    categories: list[OptionOut] = Field(default_factory=list)
    locations: LocationOptionsOut = Field(default_factory=LocationOptionsOut)
    features: dict[str, list[OptionOut]] = Field(default_factory=dict)
    price_range: PriceBoundsOut = Field(default_factory=PriceBoundsOut)


# ----------- Envelopes da API ---------------
class ProfilePageResponse(BaseModel):
    success: bool = True
    data: ProfilePageOut
    message: str = "Profiles retrieved successfully"


class ProfileCountResponse(BaseModel):
    success: bool = True
    data: ProfileCountOut
    message: str = "Profile count retrieved successfully"


class FilterOptionsResponse(BaseModel):
    success: bool = True
    data: FilterOptionsOut
    message: str = "Filter options retrieved successfully"
