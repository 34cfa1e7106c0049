# app/domains/filters/services/spec_normalizer.py
"""
Normalização do payload de filtros.

Recebe o payload bruto do cliente (JSON ou query string) e devolve um
FilterSpec com defaults preenchidos, ou levanta InvalidArgument com uma
mensagem por campo. Tudo é validado aqui, antes de qualquer acesso ao store.

Regras de forma:
- `category` de topo passa a ser mais uma facet (`features.category`);
  a categoria "perfiles" significa todos os perfis e é descartada;
- `features.ageRange` ({min, max}) sai das facets para `age_range`;
- cada facet fica sempre como lista de strings.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from app.core.config import settings
from app.core.errors import InvalidArgument
from app.core.normalize import clean_str, is_hhmm, norm_text, to_bool, to_int, to_number
from app.models.profile import DAYS_OF_WEEK
from app.schemas.filters import (
    PROFILE_FIELDS,
    SORT_FIELDS,
    SORT_ORDERS,
    AgeRange,
    AvailabilityFilter,
    FilterSpec,
    LocationFilter,
    PriceRange,
    TimeSlot,
)

DEFAULT_PAGE = 1
DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "desc"

# OFFSET tem de caber num inteiro de 64 bits com sinal
MAX_SKIP = 2**63 - 1

# categoria "catch-all" usada pelo frontend
ALL_PROFILES_CATEGORY = "perfiles"

# grafias alternativas aceites para os dias guardados
_DAY_ALIASES = {"sabado": "sábado", "miércoles": "miercoles"}

_FLAGS = {
    "isActive": "is_active",
    "isVerified": "is_verified",
    "profileVerified": "profile_verified",
    "documentVerified": "document_verified",
    "hasVideos": "has_videos",
}


def normalize_filter_spec(raw: Mapping[str, Any] | None) -> FilterSpec:
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise InvalidArgument("Filter payload must be a JSON object")

    features_raw = raw.get("features")
    if features_raw is None:
        features_raw = {}
    elif not isinstance(features_raw, Mapping):
        raise InvalidArgument("features must be an object", field="features")
    features_raw = dict(features_raw)

    # ageRange pode vir dentro de features (forma antiga) ou no topo
    age_raw = raw.get("ageRange")
    legacy_age = features_raw.pop("ageRange", None)
    if age_raw is None:
        age_raw = legacy_age

    features: dict[str, list[str]] = {}
    for key, value in features_raw.items():
        values = _one_or_many(value, field=f"features.{key}")
        if values:
            features[str(key)] = values

    _fold_category(raw.get("category"), features)

    spec_kwargs: dict[str, Any] = {
        "features": features,
        "location": _location(raw.get("location")),
        "price_range": _price_range(raw.get("priceRange")),
        "age_range": _age_range(age_raw),
        "availability": _availability(raw.get("availability")),
        "page": _page(raw.get("page")),
        "limit": _limit(raw.get("limit")),
        "sort_by": _sort_by(raw.get("sortBy")),
        "sort_order": _sort_order(raw.get("sortOrder")),
        "fields": _fields(raw.get("fields")),
    }
    for name, attr in _FLAGS.items():
        spec_kwargs[attr] = _flag(raw.get(name), field=name)

    if (spec_kwargs["page"] - 1) * spec_kwargs["limit"] > MAX_SKIP:
        raise InvalidArgument("page is too large for the requested limit", field="page")

    return FilterSpec(**spec_kwargs)


def query_params_to_payload(params: Mapping[str, str]) -> dict[str, Any]:
    """
    Converte a forma query string (GET /filters/profiles) no payload JSON
    equivalente. A validação propriamente dita fica para normalize_filter_spec.
    """
    payload: dict[str, Any] = {}

    for key in ("category", "page", "limit", "sortBy", "sortOrder", *_FLAGS):
        if params.get(key) not in (None, ""):
            payload[key] = params[key]

    location = {
        "country": params.get("country"),
        "department": params.get("department") or params.get("location[department]"),
        "city": params.get("city") or params.get("location[city]"),
    }
    location = {k: v for k, v in location.items() if v}
    if location:
        payload["location"] = location

    features = params.get("features")
    if features:
        try:
            payload["features"] = json.loads(features)
        except json.JSONDecodeError as e:
            raise InvalidArgument(
                "Invalid features format. Must be valid JSON.", field="features"
            ) from e

    price = {"min": params.get("minPrice"), "max": params.get("maxPrice")}
    price = {k: v for k, v in price.items() if v not in (None, "")}
    if price:
        payload["priceRange"] = price

    availability: dict[str, Any] = {}
    if params.get("dayOfWeek"):
        availability["dayOfWeek"] = params["dayOfWeek"]
    slot = {"start": params.get("timeStart"), "end": params.get("timeEnd")}
    slot = {k: v for k, v in slot.items() if v}
    if slot:
        availability["timeSlot"] = slot
    if availability:
        payload["availability"] = availability

    if params.get("fields"):
        payload["fields"] = [f for f in params["fields"].split(",") if f.strip()]

    return payload


# Helpers ----------------------------------------------------------


def _one_or_many(value: Any, *, field: str) -> list[str]:
    if value is None:
        return []
    items = value if isinstance(value, (list, tuple)) else [value]
    out: list[str] = []
    for item in items:
        if not isinstance(item, str):
            raise InvalidArgument(f"{field} must be a string or a list of strings", field=field)
        if item.strip():
            out.append(item)
    return out


def _fold_category(category: Any, features: dict[str, list[str]]) -> None:
    values = _one_or_many(category, field="category")
    values = [v for v in values if norm_text(v) != ALL_PROFILES_CATEGORY]
    if not values:
        return
    merged = features.get("category", []) + values
    features["category"] = list(dict.fromkeys(merged))


def _location(value: Any) -> LocationFilter | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise InvalidArgument("location must be an object", field="location")
    parts = {}
    for key in ("country", "department", "city"):
        v = value.get(key)
        if v is not None and not isinstance(v, str):
            raise InvalidArgument(f"location.{key} must be a string", field=f"location.{key}")
        parts[key] = clean_str(v)
    if not any(parts.values()):
        return None
    return LocationFilter(**parts)


def _price_range(value: Any) -> PriceRange | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise InvalidArgument("priceRange must be an object", field="priceRange")
    bounds: dict[str, float | None] = {}
    for key in ("min", "max"):
        v = value.get(key)
        if v is None:
            bounds[key] = None
            continue
        n = to_number(v)
        if n is None:
            raise InvalidArgument(
                f"priceRange.{key} must be a valid number", field=f"priceRange.{key}"
            )
        bounds[key] = n
    if bounds["min"] is None and bounds["max"] is None:
        return None
    return PriceRange(**bounds)


def _age_range(value: Any) -> AgeRange | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise InvalidArgument("ageRange must be an object", field="ageRange")
    bounds: dict[str, int | None] = {}
    for key in ("min", "max"):
        v = value.get(key)
        if v is None:
            bounds[key] = None
            continue
        n = to_int(v)
        if n is None:
            raise InvalidArgument(f"ageRange.{key} must be an integer", field=f"ageRange.{key}")
        bounds[key] = n
    if bounds["min"] is None and bounds["max"] is None:
        return None
    return AgeRange(**bounds)


def _availability(value: Any) -> AvailabilityFilter | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise InvalidArgument("availability must be an object", field="availability")

    day = value.get("dayOfWeek")
    if day is not None and not isinstance(day, str):
        raise InvalidArgument(
            "availability.dayOfWeek must be a string", field="availability.dayOfWeek"
        )
    day = norm_text(day) if day and day.strip() else None
    if day is not None:
        day = _DAY_ALIASES.get(day, day)
        if day not in DAYS_OF_WEEK:
            raise InvalidArgument(
                f"availability.dayOfWeek must be one of: {', '.join(DAYS_OF_WEEK)}",
                field="availability.dayOfWeek",
            )

    slot_raw = value.get("timeSlot")
    slot = None
    if slot_raw is not None:
        if not isinstance(slot_raw, Mapping):
            raise InvalidArgument(
                "availability.timeSlot must be an object", field="availability.timeSlot"
            )
        times = {}
        for key in ("start", "end"):
            t = slot_raw.get(key)
            if t in (None, ""):
                times[key] = None
                continue
            if not is_hhmm(t):
                field = f"availability.timeSlot.{key}"
                raise InvalidArgument(f"{field} must use the HH:MM format", field=field)
            times[key] = t
        if times["start"] or times["end"]:
            slot = TimeSlot(**times)

    if day is None and slot is None:
        return None
    return AvailabilityFilter(day_of_week=day, time_slot=slot)


def _flag(value: Any, *, field: str) -> bool | None:
    if value is None:
        return None
    b = to_bool(value)
    if b is None:
        raise InvalidArgument(f"{field} must be a boolean", field=field)
    return b


def _page(value: Any) -> int:
    if value is None:
        return DEFAULT_PAGE
    page = to_int(value)
    if page is None or page < 1:
        raise InvalidArgument("page must be an integer greater than 0", field="page")
    return page


def _limit(value: Any) -> int:
    max_limit = settings.FILTERS_MAX_LIMIT
    if value is None:
        return settings.FILTERS_DEFAULT_LIMIT
    limit = to_int(value)
    if limit is None or limit < 1 or limit > max_limit:
        raise InvalidArgument(f"limit must be a number between 1 and {max_limit}", field="limit")
    return limit


def _sort_by(value: Any) -> str:
    if value is None or value == "":
        return DEFAULT_SORT_BY
    if value not in SORT_FIELDS:
        raise InvalidArgument(f"sortBy must be one of: {', '.join(SORT_FIELDS)}", field="sortBy")
    return value


def _sort_order(value: Any) -> str:
    if value is None or value == "":
        return DEFAULT_SORT_ORDER
    if value not in SORT_ORDERS:
        raise InvalidArgument('sortOrder must be "asc" or "desc"', field="sortOrder")
    return value


def _fields(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)) or not all(isinstance(f, str) for f in value):
        raise InvalidArgument("fields must be a list of strings", field="fields")
    fields = tuple(dict.fromkeys(f.strip() for f in value if f.strip()))
    if not fields:
        return None
    unknown = sorted(set(fields) - PROFILE_FIELDS)
    if unknown:
        raise InvalidArgument(f"fields contains unknown field(s): {', '.join(unknown)}", field="fields")
    return fields
