# app/core/normalize.py
from __future__ import annotations

import math
import re
from typing import Any

_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def norm_text(value: Any) -> str:
    """Normalização usada para valores de variantes/features: trim + lower."""
    return str(value).strip().lower()


def clean_str(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def to_number(value: Any) -> float | None:
    """
    Converte para float. Aceita int/float e strings numéricas.
    Devolve None se não for um número válido (bools incluídos).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            f = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            f = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(f) or math.isinf(f):
        return None
    return f


def to_int(value: Any) -> int | None:
    """Inteiro estrito: 3, 3.0 e "3" são válidos; 3.5, "abc" e True não."""
    f = to_number(value)
    if f is None or not f.is_integer():
        return None
    return int(f)


def to_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("true", "1", "yes"):
            return True
        if v in ("false", "0", "no"):
            return False
    return None


def is_hhmm(value: Any) -> bool:
    return isinstance(value, str) and bool(_HHMM_RE.match(value))
