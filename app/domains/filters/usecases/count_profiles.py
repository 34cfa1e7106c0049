# app/domains/filters/usecases/count_profiles.py
"""
UseCase para contar perfis que satisfazem os filtros (sem paginação).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.domains.filters.services.observer import CompileObserver
from app.domains.filters.services.query_compiler import compile_profile_query
from app.domains.filters.services.spec_normalizer import normalize_filter_spec
from app.infra.uow import UoW
from app.repositories.attributes.read.attribute_group_read_repo import (
    AttributeGroupReadRepository,
)
from app.repositories.profiles.read.profile_filter_read_repo import ProfileFilterReadRepository
from app.schemas.filters import ProfileCountOut

# a contagem ignora paginação, ordenação e projeção
_IGNORED_KEYS = ("page", "limit", "sortBy", "sortOrder", "fields")


def execute(
    uow: UoW,
    raw: Mapping[str, Any] | None,
    *,
    observer: CompileObserver | None = None,
) -> ProfileCountOut:
    payload = raw
    if isinstance(raw, Mapping):
        payload = {k: v for k, v in raw.items() if k not in _IGNORED_KEYS}
    spec = normalize_filter_spec(payload)

    query = compile_profile_query(
        spec, AttributeGroupReadRepository(uow.db), observer=observer
    )
    total = ProfileFilterReadRepository(uow.db).count(query)
    return ProfileCountOut(total_count=total)
