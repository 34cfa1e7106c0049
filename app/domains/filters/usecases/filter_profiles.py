# app/domains/filters/usecases/filter_profiles.py
"""
UseCase para listar perfis filtrados e paginados.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from app.core.config import settings
from app.core.logging import log_timing
from app.domains.filters.services.observer import CompileObserver
from app.domains.filters.services.pagination import plan_page
from app.domains.filters.services.query_compiler import compile_profile_query
from app.domains.filters.services.result_assembler import assemble_page, serialize_profile
from app.domains.filters.services.spec_normalizer import normalize_filter_spec
from app.infra.fanout import run_parallel
from app.infra.uow import UoW
from app.repositories.attributes.read.attribute_group_read_repo import (
    AttributeGroupReadRepository,
)
from app.repositories.profiles.read.profile_filter_read_repo import ProfileFilterReadRepository
from app.schemas.filters import ProfilePageOut

log = logging.getLogger("pfl.filters.list")


def execute(
    uow: UoW,
    raw: Mapping[str, Any] | None,
    *,
    observer: CompileObserver | None = None,
) -> ProfilePageOut:
    """
    Normaliza o payload, compila a query, e executa linhas + contagem em
    paralelo. Se uma das duas falhar, o pedido falha (sem resultados parciais).

    Raises:
        InvalidArgument: payload inválido (antes de qualquer query)
    """
    spec = normalize_filter_spec(raw)

    query = compile_profile_query(
        spec, AttributeGroupReadRepository(uow.db), observer=observer
    )
    plan = plan_page(spec)

    def rows_task(db):
        profiles = ProfileFilterReadRepository(db).list_rows(query, plan)
        # serializar ainda dentro da sessão que carregou os objetos
        return [serialize_profile(p, plan.fields) for p in profiles]

    def count_task(db):
        return ProfileFilterReadRepository(db).count(query)

    with log_timing("filter_profiles", log, page=plan.page, limit=plan.limit, sort=plan.sort_key):
        rows, total = run_parallel(
            uow, rows_task, count_task, parallel=settings.FILTERS_PARALLEL_READS
        )

    return assemble_page(rows, total, plan)
