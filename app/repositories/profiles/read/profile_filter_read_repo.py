# app/repositories/profiles/read/profile_filter_read_repo.py
"""
Execução da listagem filtrada de perfis.

A query de linhas e a query de contagem partem do mesmo
CompiledProfileQuery; a contagem não leva sort/skip/limit/projeção.
"""

from __future__ import annotations

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session, load_only, selectinload

from app.domains.filters.services.pagination import PagePlan
from app.domains.filters.services.query_compiler import CompiledProfileQuery, min_rate_price
from app.models.profile import Profile, ProfileAvailability, ProfileFeature

SORT_COLUMNS = {
    "createdAt": Profile.created_at,
    "updatedAt": Profile.updated_at,
    "name": Profile.name,
}

# relações simples (verificação e features têm regras próprias)
_PLAIN_RELATIONS = ("media", "rates")


class ProfileFilterReadRepository:
    def __init__(self, db: Session):
        self.db = db

    # Statements --------------------------------------------------

    @staticmethod
    def build_count_stmt(query: CompiledProfileQuery) -> Select:
        return query.apply(select(func.count(Profile.id)).select_from(Profile))

    @staticmethod
    def build_rows_stmt(query: CompiledProfileQuery, plan: PagePlan) -> Select:
        stmt = query.apply(select(Profile))

        columns = [getattr(Profile, c) for c in plan.columns]
        options = [load_only(*columns)] if columns else []

        for rel in _PLAIN_RELATIONS:
            if rel in plan.relations:
                options.append(selectinload(getattr(Profile, rel)))
        if "availability" in plan.relations:
            options.append(selectinload(Profile.availability).selectinload(ProfileAvailability.slots))
        if plan.include_verification:
            options.append(selectinload(Profile.verification))
        if plan.include_feature_groups:
            options.append(selectinload(Profile.features).selectinload(ProfileFeature.group))

        stmt = stmt.options(*options)
        stmt = stmt.order_by(*_order_by(plan))
        return stmt.offset(plan.skip).limit(plan.limit)

    # Execução ----------------------------------------------------

    def list_rows(self, query: CompiledProfileQuery, plan: PagePlan) -> list[Profile]:
        return list(self.db.scalars(self.build_rows_stmt(query, plan)).all())

    def count(self, query: CompiledProfileQuery) -> int:
        return int(self.db.scalar(self.build_count_stmt(query)) or 0)


def _order_by(plan: PagePlan) -> list:
    """Ordenação por uma única key + id como desempate (paginação estável)."""
    desc = plan.direction < 0
    tie = Profile.id.desc() if desc else Profile.id.asc()

    if plan.sort_key == "price":
        lowest = min_rate_price()
        # perfis sem tarifas no fim, em qualquer direção
        return [lowest.is_(None), lowest.desc() if desc else lowest.asc(), tie]

    column = SORT_COLUMNS[plan.sort_key]
    return [column.desc() if desc else column.asc(), tie]
