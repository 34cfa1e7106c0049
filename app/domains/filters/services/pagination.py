# app/domains/filters/services/pagination.py
"""
Plano de página e projeção para a listagem de perfis.

Decide skip/limit, ordenação e que colunas/associações têm de ser
materializadas. As associações caras (verificação e labels das features)
só são carregadas quando fazem falta ao cliente.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.schemas.filters import DEFAULT_PROFILE_FIELDS, FilterSpec

# campo público -> colunas de Profile
FIELD_COLUMNS: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "name": ("name",),
    "age": ("age",),
    "description": ("description",),
    "isActive": ("is_active",),
    "location": ("country", "department_value", "department_label", "city_value", "city_label"),
    "createdAt": ("created_at",),
    "updatedAt": ("updated_at",),
    "userId": ("user_id",),
}

# campo público -> relação de Profile (carregada com selectinload)
FIELD_RELATIONS: dict[str, str] = {
    "verification": "verification",
    "media": "media",
    "rates": "rates",
    "availability": "availability",
    "features": "features",
}


@dataclass(frozen=True)
class PagePlan:
    page: int
    limit: int
    skip: int
    sort_key: str
    direction: int  # +1 asc, -1 desc
    fields: tuple[str, ...]
    columns: tuple[str, ...]
    relations: tuple[str, ...]
    include_verification: bool
    include_feature_groups: bool

    @property
    def sort(self) -> dict[str, int]:
        return {self.sort_key: self.direction}


def plan_page(spec: FilterSpec) -> PagePlan:
    if spec.fields:
        fields = tuple(dict.fromkeys(("id", *spec.fields)))
    else:
        fields = DEFAULT_PROFILE_FIELDS

    columns: list[str] = []
    relations: list[str] = []
    for field in fields:
        for col in FIELD_COLUMNS.get(field, ()):
            if col not in columns:
                columns.append(col)
        rel = FIELD_RELATIONS.get(field)
        if rel and rel not in relations:
            relations.append(rel)

    return PagePlan(
        page=spec.page,
        limit=spec.limit,
        skip=(spec.page - 1) * spec.limit,
        sort_key=spec.sort_by,
        direction=1 if spec.sort_order == "asc" else -1,
        fields=fields,
        columns=tuple(columns),
        relations=tuple(relations),
        include_verification=spec.fields is None or "verification" in spec.fields,
        include_feature_groups=spec.fields is not None and "features" in spec.fields,
    )
