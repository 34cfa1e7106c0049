# app/domains/attributes/usecases/list_groups.py
from __future__ import annotations

from app.domains.attributes.services.mappers import map_group_to_out
from app.infra.uow import UoW
from app.repositories.attributes.read.attribute_group_read_repo import (
    AttributeGroupReadRepository,
)
from app.schemas.attribute_groups import AttributeGroupOut


def execute(uow: UoW) -> list[AttributeGroupOut]:
    """Lista todos os grupos com as variantes ordenadas por label."""
    groups = AttributeGroupReadRepository(uow.db).find_all()
    return [map_group_to_out(g, sort_by_label=True) for g in groups]
