# app/domains/attributes/usecases/get_group.py
from __future__ import annotations

from app.core.errors import NotFound
from app.domains.attributes.services.mappers import map_group_to_out
from app.infra.uow import UoW
from app.repositories.attributes.read.attribute_group_read_repo import (
    AttributeGroupReadRepository,
)
from app.schemas.attribute_groups import AttributeGroupOut


def execute(uow: UoW, *, key: str) -> AttributeGroupOut:
    group = AttributeGroupReadRepository(uow.db).get_by_key(key)
    if not group:
        raise NotFound(f"Attribute group '{key}' not found")
    return map_group_to_out(group)
