# app/domains/attributes/usecases/add_variant.py
from __future__ import annotations

from app.core.errors import Conflict, NotFound
from app.core.normalize import norm_text
from app.domains.attributes.services.mappers import find_variant, map_group_to_out
from app.infra.uow import UoW
from app.repositories.attributes.read.attribute_group_read_repo import (
    AttributeGroupReadRepository,
)
from app.repositories.attributes.write.attribute_group_write_repo import (
    AttributeGroupWriteRepository,
)
from app.schemas.attribute_groups import AttributeGroupOut


def execute(uow: UoW, *, id_group: int, value: str, label: str | None) -> AttributeGroupOut:
    group = AttributeGroupReadRepository(uow.db).get(id_group)
    if not group:
        raise NotFound(f"Attribute group {id_group} not found")

    if find_variant(group, norm_text(value)):
        raise Conflict(f"Variant '{norm_text(value)}' already exists in '{group.key}'")

    AttributeGroupWriteRepository(uow.db).add_variant(group, value=value, label=label)
    uow.commit()
    return map_group_to_out(group)
