# app/domains/attributes/usecases/remove_variant.py
from __future__ import annotations

from app.core.errors import NotFound
from app.domains.attributes.services.mappers import find_variant, map_group_to_out
from app.core.normalize import norm_text
from app.infra.uow import UoW
from app.repositories.attributes.read.attribute_group_read_repo import (
    AttributeGroupReadRepository,
)
from app.repositories.attributes.write.attribute_group_write_repo import (
    AttributeGroupWriteRepository,
)
from app.schemas.attribute_groups import AttributeGroupOut


def execute(uow: UoW, *, id_group: int, variant_value: str) -> AttributeGroupOut:
    group = AttributeGroupReadRepository(uow.db).get(id_group)
    if not group:
        raise NotFound(f"Attribute group {id_group} not found")

    variant = find_variant(group, norm_text(variant_value))
    if not variant:
        raise NotFound(f"Variant '{variant_value}' not found in '{group.key}'")

    AttributeGroupWriteRepository(uow.db).remove_variant(group, variant)
    uow.commit()
    return map_group_to_out(group)
