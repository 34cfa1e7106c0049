# app/domains/attributes/usecases/update_variant.py
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


def execute(
    uow: UoW,
    *,
    id_group: int,
    variant_value: str,
    new_value: str | None = None,
    new_label: str | None = None,
    active: bool | None = None,
) -> AttributeGroupOut:
    """
    Atualiza value/label/active de uma variante identificada pelo value atual.

    Desativar (active=False) esconde a variante das opções de filtro sem a
    apagar; perfis que já a usam continuam a ser encontrados por ela.
    """
    group = AttributeGroupReadRepository(uow.db).get(id_group)
    if not group:
        raise NotFound(f"Attribute group {id_group} not found")

    variant = find_variant(group, norm_text(variant_value))
    if not variant:
        raise NotFound(f"Variant '{variant_value}' not found in '{group.key}'")

    if new_value is not None:
        target = norm_text(new_value)
        other = find_variant(group, target)
        if other is not None and other is not variant:
            raise Conflict(f"Variant '{target}' already exists in '{group.key}'")

    AttributeGroupWriteRepository(uow.db).update_variant(
        variant, value=new_value, label=new_label, active=active
    )
    uow.commit()
    return map_group_to_out(group)
