# app/domains/attributes/usecases/update_group.py
from __future__ import annotations

from app.core.errors import Conflict, NotFound
from app.domains.attributes.services.mappers import map_group_to_out
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
    key: str | None = None,
    name: str | None = None,
) -> AttributeGroupOut:
    """
    Renomeia o grupo e/ou muda a key.

    Mudar a key não mexe nos perfis (referenciam o id), mas filtros
    que usem a key antiga deixam de a encontrar.
    """
    read_repo = AttributeGroupReadRepository(uow.db)
    group = read_repo.get(id_group)
    if not group:
        raise NotFound(f"Attribute group {id_group} not found")

    if key is not None and key.strip() != group.key:
        other = read_repo.get_by_key(key.strip())
        if other and other.id != group.id:
            raise Conflict(f"Attribute group '{key.strip()}' already exists")

    AttributeGroupWriteRepository(uow.db).update_group(group, key=key, name=name)
    uow.commit()
    return map_group_to_out(group)
