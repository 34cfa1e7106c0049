# app/domains/attributes/usecases/create_group.py
from __future__ import annotations

import logging

from app.core.errors import Conflict
from app.core.normalize import norm_text
from app.domains.attributes.services.mappers import map_group_to_out
from app.infra.uow import UoW
from app.repositories.attributes.read.attribute_group_read_repo import (
    AttributeGroupReadRepository,
)
from app.repositories.attributes.write.attribute_group_write_repo import (
    AttributeGroupWriteRepository,
)
from app.schemas.attribute_groups import AttributeGroupIn, AttributeGroupOut

log = logging.getLogger(__name__)


def execute(uow: UoW, *, payload: AttributeGroupIn) -> AttributeGroupOut:
    """
    Cria um grupo de atributos com as variantes iniciais (todas ativas).

    Raises:
        Conflict: key já existe ou variantes repetidas no payload
    """
    key = payload.key.strip()
    if AttributeGroupReadRepository(uow.db).get_by_key(key):
        raise Conflict(f"Attribute group '{key}' already exists")

    seen: set[str] = set()
    for v in payload.variants:
        n = norm_text(v.value)
        if n in seen:
            raise Conflict(f"Duplicate variant '{n}'")
        seen.add(n)

    group = AttributeGroupWriteRepository(uow.db).create(
        key=key,
        name=payload.name,
        type=payload.type,
        variants=[(v.value, v.label) for v in payload.variants],
    )
    uow.commit()
    log.info("Attribute group created: %s (%d variants)", group.key, len(group.variants))
    return map_group_to_out(group)
