# app/domains/attributes/usecases/delete_group.py
from __future__ import annotations

import logging

from app.core.errors import NotFound
from app.infra.uow import UoW
from app.repositories.attributes.read.attribute_group_read_repo import (
    AttributeGroupReadRepository,
)
from app.repositories.attributes.write.attribute_group_write_repo import (
    AttributeGroupWriteRepository,
)

log = logging.getLogger(__name__)


def execute(uow: UoW, *, id_group: int) -> None:
    """
    Remove o grupo e as suas variantes. As features dos perfis que o
    referenciam ficam órfãs e passam a ser ignoradas pelos filtros.
    """
    group = AttributeGroupReadRepository(uow.db).get(id_group)
    if not group:
        raise NotFound(f"Attribute group {id_group} not found")

    key = group.key
    AttributeGroupWriteRepository(uow.db).delete(group)
    uow.commit()
    log.info("Attribute group deleted: %s", key)
