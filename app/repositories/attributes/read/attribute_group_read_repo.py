# app/repositories/attributes/read/attribute_group_read_repo.py
"""
Repositório de leitura para grupos de atributos (facets).
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.models.attribute_group import AttributeGroup


class AttributeGroupReadRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, id_group: int) -> AttributeGroup | None:
        return self.db.get(AttributeGroup, id_group)

    def get_by_key(self, key: str) -> AttributeGroup | None:
        if not key:
            return None
        stmt = (
            select(AttributeGroup)
            .where(AttributeGroup.key == key)
            .options(selectinload(AttributeGroup.variants))
        )
        return self.db.scalar(stmt)

    def find_by_keys(self, keys: Sequence[str]) -> list[tuple[str, int]]:
        """
        Resolve várias keys numa única query.
        Keys inexistentes simplesmente não aparecem no resultado.
        """
        if not keys:
            return []
        stmt = select(AttributeGroup.key, AttributeGroup.id).where(
            AttributeGroup.key.in_(list(keys))
        )
        return [(r.key, r.id) for r in self.db.execute(stmt).all()]

    def find_all(self) -> list[AttributeGroup]:
        stmt = (
            select(AttributeGroup)
            .options(selectinload(AttributeGroup.variants))
            .order_by(AttributeGroup.key)
        )
        return list(self.db.scalars(stmt).all())
